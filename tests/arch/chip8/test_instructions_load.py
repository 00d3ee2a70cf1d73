# tests/arch/chip8/test_instructions_load.py
"""
CHIP-8 転送命令（I、タイマー、BCD、メモリ一括転送）のテスト。
"""
import pytest

from chip8_tracer.core.errors import MemoryAccessError
from chip8_tracer.arch.chip8.font import FONT_SET, GLYPH_SIZE

# @intent:test_suite Annn/Fx** 命令の結果と、メモリ範囲の検証を確認します。

class TestIndexRegister:
    def test_ld_i_addr(self, cpu, run_program):
        run_program(0xA3FF)
        assert cpu.get_state().i == 0x3FF

    def test_add_i_vx(self, cpu, run_program):
        run_program(0xA300, 0x6010, 0xF01E)
        state = cpu.get_state()
        assert (state.i, state.vf) == (0x310, 0)

    # @intent:test_case_saturation I+Vxが0xFFFを超える場合、0xFFFで飽和しVF=1となることを検証します。
    def test_add_i_vx_saturates(self, cpu, run_program):
        run_program(0xAFF0, 0x6020, 0xF01E)
        state = cpu.get_state()
        assert (state.i, state.vf) == (0xFFF, 1)

    # @intent:test_case_font LD F, Vx はグリフ先頭アドレス(Vx*5)を指すことを検証します。
    def test_ld_f_vx(self, cpu, bus, run_program):
        run_program(0x600B, 0xF029)
        i = cpu.get_state().i
        assert i == 0xB * GLYPH_SIZE
        glyph = [bus.peek(i + offset) for offset in range(GLYPH_SIZE)]
        assert glyph == list(FONT_SET[0xB * GLYPH_SIZE:0xC * GLYPH_SIZE])


class TestTimers:
    def test_set_and_read_timers(self, cpu, run_program):
        run_program(0x6030, 0xF015, 0xF018, 0xF107)
        state = cpu.get_state()
        assert (state.delay_timer, state.sound_timer) == (0x30, 0x30)
        assert state.v[1] == 0x30
        assert state.sound_active


class TestMemoryTransfer:
    # @intent:test_case_bcd Vx=234 のとき I, I+1, I+2 に 2, 3, 4 が格納されることを検証します。
    def test_ld_b_vx(self, cpu, bus, run_program):
        run_program(0xA300, 0x60EA, 0xF033)
        assert [bus.peek(0x300 + k) for k in range(3)] == [2, 3, 4]
        assert cpu.get_state().i == 0x300

    # @intent:test_case_roundtrip Fx55でV0..V3を格納し、Fx65で読み戻すとIがx+1進むことを検証します。
    def test_store_and_load_round_trip(self, cpu, bus, run_program):
        run_program(0x6011, 0x6122, 0x6233, 0x6344, 0xA400, 0xF355, steps=6)
        state = cpu.get_state()
        assert [bus.peek(0x400 + k) for k in range(4)] == [0x11, 0x22, 0x33, 0x44]
        assert state.i == 0x404

        for index in range(4):
            state.v[index] = 0
        state.i = 0x400
        bus.load(0x20C, 0xF3)
        bus.load(0x20D, 0x65)
        cpu.step()
        assert state.v[:4] == [0x11, 0x22, 0x33, 0x44]
        assert state.i == 0x404

    # @intent:test_case_range メモリ末尾を越えるFx55は何も書き込まずに拒否されることを検証します。
    def test_store_past_end_is_rejected(self, cpu, bus, run_program):
        with pytest.raises(MemoryAccessError):
            run_program(0x6011, 0xAFFE, 0xF255)
        assert bus.peek(0xFFE) == 0
        assert bus.peek(0xFFF) == 0
        state = cpu.get_state()
        assert (state.i, state.pc) == (0xFFE, 0x204)

    def test_load_past_end_is_rejected(self, cpu, run_program):
        with pytest.raises(MemoryAccessError):
            run_program(0xAFFF, 0xF165)
        assert cpu.get_state().v[:2] == [0, 0]

    # @intent:test_case_protect グリフテーブルへの書き込みは保護されることを検証します。
    def test_store_into_glyph_table_is_rejected(self, cpu, bus, run_program):
        with pytest.raises(MemoryAccessError, match="glyph table"):
            run_program(0x60FF, 0xA000, 0xF055)
        assert bus.peek(0x000) == FONT_SET[0]

    def test_bcd_into_glyph_table_is_rejected(self, cpu, run_program):
        with pytest.raises(MemoryAccessError):
            run_program(0xA04E, 0xF033)

    # @intent:test_case_saturation Fx55後のIはメモリ末尾で飽和することを検証します。
    def test_index_saturates_after_store(self, cpu, run_program):
        run_program(0xAFFE, 0xF155)
        assert cpu.get_state().i == 0xFFF
