# tests/arch/chip8/test_instructions_alu.py
"""
CHIP-8 算術論理演算命令のテスト。
"""
import random

import pytest

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# @intent:test_suite 6xkk/7xkk/8xy*/Cxkk 命令の結果とVFフラグを検証します。

class TestImmediate:
    def test_ld_vx_byte(self, cpu, run_program):
        run_program(0x6A42)
        assert cpu.get_state().v[0xA] == 0x42

    # @intent:test_case_wrap ADD Vx, byte は256で剰余を取り、VFを変更しないことを検証します。
    def test_add_vx_byte_wraps_without_flag(self, cpu, run_program):
        run_program(0x6FAA, 0x60FF, 0x7002)
        state = cpu.get_state()
        assert state.v[0] == 0x01
        assert state.vf == 0xAA


class TestRegisterOps:
    @pytest.mark.parametrize("opcode, expected", [
        (0x8010, 0x0F),  # LD
        (0x8011, 0xFF),  # OR
        (0x8012, 0x00),  # AND
        (0x8013, 0xFF),  # XOR
    ])
    def test_logic(self, cpu, run_program, opcode, expected):
        run_program(0x60F0, 0x610F, opcode)
        assert cpu.get_state().v[0] == expected

    # @intent:test_case_carry ADD Vx, Vy の桁あふれでVF=1になることを検証します。
    def test_add_vx_vy_carry(self, cpu, run_program):
        run_program(0x60F0, 0x6120, 0x8014)
        state = cpu.get_state()
        assert state.v[0] == 0x10
        assert state.vf == 1

    def test_add_vx_vy_no_carry(self, cpu, run_program):
        run_program(0x6010, 0x6120, 0x6F01, 0x8014)
        state = cpu.get_state()
        assert state.v[0] == 0x30
        assert state.vf == 0

    # @intent:test_case_borrow SUB: Vx=5, Vy=3 で Vx=2, VF=1、Vx=3, Vy=5 で Vx=0xFE, VF=0 となることを検証します。
    def test_sub_vx_vy(self, cpu, run_program):
        run_program(0x6005, 0x6103, 0x8015)
        state = cpu.get_state()
        assert (state.v[0], state.vf) == (0x02, 1)

    def test_sub_vx_vy_borrow(self, cpu, run_program):
        run_program(0x6003, 0x6105, 0x8015)
        state = cpu.get_state()
        assert (state.v[0], state.vf) == (0xFE, 0)

    def test_sub_equal_values_sets_flag(self, cpu, run_program):
        run_program(0x6007, 0x6107, 0x8015)
        state = cpu.get_state()
        assert (state.v[0], state.vf) == (0x00, 1)

    def test_subn_vx_vy(self, cpu, run_program):
        run_program(0x6003, 0x6105, 0x8017)
        state = cpu.get_state()
        assert (state.v[0], state.vf) == (0x02, 1)

    # @intent:test_case_shift シフト命令はVxのみを対象とし、追い出されたビットをVFに入れることを検証します。
    def test_shr_vx(self, cpu, run_program):
        run_program(0x6005, 0x61FF, 0x8016)
        state = cpu.get_state()
        assert (state.v[0], state.vf) == (0x02, 1)
        assert state.v[1] == 0xFF

    def test_shl_vx(self, cpu, run_program):
        run_program(0x6081, 0x801E)
        state = cpu.get_state()
        assert (state.v[0], state.vf) == (0x02, 1)

    # @intent:test_case_flag_register x=F の場合、結果よりフラグの書き込みが優先されることを検証します。
    def test_flag_overrides_result_when_x_is_vf(self, cpu, run_program):
        run_program(0x6FFF, 0x6101, 0x8F14)
        assert cpu.get_state().vf == 1


class TestRandom:
    # @intent:test_case_rnd RND はシード付き乱数とkkの論理積であることを検証します。
    def test_rnd_is_masked_and_reproducible(self, assemble):
        results = []
        for _ in range(2):
            bus = Bus()
            bus.register_device(0x000, 0xFFF, RAM(0x1000))
            cpu = Chip8Cpu(bus, rng=random.Random(1234))
            cpu.load_program(assemble(0xC00F))
            cpu.step()
            results.append(cpu.get_state().v[0])
        assert results[0] == results[1]
        assert results[0] & 0xF0 == 0

    def test_rnd_with_zero_mask(self, cpu, run_program):
        run_program(0x60FF, 0xC000)
        assert cpu.get_state().v[0] == 0
