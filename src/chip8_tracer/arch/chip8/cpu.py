# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import random
from typing import Dict, List, Optional

from chip8_tracer.core.errors import FetchOutOfRangeError
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.transport.bus import Bus
from chip8_tracer.loader.loader import RomLoader
from chip8_tracer.arch.chip8.display import Display
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.font import load_font
from chip8_tracer.arch.chip8.state import Chip8CpuState, ADDRESS_MASK
from chip8_tracer.arch.chip8.instructions import (
    Chip8Operation, Peripherals, decode_opcode, execute_instruction
)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシンをエミュレートするクラス。
    4KBのメモリは外部から渡されたBus上にマップされている必要があります。
    表示面とキーパッドはCPUが所有し、外部の描画/入力処理はステップ間にのみアクセスします。
    """
    def __init__(self, bus: Bus, keypad: Optional[Keypad] = None,
                 display: Optional[Display] = None, rng: Optional[random.Random] = None):
        self._peripherals = Peripherals(
            display=display or Display(),
            keypad=keypad or Keypad(),
            rng=rng or random.Random(),
        )
        super().__init__(bus)
        load_font(self._bus)

    # @intent:responsibility CHIP-8の初期状態を生成します。PC=0x200、その他は全て0。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility CPU状態、表示面、キー入力をリセットし、グリフテーブルを書き直します。
    # @intent:rationale ロード済みのプログラムイメージはメモリに残ります。
    def reset(self) -> None:
        super().reset()
        self._peripherals.display.clear()
        self._peripherals.keypad.release_all()
        load_font(self._bus)

    @property
    def display(self) -> Display:
        return self._peripherals.display

    @property
    def keypad(self) -> Keypad:
        return self._peripherals.keypad

    @property
    def bus(self) -> Bus:
        return self._bus

    # @intent:responsibility プログラムイメージを0x200からロードします。
    def load_program(self, data: bytes) -> int:
        return RomLoader().load_bytes(data, self._bus)

    # @intent:responsibility 60Hzのタイマードライバから呼ばれ、両タイマーを0で飽和させつつ1減算します。
    def tick_timers(self) -> None:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # @intent:responsibility 入力待ちモード中はフェッチを行わず、キー押下を判定します。
    # @intent:flow キー押下なし -> 同じ命令を再提示したSnapshotを返す / キー押下あり -> Vxに格納してPCを進める
    def _handle_suspended(self, current_pc: int) -> Optional[Snapshot]:
        state = self._state
        if not state.awaiting_key:
            return None

        # 待機中の命令はメモリを再フェッチせず、保持しているレジスタ番号から再構築します
        operation = decode_opcode(0xF00A | (state.key_wait_register << 8), current_pc)
        key = self._peripherals.keypad.first_pressed()
        if key is not None:
            state.v[state.key_wait_register] = key
            state.key_wait_register = None
            state.pc = (current_pc + operation.length) & 0xFFFF
        return self._create_snapshot(current_pc, operation)

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み出し、16bit命令語を返します。
    # @intent:pre-condition pc+1が有効アドレス範囲内であること。範囲外ならFetchOutOfRangeErrorを送出します。
    def _fetch(self) -> int:
        pc = self._state.pc
        if pc < 0 or pc + 1 > ADDRESS_MASK:
            raise FetchOutOfRangeError(f"Instruction fetch at {pc:#05x} is outside memory", pc)
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Chip8Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Chip8Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._peripherals)

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": value for index, value in enumerate(s.v)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility UI表示用に、フラグと動作モードを辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "VF": s.vf != 0, "SOUND": s.sound_active, "WAIT": s.awaiting_key
        }
