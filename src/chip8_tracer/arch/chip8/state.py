# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List, Optional
from chip8_tracer.core.state import CpuState

REGISTER_COUNT = 16
STACK_DEPTH = 16
PROGRAM_START = 0x200
MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0xFFF

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP, スタック, タイマー）を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spはスタックに積まれているエントリ数（0-16）を表します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x000 # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    # @intent:rationale Fx0Aで入力待ちに入った場合、結果を格納するレジスタ番号を保持します。
    key_wait_register: Optional[int] = None

    # @intent:accessor VFはキャリー/ボロー/衝突フラグとして使われます。
    @property
    def vf(self) -> int:
        return self.v[0xF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[0xF] = value & 0xFF

    @property
    def awaiting_key(self) -> bool:
        return self.key_wait_register is not None

    # @intent:accessor sound_timerが0より大きい間、音が鳴っているとみなします。
    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0
