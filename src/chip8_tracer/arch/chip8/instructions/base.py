# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義とユーティリティ。
"""
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from chip8_tracer.core.errors import MemoryAccessError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.display import Display
from chip8_tracer.arch.chip8.font import FONT_END
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.state import Chip8CpuState, ADDRESS_MASK

INSTRUCTION_LENGTH = 2

# @intent:responsibility デコード済み命令の種別（タグ）を定義します。命令ごとに1メンバーです。
# @intent:rationale 各タグは実行マップ上でただ1つのハンドラに対応し、ハンドラ間のフォールスルーは構造上起こりません。
class Chip8Instruction(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP_ADDR = "1nnn"
    CALL_ADDR = "2nnn"
    SE_VX_BYTE = "3xkk"
    SNE_VX_BYTE = "4xkk"
    SE_VX_VY = "5xy0"
    LD_VX_BYTE = "6xkk"
    ADD_VX_BYTE = "7xkk"
    LD_VX_VY = "8xy0"
    OR_VX_VY = "8xy1"
    AND_VX_VY = "8xy2"
    XOR_VX_VY = "8xy3"
    ADD_VX_VY = "8xy4"
    SUB_VX_VY = "8xy5"
    SHR_VX = "8xy6"
    SUBN_VX_VY = "8xy7"
    SHL_VX = "8xyE"
    SNE_VX_VY = "9xy0"
    LD_I_ADDR = "Annn"
    JP_V0_ADDR = "Bnnn"
    RND_VX_BYTE = "Cxkk"
    DRW_VX_VY_N = "Dxyn"
    SKP_VX = "Ex9E"
    SKNP_VX = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    LD_F_VX = "Fx29"
    LD_B_VX = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"

# @intent:responsibility 命令語から抽出したフィールドを保持する、CHIP-8用のOperation。
@dataclass(frozen=True)
class Chip8Operation(Operation):
    """
    instructionタグと、命令語から切り出した各フィールドを保持します。
    addressは命令をフェッチしたアドレスです。
    """
    instruction: Optional[Chip8Instruction] = None
    opcode: int = 0
    address: int = 0
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0

# @intent:responsibility 命令ハンドラが操作する周辺機器（表示面、キーパッド、乱数源）をまとめます。
@dataclass
class Peripherals:
    display: Display = field(default_factory=Display)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)

# @intent:utility_function 命令語の各フィールドを取り出します。
def split_fields(opcode: int):
    """(op4, x, y, n, kk, nnn) を返します。"""
    return (
        (opcode >> 12) & 0xF,
        (opcode >> 8) & 0xF,
        (opcode >> 4) & 0xF,
        opcode & 0xF,
        opcode & 0xFF,
        opcode & 0xFFF,
    )

# @intent:utility_function 次の命令を読み飛ばします。PCは実行前に既に2進んでいます。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + INSTRUCTION_LENGTH) & 0xFFFF

# @intent:utility_function Iから始まるメモリ読み出し範囲を検証します。
def check_read_range(op: Chip8Operation, start: int, count: int) -> None:
    if count <= 0:
        return
    end = start + count - 1
    if start < 0 or end > ADDRESS_MASK:
        raise MemoryAccessError(
            f"Read of {count} bytes at {start:#05x} exceeds memory range", op.address, op.opcode
        )

# @intent:utility_function Iから始まるメモリ書き込み範囲を検証します。
# @intent:rationale グリフテーブル（0x000-0x04F）はプログラムから上書きさせません。
def check_write_range(op: Chip8Operation, start: int, count: int) -> None:
    check_read_range(op, start, count)
    if count > 0 and start < FONT_END:
        raise MemoryAccessError(
            f"Write of {count} bytes at {start:#05x} overlaps the glyph table", op.address, op.opcode
        )

def operand_bytes(opcode: int) -> List[int]:
    return [(opcode >> 8) & 0xFF, opcode & 0xFF]
