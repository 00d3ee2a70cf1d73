# chip8_tracer/core/errors.py
"""
実行時エラーの分類。

コアは状態を壊さずに命令を拒否し、エラーの種類を呼び出し元へ報告するだけです。
停止するか、状態を検査するかは呼び出し元（FrameDriver、CLI）が判断します。
"""
from typing import Optional


# @intent:responsibility 命令実行中に検出された条件の基底クラス。
class ExecutionError(Exception):
    """
    命令を実行できなかったことを表す例外。
    pcは失敗した命令のアドレス、opcodeはフェッチ済みであればその命令語です。
    """
    # @intent:rationale fatal=Trueの条件は継続実行に意味がないことを示します。
    fatal = False

    def __init__(self, message: str, pc: int, opcode: Optional[int] = None):
        super().__init__(message)
        self.pc = pc
        self.opcode = opcode


# @intent:responsibility 命令表に存在しないビットパターン。
class UndefinedOpcodeError(ExecutionError):
    fatal = True

    def __init__(self, opcode: int, pc: int):
        super().__init__(f"Undefined opcode {opcode:04X} at {pc:#05x}", pc, opcode)


class StackOverflowError(ExecutionError):
    pass


class StackUnderflowError(ExecutionError):
    pass


# @intent:responsibility 有効範囲外、または保護領域へのメモリアクセス。
# @intent:rationale IndexErrorとしても捕捉できます。
class MemoryAccessError(ExecutionError, IndexError):
    pass


class FetchOutOfRangeError(MemoryAccessError):
    pass


# @intent:responsibility プログラムイメージがロード可能領域（0x200-0xFFF）に収まらない。
class RomTooLargeError(ValueError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM size {size} bytes exceeds memory limit of {limit} bytes.")
        self.size = size
        self.limit = limit
