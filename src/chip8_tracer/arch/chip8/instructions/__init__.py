# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.core.errors import UndefinedOpcodeError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Instruction, Chip8Operation, Peripherals, INSTRUCTION_LENGTH, split_fields, operand_bytes
from .maps import EXECUTE_MAP, FORMAT_MAP, select_instruction

# @intent:responsibility 16bit命令語をデコードし、Chip8Operationを返します。
# @intent:rationale デコードは状態を参照・変更しない純粋関数です。未定義命令はここで拒否されるため、
#                  実行前の状態は一切変化しません。
def decode_opcode(opcode: int, pc: int = 0) -> Chip8Operation:
    """
    命令語からフィールドを抽出し、命令タグ付きのChip8Operationを返します。
    どの命令にも該当しない場合はUndefinedOpcodeErrorを送出します。
    """
    instruction = select_instruction(opcode)
    if instruction is None:
        raise UndefinedOpcodeError(opcode, pc)

    _, x, y, n, kk, nnn = split_fields(opcode)
    mnemonic, templates = FORMAT_MAP[instruction]
    operands = [t.format(x=x, y=y, n=n, kk=kk, nnn=nnn) for t in templates]
    return Chip8Operation(
        opcode_hex=f"{opcode:04X}",
        mnemonic=mnemonic,
        operands=operands,
        operand_bytes=operand_bytes(opcode),
        cycle_count=1,
        length=INSTRUCTION_LENGTH,
        instruction=instruction,
        opcode=opcode,
        address=pc,
        x=x, y=y, n=n, kk=kk, nnn=nnn,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Chip8Operation, state: Chip8CpuState, bus: Bus, io: Peripherals) -> None:
    """
    命令タグに対応するただ1つのハンドラを呼び出し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP[operation.instruction]
    executor(state, bus, operation, io)
