# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

ハンドラ実行時点でPCは既に次の命令（命令アドレス+2）を指しています。
"""
from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.state import Chip8CpuState, STACK_DEPTH
from .base import Chip8Operation, Peripherals, skip_next

# --- JP / CALL / RET ---
# @intent:responsibility JP addr (1nnn)
def execute_jp_addr(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.pc = op.nnn

# @intent:responsibility JP V0, addr (Bnnn)
def execute_jp_v0_addr(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.pc = op.nnn + state.v[0]

# @intent:responsibility CALL addr (2nnn) - 戻りアドレス（次の命令）をプッシュしてからジャンプします。
def execute_call_addr(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(
            f"Stack overflow: CALL ${op.nnn:03X} with {STACK_DEPTH} nested calls", op.address, op.opcode
        )
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = op.nnn

# @intent:responsibility RET (00EE)
def execute_ret(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.sp == 0:
        raise StackUnderflowError("Stack underflow: RET with empty stack", op.address, op.opcode)
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- Skip ---
def execute_se_vx_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

def execute_sne_vx_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

def execute_se_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

def execute_sne_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# @intent:utility_function Vxが指すキーの押下状態を返します。
# @intent:rationale 0xFを超える値は存在しないキーであり、常に未押下として扱います。
def _key_pressed(io: Peripherals, key: int) -> bool:
    return key < Keypad.KEY_COUNT and io.keypad.is_pressed(key)

# @intent:responsibility SKP Vx (Ex9E)
def execute_skp_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if _key_pressed(io, state.v[op.x]):
        skip_next(state)

# @intent:responsibility SKNP Vx (ExA1)
def execute_sknp_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if not _key_pressed(io, state.v[op.x]):
        skip_next(state)
