# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

フラグを定義する命令は、両オペランドを読み出してからVxを書き込み、最後にVFを書き込みます。
これによりx=0xFの場合でもフラグが結果を上書きします。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, Peripherals

# --- 即値 ---
# @intent:responsibility LD Vx, byte (6xkk)
def execute_ld_vx_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = op.kk

# @intent:responsibility ADD Vx, byte (7xkk) - 256で剰余、フラグは変化しません。
def execute_add_vx_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# @intent:responsibility RND Vx, byte (Cxkk)
def execute_rnd_vx_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = io.rng.randrange(0x100) & op.kk

# --- レジスタ間 ---
def execute_ld_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = state.v[op.y]

def execute_or_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] |= state.v[op.y]

def execute_and_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] &= state.v[op.y]

def execute_xor_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] ^= state.v[op.y]

# @intent:responsibility ADD Vx, Vy (8xy4) - 桁あふれ時にVF=1。
def execute_add_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.v[op.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# @intent:responsibility SUB Vx, Vy (8xy5) - ボローなし(Vx >= Vy)でVF=1。
def execute_sub_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vx - vy) & 0xFF
    state.vf = 1 if vx >= vy else 0

# @intent:responsibility SUBN Vx, Vy (8xy7) - ボローなし(Vy >= Vx)でVF=1。
def execute_subn_vx_vy(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vy - vx) & 0xFF
    state.vf = 1 if vy >= vx else 0

# @intent:responsibility SHR Vx (8xy6) - Vxのみを対象とし、yは無視します。
def execute_shr_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    vx = state.v[op.x]
    state.v[op.x] = vx >> 1
    state.vf = vx & 0x1

# @intent:responsibility SHL Vx (8xyE) - Vxのみを対象とし、yは無視します。
def execute_shl_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    vx = state.v[op.x]
    state.v[op.x] = (vx << 1) & 0xFF
    state.vf = (vx >> 7) & 0x1
