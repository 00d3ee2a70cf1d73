# src/chip8_tracer/arch/chip8/instructions/load.py
"""
転送命令（Iレジスタ、タイマー、キー入力、メモリ）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.font import glyph_address
from chip8_tracer.arch.chip8.state import Chip8CpuState, ADDRESS_MASK
from .base import Chip8Operation, Peripherals, check_read_range, check_write_range

# --- Index Register ---
# @intent:responsibility LD I, addr (Annn)
def execute_ld_i_addr(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.i = op.nnn

# @intent:responsibility ADD I, Vx (Fx1E) - 0xFFFで飽和し、飽和時にVF=1。
def execute_add_i_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    total = state.i + state.v[op.x]
    if total > ADDRESS_MASK:
        state.i = ADDRESS_MASK
        state.vf = 1
    else:
        state.i = total
        state.vf = 0

# @intent:responsibility LD F, Vx (Fx29) - 数字Vxのグリフ先頭アドレスをIに設定します。
def execute_ld_f_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.i = glyph_address(state.v[op.x])

# --- Timers ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = state.delay_timer

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.delay_timer = state.v[op.x]

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.sound_timer = state.v[op.x]

# --- Key Input ---
# @intent:responsibility LD Vx, K (Fx0A)
# @intent:rationale キーが押されていなければ入力待ちモードに入り、PCをこの命令に戻します。
#                  以後はCPUがフェッチ前に入力待ちを判定し、キー押下まで同じ命令を再提示します。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    key = io.keypad.first_pressed()
    if key is not None:
        state.v[op.x] = key
        return
    state.key_wait_register = op.x
    state.pc = op.address

# --- Memory ---
# @intent:responsibility LD B, Vx (Fx33) - Vxの10進3桁をI, I+1, I+2に格納します。
def execute_ld_b_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    check_write_range(op, state.i, 3)
    value = state.v[op.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# @intent:responsibility LD [I], Vx (Fx55) - V0..Vxをメモリへ格納し、Iをx+1進めます。
def execute_ld_mem_vx(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    count = op.x + 1
    check_write_range(op, state.i, count)
    for offset in range(count):
        bus.write(state.i + offset, state.v[offset])
    state.i = min(state.i + count, ADDRESS_MASK)

# @intent:responsibility LD Vx, [I] (Fx65) - メモリからV0..Vxへ読み込み、Iをx+1進めます。
def execute_ld_vx_mem(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    count = op.x + 1
    check_read_range(op, state.i, count)
    values = [bus.read(state.i + offset) for offset in range(count)]
    state.v[:count] = values
    state.i = min(state.i + count, ADDRESS_MASK)
