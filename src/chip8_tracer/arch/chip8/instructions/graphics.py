# src/chip8_tracer/arch/chip8/instructions/graphics.py
"""
表示命令（CLS, DRW）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, Peripherals, check_read_range

# @intent:responsibility CLS (00E0)
def execute_cls(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    io.display.clear()

# @intent:responsibility DRW Vx, Vy, n (Dxyn)
# @intent:pre-condition スプライトの読み出し範囲を検証してから表示面を変更します。
def execute_drw_vx_vy_n(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    check_read_range(op, state.i, op.n)
    sprite = [bus.read(state.i + row) for row in range(op.n)]
    collision = io.display.draw_sprite(state.v[op.x], state.v[op.y], sprite)
    state.vf = 1 if collision else 0
