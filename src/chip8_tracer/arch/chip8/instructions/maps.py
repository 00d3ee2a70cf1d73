# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令語と命令実装のマッピング定義。
"""
from typing import Callable, Dict, Optional, Tuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Instruction as Ins, Chip8Operation, Peripherals
from . import alu
from . import control
from . import graphics
from . import load

ExecFunc = Callable[[Chip8CpuState, Bus, Chip8Operation, Peripherals], None]

# @intent:map 上位4ビットだけで命令が確定するグループ。
DIRECT_MAP: Dict[int, Ins] = {
    0x1: Ins.JP_ADDR,
    0x2: Ins.CALL_ADDR,
    0x3: Ins.SE_VX_BYTE,
    0x4: Ins.SNE_VX_BYTE,
    0x6: Ins.LD_VX_BYTE,
    0x7: Ins.ADD_VX_BYTE,
    0xA: Ins.LD_I_ADDR,
    0xB: Ins.JP_V0_ADDR,
    0xC: Ins.RND_VX_BYTE,
    0xD: Ins.DRW_VX_VY_N,
}

# @intent:map 0x0***グループ。命令語全体で照合します。
SYSTEM_MAP: Dict[int, Ins] = {
    0x00E0: Ins.CLS,
    0x00EE: Ins.RET,
}

# @intent:map 5xy0 / 9xy0。下位4ビットが0の場合のみ有効です。
REGISTER_COMPARE_MAP: Dict[int, Ins] = {
    0x5: Ins.SE_VX_VY,
    0x9: Ins.SNE_VX_VY,
}

# @intent:map 8xy*グループ。下位4ビット(n)で照合します。
ALU_MAP: Dict[int, Ins] = {
    0x0: Ins.LD_VX_VY,
    0x1: Ins.OR_VX_VY,
    0x2: Ins.AND_VX_VY,
    0x3: Ins.XOR_VX_VY,
    0x4: Ins.ADD_VX_VY,
    0x5: Ins.SUB_VX_VY,
    0x6: Ins.SHR_VX,
    0x7: Ins.SUBN_VX_VY,
    0xE: Ins.SHL_VX,
}

# @intent:map Ex**グループ。下位8ビット(kk)で照合します。
KEY_MAP: Dict[int, Ins] = {
    0x9E: Ins.SKP_VX,
    0xA1: Ins.SKNP_VX,
}

# @intent:map Fx**グループ。下位8ビット(kk)で照合します。
MISC_MAP: Dict[int, Ins] = {
    0x07: Ins.LD_VX_DT,
    0x0A: Ins.LD_VX_K,
    0x15: Ins.LD_DT_VX,
    0x18: Ins.LD_ST_VX,
    0x1E: Ins.ADD_I_VX,
    0x29: Ins.LD_F_VX,
    0x33: Ins.LD_B_VX,
    0x55: Ins.LD_MEM_VX,
    0x65: Ins.LD_VX_MEM,
}

# @intent:map 命令タグから表示用のニーモニックとオペランド書式へのマッピング。
FORMAT_MAP: Dict[Ins, Tuple[str, Tuple[str, ...]]] = {
    Ins.CLS: ("CLS", ()),
    Ins.RET: ("RET", ()),
    Ins.JP_ADDR: ("JP", ("${nnn:03X}",)),
    Ins.CALL_ADDR: ("CALL", ("${nnn:03X}",)),
    Ins.SE_VX_BYTE: ("SE", ("V{x:X}", "${kk:02X}")),
    Ins.SNE_VX_BYTE: ("SNE", ("V{x:X}", "${kk:02X}")),
    Ins.SE_VX_VY: ("SE", ("V{x:X}", "V{y:X}")),
    Ins.LD_VX_BYTE: ("LD", ("V{x:X}", "${kk:02X}")),
    Ins.ADD_VX_BYTE: ("ADD", ("V{x:X}", "${kk:02X}")),
    Ins.LD_VX_VY: ("LD", ("V{x:X}", "V{y:X}")),
    Ins.OR_VX_VY: ("OR", ("V{x:X}", "V{y:X}")),
    Ins.AND_VX_VY: ("AND", ("V{x:X}", "V{y:X}")),
    Ins.XOR_VX_VY: ("XOR", ("V{x:X}", "V{y:X}")),
    Ins.ADD_VX_VY: ("ADD", ("V{x:X}", "V{y:X}")),
    Ins.SUB_VX_VY: ("SUB", ("V{x:X}", "V{y:X}")),
    Ins.SHR_VX: ("SHR", ("V{x:X}",)),
    Ins.SUBN_VX_VY: ("SUBN", ("V{x:X}", "V{y:X}")),
    Ins.SHL_VX: ("SHL", ("V{x:X}",)),
    Ins.SNE_VX_VY: ("SNE", ("V{x:X}", "V{y:X}")),
    Ins.LD_I_ADDR: ("LD", ("I", "${nnn:03X}")),
    Ins.JP_V0_ADDR: ("JP", ("V0", "${nnn:03X}")),
    Ins.RND_VX_BYTE: ("RND", ("V{x:X}", "${kk:02X}")),
    Ins.DRW_VX_VY_N: ("DRW", ("V{x:X}", "V{y:X}", "{n}")),
    Ins.SKP_VX: ("SKP", ("V{x:X}",)),
    Ins.SKNP_VX: ("SKNP", ("V{x:X}",)),
    Ins.LD_VX_DT: ("LD", ("V{x:X}", "DT")),
    Ins.LD_VX_K: ("LD", ("V{x:X}", "K")),
    Ins.LD_DT_VX: ("LD", ("DT", "V{x:X}")),
    Ins.LD_ST_VX: ("LD", ("ST", "V{x:X}")),
    Ins.ADD_I_VX: ("ADD", ("I", "V{x:X}")),
    Ins.LD_F_VX: ("LD", ("F", "V{x:X}")),
    Ins.LD_B_VX: ("LD", ("B", "V{x:X}")),
    Ins.LD_MEM_VX: ("LD", ("[I]", "V{x:X}")),
    Ins.LD_VX_MEM: ("LD", ("V{x:X}", "[I]")),
}

# @intent:map 命令タグから実行関数へのマッピングテーブル。各タグはただ1つのハンドラを持ちます。
EXECUTE_MAP: Dict[Ins, ExecFunc] = {
    # Control
    Ins.RET: control.execute_ret,
    Ins.JP_ADDR: control.execute_jp_addr,
    Ins.CALL_ADDR: control.execute_call_addr,
    Ins.SE_VX_BYTE: control.execute_se_vx_byte,
    Ins.SNE_VX_BYTE: control.execute_sne_vx_byte,
    Ins.SE_VX_VY: control.execute_se_vx_vy,
    Ins.SNE_VX_VY: control.execute_sne_vx_vy,
    Ins.JP_V0_ADDR: control.execute_jp_v0_addr,
    Ins.SKP_VX: control.execute_skp_vx,
    Ins.SKNP_VX: control.execute_sknp_vx,

    # ALU
    Ins.LD_VX_BYTE: alu.execute_ld_vx_byte,
    Ins.ADD_VX_BYTE: alu.execute_add_vx_byte,
    Ins.LD_VX_VY: alu.execute_ld_vx_vy,
    Ins.OR_VX_VY: alu.execute_or_vx_vy,
    Ins.AND_VX_VY: alu.execute_and_vx_vy,
    Ins.XOR_VX_VY: alu.execute_xor_vx_vy,
    Ins.ADD_VX_VY: alu.execute_add_vx_vy,
    Ins.SUB_VX_VY: alu.execute_sub_vx_vy,
    Ins.SHR_VX: alu.execute_shr_vx,
    Ins.SUBN_VX_VY: alu.execute_subn_vx_vy,
    Ins.SHL_VX: alu.execute_shl_vx,
    Ins.RND_VX_BYTE: alu.execute_rnd_vx_byte,

    # Load
    Ins.LD_I_ADDR: load.execute_ld_i_addr,
    Ins.LD_VX_DT: load.execute_ld_vx_dt,
    Ins.LD_VX_K: load.execute_ld_vx_k,
    Ins.LD_DT_VX: load.execute_ld_dt_vx,
    Ins.LD_ST_VX: load.execute_ld_st_vx,
    Ins.ADD_I_VX: load.execute_add_i_vx,
    Ins.LD_F_VX: load.execute_ld_f_vx,
    Ins.LD_B_VX: load.execute_ld_b_vx,
    Ins.LD_MEM_VX: load.execute_ld_mem_vx,
    Ins.LD_VX_MEM: load.execute_ld_vx_mem,

    # Graphics
    Ins.CLS: graphics.execute_cls,
    Ins.DRW_VX_VY_N: graphics.execute_drw_vx_vy_n,
}

# @intent:responsibility 命令語に対応する命令タグを選択します。該当がなければNone。
def select_instruction(opcode: int) -> Optional[Ins]:
    op4 = (opcode >> 12) & 0xF
    if op4 in DIRECT_MAP:
        return DIRECT_MAP[op4]
    if op4 == 0x0:
        return SYSTEM_MAP.get(opcode)
    if op4 in REGISTER_COMPARE_MAP:
        return REGISTER_COMPARE_MAP[op4] if opcode & 0xF == 0 else None
    if op4 == 0x8:
        return ALU_MAP.get(opcode & 0xF)
    if op4 == 0xE:
        return KEY_MAP.get(opcode & 0xFF)
    if op4 == 0xF:
        return MISC_MAP.get(opcode & 0xFF)
    return None
