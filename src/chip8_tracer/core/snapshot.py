# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、CPUとバスの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、実行結果の検証に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "1234"
    mnemonic: str # 例: "JP"
    operands: List[str] = field(default_factory=list) # 例: ["$234"]
    operand_bytes: List[int] = field(default_factory=list) # 生の命令バイト
    cycle_count: int = 0
    length: int = 1 # 命令のバイト長

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、表示用テキスト）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "LD V0, $12"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令実行直後のCPU状態と、その命令が発生させたバスアクセスの記録。
    stateはスナップショット生成時点のコピーであり、以後のstepの影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
