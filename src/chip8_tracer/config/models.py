from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:data_structure 物理キー名（Qtのキー名、例: "Q"）からCHIP-8キー番号への既定マッピング。
#                        一般的な 1234/QWER/ASDF/ZXCV 配置。
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#101010"

@dataclass
class SystemConfig:
    cycles_per_frame: int = 10 # 1フレーム（1/60秒）あたりの命令数
    frame_rate: int = 60 # タイマー減算の周波数
    rng_seed: Optional[int] = None
    display: DisplayConfig = field(default_factory=DisplayConfig)
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
