# chip8_tracer/loader/loader.py
"""
プログラムローダーモジュール。
CHIP-8のROMイメージ（生バイナリ）をプログラム領域（0x200〜）にロードします。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_tracer.core.errors import RomTooLargeError
from chip8_tracer.transport.bus import Bus

logger = logging.getLogger(__name__)

LOAD_ADDRESS = 0x200
MAX_ROM_SIZE = 0x1000 - LOAD_ADDRESS # 3584 bytes

class RomLoader:
    """
    ROMファイルまたはバイト列を、0x200から順にそのままバスへ書き込むローダー。
    """
    # @intent:responsibility ファイルからROMを読み込み、バスにロードします。
    # @intent:post-condition ロードしたバイト数を返します。ファイルが読めない場合はOSErrorが伝播します。
    def load_rom(self, file_path: Union[str, Path], bus: Bus) -> int:
        data = Path(file_path).read_bytes()
        size = self.load_bytes(data, bus)
        logger.info("Loaded ROM %s (%d bytes)", file_path, size)
        return size

    # @intent:responsibility バイト列をプログラム領域にコピーします。
    # @intent:rationale サイズ超過は何も書き込まずに拒否します（部分ロードを残さない）。
    # @intent:post-condition 0x200-0xFFFのうちイメージ以降は0になり、以前のイメージは残りません。
    def load_bytes(self, data: bytes, bus: Bus) -> int:
        if len(data) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(data), MAX_ROM_SIZE)
        for offset in range(len(data), MAX_ROM_SIZE):
            bus.load(LOAD_ADDRESS + offset, 0x00)
        for offset, value in enumerate(data):
            bus.load(LOAD_ADDRESS + offset, value)
        return len(data)
