# src/chip8_tracer/arch/chip8/keypad.py
"""
CHIP-8 の16キー入力マトリクス。
"""
from typing import List, Optional

# @intent:responsibility 16個のキー状態を保持します。書き込みは外部の入力プロデューサのみが行います。
class Keypad:
    KEY_COUNT = 16

    def __init__(self):
        self._keys: List[bool] = [False] * self.KEY_COUNT

    def _check_key(self, key: int) -> None:
        if not 0 <= key < self.KEY_COUNT:
            raise ValueError(f"Key {key} is not a valid CHIP-8 key (0x0-0xF).")

    def set_key(self, key: int, pressed: bool) -> None:
        self._check_key(key)
        self._keys[key] = pressed

    def press(self, key: int) -> None:
        self.set_key(key, True)

    def release(self, key: int) -> None:
        self.set_key(key, False)

    def release_all(self) -> None:
        self._keys = [False] * self.KEY_COUNT

    def is_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self._keys[key]

    # @intent:responsibility 押下中のキーのうち最小のインデックスを返します。押下がなければNone。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None
