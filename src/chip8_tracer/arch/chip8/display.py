# src/chip8_tracer/arch/chip8/display.py
"""
CHIP-8 のモノクロフレームバッファ（64x32）。
"""
from typing import List, Sequence

# @intent:responsibility 1ピクセル1ビットの表示面を保持し、スプライトのXOR合成を行います。
class Display:
    """
    64x32の行優先フレームバッファ。
    CLSとDRW命令によってのみ変更されます。ダブルバッファリングは行いません。
    """
    WIDTH = 64
    HEIGHT = 32
    SPRITE_WIDTH = 8

    def __init__(self):
        self._pixels: List[List[int]] = [[0] * self.WIDTH for _ in range(self.HEIGHT)]

    # @intent:responsibility 全ピクセルを消灯します。
    def clear(self) -> None:
        for row in self._pixels:
            for x in range(self.WIDTH):
                row[x] = 0

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[y % self.HEIGHT][x % self.WIDTH]

    # @intent:responsibility スプライトをXOR合成し、点灯ピクセルが消えたかどうかを返します。
    # @intent:rationale 両軸とも表示サイズで剰余を取り、画面端ではクリップせず反対側へ回り込みます。
    def draw_sprite(self, x: int, y: int, sprite_rows: Sequence[int]) -> bool:
        """
        sprite_rowsの各バイトを1行とし、MSBから順に8列を(x, y)を起点に描画します。
        いずれかのピクセルが1から0に変化した場合Trueを返します。
        """
        collision = False
        for row_offset, sprite_byte in enumerate(sprite_rows):
            row = self._pixels[(y + row_offset) % self.HEIGHT]
            for col in range(self.SPRITE_WIDTH):
                if not (sprite_byte >> (7 - col)) & 1:
                    continue
                px = (x + col) % self.WIDTH
                if row[px]:
                    collision = True
                row[px] ^= 1
        return collision

    # @intent:responsibility 現在のフレームのコピーを返します。
    def rows(self) -> List[List[int]]:
        return [list(row) for row in self._pixels]

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._pixels)

    # @intent:responsibility ヘッドレス実行やテスト用に、フレームをテキストとして描画します。
    def to_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if p else off for p in row) for row in self._pixels)
