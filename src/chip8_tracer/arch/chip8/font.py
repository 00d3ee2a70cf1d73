# src/chip8_tracer/arch/chip8/font.py
"""
CHIP-8 組み込みグリフテーブル（16進数字フォント）。
"""
from chip8_tracer.transport.bus import Bus

GLYPH_SIZE = 5 # 1文字あたりのバイト数
FONT_BASE = 0x000
FONT_END = 0x050 # グリフテーブル直後のアドレス

# @intent:constant 0-Fの各文字を4x5ドットで表すビットマップ。上位4ビットのみ使用します。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])

# @intent:responsibility グリフテーブルをメモリ先頭に書き込みます。
def load_font(bus: Bus) -> None:
    for offset, value in enumerate(FONT_SET):
        bus.load(FONT_BASE + offset, value)

# @intent:responsibility 指定された数字のグリフ先頭アドレスを返します。
def glyph_address(digit: int) -> int:
    return FONT_BASE + digit * GLYPH_SIZE
