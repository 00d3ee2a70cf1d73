# src/chip8_tracer/ui/display_view.py
"""
CHIP-8 フレームバッファを描画するウィジェット。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from chip8_tracer.arch.chip8.display import Display
from chip8_tracer.config.models import DisplayConfig

# @intent:responsibility 64x32の表示面を指定倍率で拡大して描画します。
class DisplayView(QWidget):
    """
    Displayの内容をステップ間に読み出して描画するビュー。
    描画はpaintEvent内でのみ行い、表示面を変更することはありません。
    """
    def __init__(self, config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config or DisplayConfig()
        self._display: Optional[Display] = None
        self._foreground = QColor(self._config.foreground)
        self._background = QColor(self._config.background)
        self.setMinimumSize(Display.WIDTH * 2, Display.HEIGHT * 2)

    def set_display(self, display: Display) -> None:
        self._display = display
        self.update()

    def sizeHint(self) -> QSize:
        return QSize(Display.WIDTH * self._config.scale, Display.HEIGHT * self._config.scale)

    # @intent:responsibility ウィジェットの大きさに合わせて1ピクセルの描画サイズを決めます。
    def pixel_size(self) -> int:
        return max(1, min(self.width() // Display.WIDTH, self.height() // Display.HEIGHT))

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        if self._display is not None:
            size = self.pixel_size()
            for y, row in enumerate(self._display.rows()):
                for x, pixel in enumerate(row):
                    if pixel:
                        painter.fillRect(x * size, y * size, size, size, self._foreground)
        painter.end()
