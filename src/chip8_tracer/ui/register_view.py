# src/chip8_tracer/ui/register_view.py
"""
CPUのレジスタを表示する汎用ウィジェット。
AbstractCpuのメタデータを利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QFontDatabase

from chip8_tracer.core.cpu import AbstractCpu

GROUP_STYLE = """
    QGroupBox {
        font-weight: bold;
        border: 1px solid #222;
        border-radius: 4px;
        margin-top: 20px;
        color: #EEE;
        background-color: #121212;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        subcontrol-position: top left;
        padding: 0 5px;
        left: 10px;
        color: #00AAAA;
    }
"""

# @intent:responsibility CPUのレジスタ値とフラグを表示する汎用UIウィジェットを提供します。
class RegisterView(QWidget):
    """
    CPUのレジスタ状態を表示するウィジェット。
    AbstractCpuから取得したレイアウト情報に基づいて動的にフィールドを生成します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._flag_labels: Dict[str, QLabel] = {}
        self._cpu: Optional[AbstractCpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self):
        # 既存のウィジェットをクリア
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()
        self._flag_labels.clear()

        for group in self._cpu.get_register_layout():
            group_box, group_layout = self._create_group(group.group_name)
            for reg in group.registers:
                hex_width = (reg.width + 3) // 4 # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width
                self._register_labels[reg.name] = self._add_row(group_layout, reg.name, f"0x{'0'*hex_width}")
            self._layout.addWidget(group_box)

        flag_box, flag_layout = self._create_group("Flags")
        for name in self._cpu.get_flag_state():
            self._flag_labels[name] = self._add_row(flag_layout, name, "0")
        self._layout.addWidget(flag_box)

        self._layout.addStretch()

    def _create_group(self, title: str):
        group_box = QGroupBox(title)
        group_box.setStyleSheet(GROUP_STYLE)
        group_layout = QFormLayout(group_box)
        group_layout.setLabelAlignment(Qt.AlignLeft)
        group_layout.setContentsMargins(10, 15, 10, 10)
        group_layout.setSpacing(3)
        return group_box, group_layout

    def _add_row(self, layout: QFormLayout, name: str, initial: str) -> QLabel:
        label_name = QLabel(f"{name}:")
        label_name.setStyleSheet("font-weight: bold; color: #BBBBBB;")
        label_value = QLabel(initial)
        label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
        label_value.setAlignment(Qt.AlignRight)
        layout.addRow(label_name, label_value)
        return label_value

    # @intent:responsibility 現在のCPU状態を取得し、レジスタとフラグの表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

        for name, value in self._cpu.get_flag_state().items():
            if name in self._flag_labels:
                self._flag_labels[name].setText("1" if value else "0")

    def register_text(self, name: str) -> str:
        return self._register_labels[name].text()
