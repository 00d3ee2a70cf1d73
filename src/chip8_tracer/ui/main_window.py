# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
表示面、レジスタビュー、フレームタイマーを保持し、キー入力をキーパッドへ中継します。
"""
import logging
from typing import Dict, Optional

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar, QLabel, QFileDialog, QMessageBox
from PySide6.QtGui import QPalette, QColor, QAction, QKeyEvent, QCloseEvent, QFocusEvent
from PySide6.QtCore import Qt, QTimer, QElapsedTimer, Slot

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.driver.frame_driver import FrameDriver
from chip8_tracer.loader.loader import RomLoader
from chip8_tracer.core.errors import RomTooLargeError
from .display_view import DisplayView
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# 1回のタイマー通知で追いつくフレーム数の上限
MAX_CATCHUP_FRAMES = 4

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    QTimerでフレームを駆動するため、CPUとUIは同じスレッド上で動作します。
    """
    def __init__(self, cpu: Chip8Cpu, driver: FrameDriver, config: SystemConfig, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("CHIP-8 Tracer")
        self._cpu = cpu
        self._driver = driver
        self._config = config

        self._set_dark_theme()
        self._create_display()
        self._create_status_inspector()
        self._create_toolbar()
        self._create_menus()

        # 実行フレーム数はタイマー通知の回数ではなく経過時間から決めます
        self._frame_timer = QTimer(self)
        self._frame_timer.setTimerType(Qt.PreciseTimer)
        self._frame_timer.setInterval(max(1, 1000 // config.frame_rate))
        self._frame_timer.timeout.connect(self._on_frame_timer)
        self._clock = QElapsedTimer()
        self._frames_scheduled = 0

        # 押下中の物理キー（スキャンコードまたはキーコード）からCHIP-8キーへの対応
        self._held_keys: Dict[int, int] = {}
        self._key_codes: Dict[int, int] = {
            ord(name.upper()): key for name, key in config.key_map.items() if len(name) == 1
        }

        self._update_ui_state(False)
        self._refresh_views()

    def is_running(self) -> bool:
        return self._frame_timer.isActive()

    def _create_display(self):
        self.display_widget = DisplayView(self._config.display)
        self.display_widget.set_display(self._cpu.display)
        self.setCentralWidget(self.display_widget)
        self.setFocusPolicy(Qt.StrongFocus)

    # @intent:responsibility 右側のレジスタインスペクタを作成します。
    def _create_status_inspector(self):
        status_dock = QDockWidget("Registers", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self._cpu)
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

        self.status_label = QLabel("Stopped")
        self.statusBar().addWidget(self.status_label)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.pause_action = QAction("Pause", self)
        self.pause_action.triggered.connect(self.pause)
        toolbar.addAction(self.pause_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset)
        toolbar.addAction(self.reset_action)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.load_rom_action)
        file_menu.addAction(self.reset_action)
        file_menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def _update_ui_state(self, is_running: bool):
        self.run_action.setEnabled(not is_running and not self._driver.halted)
        self.pause_action.setEnabled(is_running)
        self.load_rom_action.setEnabled(not is_running)

    # @intent:responsibility フレームタイマーを開始します。停止中のエラーが回復可能であれば解除してから再開します。
    @Slot()
    def start(self):
        if self._driver.halted and not self._driver.resume():
            return
        self._clock.start()
        self._frames_scheduled = 0
        self._frame_timer.start()
        self.status_label.setText("Running...")
        self._update_ui_state(True)

    @Slot()
    def pause(self):
        self._frame_timer.stop()
        self.status_label.setText("Paused")
        self._update_ui_state(False)

    @Slot()
    def reset(self):
        self._frame_timer.stop()
        self._driver.reset()
        self._release_keys()
        self.status_label.setText("Reset")
        self._update_ui_state(False)
        self._refresh_views()

    # @intent:responsibility 開始からの経過時間に対して不足しているフレーム数を返し、予定済みとして記録します。
    # @intent:post-condition 戻り値は0からMAX_CATCHUP_FRAMESまで。上限を超えた遅れは切り捨てます。
    def _frames_due(self, elapsed_ms: int) -> int:
        target = elapsed_ms * self._config.frame_rate // 1000
        due = target - self._frames_scheduled
        if due > MAX_CATCHUP_FRAMES:
            self._frames_scheduled = target - MAX_CATCHUP_FRAMES
            due = MAX_CATCHUP_FRAMES
        due = max(0, due)
        self._frames_scheduled += due
        return due

    @Slot()
    def _on_frame_timer(self):
        for _ in range(self._frames_due(self._clock.elapsed())):
            self._run_frame()
            if not self._frame_timer.isActive():
                break

    # @intent:responsibility 1フレームを実行し、停止した場合はタイマーを止めてエラー内容を表示します。
    @Slot()
    def _run_frame(self):
        self._driver.run_frame()
        if self._driver.halted:
            self._frame_timer.stop()
            self.status_label.setText(f"Halted: {self._driver.last_error}")
            self._update_ui_state(False)
        self._refresh_views()

    def _refresh_views(self):
        self.display_widget.update()
        self.register_view.update_registers()

    # @intent:responsibility 指定されたROMファイルをロードし、システムを初期状態に戻します。
    def load_rom(self, file_name: str) -> bool:
        self._frame_timer.stop()
        self._driver.reset()
        self._release_keys()
        try:
            size = RomLoader().load_rom(file_name, self._cpu.bus)
        except (OSError, RomTooLargeError) as e:
            logger.error("Failed to load ROM %s: %s", file_name, e)
            self.status_label.setText(f"Failed to load ROM: {e}")
            self._update_ui_state(False)
            return False
        self.status_label.setText(f"Loaded {file_name} ({size} bytes)")
        self._update_ui_state(False)
        self._refresh_views()
        return True

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name and not self.load_rom(file_name):
            QMessageBox.critical(self, "Error", self.status_label.text())

    # @intent:responsibility 物理キーをkey_mapで解決し、対応するCHIP-8キーを返します。
    # @intent:rationale 修飾キーで変化する文字ではなく、キーコードを優先して照合します。
    def _map_key(self, event: QKeyEvent) -> Optional[int]:
        key = self._key_codes.get(event.key())
        if key is not None:
            return key
        text = event.text().upper()
        if not text:
            return None
        return self._config.key_map.get(text)

    def _physical_key(self, event: QKeyEvent) -> int:
        return event.nativeScanCode() or event.key()

    # @intent:responsibility 押下した物理キーを記録し、離したときは押下時と同じCHIP-8キーを解放します。
    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        key = self._map_key(event)
        if key is None:
            super().keyPressEvent(event)
            return
        self._held_keys[self._physical_key(event)] = key
        self._cpu.keypad.press(key)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        key = self._held_keys.pop(self._physical_key(event), None)
        if key is None:
            key = self._map_key(event)
        if key is None:
            super().keyReleaseEvent(event)
            return
        self._cpu.keypad.release(key)

    # @intent:responsibility フォーカスを失った時点で押下中のキーを全て解放します。
    def focusOutEvent(self, event: QFocusEvent):
        self._release_keys()
        super().focusOutEvent(event)

    def _release_keys(self):
        self._held_keys.clear()
        self._cpu.keypad.release_all()

    # @intent:responsibility アプリケーションにダークテーマのパレットを適用します。
    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)
        self.setStyleSheet("""
            QMainWindow, QToolBar { background-color: #1D1D1D; border: none; }
            QDockWidget::title { text-align: left; background: #101010; padding: 4px; font-weight: bold; }
        """)

    def closeEvent(self, event: QCloseEvent):
        self._frame_timer.stop()
        event.accept()
