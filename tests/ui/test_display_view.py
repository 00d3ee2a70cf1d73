# tests/ui/test_display_view.py
"""
DisplayView、RegisterView、MainWindowのテスト。
"""
import os
import sys
import tempfile
import unittest

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QKeyEvent, QFocusEvent
from PySide6.QtCore import Qt, QEvent

from chip8_tracer.arch.chip8.display import Display
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import DisplayConfig, SystemConfig
from chip8_tracer.ui.display_view import DisplayView
from chip8_tracer.ui.register_view import RegisterView
from chip8_tracer.ui.main_window import MainWindow, MAX_CATCHUP_FRAMES


class QtTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()


# @intent:test_suite 表示面の描画が点灯ピクセルと設定色に従うことを検証します。
class TestDisplayView(QtTestCase):
    def _render(self, display, config):
        view = DisplayView(config)
        view.set_display(display)
        view.resize(Display.WIDTH * config.scale, Display.HEIGHT * config.scale)
        return view, view.grab().toImage()

    def test_size_hint_uses_scale(self):
        view = DisplayView(DisplayConfig(scale=5))
        self.assertEqual(view.sizeHint().width(), 320)
        self.assertEqual(view.sizeHint().height(), 160)

    def test_lit_pixel_painted_with_foreground(self):
        display = Display()
        display.draw_sprite(1, 0, [0x80])
        config = DisplayConfig(scale=4, foreground="#FF0000", background="#000000")
        view, image = self._render(display, config)

        self.assertEqual(view.pixel_size(), 4)
        self.assertEqual(image.pixelColor(5, 1).name(), "#ff0000")  # (1, 0)
        self.assertEqual(image.pixelColor(1, 1).name(), "#000000")  # (0, 0)


# @intent:test_suite レジスタビューがCPUのレイアウトと値を反映することを検証します。
class TestRegisterView(QtTestCase):
    def test_update_registers(self):
        cpu, _ = SystemBuilder().build_system(SystemConfig())
        cpu.load_program(bytes([0x6A, 0x42]))
        view = RegisterView()
        view.set_cpu(cpu)
        self.assertEqual(view.register_text("PC"), "0x0200")

        cpu.step()
        view.update_registers()
        self.assertEqual(view.register_text("VA"), "0x42")
        self.assertEqual(view.register_text("PC"), "0x0202")


# @intent:test_suite メインウィンドウのROMロード、キー入力の中継、停止表示を検証します。
class TestMainWindow(QtTestCase):
    def setUp(self):
        self.config = SystemConfig(cycles_per_frame=4)
        builder = SystemBuilder()
        self.cpu, _ = builder.build_system(self.config)
        self.driver = builder.build_driver(self.cpu, self.config)
        self.window = MainWindow(self.cpu, self.driver, self.config)

    def tearDown(self):
        self.window.close()

    def test_key_events_drive_keypad(self):
        press = QKeyEvent(QEvent.KeyPress, Qt.Key_Q, Qt.NoModifier, "q")
        self.window.keyPressEvent(press)
        self.assertTrue(self.cpu.keypad.is_pressed(0x4))

        release = QKeyEvent(QEvent.KeyRelease, Qt.Key_Q, Qt.NoModifier, "q")
        self.window.keyReleaseEvent(release)
        self.assertFalse(self.cpu.keypad.is_pressed(0x4))

    def test_unmapped_key_is_ignored(self):
        event = QKeyEvent(QEvent.KeyPress, Qt.Key_P, Qt.NoModifier, "p")
        self.window.keyPressEvent(event)
        self.assertIsNone(self.cpu.keypad.first_pressed())

    def test_load_rom_and_run_frame(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "loop.ch8")
            with open(path, "wb") as f:
                f.write(bytes([0x12, 0x00]))
            self.assertTrue(self.window.load_rom(path))

        self.window._run_frame()
        self.assertEqual(self.driver.frame_count, 1)
        self.assertEqual(self.driver.instruction_count, 4)

    def test_load_missing_rom(self):
        self.assertFalse(self.window.load_rom("/nonexistent/rom.ch8"))
        self.assertIn("Failed to load ROM", self.window.status_label.text())

    def test_halt_is_reported(self):
        self.cpu.load_program(bytes([0xFF, 0xFF]))
        self.window.start()
        self.window._run_frame()
        self.assertFalse(self.window.is_running())
        self.assertIn("Halted: Undefined opcode FFFF", self.window.status_label.text())
        self.assertFalse(self.window.run_action.isEnabled())

    def test_frame_timer_is_precise(self):
        self.assertEqual(self.window._frame_timer.timerType(), Qt.PreciseTimer)

    # @intent:test_case 実行フレーム数が経過時間に従い、大きな遅れは上限までしか追いつかないことを検証します。
    def test_frames_follow_elapsed_time(self):
        self.window.start()
        self.assertEqual(self.window._frames_due(50), 3)
        self.assertEqual(self.window._frames_due(50), 0)
        self.assertEqual(self.window._frames_due(100), 3)
        self.assertEqual(self.window._frames_due(10000), MAX_CATCHUP_FRAMES)
        self.assertEqual(self.window._frames_due(10000), 0)
        self.window.pause()

    def test_shifted_release_releases_pressed_key(self):
        press = QKeyEvent(QEvent.KeyPress, Qt.Key_1, Qt.NoModifier, 10, 0, 0, "1")
        self.window.keyPressEvent(press)
        self.assertTrue(self.cpu.keypad.is_pressed(0x1))

        release = QKeyEvent(QEvent.KeyRelease, Qt.Key_Exclam, Qt.ShiftModifier, 10, 0, 0, "!")
        self.window.keyReleaseEvent(release)
        self.assertFalse(self.cpu.keypad.is_pressed(0x1))

    def test_key_code_mapping_ignores_text(self):
        press = QKeyEvent(QEvent.KeyPress, Qt.Key_Q, Qt.ShiftModifier, "")
        self.window.keyPressEvent(press)
        self.assertTrue(self.cpu.keypad.is_pressed(0x4))

    def test_focus_out_releases_keys(self):
        self.window.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_Q, Qt.NoModifier, "q"))
        self.window.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_W, Qt.NoModifier, "w"))
        self.window.focusOutEvent(QFocusEvent(QEvent.FocusOut))
        self.assertIsNone(self.cpu.keypad.first_pressed())
        self.assertEqual(self.window._held_keys, {})


if __name__ == '__main__':
    unittest.main()
