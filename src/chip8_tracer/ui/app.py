# src/chip8_tracer/ui/app.py
"""
アプリケーションのエントリポイント。
コマンドラインを解析し、GUI（PySide6）またはヘッドレスモードでROMを実行します。

終了コード:
    0 正常終了
    1 引数の誤り、設定ファイルまたはROMのロード失敗
    2 ヘッドレス実行が実行時エラーで停止した
"""
import argparse
import logging
import sys
from typing import List, Optional

import yaml

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.core.errors import RomTooLargeError
from chip8_tracer.loader.loader import RomLoader

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_HALTED = 2


class _ArgumentParser(argparse.ArgumentParser):
    # 引数エラーは終了コード1（2は実行時停止）
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="chip8-tracer", description="CHIP-8 virtual machine")
    parser.add_argument("rom", help="Path to the CHIP-8 ROM image")
    parser.add_argument("--config", help="YAML system configuration file")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a window and print the final display")
    parser.add_argument("--frames", type=int, default=600,
                        help="Number of frames to run in headless mode (default: 600)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


# @intent:responsibility 設定ファイルを読み込みます。指定がなければ既定値を返します。
def _load_config(path: Optional[str]) -> SystemConfig:
    if path is None:
        return SystemConfig()
    return ConfigLoader().load_from_file(path)


# @intent:responsibility ウィンドウを開かずに指定フレーム数を実行し、最終的な表示面を出力します。
def run_headless(driver, frames: int) -> int:
    completed = driver.run(frames)
    print(driver.cpu.display.to_text())
    print(f"frames={completed} instructions={driver.instruction_count}")
    if driver.halted:
        error = driver.last_error
        print(f"halted: {error}", file=sys.stderr)
        return EXIT_HALTED
    return EXIT_OK


def run_gui(cpu, driver, config: SystemConfig, argv: List[str]) -> int:
    # PySide6はGUIモードでのみ読み込みます
    from PySide6.QtWidgets import QApplication
    from .main_window import MainWindow

    app = QApplication.instance() or QApplication(argv)
    main_win = MainWindow(cpu, driver, config)
    main_win.show()
    main_win.start()
    return app.exec()


# @intent:responsibility コマンドライン引数からシステムを構築し、選択されたモードで実行します。
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.frames < 0:
        parser.error("--frames must not be negative")

    try:
        config = _load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", args.config, e)
        return EXIT_USAGE

    builder = SystemBuilder()
    cpu, _ = builder.build_system(config)
    driver = builder.build_driver(cpu, config)

    try:
        RomLoader().load_rom(args.rom, cpu.bus)
    except (OSError, RomTooLargeError) as e:
        logger.error("Failed to load ROM %s: %s", args.rom, e)
        return EXIT_USAGE

    if args.headless:
        return run_headless(driver, args.frames)
    return run_gui(cpu, driver, config, [sys.argv[0]])


if __name__ == '__main__':
    sys.exit(main())
