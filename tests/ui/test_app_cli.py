# tests/ui/test_app_cli.py
"""
コマンドラインエントリポイント（ヘッドレスモード）のテスト。
"""
import pytest

from chip8_tracer.ui.app import main, EXIT_OK, EXIT_USAGE, EXIT_HALTED

# @intent:test_suite 引数の誤り、ロード失敗、ヘッドレス実行の終了コードと出力を検証します。

def _write_rom(tmp_path, *words):
    data = bytearray()
    for word in words:
        data += bytes([word >> 8, word & 0xFF])
    path = tmp_path / "test.ch8"
    path.write_bytes(bytes(data))
    return str(path)


class TestCli:
    # @intent:test_case_usage ROMパスが指定されない場合は終了コード1になることを検証します。
    def test_missing_rom_argument(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == EXIT_USAGE
        assert "usage:" in capsys.readouterr().err

    def test_unknown_option(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["rom.ch8", "--bogus"])
        assert exc_info.value.code == EXIT_USAGE

    def test_negative_frames(self, tmp_path):
        rom = _write_rom(tmp_path, 0x1200)
        with pytest.raises(SystemExit) as exc_info:
            main([rom, "--headless", "--frames", "-1"])
        assert exc_info.value.code == EXIT_USAGE

    # @intent:test_case_load ROMが読めない、または大きすぎる場合は終了コード1になることを検証します。
    def test_missing_rom_file(self, tmp_path):
        assert main([str(tmp_path / "missing.ch8"), "--headless"]) == EXIT_USAGE

    def test_oversized_rom(self, tmp_path):
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(3585))
        assert main([str(path), "--headless"]) == EXIT_USAGE

    def test_invalid_config(self, tmp_path):
        rom = _write_rom(tmp_path, 0x1200)
        config = tmp_path / "bad.yaml"
        config.write_text("machine:\n  cycles_per_frame: 0\n")
        assert main([rom, "--headless", "--config", str(config)]) == EXIT_USAGE

    def test_empty_config_sections(self, tmp_path):
        rom = _write_rom(tmp_path, 0x1200)
        config = tmp_path / "empty.yaml"
        config.write_text("machine:\ndisplay:\n")
        assert main([rom, "--config", str(config), "--headless", "--frames", "1"]) == EXIT_OK

    def test_non_mapping_config(self, tmp_path):
        rom = _write_rom(tmp_path, 0x1200)
        config = tmp_path / "list.yaml"
        config.write_text("- 1\n- 2\n")
        assert main([rom, "--config", str(config), "--headless", "--frames", "1"]) == EXIT_USAGE

    # @intent:test_case_headless ヘッドレス実行で最終フレームがテキストとして出力されることを検証します。
    def test_headless_run_prints_display(self, tmp_path, capsys):
        # グリフ"0"を左上に描画して無限ループ
        rom = _write_rom(tmp_path, 0x6000, 0x6100, 0xF029, 0xD015, 0x1208)
        assert main([rom, "--headless", "--frames", "2"]) == EXIT_OK

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0] == "####" + "." * 60
        assert lines[1] == "#..#" + "." * 60
        assert "frames=2 instructions=20" in out

    def test_headless_with_config(self, tmp_path, capsys):
        rom = _write_rom(tmp_path, 0x1200)
        config = tmp_path / "chip8.yaml"
        config.write_text("machine:\n  cycles_per_frame: 3\n")
        assert main([rom, "--headless", "--frames", "5", "--config", str(config)]) == EXIT_OK
        assert "frames=5 instructions=15" in capsys.readouterr().out

    # @intent:test_case_halt 実行時エラーで停止した場合は終了コード2になることを検証します。
    def test_headless_halt(self, tmp_path, capsys):
        rom = _write_rom(tmp_path, 0x6001, 0xFFFF)
        assert main([rom, "--headless", "--frames", "10"]) == EXIT_HALTED
        assert "Undefined opcode FFFF" in capsys.readouterr().err
