# tests/conftest.py
"""
テスト共通の設定とフィクスチャ。
"""
import os

import pytest

# Qtウィジェットのテストはウィンドウを表示せずに実行します
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import MEMORY_SIZE


def assemble(*words: int) -> bytes:
    """16bit命令語の並びをビッグエンディアンのバイト列に変換します。"""
    data = bytearray()
    for word in words:
        data += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(data)


@pytest.fixture(name="assemble")
def assemble_fixture():
    return assemble


@pytest.fixture
def bus():
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    return bus


@pytest.fixture
def cpu(bus):
    return Chip8Cpu(bus)


@pytest.fixture
def run_program(cpu):
    """
    命令語をロードし、指定回数だけstepを実行するヘルパーを返します。
    戻り値は最後のSnapshotです。
    """
    def _run(*words: int, steps: int = None):
        cpu.load_program(assemble(*words))
        snapshot = None
        for _ in range(len(words) if steps is None else steps):
            snapshot = cpu.step()
        return snapshot
    return _run
