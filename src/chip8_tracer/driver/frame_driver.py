# chip8_tracer/driver/frame_driver.py
"""
フレームドライバ

命令サイクルの駆動と60Hzタイマーの減算を、1つのスレッド上で交互に行います。
1フレーム = cycles_per_frame 回のstep() + 1回のタイマー減算 です。
"""
import logging
from typing import Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.errors import ExecutionError
from chip8_tracer.core.snapshot import Snapshot

logger = logging.getLogger(__name__)

# @intent:responsibility CPUの実行を継続し、実行時エラーを検出した時点で停止します。
class FrameDriver:
    """
    サイクルドライバとタイマードライバを兼ねる実行制御クラス。
    コアが報告したExecutionErrorはここで捕捉され、停止状態（halted）として保持されます。
    """
    def __init__(self, cpu: Chip8Cpu, cycles_per_frame: int = 10):
        if cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be a positive integer.")
        self._cpu = cpu
        self._cycles_per_frame = cycles_per_frame
        self._last_error: Optional[ExecutionError] = None
        self._last_snapshot: Optional[Snapshot] = None
        self._frame_count = 0

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def halted(self) -> bool:
        return self._last_error is not None

    @property
    def last_error(self) -> Optional[ExecutionError]:
        return self._last_error

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def instruction_count(self) -> int:
        return self._cpu.get_instruction_count()

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility 1フレーム分の命令を実行し、最後にタイマーを1回減算します。
    # @intent:return 最後に実行した命令のSnapshot。停止中、または途中で停止した場合はNone。
    def run_frame(self) -> Optional[Snapshot]:
        if self.halted:
            return None

        snapshot = None
        for _ in range(self._cycles_per_frame):
            try:
                snapshot = self._cpu.step()
            except ExecutionError as e:
                self._halt(e)
                return None
            self._last_snapshot = snapshot

        self._cpu.tick_timers()
        self._frame_count += 1
        return snapshot

    # @intent:responsibility 指定フレーム数を実行します。停止した場合はそこで打ち切ります。
    # @intent:return 完了したフレーム数。
    def run(self, frames: int) -> int:
        completed = 0
        for _ in range(frames):
            if self.run_frame() is None and self.halted:
                break
            completed += 1
        return completed

    # @intent:responsibility 回復可能なエラーによる停止を解除します。致命的エラーはreset()まで解除しません。
    def resume(self) -> bool:
        if self._last_error is None:
            return True
        if self._last_error.fatal:
            return False
        self._last_error = None
        return True

    # @intent:responsibility CPUと実行カウンタをリセットし、停止状態を解除します。
    def reset(self) -> None:
        self._cpu.reset()
        self._last_error = None
        self._last_snapshot = None
        self._frame_count = 0

    def _halt(self, error: ExecutionError) -> None:
        self._last_error = error
        if error.fatal:
            logger.error("Execution halted: %s", error)
        else:
            logger.warning("Execution halted at %#05x: %s", error.pc, error)
