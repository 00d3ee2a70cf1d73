import logging
import random
from typing import Tuple

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import MEMORY_SIZE
from chip8_tracer.driver.frame_driver import FrameDriver
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPU、ドライバを生成・接続します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        # @intent:rationale シードが指定された場合、RND命令の結果を再現可能にします。
        rng = random.Random(config.rng_seed) if config.rng_seed is not None else random.Random()
        cpu = Chip8Cpu(bus, rng=rng)

        logger.debug(
            "Built CHIP-8 system: %d bytes RAM, %d cycles/frame at %d Hz",
            MEMORY_SIZE, config.cycles_per_frame, config.frame_rate
        )
        return cpu, bus

    def build_driver(self, cpu: Chip8Cpu, config: SystemConfig) -> FrameDriver:
        return FrameDriver(cpu, cycles_per_frame=config.cycles_per_frame)
