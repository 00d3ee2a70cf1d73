import yaml
from typing import Dict, Any
from .models import SystemConfig, DisplayConfig, DEFAULT_KEY_MAP

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data)

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text))

    # @intent:responsibility 空のセクション（"machine:" のみ）は未指定として扱い、マッピング以外はValueErrorとします。
    def _section(self, data: Any, name: str) -> Dict[str, Any]:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config section '{name}' must be a mapping, got {type(data).__name__}.")
        return data

    def _parse_config(self, data: Any) -> SystemConfig:
        data = self._section(data, "top level")
        machine = self._section(data.get("machine"), "machine")
        cycles_per_frame = self._parse_int(machine.get("cycles_per_frame", 10))
        frame_rate = self._parse_int(machine.get("frame_rate", 60))
        if cycles_per_frame <= 0:
            raise ValueError(f"cycles_per_frame must be positive: {cycles_per_frame}")
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive: {frame_rate}")

        seed = machine.get("rng_seed")
        rng_seed = self._parse_int(seed) if seed is not None else None

        # Parse Display
        display_data = self._section(data.get("display"), "display")
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", 10)),
            foreground=str(display_data.get("foreground", "#33FF66")),
            background=str(display_data.get("background", "#101010")),
        )
        if display.scale <= 0:
            raise ValueError(f"Display scale must be positive: {display.scale}")

        # Parse Key Map (指定がなければ既定配置)
        key_map = dict(DEFAULT_KEY_MAP)
        key_map_data = data.get("key_map")
        if key_map_data is not None:
            key_map_data = self._section(key_map_data, "key_map")
            key_map = {}
            for name, value in key_map_data.items():
                key = self._parse_int(value)
                if not 0 <= key <= 0xF:
                    raise ValueError(f"Key map target for '{name}' is not a CHIP-8 key: {value}")
                key_map[str(name).upper()] = key

        return SystemConfig(
            cycles_per_frame=cycles_per_frame,
            frame_rate=frame_rate,
            rng_seed=rng_seed,
            display=display,
            key_map=key_map,
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
