"""Configuration management for sysprobe."""

import json
import math
import os
import re
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ConfigError
from .snapshot import CPU_SAMPLE_INTERVAL

DEFAULT_CONFIG_PATH = "/etc/sysprobe/config.json"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: Union[str, int, float]) -> float:
    """
    Parse a duration into seconds.

    Accepts plain numbers (seconds) and unit strings such as ``500ms``,
    ``2s``, ``1m30s`` or ``1h``. Negative durations are rejected.
    """
    if isinstance(text, bool):
        raise ValueError(f"invalid duration: {text!r}")
    if isinstance(text, (int, float)):
        seconds = float(text)
    else:
        value = text.strip()
        try:
            seconds = float(value)
        except ValueError:
            pos = 0
            seconds = 0.0
            for match in _DURATION_PART.finditer(value):
                if match.start() != pos:
                    break
                seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
                pos = match.end()
            if pos == 0 or pos != len(value):
                raise ValueError(f"invalid duration: {text!r}")

    if seconds < 0 or not math.isfinite(seconds):
        raise ValueError(f"invalid duration: {text!r}")
    return seconds


def _parse_count(value: Any) -> int:
    """Accept an integer or a whole-number string."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and re.fullmatch(r"\s*[+-]?\d+\s*", value):
        return int(value)
    raise ValueError(f"count must be a whole number, got {value!r}")


@dataclass
class SamplerConfig:
    """Sampler configuration."""

    interval: float = 0.0  # seconds, 0 = single shot
    count: int = 0  # samples when streaming, <= 0 = unbounded
    json_output: bool = False
    cpu_interval: float = CPU_SAMPLE_INTERVAL
    disk_path: Optional[str] = None  # overrides the platform root

    @property
    def streaming(self) -> bool:
        return self.interval > 0

    def merge(self, overrides: Dict[str, Any]) -> "SamplerConfig":
        """Return a copy with every non-None override applied."""
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return SamplerConfig(**data)


class ConfigManager:
    """Manages sampler configuration files."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)

    def load(self) -> SamplerConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_path} must contain a JSON object")

        known = {f.name for f in fields(SamplerConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys in {self.config_path}: {', '.join(unknown)}")

        try:
            if "interval" in data:
                data["interval"] = parse_duration(data["interval"])
            if "cpu_interval" in data:
                data["cpu_interval"] = parse_duration(data["cpu_interval"])
            if "count" in data:
                data["count"] = _parse_count(data["count"])
            if "json_output" in data and not isinstance(data["json_output"], bool):
                raise ValueError(f"json_output must be true or false, got {data['json_output']!r}")
            if data.get("disk_path") is not None and not isinstance(data["disk_path"], str):
                raise ValueError(f"disk_path must be a string, got {data['disk_path']!r}")
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {self.config_path}: {e}") from e

        return SamplerConfig(**data)

    def save(self, config: SamplerConfig) -> None:
        """Save configuration to file."""
        # Ensure directory exists
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            json.dump(asdict(config), f, indent=2)

        os.chmod(self.config_path, 0o644)

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()
