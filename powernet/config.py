"""
Network Configuration

Defaults for entity construction and hit-testing, loadable from JSON.
"""

import json
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

from dataclasses_json import dataclass_json

from .errors import ConfigError

DEFAULT_RANGE = 100.0  # radius of influence for generators and grid relays
SOURCE_HIT_RADIUS = 20.0
CONSUMER_HIT_RADIUS = 10.0


@dataclass_json
@dataclass
class NetworkConfig:
    """Network-wide defaults"""
    default_range: float = DEFAULT_RANGE
    source_hit_radius: float = SOURCE_HIT_RADIUS
    consumer_hit_radius: float = CONSUMER_HIT_RADIUS
    log_level: str = "INFO"

    def __post_init__(self):
        for name in ('default_range', 'source_hit_radius', 'consumer_hit_radius'):
            value = getattr(self, name)
            if (isinstance(value, bool) or not isinstance(value, (int, float))
                    or not math.isfinite(value) or value < 0):
                raise ConfigError(f"{name} must be a finite non-negative number, got {value!r}")
            setattr(self, name, float(value))
        if not isinstance(self.log_level, str):
            raise ConfigError(f"log_level must be a string, got {self.log_level!r}")


def load_config(path: Union[str, Path]) -> NetworkConfig:
    """Load configuration from a JSON file; missing keys keep their defaults"""
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must hold a JSON object")

    # dataclasses_json would coerce true/false into 1.0/0.0
    for f in fields(NetworkConfig):
        if isinstance(data.get(f.name), bool):
            raise ConfigError(f"{f.name} must not be a boolean, got {data[f.name]!r}")

    try:
        return NetworkConfig.from_dict(data)
    except ConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e
