"""
Power Network Components

Entity models for generators, grid relays and consumers placed on a 2D plane.
Generators and grid relays share the PowerSource shape; consumers are sinks.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from dataclasses_json import dataclass_json
from loguru import logger

from .config import DEFAULT_RANGE
from .errors import InvalidEntityError

# ========================= Helpers =========================

def _finite(entity_id: str, name: str, value: Any) -> float:
    """Coerce a coordinate or range to float, rejecting NaN and infinities"""
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidEntityError(f"{entity_id}: {name} must be a number, got {value!r}") from e
    if not math.isfinite(value):
        raise InvalidEntityError(f"{entity_id}: {name} must be finite, got {value}")
    return value

# ========================= Entities =========================

class SourceKind(Enum):
    """Role of a power source"""
    GENERATOR = "generator"
    GRID_RELAY = "grid_relay"


@dataclass(eq=False)
class Entity(ABC):
    """Anything placed on the network plane"""
    id: str
    x: float
    y: float
    powered: bool = field(default=False, init=False)  # written only by the propagation engine

    def __post_init__(self):
        self.x = _finite(self.id, 'x', self.x)
        self.y = _finite(self.id, 'y', self.y)

    @property
    @abstractmethod
    def kind_name(self) -> str:
        """Role label used in reports"""

    @property
    def forwards_power(self) -> bool:
        """Whether power continues outward from this entity once it is reached"""
        return False

    def accepts_power(self) -> bool:
        """Whether this entity can currently be energized by a neighbour"""
        return True

    def move_to(self, x: float, y: float):
        x = _finite(self.id, 'x', x)
        y = _finite(self.id, 'y', y)
        self.x, self.y = x, y

    def describe(self) -> Dict[str, Any]:
        """Flat record for rendering and reporting"""
        record = self.to_dict()
        record['kind'] = self.kind_name
        return record


@dataclass(eq=False)
class PowerSource(Entity):
    """Generator or grid relay: has a range of influence and an on/off switch"""
    range: float = DEFAULT_RANGE
    active: bool = True

    def __post_init__(self):
        super().__post_init__()
        self.range = _finite(self.id, 'range', self.range)
        if self.range < 0:
            logger.warning(f"{self.id}: negative range {self.range} clamped to 0")
            self.range = 0.0

    @property
    @abstractmethod
    def kind(self) -> SourceKind:
        """Generator or grid relay"""

    @property
    def kind_name(self) -> str:
        return self.kind.value

    @property
    def forwards_power(self) -> bool:
        return True

    def accepts_power(self) -> bool:
        # inactive sources neither receive nor forward power
        return self.active


@dataclass_json
@dataclass(eq=False)
class Generator(PowerSource):
    """Self-powered source; powered iff active"""

    @property
    def kind(self) -> SourceKind:
        return SourceKind.GENERATOR


@dataclass_json
@dataclass(eq=False)
class GridRelay(PowerSource):
    """Pass-through node that forwards power while active and energized"""

    @property
    def kind(self) -> SourceKind:
        return SourceKind.GRID_RELAY


@dataclass_json
@dataclass(eq=False)
class Consumer(Entity):
    """Terminal sink; never forwards power"""

    @property
    def kind_name(self) -> str:
        return "consumer"
