"""
Power Network Package

Entity models, geometry and the network container for power reachability
simulation.
"""

from .components import (
    SourceKind,
    Entity,
    PowerSource,
    Generator,
    GridRelay,
    Consumer
)

from .config import NetworkConfig, load_config
from .errors import (
    PowerNetworkError,
    EntityNotFoundError,
    InvalidEntityError,
    NotToggleableError,
    ConfigError
)
from .geometry import distance, in_range, contains_point
from .network import PowerNetwork
from .layouts import build_demo_network, build_random_network

__version__ = "1.0.0"
__all__ = [
    "SourceKind",
    "Entity",
    "PowerSource",
    "Generator",
    "GridRelay",
    "Consumer",
    "NetworkConfig",
    "load_config",
    "PowerNetworkError",
    "EntityNotFoundError",
    "InvalidEntityError",
    "NotToggleableError",
    "ConfigError",
    "distance",
    "in_range",
    "contains_point",
    "PowerNetwork",
    "build_demo_network",
    "build_random_network"
]
