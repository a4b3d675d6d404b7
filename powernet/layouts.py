"""
Network Layout Builders

Ready-made networks for demonstrations, the CLI, and property tests.
"""

from typing import Optional

import numpy as np
from loguru import logger

from .config import NetworkConfig
from .network import PowerNetwork


def build_demo_network(config: Optional[NetworkConfig] = None) -> PowerNetwork:
    """One generator, one relay and two consumers"""
    network = PowerNetwork(config)
    network.add_generator(150, 150)
    network.add_grid_relay(400, 150)
    network.add_consumer(200, 300)
    network.add_consumer(450, 200)
    return network


def build_random_network(n_generators: int, n_relays: int, n_consumers: int,
                         width: float = 800.0, height: float = 600.0,
                         seed: Optional[int] = None,
                         config: Optional[NetworkConfig] = None) -> PowerNetwork:
    """
    Place entities uniformly at random inside a width x height rectangle

    Args:
        n_generators: Number of generators
        n_relays: Number of grid relays
        n_consumers: Number of consumers
        width: Plane width
        height: Plane height
        seed: Seed for reproducible layouts
        config: Network configuration

    Returns:
        Populated network with powered flags computed
    """
    if min(n_generators, n_relays, n_consumers) < 0:
        raise ValueError("Entity counts must be non-negative")

    rng = np.random.default_rng(seed)
    network = PowerNetwork(config)

    def positions(count):
        return rng.uniform((0.0, 0.0), (width, height), size=(count, 2))

    for x, y in positions(n_generators):
        network.add_generator(float(x), float(y))
    for x, y in positions(n_relays):
        network.add_grid_relay(float(x), float(y))
    for x, y in positions(n_consumers):
        network.add_consumer(float(x), float(y))

    logger.info(f"Random network built: {n_generators} generators, {n_relays} relays, "
                f"{n_consumers} consumers on {width:.0f}x{height:.0f}")

    return network
