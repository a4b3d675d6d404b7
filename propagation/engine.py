"""
Power Propagation Engine

Recomputes, from scratch, which grid relays and consumers are energized.
Energization spreads by breadth-first search from every active generator
through active grid relays; consumers are terminal.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List

from loguru import logger

from powernet.components import Consumer, Generator, GridRelay
from powernet.geometry import in_range


@dataclass
class PropagationResult:
    """Outcome of a single recompute"""
    powered_ids: List[str] = field(default_factory=list)
    generators_online: int = 0
    relays_powered: int = 0
    relays_total: int = 0
    consumers_powered: int = 0
    consumers_total: int = 0
    iterations: int = 0  # BFS queue pops
    solve_time_sec: float = 0.0

    @property
    def all_consumers_powered(self) -> bool:
        return self.consumers_powered == self.consumers_total


def recompute_power(generators: Iterable[Generator],
                    relays: Iterable[GridRelay],
                    consumers: Iterable[Consumer]) -> PropagationResult:
    """
    Recompute the powered flag of every entity in place.

    Args:
        generators: Generator entities; each is powered iff active
        relays: Grid relays; powered iff reachable from an active generator
            through a chain of active relays, each hop within range
        consumers: Consumers; powered iff within range of a powered node

    Returns:
        Summary of the recompute
    """
    start_time = time.time()

    generators = list(generators)
    relays = list(relays)
    consumers = list(consumers)

    for relay in relays:
        relay.powered = False
    for consumer in consumers:
        consumer.powered = False

    # one multi-source search; powered is a monotone OR over all paths
    queue = deque()
    visited = set()
    for generator in generators:
        generator.powered = generator.active
        if generator.active:
            queue.append(generator)
            visited.add(generator)

    targets = relays + consumers
    iterations = 0

    while queue:
        current = queue.popleft()
        iterations += 1

        for target in targets:
            if target in visited:
                continue
            if not in_range(current, target):
                continue
            if not target.accepts_power():
                continue

            target.powered = True
            visited.add(target)
            if target.forwards_power:
                queue.append(target)

    result = PropagationResult(
        powered_ids=[e.id for e in (*generators, *targets) if e.powered],
        generators_online=sum(1 for g in generators if g.powered),
        relays_powered=sum(1 for r in relays if r.powered),
        relays_total=len(relays),
        consumers_powered=sum(1 for c in consumers if c.powered),
        consumers_total=len(consumers),
        iterations=iterations,
        solve_time_sec=time.time() - start_time
    )

    logger.debug(f"Recompute: {result.generators_online}/{len(generators)} generators online, "
                 f"{result.relays_powered}/{len(relays)} relays, "
                 f"{result.consumers_powered}/{len(consumers)} consumers powered "
                 f"({iterations} iterations)")

    return result
