"""
Power Network Container

Owns the generator, grid relay and consumer collections and exposes the
mutation and query surface used by rendering and UI layers. Every mutation
is followed by a full recompute of powered flags.
"""

from typing import Any, Dict, Iterator, List, Optional, Union

import pandas as pd
from loguru import logger

from .components import Consumer, Entity, Generator, GridRelay, PowerSource
from .config import NetworkConfig
from .errors import EntityNotFoundError, NotToggleableError
from .geometry import contains_point

EntityRef = Union[str, Entity]


class PowerNetwork:
    """
    Power distribution network on a 2D plane

    Entities are keyed by id (``GEN_001``, ``RELAY_001``, ``CONS_001``).
    Powered flags always reflect the state at the last mutation.
    """

    def __init__(self, config: Optional[NetworkConfig] = None):
        self.config = config or NetworkConfig()

        self.generators: Dict[str, Generator] = {}
        self.relays: Dict[str, GridRelay] = {}
        self.consumers: Dict[str, Consumer] = {}

        self._counters = {'GEN': 0, 'RELAY': 0, 'CONS': 0}
        self.last_result = None

        logger.info(f"Initializing PowerNetwork with default range {self.config.default_range}")

    # ========================= Construction =========================

    def _next_id(self, prefix: str) -> str:
        self._counters[prefix] += 1
        return f"{prefix}_{self._counters[prefix]:03d}"

    def add_generator(self, x: float, y: float, range: Optional[float] = None,
                      active: bool = True) -> Generator:
        """Place a generator and recompute"""
        generator = Generator(
            id=self._next_id('GEN'),
            x=x,
            y=y,
            range=self.config.default_range if range is None else range,
            active=active
        )
        self.generators[generator.id] = generator
        logger.debug(f"Added {generator.id} at ({generator.x:.1f}, {generator.y:.1f})")
        self.recompute()
        return generator

    def add_grid_relay(self, x: float, y: float, range: Optional[float] = None,
                       active: bool = True) -> GridRelay:
        """Place a grid relay and recompute"""
        relay = GridRelay(
            id=self._next_id('RELAY'),
            x=x,
            y=y,
            range=self.config.default_range if range is None else range,
            active=active
        )
        self.relays[relay.id] = relay
        logger.debug(f"Added {relay.id} at ({relay.x:.1f}, {relay.y:.1f})")
        self.recompute()
        return relay

    def add_consumer(self, x: float, y: float) -> Consumer:
        """Place a consumer and recompute"""
        consumer = Consumer(id=self._next_id('CONS'), x=x, y=y)
        self.consumers[consumer.id] = consumer
        logger.debug(f"Added {consumer.id} at ({consumer.x:.1f}, {consumer.y:.1f})")
        self.recompute()
        return consumer

    # ========================= Lookup =========================

    def _collection_for(self, entity_id: str) -> Dict[str, Entity]:
        for collection in (self.generators, self.relays, self.consumers):
            if entity_id in collection:
                return collection
        raise EntityNotFoundError(entity_id)

    def get(self, entity: EntityRef) -> Entity:
        """Resolve an id or entity reference to the registered entity"""
        entity_id = entity if isinstance(entity, str) else entity.id
        found = self._collection_for(entity_id)[entity_id]
        if not isinstance(entity, str) and found is not entity:
            # same id, different object: the reference is stale
            raise EntityNotFoundError(entity_id)
        return found

    def __iter__(self) -> Iterator[Entity]:
        yield from self.generators.values()
        yield from self.relays.values()
        yield from self.consumers.values()

    def __len__(self) -> int:
        return len(self.generators) + len(self.relays) + len(self.consumers)

    def __contains__(self, entity: EntityRef) -> bool:
        try:
            self.get(entity)
        except EntityNotFoundError:
            return False
        return True

    def entity_at(self, x: float, y: float) -> Optional[Entity]:
        """Hit-test a point; sources take priority over consumers"""
        for source in [*self.generators.values(), *self.relays.values()]:
            if contains_point(source, x, y, self.config.source_hit_radius):
                return source
        for consumer in self.consumers.values():
            if contains_point(consumer, x, y, self.config.consumer_hit_radius):
                return consumer
        return None

    # ========================= Mutation =========================

    def toggle(self, entity: EntityRef) -> bool:
        """Flip a source's activation switch, recompute, and return the new state"""
        target = self._require_source(entity)
        return self.set_active(target, not target.active)

    def set_active(self, entity: EntityRef, active: bool) -> bool:
        target = self._require_source(entity)
        target.active = bool(active)
        logger.debug(f"{target.id} {'activated' if target.active else 'deactivated'}")
        self.recompute()
        return target.active

    def move_entity(self, entity: EntityRef, x: float, y: float) -> Entity:
        """Move an entity to (x, y) and recompute"""
        target = self.get(entity)
        target.move_to(x, y)
        self.recompute()
        return target

    def remove_entity(self, entity: EntityRef) -> Entity:
        """Unregister an entity and recompute"""
        target = self.get(entity)
        del self._collection_for(target.id)[target.id]
        logger.debug(f"Removed {target.id}")
        self.recompute()
        return target

    def _require_source(self, entity: EntityRef) -> PowerSource:
        target = self.get(entity)
        if not isinstance(target, PowerSource):
            raise NotToggleableError(target.id)
        return target

    # ========================= Propagation =========================

    def recompute(self):
        """Recompute powered flags for the whole network"""
        from propagation.engine import recompute_power

        self.last_result = recompute_power(
            self.generators.values(),
            self.relays.values(),
            self.consumers.values()
        )
        return self.last_result

    def get_powered_state(self, entity: EntityRef) -> bool:
        return self.get(entity).powered

    # ========================= Reporting =========================

    def snapshot(self) -> List[Dict[str, Any]]:
        """Entity records for a rendering pass"""
        return [entity.describe() for entity in self]

    def to_frame(self) -> pd.DataFrame:
        """Export entity state to a pandas DataFrame"""
        records = []
        for entity in self:
            records.append({
                'id': entity.id,
                'kind': entity.kind_name,
                'x': entity.x,
                'y': entity.y,
                'range': getattr(entity, 'range', None),
                'active': getattr(entity, 'active', None),
                'powered': entity.powered
            })
        return pd.DataFrame(records, columns=['id', 'kind', 'x', 'y', 'range', 'active', 'powered'])

    def get_summary(self) -> Dict[str, Any]:
        """Get network summary statistics"""
        return {
            "total_generators": len(self.generators),
            "active_generators": sum(1 for g in self.generators.values() if g.active),
            "total_relays": len(self.relays),
            "active_relays": sum(1 for r in self.relays.values() if r.active),
            "powered_relays": sum(1 for r in self.relays.values() if r.powered),
            "total_consumers": len(self.consumers),
            "powered_consumers": sum(1 for c in self.consumers.values() if c.powered),
            "unpowered_consumers": sorted(c.id for c in self.consumers.values() if not c.powered)
        }
