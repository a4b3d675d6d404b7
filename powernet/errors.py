"""
Power Network Errors

Exception hierarchy raised by the network container and entity models.
"""


class PowerNetworkError(Exception):
    """Base class for all power network errors"""


class EntityNotFoundError(PowerNetworkError, LookupError):
    """Raised when an entity id or reference is not registered in the network"""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Entity not found: {entity_id}")


class InvalidEntityError(PowerNetworkError, ValueError):
    """Raised when an entity is given non-finite coordinates or range"""


class NotToggleableError(PowerNetworkError, TypeError):
    """Raised when toggling an entity that has no activation switch"""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Entity {entity_id} has no activation switch")


class ConfigError(PowerNetworkError, ValueError):
    """Raised when a configuration value is out of bounds"""
