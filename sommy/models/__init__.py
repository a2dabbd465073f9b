"""Entity facade models."""

from .entity import Entity, EntityConfig, Model

__all__ = [
    "Entity",
    "EntityConfig",
    "Model",
]
