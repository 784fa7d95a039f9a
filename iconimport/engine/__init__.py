"""Target type registry and dispatch."""

from iconimport.engine.registry import (
    TargetTypeRegistry,
    TargetTypeSpec,
    get_registry,
    target_type,
)

__all__ = [
    "TargetTypeRegistry",
    "TargetTypeSpec",
    "get_registry",
    "target_type",
]
