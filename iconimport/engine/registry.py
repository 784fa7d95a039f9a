"""Target type registry — every icon platform registers an options model and an emitter.

Usage:
    @target_type(type="android", options=AndroidTargetOptions, description="...")
    def emit_android_target(icon_file, options, output_dir, *, converter=None, warn=None):
        ...
        return written_files

Adding a new platform = creating one module under ``iconimport.emit`` with the
decorator. The metadata parser and the target resolver pick it up unchanged.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel

from iconimport.errors import UnknownTargetType

logger = logging.getLogger(__name__)

Emitter = Callable[..., list[Path]]

_BUILTIN_PACKAGES = ("iconimport.emit",)


@dataclass
class TargetTypeSpec:
    type: str
    options_model: type[BaseModel]
    emit: Emitter
    description: str = ""


class TargetTypeRegistry:
    """Maps discriminator values to their options model and emitter."""

    def __init__(self) -> None:
        self._types: dict[str, TargetTypeSpec] = {}

    def register(self, spec: TargetTypeSpec) -> None:
        if spec.type in self._types:
            raise ValueError(f"Duplicate target type: {spec.type}")
        self._types[spec.type] = spec
        logger.debug("Registered target type %s (%s)", spec.type, spec.options_model.__name__)

    def get(self, type_name: str) -> TargetTypeSpec:
        try:
            return self._types[type_name]
        except KeyError:
            raise UnknownTargetType(type_name, known=self.types()) from None

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._types

    def types(self) -> list[str]:
        return sorted(self._types)

    def parse_options(self, type_name: str, payload: dict[str, Any]) -> BaseModel:
        """Validate a raw options payload against the model registered for ``type_name``.

        Raises ``UnknownTargetType`` for unregistered tags; validation errors of
        the payload itself propagate as ``pydantic.ValidationError``.
        """
        return self.get(type_name).options_model.model_validate(payload)

    def for_options(self, options: object) -> TargetTypeSpec | None:
        """Find the spec whose options model ``options`` is an instance of."""
        for spec in self._types.values():
            if isinstance(options, spec.options_model):
                return spec
        return None

    @property
    def count(self) -> int:
        return len(self._types)


# Module-level singleton
_registry = TargetTypeRegistry()
_builtins_loaded = False


def load_builtin_target_types() -> None:
    """Import all emitter modules so @target_type decorators fire."""
    global _builtins_loaded
    if _builtins_loaded:
        return
    _builtins_loaded = True

    for package_name in _BUILTIN_PACKAGES:
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


def get_registry() -> TargetTypeRegistry:
    load_builtin_target_types()
    return _registry


def target_type(
    *,
    type: str,
    options: type[BaseModel],
    description: str = "",
):
    """Decorator to register an emitter for a target type."""

    def decorator(fn: Emitter) -> Emitter:
        spec = TargetTypeSpec(
            type=type,
            options_model=options,
            emit=fn,
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
