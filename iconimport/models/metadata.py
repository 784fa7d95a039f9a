"""Icon metadata model and parser.

A metadata file names the master SVG and the targets generated from it:

    {
      "file": "icon.svg",
      "targets": [
        {"name": "main", "type": "android",
         "options": {"resourceName": "ic_launcher", "background": "bg", "foreground": "fg"}}
      ]
    }

Parsing happens in two phases. The envelope (``file``, ``targets`` and each
target's ``name``/``type``/``options``) is validated first; then ``type`` is
looked up in the target type registry and ``options`` is validated against the
model registered for it.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from iconimport.engine.registry import TargetTypeRegistry, get_registry
from iconimport.errors import MalformedMetadata, UnknownTarget, UnknownTargetType
from iconimport.models.targets import UnsupportedTargetOptions

logger = logging.getLogger(__name__)


class _TargetEnvelope(BaseModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    options: dict[str, Any]


class _MetadataEnvelope(BaseModel):
    file: str = Field(..., min_length=1)
    targets: list[_TargetEnvelope]
    # Consumed by other icon processors sharing the file
    variables: dict[str, Any] = Field(default_factory=dict)


class IconTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    options: Any

    @property
    def supported(self) -> bool:
        return not isinstance(self.options, UnsupportedTargetOptions)


class IconDescription(BaseModel):
    """Parsed metadata: the source SVG (relative to the metadata file) and its targets."""

    model_config = ConfigDict(frozen=True)

    file: str
    targets: list[IconTarget] = Field(default_factory=list)

    @property
    def target_names(self) -> list[str]:
        return [t.name for t in self.targets]

    def target(self, name: str) -> IconTarget:
        for t in self.targets:
            if t.name == name:
                return t
        raise UnknownTarget(name)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(dump_metadata(self), indent=indent)


def parse_metadata(
    data: bytes | str,
    *,
    registry: TargetTypeRegistry | None = None,
    ignore_unknown_types: bool = False,
) -> IconDescription:
    """Parse a metadata document into an ``IconDescription``.

    Raises ``MalformedMetadata`` for invalid JSON, missing or mistyped fields and
    duplicate target names, and ``UnknownTargetType`` for unregistered type tags
    unless ``ignore_unknown_types`` is set.
    """
    registry = registry or get_registry()

    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedMetadata(f"invalid JSON: {e}") from e

    try:
        envelope = _MetadataEnvelope.model_validate(raw)
    except ValidationError as e:
        raise MalformedMetadata(_describe(e)) from e

    targets: list[IconTarget] = []
    seen: set[str] = set()
    for entry in envelope.targets:
        if entry.name in seen:
            raise MalformedMetadata(f"duplicate target name {entry.name!r}")
        seen.add(entry.name)

        if entry.type not in registry:
            if not ignore_unknown_types:
                raise UnknownTargetType(entry.type, target=entry.name, known=registry.types())
            logger.debug("Keeping target %s of unsupported type %s", entry.name, entry.type)
            options: Any = UnsupportedTargetOptions(type=entry.type, raw=dict(entry.options))
        else:
            try:
                options = registry.parse_options(entry.type, entry.options)
            except ValidationError as e:
                raise MalformedMetadata(f"target {entry.name!r}: {_describe(e)}") from e

        targets.append(IconTarget(name=entry.name, type=entry.type, options=options))

    logger.debug("Parsed icon metadata: file %s, %d targets", envelope.file, len(targets))
    return IconDescription(file=envelope.file, targets=targets)


def dump_metadata(description: IconDescription) -> dict[str, Any]:
    """Serialize a description back into the metadata JSON shape."""
    targets = []
    for t in description.targets:
        if isinstance(t.options, UnsupportedTargetOptions):
            options = dict(t.options.raw)
        else:
            options = t.options.model_dump(by_alias=True, exclude_none=True)
        targets.append({"name": t.name, "type": t.type, "options": options})
    return {"file": description.file, "targets": targets}


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
