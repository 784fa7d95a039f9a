"""Target resolution and import orchestration.

Ties the metadata model to the registered platform emitters: a request names a
metadata file and the targets to build, every target is resolved up front and
then emitted one at a time.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from iconimport.config import Settings, settings as default_settings
from iconimport.emit.android import WarningSink
from iconimport.engine.registry import TargetTypeRegistry, get_registry
from iconimport.errors import (
    InvalidImportRequest,
    MalformedMetadata,
    MissingSourceFile,
    UnknownTargetType,
)
from iconimport.models.metadata import IconDescription, parse_metadata
from iconimport.models.requests import IconImportRequest, ImportResult, TargetOutput
from iconimport.vector.converter import VectorConverter

logger = logging.getLogger(__name__)


def load_description(
    metadata_file: str | Path,
    *,
    registry: TargetTypeRegistry | None = None,
    ignore_unknown_types: bool = False,
) -> tuple[IconDescription, Path]:
    """Read a metadata file. Returns the description and the resolved icon file."""
    metadata_file = Path(metadata_file)
    try:
        data = metadata_file.read_bytes()
    except OSError as e:
        raise MalformedMetadata(f"cannot read metadata: {e}", path=metadata_file) from e

    try:
        description = parse_metadata(data, registry=registry, ignore_unknown_types=ignore_unknown_types)
    except MalformedMetadata as e:
        raise MalformedMetadata(str(e), path=metadata_file) from e

    # The icon file is relative to the directory holding the metadata
    icon_file = metadata_file.parent / description.file
    if not icon_file.is_file():
        raise MissingSourceFile(icon_file)
    return description, icon_file


def resolve_and_emit(
    description: IconDescription,
    target_name: str,
    output_dir: str | Path,
    icon_file: str | Path,
    *,
    registry: TargetTypeRegistry | None = None,
    converter: VectorConverter | None = None,
    warn: WarningSink | None = None,
) -> TargetOutput:
    """Emit a single target through the emitter registered for its options."""
    registry = registry or get_registry()
    target = description.target(target_name)

    spec = registry.for_options(target.options)
    if spec is None:
        raise UnknownTargetType(target.type, target=target.name, known=registry.types())

    output_dir = Path(output_dir)
    logger.info("Generating target %s (%s) into %s", target.name, spec.type, output_dir)
    files = spec.emit(icon_file, target.options, output_dir, converter=converter, warn=warn)
    return TargetOutput(target=target.name, output_dir=output_dir, files=files)


def run_import(
    request: IconImportRequest,
    *,
    settings: Settings | None = None,
    registry: TargetTypeRegistry | None = None,
    converter: VectorConverter | None = None,
    warn: WarningSink | None = None,
) -> ImportResult:
    """Run a whole import request.

    Every requested target is checked before anything is written, so an unknown
    name or type fails the request with no output on disk.
    """
    settings = settings or default_settings
    registry = registry or get_registry()
    start = time.perf_counter()

    if not request.targets:
        raise InvalidImportRequest(f"No targets specified for icon import {request.metadata_file}")

    description, icon_file = load_description(
        request.metadata_file,
        registry=registry,
        ignore_unknown_types=settings.ignore_unknown_target_types,
    )

    names = sorted(request.targets)
    for name in names:
        target = description.target(name)
        if registry.for_options(target.options) is None:
            raise UnknownTargetType(target.type, target=name, known=registry.types())

    result = ImportResult()
    for name in names:
        output_dir = request.destinations.get(name) or settings.output_root / name
        result.outputs.append(
            resolve_and_emit(
                description,
                name,
                output_dir,
                icon_file,
                registry=registry,
                converter=converter,
                warn=warn,
            )
        )

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Icon import complete: %d targets, %d files in %.0fms",
        len(result.outputs),
        len(result.files),
        elapsed,
    )
    return result
