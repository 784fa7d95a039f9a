"""Android target — vector drawables plus an adaptive icon.

For a target with resource name ``ic_launcher`` the output directory receives:

    drawable/ic_launcher.xml               flat drawable of the whole icon
    drawable/ic_launcher_background.xml    108x108 layer cut from the background element
    drawable/ic_launcher_foreground.xml    108x108 layer cut from the foreground element
    drawable/ic_launcher_monochrome.xml    foreground layer filled white
    drawable-v26/ic_launcher.xml           <adaptive-icon> referencing the three layers
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable

from iconimport.engine.registry import target_type
from iconimport.errors import ConversionFailed, IconImportError
from iconimport.models.targets import AndroidTargetOptions
from iconimport.svg.derive import derive_variant
from iconimport.svg.document import load_svg
from iconimport.vector.converter import (
    SvgSource,
    VectorConverter,
    android,
    default_converter,
)

logger = logging.getLogger(__name__)

WarningSink = Callable[[str], None]

DRAWABLE_DIR = "drawable"
DRAWABLE_V26_DIR = "drawable-v26"

# Adaptive icon foregrounds are drawn inset from the 108dp layer bounds
ADAPTIVE_ICON_INSET = "21dp"

BACKGROUND_SUFFIX = "_background"
FOREGROUND_SUFFIX = "_foreground"
MONOCHROME_SUFFIX = "_monochrome"


def _log_warning(message: str) -> None:
    logger.warning("Failed to cleanly convert SVG to XML: %s", message)


def emit_vector(
    source: SvgSource,
    output_path: str | Path,
    converter: VectorConverter | None = None,
    warn: WarningSink | None = None,
) -> Path:
    """Convert ``source`` into a vector drawable at ``output_path``.

    Converter warnings go to ``warn``. Converter errors and empty output raise
    ``ConversionFailed``; the partially written file is deleted first.
    """
    converter = converter or default_converter()
    warn = warn or _log_warning
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with output_path.open("wb") as out:
            result = converter.convert(source)
            for message in result.warnings:
                warn(f"{output_path.name}: {message}")
            out.write(result.data)

        if output_path.stat().st_size == 0:
            raise ConversionFailed(output_path, "converter produced no output")
    except Exception as e:
        _discard(output_path)
        if isinstance(e, IconImportError):
            raise
        raise ConversionFailed(output_path, str(e)) from e

    logger.debug("Wrote %s", output_path)
    return output_path


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Failed to delete partially written file %s", path)


def build_adaptive_icon(resource_name: str) -> bytes:
    """Adaptive-icon XML referencing the three layer drawables of ``resource_name``."""
    ref = f"@drawable/{resource_name}"

    icon = ET.Element("adaptive-icon")
    background = ET.SubElement(icon, "background")
    background.set(android("drawable"), ref + BACKGROUND_SUFFIX)

    for layer, suffix in (("foreground", FOREGROUND_SUFFIX), ("monochrome", MONOCHROME_SUFFIX)):
        element = ET.SubElement(icon, layer)
        inset = ET.SubElement(element, "inset")
        inset.set(android("drawable"), ref + suffix)
        for side in ("Left", "Top", "Right", "Bottom"):
            inset.set(android(f"inset{side}"), ADAPTIVE_ICON_INSET)

    ET.indent(icon, space="    ")
    return ET.tostring(icon, encoding="utf-8", xml_declaration=True) + b"\n"


def write_adaptive_icon(output_path: str | Path, resource_name: str) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(build_adaptive_icon(resource_name))
    logger.debug("Wrote adaptive icon %s", output_path)
    return output_path


@target_type(
    type="android",
    options=AndroidTargetOptions,
    description="Android vector drawable and adaptive icon",
)
def emit_android_target(
    icon_file: str | Path,
    options: AndroidTargetOptions,
    output_dir: str | Path,
    *,
    converter: VectorConverter | None = None,
    warn: WarningSink | None = None,
) -> list[Path]:
    """Generate the Android resources for one target. Returns the written files."""
    icon_file = Path(icon_file)
    output_dir = Path(output_dir)
    drawable_dir = output_dir / DRAWABLE_DIR
    name = options.resource_name

    written = [emit_vector(icon_file, drawable_dir / f"{name}.xml", converter, warn)]
    if not options.has_adaptive_layers:
        return written

    try:
        document = load_svg(icon_file)
    except ET.ParseError as e:
        raise ConversionFailed(icon_file, f"invalid SVG markup: {e}") from e

    layers = (
        (BACKGROUND_SUFFIX, options.background_element_id, False),
        (FOREGROUND_SUFFIX, options.foreground_element_id, False),
        # Themed icons are always cut from the foreground element
        (MONOCHROME_SUFFIX, options.foreground_element_id, True),
    )
    for suffix, element_id, monochrome in layers:
        variant = derive_variant(document, element_id, monochrome=monochrome)
        written.append(emit_vector(variant, drawable_dir / f"{name}{suffix}.xml", converter, warn))

    written.append(write_adaptive_icon(output_dir / DRAWABLE_V26_DIR / f"{name}.xml", name))

    logger.info("Generated %d Android resources for %s", len(written), name)
    return written
