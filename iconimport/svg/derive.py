"""Derive single-layer SVGs from a master icon.

Adaptive icons need each layer as its own drawable on a 108x108 canvas. A
variant keeps the whole document (``defs``, styles, viewBox) but replaces the
top-level groups with one group wrapping the selected element.
"""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET

from iconimport.errors import ElementNotFound
from iconimport.svg.document import find_by_id, is_group, parent_map, qualified

logger = logging.getLogger(__name__)

ADAPTIVE_CANVAS_SIZE = 108
MONOCHROME_FILL = "#FFFFFF"


def derive_variant(
    source: ET.ElementTree | ET.Element,
    element_id: str,
    monochrome: bool = False,
) -> ET.ElementTree:
    """Return a new tree containing only the element ``element_id``.

    The source is deep-copied and never modified, so several variants can be
    derived from one loaded document. Raises ``ElementNotFound`` when zero or
    several elements carry the id.
    """
    src_root = source.getroot() if isinstance(source, ET.ElementTree) else source
    root = copy.deepcopy(src_root)

    root.set("width", str(ADAPTIVE_CANVAS_SIZE))
    root.set("height", str(ADAPTIVE_CANVAS_SIZE))

    matches = find_by_id(root, element_id)
    if len(matches) != 1:
        raise ElementNotFound(element_id, matches=len(matches))
    element = matches[0]

    parent_map(root)[element].remove(element)

    # Only grouping children go; defs and bare shapes stay
    for child in list(root):
        if is_group(child):
            root.remove(child)

    group = ET.SubElement(root, qualified(root, "g"))
    group.append(element)

    if monochrome:
        _force_fill(element, MONOCHROME_FILL)

    logger.debug("Derived variant for #%s (monochrome=%s)", element_id, monochrome)
    return ET.ElementTree(root)


def _force_fill(element: ET.Element, color: str) -> None:
    element.set("fill", color)

    # An inline style declaration would win over the attribute
    style = element.get("style")
    if style is None:
        return
    kept = [
        decl.strip()
        for decl in style.split(";")
        if decl.strip() and decl.split(":", 1)[0].strip() != "fill"
    ]
    if kept:
        element.set("style", ";".join(kept))
    else:
        del element.attrib["style"]
