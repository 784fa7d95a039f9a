"""SVG document helpers over xml.etree.ElementTree.

Loads and serializes SVG trees and answers the few structural questions the
derivation engine and the converter ask: local tag names, id lookup, grouping.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Register common namespaces to avoid ns0: prefixes on serialization
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)
ET.register_namespace("inkscape", "http://www.inkscape.org/namespaces/inkscape")
ET.register_namespace("sodipodi", "http://sodipodi.sourceforge.net/DTD/sodipodi-0.0.dtd")


def local_name(tag: object) -> str:
    """Strip the namespace from a tag. Comments and PIs yield an empty string."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def qualified(root: ET.Element, name: str) -> str:
    """Qualify ``name`` with the namespace of ``root`` (if it has one)."""
    if isinstance(root.tag, str) and root.tag.startswith("{"):
        return root.tag[: root.tag.index("}") + 1] + name
    return name


def is_group(element: ET.Element) -> bool:
    return local_name(element.tag) == "g"


def parse_svg(text: str | bytes) -> ET.ElementTree:
    """Parse SVG markup into an element tree. Raises ``ET.ParseError`` on bad XML."""
    root = ET.fromstring(text)
    return ET.ElementTree(root)


def load_svg(path: str | Path) -> ET.ElementTree:
    path = Path(path)
    tree = parse_svg(path.read_bytes())
    logger.debug("Loaded SVG %s", path)
    return tree


def serialize_svg(tree: ET.ElementTree | ET.Element) -> bytes:
    root = tree.getroot() if isinstance(tree, ET.ElementTree) else tree
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def find_by_id(root: ET.Element, element_id: str) -> list[ET.Element]:
    """All descendants of ``root`` whose ``id`` attribute equals ``element_id``."""
    return [el for el in root.iter() if el is not root and el.get("id") == element_id]


def parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    return {child: parent for parent in root.iter() for child in parent}
