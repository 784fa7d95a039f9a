"""SVG to Android VectorDrawable converter — facade over svgpathtools + numpy.

Shapes are normalized to path data, nested ``transform`` attributes are composed
as 3x3 matrices and baked into the paths, and inherited presentation attributes
are resolved per path. Anything VectorDrawable cannot express is reported as a
warning and left out; the conversion itself only fails for documents that are
not SVG at all.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Union

import numpy as np
from svgpathtools import parse_path
from svgpathtools.parser import parse_transform
from svgpathtools.path import transform as transform_path
from svgpathtools.svg_to_paths import ellipse2pathd, polygon2pathd, polyline2pathd, rect2pathd

from iconimport.svg.document import SVG_NS, load_svg, local_name, parse_svg
from iconimport.vector.colors import UnsupportedPaint, parse_opacity, parse_paint

logger = logging.getLogger(__name__)

ANDROID_NS = "http://schemas.android.com/apk/res/android"
ET.register_namespace("android", ANDROID_NS)

SvgSource = Union[str, Path, ET.ElementTree, ET.Element]

# Presentation attributes inherited from ancestors
_INHERITED = (
    "fill",
    "fill-opacity",
    "fill-rule",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
)
_SHAPES = {"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"}
_SKIPPED = {
    "defs", "title", "desc", "metadata", "style", "symbol",
    "linearGradient", "radialGradient", "namedview",
}
_UNSUPPORTED = {"clipPath", "mask", "text", "image", "use", "filter", "pattern", "foreignObject", "svg", "switch"}

_LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(px|pt|dp)?\s*$")
_PT_TO_PX = 4.0 / 3.0


class ConverterError(Exception):
    """The input cannot be converted at all."""


@dataclass
class ConversionResult:
    data: bytes
    warnings: list[str] = field(default_factory=list)


class VectorConverter(Protocol):
    def convert(self, source: SvgSource) -> ConversionResult: ...


def android(name: str) -> str:
    return f"{{{ANDROID_NS}}}{name}"


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _parse_length(value: str | None) -> float | None:
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    if match.group(2) == "pt":
        number *= _PT_TO_PX
    return number


def _foreign(tag: str) -> bool:
    """Elements of editor-private namespaces (inkscape, sodipodi, ...)."""
    return tag.startswith("{") and not tag.startswith(f"{{{SVG_NS}}}")


def _presentation(element: ET.Element) -> dict[str, str]:
    """Attributes plus inline style declarations (style wins)."""
    props = {k: v for k, v in element.attrib.items() if not k.startswith("{")}
    style = props.pop("style", "")
    for decl in style.split(";"):
        if ":" not in decl:
            continue
        key, value = decl.split(":", 1)
        props[key.strip()] = value.strip()
    return props


@dataclass
class _State:
    matrix: np.ndarray
    style: dict[str, str]
    opacity: float = 1.0


class SvgToVectorConverter:
    """Convert one SVG document into VectorDrawable XML."""

    def convert(self, source: SvgSource) -> ConversionResult:
        root = self._load(source)
        if local_name(root.tag) != "svg":
            raise ConverterError(f"root element is <{local_name(root.tag)}>, not <svg>")

        warnings: list[str] = []
        vector, base = self._vector_root(root)

        state = self._descend(root, base, warnings)
        if state is not None:
            for child in root:
                self._visit(child, vector, state, warnings)

        paths = sum(1 for _ in vector.iter("path"))
        if paths == 0:
            warnings.append("document has no drawable content")
            return ConversionResult(data=b"", warnings=warnings)

        ET.indent(vector, space="    ")
        data = ET.tostring(vector, encoding="utf-8", xml_declaration=True) + b"\n"
        logger.debug("Converted SVG: %d paths, %d warnings", paths, len(warnings))
        return ConversionResult(data=data, warnings=warnings)

    # ── Document level ────────────────────────────────────────────────

    @staticmethod
    def _load(source: SvgSource) -> ET.Element:
        if isinstance(source, ET.ElementTree):
            return source.getroot()
        if isinstance(source, ET.Element):
            return source
        try:
            if isinstance(source, Path):
                return load_svg(source).getroot()
            if source.lstrip().startswith("<"):
                return parse_svg(source).getroot()
            return load_svg(source).getroot()
        except ET.ParseError as e:
            raise ConverterError(f"invalid SVG markup: {e}") from e

    def _vector_root(self, root: ET.Element) -> tuple[ET.Element, _State]:
        matrix = np.identity(3)
        viewbox = root.get("viewBox")
        width = _parse_length(root.get("width"))
        height = _parse_length(root.get("height"))

        if viewbox:
            try:
                min_x, min_y, vp_w, vp_h = (float(v) for v in re.split(r"[\s,]+", viewbox.strip()))
            except ValueError:
                raise ConverterError(f"invalid viewBox {viewbox!r}") from None
            if vp_w <= 0 or vp_h <= 0:
                raise ConverterError(f"invalid viewBox {viewbox!r}")
            if min_x or min_y:
                matrix = np.array([[1.0, 0.0, -min_x], [0.0, 1.0, -min_y], [0.0, 0.0, 1.0]])
        elif width and height:
            vp_w, vp_h = width, height
        else:
            raise ConverterError("document has neither a viewBox nor a width and height")

        vector = ET.Element("vector")
        vector.set(android("width"), _fmt(width or vp_w) + "dp")
        vector.set(android("height"), _fmt(height or vp_h) + "dp")
        vector.set(android("viewportWidth"), _fmt(vp_w))
        vector.set(android("viewportHeight"), _fmt(vp_h))
        return vector, _State(matrix=matrix, style={})

    # ── Tree walk ─────────────────────────────────────────────────────

    def _descend(self, element: ET.Element, parent: _State, warnings: list[str]) -> _State | None:
        """State for ``element``'s subtree, or None if it is not rendered."""
        props = _presentation(element)
        if props.get("display") == "none" or props.get("visibility") in ("hidden", "collapse"):
            return None

        style = dict(parent.style)
        style.update({k: v for k, v in props.items() if k in _INHERITED and v != "inherit"})

        opacity = parent.opacity
        if "opacity" in props:
            try:
                opacity *= parse_opacity(props["opacity"])
            except ValueError:
                warnings.append(f"ignoring invalid opacity {props['opacity']!r}")

        matrix = parent.matrix
        if element.get("transform") and local_name(element.tag) != "svg":
            try:
                matrix = matrix @ parse_transform(element.get("transform"))
            except (ValueError, IndexError) as e:
                warnings.append(f"ignoring invalid transform {element.get('transform')!r}: {e}")

        return _State(matrix=matrix, style=style, opacity=opacity)

    def _visit(self, element: ET.Element, out: ET.Element, parent: _State, warnings: list[str]) -> None:
        name = local_name(element.tag)
        if not name or name in _SKIPPED or _foreign(element.tag):
            return
        if name in _UNSUPPORTED:
            warnings.append(f"<{name}> is not supported and was ignored")
            return
        if name != "g" and name not in _SHAPES:
            warnings.append(f"unknown element <{name}> was ignored")
            return

        state = self._descend(element, parent, warnings)
        if state is None:
            return

        if name == "g":
            group = ET.Element("group")
            if element.get("id"):
                group.set(android("name"), element.get("id"))
            for child in element:
                self._visit(child, group, state, warnings)
            if len(group):
                out.append(group)
            return

        path = self._shape(element, name, state, warnings)
        if path is not None:
            out.append(path)

    # ── Shapes ────────────────────────────────────────────────────────

    def _shape(self, element: ET.Element, name: str, state: _State, warnings: list[str]) -> ET.Element | None:
        label = f"<{name}" + (f" id={element.get('id')!r}" if element.get("id") else "") + ">"
        try:
            d = _shape_to_d(name, element.attrib)
        except (KeyError, TypeError, ValueError, IndexError) as e:
            warnings.append(f"{label}: cannot build path data ({e})")
            return None
        if not d or not d.strip():
            return None

        try:
            parsed = parse_path(d)
        except Exception as e:
            warnings.append(f"{label}: invalid path data ({e})")
            return None
        if len(parsed) == 0:
            return None

        identity = np.allclose(state.matrix, np.identity(3))
        if not identity:
            try:
                parsed = transform_path(parsed, state.matrix)
            except (ValueError, ZeroDivisionError, np.linalg.LinAlgError) as e:
                warnings.append(f"{label}: cannot apply transform ({e})")
                return None
        path_data = d.strip() if identity and name == "path" else parsed.d()

        fill = self._paint(state.style.get("fill", "#000000"), label, "fill", warnings)
        stroke = self._paint(state.style.get("stroke", "none"), label, "stroke", warnings)
        if fill is None and stroke is None:
            return None

        out = ET.Element("path")
        if element.get("id"):
            out.set(android("name"), element.get("id"))
        out.set(android("pathData"), path_data)

        if fill is not None:
            out.set(android("fillColor"), fill.rgb)
            alpha = fill.alpha * state.opacity * self._opacity(state.style, "fill-opacity", warnings)
            if alpha < 1.0:
                out.set(android("fillAlpha"), _fmt(alpha))
            if state.style.get("fill-rule") == "evenodd":
                out.set(android("fillType"), "evenOdd")

        if stroke is not None:
            out.set(android("strokeColor"), stroke.rgb)
            width = _parse_length(state.style.get("stroke-width", "1"))
            if width is None:
                warnings.append(f"{label}: unsupported stroke-width {state.style['stroke-width']!r}")
                width = 1.0
            scale = float(np.sqrt(abs(np.linalg.det(state.matrix[:2, :2]))))
            out.set(android("strokeWidth"), _fmt(width * scale))
            alpha = stroke.alpha * state.opacity * self._opacity(state.style, "stroke-opacity", warnings)
            if alpha < 1.0:
                out.set(android("strokeAlpha"), _fmt(alpha))
            cap = state.style.get("stroke-linecap")
            if cap in ("butt", "round", "square"):
                out.set(android("strokeLineCap"), cap)
            join = state.style.get("stroke-linejoin")
            if join in ("miter", "round", "bevel"):
                out.set(android("strokeLineJoin"), join)
            miter = _parse_length(state.style.get("stroke-miterlimit"))
            if miter is not None:
                out.set(android("strokeMiterLimit"), _fmt(miter))

        return out

    @staticmethod
    def _paint(value: str, label: str, prop: str, warnings: list[str]):
        try:
            return parse_paint(value)
        except UnsupportedPaint as e:
            warnings.append(f"{label}: {prop} dropped, {e}")
            return None

    @staticmethod
    def _opacity(style: dict[str, str], prop: str, warnings: list[str]) -> float:
        if prop not in style:
            return 1.0
        try:
            return parse_opacity(style[prop])
        except ValueError:
            warnings.append(f"ignoring invalid {prop} {style[prop]!r}")
            return 1.0


def _shape_to_d(name: str, attrs: dict[str, str]) -> str | None:
    if name == "path":
        return attrs.get("d")
    if name == "rect":
        return rect2pathd(attrs)
    if name in ("circle", "ellipse"):
        return ellipse2pathd(attrs)
    if name == "line":
        points = "{},{} {},{}".format(
            attrs.get("x1", "0"), attrs.get("y1", "0"), attrs.get("x2", "0"), attrs.get("y2", "0")
        )
        return polyline2pathd({"points": points})
    # svgpathtools reads ``points`` from the attribute mapping; a bare string
    # is taken as an already split point list
    if name == "polyline":
        return polyline2pathd(attrs)
    if name == "polygon":
        return polygon2pathd(attrs)
    return None


_default_converter = SvgToVectorConverter()


def default_converter() -> SvgToVectorConverter:
    return _default_converter
