"""SVG paint parsing for VectorDrawable output."""

from __future__ import annotations

import re
from dataclasses import dataclass

# CSS basic color keywords plus a few common extended ones
NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "silver": "#C0C0C0",
    "gray": "#808080",
    "grey": "#808080",
    "white": "#FFFFFF",
    "maroon": "#800000",
    "red": "#FF0000",
    "purple": "#800080",
    "fuchsia": "#FF00FF",
    "magenta": "#FF00FF",
    "green": "#008000",
    "lime": "#00FF00",
    "olive": "#808000",
    "yellow": "#FFFF00",
    "navy": "#000080",
    "blue": "#0000FF",
    "teal": "#008080",
    "aqua": "#00FFFF",
    "cyan": "#00FFFF",
    "orange": "#FFA500",
    "transparent": "#00000000",
}

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_RGB_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)
_URL_RE = re.compile(r"^url\([^)]*\)\s*(.*)$", re.IGNORECASE)


class UnsupportedPaint(ValueError):
    pass


@dataclass(frozen=True)
class Color:
    rgb: str  # "#RRGGBB"
    alpha: float = 1.0


def parse_paint(value: str) -> Color | None:
    """Parse an SVG paint value. ``none`` yields None.

    Raises ``UnsupportedPaint`` for gradients and pattern references without a
    fallback color, ``currentColor`` and unknown values.
    """
    value = value.strip()
    lowered = value.lower()

    if lowered == "none":
        return None

    url = _URL_RE.match(value)
    if url:
        fallback = url.group(1).strip()
        if fallback:
            return parse_paint(fallback)
        raise UnsupportedPaint(f"paint server {value!r} is not supported")

    if lowered == "currentcolor":
        raise UnsupportedPaint("currentColor has no value outside a rendering context")

    if lowered in NAMED_COLORS:
        return parse_paint(NAMED_COLORS[lowered])

    match = _HEX_RE.match(value)
    if match:
        digits = match.group(1)
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits)
        alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return Color(rgb="#" + digits[:6].upper(), alpha=alpha)

    match = _RGB_RE.match(value)
    if match:
        return _parse_rgb_function(value, match.group(1))

    raise UnsupportedPaint(f"unknown color {value!r}")


def _parse_rgb_function(value: str, args: str) -> Color:
    parts = [p.strip() for p in re.split(r"[,\s/]+", args.strip()) if p.strip()]
    if len(parts) not in (3, 4):
        raise UnsupportedPaint(f"unknown color {value!r}")

    channels = []
    try:
        for part in parts[:3]:
            if part.endswith("%"):
                channel = round(float(part[:-1]) * 255 / 100)
            else:
                channel = round(float(part))
            channels.append(min(255, max(0, channel)))
        alpha = parse_opacity(parts[3]) if len(parts) == 4 else 1.0
    except ValueError:
        raise UnsupportedPaint(f"unknown color {value!r}") from None

    return Color(rgb="#{:02X}{:02X}{:02X}".format(*channels), alpha=alpha)


def parse_opacity(value: str) -> float:
    """Parse an opacity (``0.5`` or ``50%``), clamped to [0, 1]."""
    value = value.strip()
    if value.endswith("%"):
        number = float(value[:-1]) / 100
    else:
        number = float(value)
    return min(1.0, max(0.0, number))
