"""Shared test fixtures."""

from __future__ import annotations

import json

import pytest


# Master icon: a full-bleed background and a foreground mark in separate groups
ICON_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="512" height="512" viewBox="0 0 108 108">
  <defs>
    <linearGradient id="shade"><stop offset="0" stop-color="#000"/></linearGradient>
  </defs>
  <g id="layer-bg">
    <rect id="bg" x="0" y="0" width="108" height="108" fill="#3DDC84"/>
  </g>
  <g id="layer-fg">
    <path id="fg" d="M30 30 L78 30 L78 78 L30 78 Z" fill="#073042"/>
    <circle id="dot" cx="54" cy="54" r="6" fill="#FF0000"/>
  </g>
</svg>'''

# Two elements share the id "fg"
DUPLICATE_ID_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 108 108">
  <g><rect id="bg" width="108" height="108" fill="#FFFFFF"/></g>
  <g><path id="fg" d="M0 0 L10 10 Z"/></g>
  <g><path id="fg" d="M10 10 L20 20 Z"/></g>
</svg>'''

STYLED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="#112233">
  <g transform="translate(2 4)" opacity="0.5">
    <rect id="box" width="10" height="10"/>
  </g>
  <path id="line" d="M0 0 L24 24" fill="none" style="stroke:#ff0000;stroke-width:2;stroke-linecap:round"/>
  <text x="0" y="10">hi</text>
</svg>'''

METADATA = {
    "file": "icon.svg",
    "targets": [
        {
            "name": "main",
            "type": "android",
            "options": {"resourceName": "ic_launcher", "background": "bg", "foreground": "fg"},
        },
        {
            "name": "flat",
            "type": "android",
            "options": {"resourceName": "ic_logo"},
        },
    ],
}

METADATA_WITH_FOREIGN_TARGETS = {
    "file": "icon.svg",
    "targets": [
        *METADATA["targets"],
        {"name": "windows", "type": "ico", "options": {"sizes": [16, 32, 256]}},
    ],
    "variables": {"accent": {"type": "fillPaint", "from": "fg"}},
}


@pytest.fixture
def icon_svg() -> str:
    return ICON_SVG


@pytest.fixture
def icon_project(tmp_path):
    """A directory holding icon.svg and its metadata file; returns the metadata path."""
    (tmp_path / "icon.svg").write_text(ICON_SVG, encoding="utf-8")
    meta = tmp_path / "icon.json"
    meta.write_text(json.dumps(METADATA), encoding="utf-8")
    return meta
