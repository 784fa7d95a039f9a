"""Tests for SVG document helpers."""

import xml.etree.ElementTree as ET

import pytest

from iconimport.svg.document import (
    SVG_NS,
    find_by_id,
    load_svg,
    local_name,
    parse_svg,
    qualified,
    serialize_svg,
)
from tests.conftest import ICON_SVG


def test_local_name():
    assert local_name(f"{{{SVG_NS}}}path") == "path"
    assert local_name("path") == "path"
    assert local_name(ET.Comment) == ""


def test_qualified_follows_root_namespace():
    assert qualified(parse_svg(ICON_SVG).getroot(), "g") == f"{{{SVG_NS}}}g"
    assert qualified(ET.fromstring("<svg/>"), "g") == "g"


def test_find_by_id():
    root = parse_svg(ICON_SVG).getroot()
    matches = find_by_id(root, "fg")
    assert len(matches) == 1
    assert local_name(matches[0].tag) == "path"
    assert find_by_id(root, "missing") == []


def test_serialize_uses_default_namespace():
    data = serialize_svg(parse_svg(ICON_SVG))
    assert b'xmlns="http://www.w3.org/2000/svg"' in data
    assert b"ns0:" not in data


def test_load_svg(tmp_path):
    path = tmp_path / "icon.svg"
    path.write_text(ICON_SVG, encoding="utf-8")
    assert local_name(load_svg(path).getroot().tag) == "svg"


def test_parse_error():
    with pytest.raises(ET.ParseError):
        parse_svg("<svg><g></svg>")
