"""Tests for the metadata model and parser."""

from __future__ import annotations

import json

import pytest

from iconimport.errors import MalformedMetadata, UnknownTarget, UnknownTargetType
from iconimport.models.metadata import dump_metadata, parse_metadata
from iconimport.models.targets import AndroidTargetOptions, UnsupportedTargetOptions
from tests.conftest import METADATA, METADATA_WITH_FOREIGN_TARGETS


def _parse(doc, **kwargs):
    return parse_metadata(json.dumps(doc), **kwargs)


def test_parse_android_targets():
    desc = _parse(METADATA)
    assert desc.file == "icon.svg"
    assert desc.target_names == ["main", "flat"]

    main = desc.target("main")
    assert main.type == "android"
    assert isinstance(main.options, AndroidTargetOptions)
    assert main.options.resource_name == "ic_launcher"
    assert main.options.background_element_id == "bg"
    assert main.options.foreground_element_id == "fg"
    assert main.options.has_adaptive_layers

    flat = desc.target("flat")
    assert not flat.options.has_adaptive_layers


def test_parse_accepts_bytes():
    desc = parse_metadata(json.dumps(METADATA).encode("utf-8"))
    assert len(desc.targets) == 2


def test_round_trip():
    desc = _parse(METADATA)
    assert dump_metadata(desc) == METADATA
    assert _parse(json.loads(desc.to_json())) == desc


def test_unknown_target_name():
    desc = _parse(METADATA)
    with pytest.raises(UnknownTarget) as exc:
        desc.target("tv")
    assert exc.value.target == "tv"


def test_unknown_type_fails():
    with pytest.raises(UnknownTargetType) as exc:
        _parse(METADATA_WITH_FOREIGN_TARGETS)
    assert exc.value.type_name == "ico"
    assert exc.value.target == "windows"
    assert "android" in exc.value.known


def test_unknown_type_kept_when_ignored():
    desc = _parse(METADATA_WITH_FOREIGN_TARGETS, ignore_unknown_types=True)
    windows = desc.target("windows")
    assert not windows.supported
    assert isinstance(windows.options, UnsupportedTargetOptions)
    assert windows.options.raw == {"sizes": [16, 32, 256]}
    # variables are not part of the model
    assert dump_metadata(desc)["targets"][-1]["options"] == {"sizes": [16, 32, 256]}


@pytest.mark.parametrize(
    "doc",
    [
        {"targets": []},
        {"file": "icon.svg"},
        {"file": "icon.svg", "targets": [{"type": "android", "options": {"resourceName": "a"}}]},
        {"file": "icon.svg", "targets": [{"name": "main", "options": {"resourceName": "a"}}]},
        {"file": "icon.svg", "targets": [{"name": "main", "type": "android"}]},
        {"file": "icon.svg", "targets": [{"name": "main", "type": "android", "options": {}}]},
        [],
    ],
)
def test_missing_required_fields(doc):
    with pytest.raises(MalformedMetadata):
        _parse(doc)


def test_invalid_json():
    with pytest.raises(MalformedMetadata):
        parse_metadata("{not json")


def test_duplicate_target_names():
    doc = {"file": "icon.svg", "targets": [METADATA["targets"][0], METADATA["targets"][0]]}
    with pytest.raises(MalformedMetadata, match="duplicate"):
        _parse(doc)


def test_background_without_foreground():
    doc = {
        "file": "icon.svg",
        "targets": [{"name": "main", "type": "android", "options": {"resourceName": "a", "background": "bg"}}],
    }
    with pytest.raises(MalformedMetadata, match="main"):
        _parse(doc)


def test_invalid_resource_name():
    doc = {
        "file": "icon.svg",
        "targets": [{"name": "main", "type": "android", "options": {"resourceName": "Launcher-Icon"}}],
    }
    with pytest.raises(MalformedMetadata):
        _parse(doc)
