"""Tests for the target type registry."""

from pathlib import Path

import pytest
from pydantic import BaseModel

from iconimport.emit.android import emit_android_target
from iconimport.engine.registry import TargetTypeRegistry, TargetTypeSpec, get_registry
from iconimport.errors import UnknownTargetType
from iconimport.models.metadata import parse_metadata
from iconimport.models.targets import AndroidTargetOptions


class PngOptions(BaseModel):
    width: int
    height: int


def _emit_png(icon_file, options, output_dir, *, converter=None, warn=None) -> list[Path]:
    return [Path(output_dir) / f"{options.width}x{options.height}.png"]


def test_register_and_get():
    reg = TargetTypeRegistry()
    spec = TargetTypeSpec(type="png", options_model=PngOptions, emit=_emit_png)
    reg.register(spec)
    assert reg.get("png") is spec
    assert "png" in reg
    assert reg.count == 1


def test_duplicate_type_rejected():
    reg = TargetTypeRegistry()
    reg.register(TargetTypeSpec(type="png", options_model=PngOptions, emit=_emit_png))
    with pytest.raises(ValueError):
        reg.register(TargetTypeSpec(type="png", options_model=PngOptions, emit=_emit_png))


def test_get_unknown_type():
    reg = TargetTypeRegistry()
    reg.register(TargetTypeSpec(type="png", options_model=PngOptions, emit=_emit_png))
    with pytest.raises(UnknownTargetType) as exc:
        reg.get("ico")
    assert exc.value.known == ["png"]
    assert "known types: png" in str(exc.value)


def test_for_options_dispatches_on_model():
    reg = TargetTypeRegistry()
    reg.register(TargetTypeSpec(type="png", options_model=PngOptions, emit=_emit_png))
    options = reg.parse_options("png", {"width": 16, "height": 16})
    assert reg.for_options(options).type == "png"
    assert reg.for_options(object()) is None


def test_builtin_android_registered():
    reg = get_registry()
    assert "android" in reg
    spec = reg.get("android")
    assert spec.options_model is AndroidTargetOptions
    assert spec.emit is emit_android_target


def test_parser_uses_custom_registry():
    reg = TargetTypeRegistry()
    reg.register(TargetTypeSpec(type="png", options_model=PngOptions, emit=_emit_png))
    doc = '{"file": "i.svg", "targets": [{"name": "web", "type": "png", "options": {"width": 32, "height": 32}}]}'
    desc = parse_metadata(doc, registry=reg)
    assert desc.target("web").options == PngOptions(width=32, height=32)

    android = '{"file": "i.svg", "targets": [{"name": "main", "type": "android", "options": {"resourceName": "a"}}]}'
    with pytest.raises(UnknownTargetType):
        parse_metadata(android, registry=reg)
