"""Platform-specific target option models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AndroidTargetOptions(BaseModel):
    """Options of an ``android`` target.

    ``background`` and ``foreground`` name the ids of the SVG elements the
    adaptive-icon layers are cut from. Without them only the flat vector
    drawable is generated.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    resource_name: str = Field(..., alias="resourceName", pattern=r"^[a-z][a-z0-9_]*$")
    background_element_id: str | None = Field(default=None, alias="background", min_length=1)
    foreground_element_id: str | None = Field(default=None, alias="foreground", min_length=1)

    @model_validator(mode="after")
    def check_layers_paired(self) -> "AndroidTargetOptions":
        if (self.background_element_id is None) != (self.foreground_element_id is None):
            raise ValueError("background and foreground must be given together")
        return self

    @property
    def has_adaptive_layers(self) -> bool:
        return self.background_element_id is not None


@dataclass(frozen=True)
class UnsupportedTargetOptions:
    """Options of a target whose type no registered platform handles.

    Kept verbatim so the description round-trips; emitting such a target fails.
    """

    type: str
    raw: dict[str, Any] = field(default_factory=dict)
