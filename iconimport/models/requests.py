"""Import request and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field


class IconImportRequest(BaseModel):
    metadata_file: Path = Field(..., description="Path to the icon metadata JSON")
    targets: frozenset[str] = Field(default_factory=frozenset, description="Target names to generate")
    destinations: dict[str, Path] = Field(
        default_factory=dict,
        description="Output directory per target (default: <output_root>/<target>)",
    )


@dataclass
class TargetOutput:
    target: str
    output_dir: Path
    files: list[Path] = field(default_factory=list)

    @property
    def resource_dirs(self) -> list[Path]:
        """Directories a host build adds to its resource source set."""
        return [self.output_dir]


@dataclass
class ImportResult:
    outputs: list[TargetOutput] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        return [f for out in self.outputs for f in out.files]

    @property
    def resource_dirs(self) -> list[Path]:
        return [d for out in self.outputs for d in out.resource_dirs]

    def for_target(self, name: str) -> TargetOutput:
        for out in self.outputs:
            if out.target == name:
                return out
        raise KeyError(name)
