"""Error taxonomy for icon imports.

Every failure raised by the package derives from ``IconImportError`` and carries
enough context (target name, file path, element id) to be reported precisely.
Nothing here is retried: all failures are deterministic for fixed inputs.
"""

from __future__ import annotations

from pathlib import Path


class IconImportError(Exception):
    """Base class for all icon import failures."""


class MalformedMetadata(IconImportError):
    """The metadata document is not valid JSON or misses required fields."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        prefix = f"{self.path}: " if self.path is not None else ""
        super().__init__(f"{prefix}{message}")


class MissingSourceFile(IconImportError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Icon file {self.path} does not exist")


class UnknownTarget(IconImportError):
    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"No such target {target!r}")


class UnknownTargetType(IconImportError):
    def __init__(self, type_name: str, *, target: str | None = None, known: list[str] | None = None) -> None:
        self.type_name = type_name
        self.target = target
        self.known = list(known or [])
        where = f" (target {target!r})" if target else ""
        hint = f"; known types: {', '.join(self.known)}" if self.known else ""
        super().__init__(f"Unsupported target type {type_name!r}{where}{hint}")



class ElementNotFound(IconImportError):
    """Zero or several elements carry the requested id."""

    def __init__(self, element_id: str, *, matches: int = 0) -> None:
        self.element_id = element_id
        self.matches = matches
        if matches:
            detail = f"{matches} elements share the id"
        else:
            detail = "no element carries the id"
        super().__init__(f"Cannot select element {element_id!r}: {detail}")


class ConversionFailed(IconImportError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to convert SVG to {self.path}: {reason}")


class InvalidImportRequest(IconImportError):
    pass
