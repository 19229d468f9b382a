"""Data records exchanged between the collaborator and the pipeline."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from .utils import resolve_path

PDF_MIME_TYPE = "application/pdf"
_FALLBACK_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class InputFile:
    """A named, read-only input buffer supplied by the collaborator."""

    name: str
    data: bytes
    mime_type: str

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "InputFile":
        source = resolve_path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(source.name)[0] or _FALLBACK_MIME_TYPE
        return cls(name=source.name, data=source.read_bytes(), mime_type=mime_type)

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"InputFile(name={self.name!r}, size={self.size}, mime_type={self.mime_type!r})"


@dataclass(frozen=True)
class OutputArtifact:
    """A named output buffer produced by one of the components."""

    name: str
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"OutputArtifact(name={self.name!r}, size={self.size}, mime_type={self.mime_type!r})"


@dataclass(frozen=True)
class ItemFailure:
    """An input that was skipped because it could not be processed."""

    name: str
    message: str


@dataclass(frozen=True)
class PageGeometry:
    """Intrinsic size of a page (in points) or an image (in pixels)."""

    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class PlacementRect:
    """Target rectangle for drawing an image on a page."""

    x: float
    y: float
    width: float
    height: float


__all__ = [
    "PDF_MIME_TYPE",
    "InputFile",
    "OutputArtifact",
    "ItemFailure",
    "PageGeometry",
    "PlacementRect",
]
