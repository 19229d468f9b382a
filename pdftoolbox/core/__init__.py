"""Core primitives shared by every pdftoolbox component."""

from __future__ import annotations

from .exceptions import (
    ArtifactReleasedError,
    ComposeError,
    DecodeError,
    EncodeError,
    InputValidationError,
    JobError,
    JobInProgressError,
    PdfToolboxError,
)
from .geometry import PAGE_FORMATS, fit_image_to_page, page_size
from .model import (
    PDF_MIME_TYPE,
    InputFile,
    ItemFailure,
    OutputArtifact,
    PageGeometry,
    PlacementRect,
)

__all__ = [
    "PAGE_FORMATS",
    "PDF_MIME_TYPE",
    "InputFile",
    "OutputArtifact",
    "ItemFailure",
    "PageGeometry",
    "PlacementRect",
    "fit_image_to_page",
    "page_size",
    "PdfToolboxError",
    "InputValidationError",
    "DecodeError",
    "EncodeError",
    "ComposeError",
    "JobError",
    "JobInProgressError",
    "ArtifactReleasedError",
]
