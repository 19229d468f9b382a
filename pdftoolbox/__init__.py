"""Local PDF and image transformation toolkit.

Five operations are exposed: merging PDFs, laying out images as a PDF,
splitting a PDF into pages, converting images between encodings and
re-serialising a PDF to reduce its size.
"""

from __future__ import annotations

from typing import Iterable

from . import compose, compress, raster
from .compress import CompressionResult
from .core.config import Settings, load_settings
from .core.exceptions import (
    ArtifactReleasedError,
    ComposeError,
    DecodeError,
    EncodeError,
    InputValidationError,
    JobError,
    JobInProgressError,
    PdfToolboxError,
)
from .core.geometry import PAGE_FORMATS, fit_image_to_page, page_size
from .core.model import InputFile, ItemFailure, OutputArtifact, PageGeometry, PlacementRect
from .jobs import (
    BatchExportScheduler,
    ConversionJob,
    ConversionJobRunner,
    DirectorySink,
    JobStatus,
    Operation,
    ScheduledExport,
)
from .raster import RasterFormat
from .tools import load_builtin_plugins
from .tools.common.interfaces import JobContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry

__version__ = "1.0.0"

load_builtin_plugins()

__all__ = [
    "compose",
    "compress",
    "raster",
    "merge_documents",
    "images_to_document",
    "split_document",
    "convert_images",
    "compress_document",
    "InputFile",
    "OutputArtifact",
    "ItemFailure",
    "PageGeometry",
    "PlacementRect",
    "PAGE_FORMATS",
    "fit_image_to_page",
    "page_size",
    "RasterFormat",
    "CompressionResult",
    "Settings",
    "load_settings",
    "ConversionJob",
    "ConversionJobRunner",
    "JobStatus",
    "Operation",
    "BatchExportScheduler",
    "DirectorySink",
    "ScheduledExport",
    "JobContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "PdfToolboxError",
    "InputValidationError",
    "DecodeError",
    "EncodeError",
    "ComposeError",
    "JobError",
    "JobInProgressError",
    "ArtifactReleasedError",
]


def _run_tool(name: str, inputs: Iterable[InputFile], **config) -> tuple[list[OutputArtifact], JobContext]:
    context = JobContext(inputs=list(inputs), settings=load_settings(), config=config)
    tool = registry.create(name, context)
    return tool.run(), context


def merge_documents(inputs: Iterable[InputFile], **config) -> OutputArtifact:
    """Convenience wrapper around the merge plugin."""

    artifacts, _ = _run_tool("merge", inputs, **config)
    return artifacts[0]


def images_to_document(inputs: Iterable[InputFile], *, page_format: str | None = None) -> OutputArtifact:
    """Convenience wrapper around the images-to-PDF plugin."""

    artifacts, _ = _run_tool("images_to_pdf", inputs, page_format=page_format)
    return artifacts[0]


def split_document(input: InputFile) -> list[OutputArtifact]:
    """Convenience wrapper around the split plugin."""

    artifacts, _ = _run_tool("split", [input])
    return artifacts


def convert_images(
    inputs: Iterable[InputFile],
    format: RasterFormat | str | None = None,
    *,
    quality: float | None = None,
) -> list[OutputArtifact]:
    """Convenience wrapper around the image conversion plugin.

    Images that fail to convert are skipped; use :class:`ConversionJobRunner`
    to inspect the failures.
    """

    artifacts, _ = _run_tool("convert_images", inputs, format=format, quality=quality)
    return artifacts


def compress_document(input: InputFile) -> tuple[OutputArtifact, CompressionResult]:
    """Convenience wrapper around the compression plugin."""

    artifacts, context = _run_tool("compress", [input])
    return artifacts[0], context.resources["statistics"]
