"""Merge functionality for the :mod:`pdftoolbox.compose` package."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from pypdf import PdfWriter

from ..core.exceptions import ComposeError
from ..core.model import PDF_MIME_TYPE, InputFile, OutputArtifact
from ..core.validator import ensure_min_inputs
from .reader import load_document, serialize_document

LOGGER = logging.getLogger("pdftoolbox.compose")

MERGED_OUTPUT_NAME = "merged-document.pdf"


def merge_documents(
    inputs: Iterable[InputFile],
    *,
    output_name: str = MERGED_OUTPUT_NAME,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> OutputArtifact:
    """Merge *inputs* into a single PDF artifact.

    Pages are appended in the order of *inputs*, each source keeping its own
    page order.

    Args:
        inputs: At least two encoded PDF documents.
        output_name: Name of the produced artifact.
        progress_callback: Called with ``(current, total)`` after each source.

    Raises:
        InputValidationError: If fewer than two inputs are supplied.
        DecodeError: If a source is not a readable PDF.
        ComposeError: If a page cannot be copied or the result cannot be written.
    """

    sources = list(inputs)
    ensure_min_inputs(sources, 2, "merge")

    writer = PdfWriter()
    for position, source in enumerate(sources, start=1):
        LOGGER.debug("Processing input PDF %s", source.name)
        reader = load_document(source)
        for page_index, page in enumerate(reader.pages):
            LOGGER.debug("Adding page %s from %s", page_index, source.name)
            try:
                writer.add_page(page)
            except Exception as exc:  # pragma: no cover - pypdf errors vary
                LOGGER.error("Failed to copy page %s from %s: %s", page_index, source.name, exc)
                raise ComposeError(
                    f"Unable to copy page {page_index + 1} of {source.name}"
                ) from exc
        if progress_callback is not None:
            progress_callback(position, len(sources))

    data = serialize_document(writer, output_name)
    LOGGER.info("Merged %d PDFs into %s (%d pages)", len(sources), output_name, len(writer.pages))
    return OutputArtifact(name=output_name, data=data, mime_type=PDF_MIME_TYPE)


__all__ = ["MERGED_OUTPUT_NAME", "merge_documents"]
