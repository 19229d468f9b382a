"""Split a PDF into one single-page document per source page."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from pypdf import PdfWriter

from ..core.exceptions import ComposeError
from ..core.model import PDF_MIME_TYPE, InputFile, OutputArtifact
from .reader import load_document, serialize_document

LOGGER = logging.getLogger("pdftoolbox.compose")

PAGE_NAME_TEMPLATE = "page-{number}.pdf"


def build_page_name(number: int, template: str = PAGE_NAME_TEMPLATE) -> str:
    return template.format(number=number)


def split_document(
    input_file: InputFile,
    *,
    name_template: str = PAGE_NAME_TEMPLATE,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> List[OutputArtifact]:
    """Split *input_file* into single-page artifacts.

    Artifacts are returned in page order and named with the 1-based page
    number. A document without pages yields an empty list.
    """

    reader = load_document(input_file)
    total_pages = len(reader.pages)
    if total_pages == 0:
        LOGGER.info("%s has no pages; nothing to split", input_file.name)
        return []

    artifacts: List[OutputArtifact] = []
    for index, page in enumerate(reader.pages):
        number = index + 1
        writer = PdfWriter()
        try:
            writer.add_page(page)
        except Exception as exc:  # pragma: no cover - pypdf errors vary
            LOGGER.error("Failed to copy page %s of %s: %s", number, input_file.name, exc)
            raise ComposeError(f"Unable to copy page {number} of {input_file.name}") from exc
        name = build_page_name(number, name_template)
        LOGGER.debug("Writing page %s to %s", number, name)
        artifacts.append(
            OutputArtifact(name=name, data=serialize_document(writer, name), mime_type=PDF_MIME_TYPE)
        )
        if progress_callback is not None:
            progress_callback(number, total_pages)

    LOGGER.info("Split %s into %d page(s)", input_file.name, len(artifacts))
    return artifacts


__all__ = ["PAGE_NAME_TEMPLATE", "build_page_name", "split_document"]
