"""Page composition across PDF documents: merge, images to PDF and split."""

from __future__ import annotations

from .images import IMAGES_OUTPUT_NAME, images_to_document
from .merger import MERGED_OUTPUT_NAME, merge_documents
from .reader import load_document, page_count, serialize_document
from .splitter import PAGE_NAME_TEMPLATE, split_document

__all__ = [
    "IMAGES_OUTPUT_NAME",
    "MERGED_OUTPUT_NAME",
    "PAGE_NAME_TEMPLATE",
    "images_to_document",
    "merge_documents",
    "split_document",
    "load_document",
    "page_count",
    "serialize_document",
]
