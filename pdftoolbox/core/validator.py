"""Validation helpers shared by pdftoolbox tools."""

from __future__ import annotations

from typing import Sequence

from .exceptions import InputValidationError
from .model import PDF_MIME_TYPE, InputFile
from .utils import get_logger

LOGGER = get_logger("pdftoolbox.validator")


def ensure_min_inputs(inputs: Sequence[InputFile], minimum: int, operation: str) -> None:
    if len(inputs) < minimum:
        noun = "file" if minimum == 1 else "files"
        raise InputValidationError(
            f"{operation} requires at least {minimum} input {noun}, got {len(inputs)}"
        )


def take_single_input(inputs: Sequence[InputFile], operation: str) -> InputFile:
    """Return the first input, discarding any extra files."""

    ensure_min_inputs(inputs, 1, operation)
    if len(inputs) > 1:
        LOGGER.warning(
            "%s accepts a single file; discarding %d extra input(s)", operation, len(inputs) - 1
        )
    return inputs[0]


def ensure_pdf_inputs(inputs: Sequence[InputFile]) -> None:
    for item in inputs:
        if item.mime_type.lower() != PDF_MIME_TYPE:
            raise InputValidationError(
                f"Expected a PDF file, got {item.name!r} ({item.mime_type})"
            )


def ensure_image_inputs(inputs: Sequence[InputFile]) -> None:
    for item in inputs:
        if not item.mime_type.lower().startswith("image/"):
            raise InputValidationError(
                f"Expected an image file, got {item.name!r} ({item.mime_type})"
            )


__all__ = ["ensure_min_inputs", "take_single_input", "ensure_pdf_inputs", "ensure_image_inputs"]
