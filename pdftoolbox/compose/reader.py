"""Decoding and serialisation helpers for :mod:`pdftoolbox.compose`."""

from __future__ import annotations

import io

from pypdf import PasswordType, PdfReader, PdfWriter

from ..core.exceptions import ComposeError, DecodeError
from ..core.model import PDF_MIME_TYPE, InputFile
from ..core.utils import get_logger

LOGGER = get_logger("pdftoolbox.compose")


def load_document(input_file: InputFile) -> PdfReader:
    """Decode *input_file* into a :class:`~pypdf.PdfReader`.

    Encrypted documents are opened with an empty password when possible.

    Raises:
        DecodeError: If the bytes are not a readable PDF.
    """

    try:
        reader = PdfReader(io.BytesIO(input_file.data))
        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF %s", input_file.name)
            if reader.decrypt("") == PasswordType.NOT_DECRYPTED:
                raise DecodeError(input_file.name, "document is encrypted")
        total_pages = len(reader.pages)
    except DecodeError:
        LOGGER.error("Encrypted PDF %s cannot be decrypted", input_file.name)
        raise
    except Exception as exc:  # pypdf raises many unrelated error types
        LOGGER.error("Failed to read PDF %s: %s", input_file.name, exc)
        raise DecodeError(input_file.name, exc) from exc

    LOGGER.debug("Loaded %s with %d page(s)", input_file.name, total_pages)
    return reader


def page_count(data: bytes, name: str = "document.pdf") -> int:
    """Return the number of pages in the encoded PDF *data*."""

    reader = load_document(InputFile(name=name, data=data, mime_type=PDF_MIME_TYPE))
    return len(reader.pages)


def serialize_document(writer: PdfWriter, name: str) -> bytes:
    """Serialise *writer* into PDF bytes."""

    buffer = io.BytesIO()
    try:
        writer.write(buffer)
    except Exception as exc:  # pragma: no cover - IO errors vary
        LOGGER.error("Failed to serialise %s: %s", name, exc)
        raise ComposeError(f"Failed to write {name}") from exc
    return buffer.getvalue()


__all__ = ["load_document", "page_count", "serialize_document"]
