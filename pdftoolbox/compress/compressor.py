"""Re-serialisation based compression for :mod:`pdftoolbox.compress`."""

from __future__ import annotations

import dataclasses

from pypdf import PdfWriter

from ..compose.reader import load_document, serialize_document
from ..core.exceptions import ComposeError
from ..core.model import PDF_MIME_TYPE, InputFile, OutputArtifact
from ..core.utils import get_logger

_LOGGER = get_logger("pdftoolbox.compress")

COMPRESSED_OUTPUT_NAME = "compressed-document.pdf"


@dataclasses.dataclass(slots=True, frozen=True)
class CompressionResult:
    """Represents the outcome of a compression run."""

    original_size: int
    compressed_size: int
    page_count: int

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def raw_reduction_percent(self) -> float:
        """Signed size reduction; negative when the output grew."""

        if self.original_size == 0:
            return 0.0
        return (self.original_size - self.compressed_size) / self.original_size * 100

    @property
    def reduction_percent(self) -> float:
        """Size reduction reported to users, never below ``0.0``."""

        return max(self.raw_reduction_percent, 0.0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


def compress_document(
    input_file: InputFile,
    *,
    output_name: str = COMPRESSED_OUTPUT_NAME,
) -> tuple[OutputArtifact, CompressionResult]:
    """Re-serialise *input_file* into its most compact equivalent encoding.

    Content streams are recompressed and duplicated or unreferenced objects are
    dropped. The output is not guaranteed to be smaller than the input.

    Raises:
        DecodeError: If the input is not a readable PDF.
        ComposeError: If the document cannot be rebuilt or written.
    """

    reader = load_document(input_file)
    try:
        writer = PdfWriter(clone_from=reader)
        for page in writer.pages:
            page.compress_content_streams()
        writer.compress_identical_objects(remove_identicals=True, remove_orphans=True)
    except Exception as exc:  # pragma: no cover - pypdf errors vary
        _LOGGER.error("Failed to rebuild %s: %s", input_file.name, exc)
        raise ComposeError(f"Unable to compress {input_file.name}") from exc

    data = serialize_document(writer, output_name)
    result = CompressionResult(
        original_size=input_file.size,
        compressed_size=len(data),
        page_count=len(writer.pages),
    )
    _LOGGER.info(
        "Compressed %s: %d -> %d bytes (%.1f%%)",
        input_file.name,
        result.original_size,
        result.compressed_size,
        result.reduction_percent,
    )
    return OutputArtifact(name=output_name, data=data, mime_type=PDF_MIME_TYPE), result


__all__ = ["COMPRESSED_OUTPUT_NAME", "CompressionResult", "compress_document"]
