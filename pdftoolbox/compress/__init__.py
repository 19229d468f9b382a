"""Compression utilities exposed through the pdftoolbox namespace."""

from __future__ import annotations

from .compressor import COMPRESSED_OUTPUT_NAME, CompressionResult, compress_document

__all__ = ["COMPRESSED_OUTPUT_NAME", "CompressionResult", "compress_document"]
