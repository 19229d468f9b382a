"""Raster image re-encoding for the :mod:`pdftoolbox` toolkit."""

from __future__ import annotations

from .converter import (
    ConversionBatch,
    RasterFormat,
    convert_image,
    convert_images,
    decode_image,
    encode_image,
    image_geometry,
)

__all__ = [
    "ConversionBatch",
    "RasterFormat",
    "convert_image",
    "convert_images",
    "decode_image",
    "encode_image",
    "image_geometry",
]
