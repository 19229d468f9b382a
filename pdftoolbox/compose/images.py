"""Lay out raster images on fixed-size PDF pages, one image per page."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from PIL import Image
from pypdf import PdfWriter
from pypdf.generic import (
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    StreamObject,
)

from ..core.exceptions import ComposeError, EncodeError, InputValidationError
from ..core.geometry import DEFAULT_PAGE_FORMAT, fit_image_to_page, page_size
from ..core.model import PDF_MIME_TYPE, InputFile, OutputArtifact, PageGeometry, PlacementRect
from ..core.validator import ensure_min_inputs
from ..raster.converter import RasterFormat, decode_image, encode_image, image_geometry
from .reader import serialize_document

LOGGER = logging.getLogger("pdftoolbox.compose")

IMAGES_OUTPUT_NAME = "images-to-pdf.pdf"
EMBED_QUALITY = 0.95
_IMAGE_RESOURCE = "/Im0"


def _image_xobject(image: Image.Image, quality: float) -> StreamObject:
    xobject = StreamObject()
    xobject._data = encode_image(image, RasterFormat.JPEG, quality)
    xobject.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Image"),
            NameObject("/Width"): NumberObject(image.width),
            NameObject("/Height"): NumberObject(image.height),
            NameObject("/ColorSpace"): NameObject("/DeviceRGB"),
            NameObject("/BitsPerComponent"): NumberObject(8),
            NameObject("/Filter"): NameObject("/DCTDecode"),
        }
    )
    return xobject


def _draw_operators(rect: PlacementRect) -> bytes:
    # The rect is centred, so its offset from the top equals the offset from
    # the bottom and needs no flip into PDF user space.
    return (
        f"q {rect.width:.4f} 0 0 {rect.height:.4f} {rect.x:.4f} {rect.y:.4f} cm "
        f"{_IMAGE_RESOURCE} Do Q"
    ).encode("ascii")


def add_image_page(
    writer: PdfWriter,
    image: Image.Image,
    page: PageGeometry,
    quality: float = EMBED_QUALITY,
) -> PlacementRect:
    """Append a *page*-sized page to *writer* showing *image* fitted and centred."""

    rect = fit_image_to_page(page, image_geometry(image))
    writer.add_blank_page(width=page.width, height=page.height)
    target = writer.pages[-1]

    image_ref = writer._add_object(_image_xobject(image, quality))
    content = DecodedStreamObject()
    content.set_data(_draw_operators(rect))

    target[NameObject("/Resources")] = DictionaryObject(
        {
            NameObject("/XObject"): DictionaryObject(
                {NameObject(_IMAGE_RESOURCE): image_ref}
            )
        }
    )
    target[NameObject("/Contents")] = writer._add_object(content)
    return rect


def images_to_document(
    inputs: Iterable[InputFile],
    *,
    page_format: str | PageGeometry = DEFAULT_PAGE_FORMAT,
    quality: float = EMBED_QUALITY,
    output_name: str = IMAGES_OUTPUT_NAME,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> OutputArtifact:
    """Build a PDF with one page per image in *inputs*.

    Each image is decoded, scaled uniformly to the largest size that fits the
    page, centred and embedded as JPEG.

    Raises:
        InputValidationError: If no images are given or an image has no pixels.
        DecodeError: If an image cannot be decoded.
        ComposeError: If a page cannot be built or the result cannot be written.
    """

    images = list(inputs)
    ensure_min_inputs(images, 1, "images to PDF")
    page = page_size(page_format)

    writer = PdfWriter()
    for position, item in enumerate(images, start=1):
        image = decode_image(item)
        try:
            rect = add_image_page(writer, image, page, quality)
        except (InputValidationError, EncodeError):
            raise
        except Exception as exc:  # pragma: no cover - pypdf errors vary
            LOGGER.error("Failed to add page for %s: %s", item.name, exc)
            raise ComposeError(f"Unable to add a page for {item.name}") from exc
        LOGGER.debug(
            "Placed %s at x=%.2f y=%.2f w=%.2f h=%.2f",
            item.name,
            rect.x,
            rect.y,
            rect.width,
            rect.height,
        )
        if progress_callback is not None:
            progress_callback(position, len(images))

    data = serialize_document(writer, output_name)
    LOGGER.info("Converted %d image(s) into %s", len(images), output_name)
    return OutputArtifact(name=output_name, data=data, mime_type=PDF_MIME_TYPE)


__all__ = ["IMAGES_OUTPUT_NAME", "EMBED_QUALITY", "add_image_page", "images_to_document"]
