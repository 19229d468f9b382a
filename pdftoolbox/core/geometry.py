"""Page geometry helpers used when placing raster images on fixed-size pages."""

from __future__ import annotations

from .exceptions import InputValidationError
from .model import PageGeometry, PlacementRect

# Page sizes in PDF points (1/72 inch), portrait orientation.
PAGE_FORMATS: dict[str, PageGeometry] = {
    "a4": PageGeometry(595.28, 841.89),
    "letter": PageGeometry(612.0, 792.0),
    "legal": PageGeometry(612.0, 1008.0),
}

DEFAULT_PAGE_FORMAT = "a4"


def page_size(page_format: str | PageGeometry = DEFAULT_PAGE_FORMAT) -> PageGeometry:
    """Resolve *page_format* into a :class:`PageGeometry`."""

    if isinstance(page_format, PageGeometry):
        _ensure_positive(page_format, "page")
        return page_format
    key = str(page_format).strip().lower()
    try:
        return PAGE_FORMATS[key]
    except KeyError as exc:
        choices = ", ".join(sorted(PAGE_FORMATS))
        raise InputValidationError(
            f"Unknown page format {page_format!r}; expected one of: {choices}"
        ) from exc


def _ensure_positive(geometry: PageGeometry, label: str) -> None:
    if geometry.width <= 0 or geometry.height <= 0:
        raise InputValidationError(
            f"Invalid {label} size {geometry.width}x{geometry.height}: dimensions must be positive"
        )


def fit_image_to_page(page: PageGeometry, image: PageGeometry) -> PlacementRect:
    """Return the largest centred rectangle with *image*'s aspect ratio inside *page*.

    Args:
        page: Size of the destination page.
        image: Intrinsic size of the image to place.

    Raises:
        InputValidationError: If either size has a non-positive dimension.
    """

    _ensure_positive(page, "page")
    _ensure_positive(image, "image")

    image_ratio = image.aspect_ratio
    page_ratio = page.aspect_ratio
    if image_ratio > page_ratio:
        width = page.width
        height = page.width / image_ratio
    else:
        height = page.height
        width = page.height * image_ratio

    return PlacementRect(
        x=(page.width - width) / 2,
        y=(page.height - height) / 2,
        width=width,
        height=height,
    )


__all__ = ["PAGE_FORMATS", "DEFAULT_PAGE_FORMAT", "page_size", "fit_image_to_page"]
