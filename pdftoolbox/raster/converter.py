"""Decode raster images into RGBA pixel grids and re-encode them with Pillow."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional

from PIL import Image, ImageOps

from ..core.exceptions import DecodeError, EncodeError, InputValidationError
from ..core.model import InputFile, ItemFailure, OutputArtifact, PageGeometry
from ..core.utils import clamp, get_logger, replace_extension

LOGGER = get_logger("pdftoolbox.raster")

ProgressCallback = Callable[[int, int], None]

_JPEG_BACKGROUND = (255, 255, 255)


class RasterFormat(str, Enum):
    """Output encodings supported by the converter."""

    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def pillow_format(self) -> str:
        return self.name

    @property
    def lossy(self) -> bool:
        return self is not RasterFormat.PNG

    @classmethod
    def parse(cls, value: "RasterFormat | str") -> "RasterFormat":
        """Resolve an enum member, name, extension or MIME type."""

        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key.startswith("image/"):
            key = key.split("/", 1)[1]
        key = key.lstrip(".")
        if key == "jpg":
            key = "jpeg"
        try:
            return cls(key)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise InputValidationError(
                f"Unsupported output format {value!r}; expected one of: {choices}"
            ) from exc


@dataclass
class ConversionBatch:
    """Artifacts and skipped items produced by :func:`convert_images`."""

    artifacts: list[OutputArtifact] = field(default_factory=list)
    errors: list[ItemFailure] = field(default_factory=list)


def _to_rgba(image: Image.Image) -> Image.Image:
    # 16-bit greyscale is scaled down to 8 bits; convert() alone would clip it.
    if image.mode == "I" or image.mode.startswith("I;16"):
        image = image.convert("I").point(lambda value: value * (1 / 256)).convert("L")
    return image.convert("RGBA")


def decode_image(input_file: InputFile) -> Image.Image:
    """Decode *input_file* into a fully loaded RGBA image.

    EXIF orientation is applied, so the pixel grid matches the displayed image.
    """

    try:
        with Image.open(io.BytesIO(input_file.data)) as source:
            source.load()
            image = _to_rgba(ImageOps.exif_transpose(source))
    except Exception as exc:  # Pillow raises many unrelated error types
        LOGGER.error("Failed to decode image %s: %s", input_file.name, exc)
        raise DecodeError(input_file.name, exc) from exc
    LOGGER.debug("Decoded %s (%dx%d)", input_file.name, image.width, image.height)
    return image


def image_geometry(image: Image.Image) -> PageGeometry:
    return PageGeometry(float(image.width), float(image.height))


def flatten_alpha(image: Image.Image) -> Image.Image:
    """Composite *image* onto an opaque white background."""

    if image.mode in {"RGB", "L"}:
        return image
    rgba = image.convert("RGBA")
    background = Image.new("RGB", rgba.size, _JPEG_BACKGROUND)
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


def _codec_quality(quality: float) -> int:
    return max(1, round(clamp(float(quality), 0.0, 1.0) * 100))


def encode_image(image: Image.Image, fmt: RasterFormat | str, quality: float = 0.9) -> bytes:
    """Encode *image* as *fmt*; *quality* is ignored for lossless formats."""

    target = RasterFormat.parse(fmt)
    save_kwargs: dict[str, object] = {}
    if target is RasterFormat.JPEG:
        image = flatten_alpha(image)
    if target.lossy:
        save_kwargs["quality"] = _codec_quality(quality)

    output = io.BytesIO()
    try:
        image.save(output, format=target.pillow_format, **save_kwargs)
    except Exception as exc:  # pragma: no cover - depends on Pillow codecs
        LOGGER.error("Failed to encode image as %s: %s", target.value, exc)
        raise EncodeError(f"Unable to encode image as {target.value}: {exc}") from exc
    return output.getvalue()


def convert_image(
    input_file: InputFile,
    fmt: RasterFormat | str,
    quality: float = 0.9,
) -> OutputArtifact:
    """Re-encode *input_file* as *fmt* and return the resulting artifact."""

    target = RasterFormat.parse(fmt)
    image = decode_image(input_file)
    data = encode_image(image, target, quality)
    name = replace_extension(input_file.name, target.extension)
    LOGGER.debug("Converted %s -> %s (%d bytes)", input_file.name, name, len(data))
    return OutputArtifact(name=name, data=data, mime_type=target.mime_type)


def convert_images(
    inputs: Iterable[InputFile],
    fmt: RasterFormat | str,
    quality: float = 0.9,
    *,
    isolate_failures: bool = True,
    progress_callback: Optional[ProgressCallback] = None,
) -> ConversionBatch:
    """Convert *inputs* one after another.

    With ``isolate_failures`` a failing image is recorded in
    :attr:`ConversionBatch.errors` and the remaining images are still
    converted. Otherwise the first failure propagates.
    """

    target = RasterFormat.parse(fmt)
    items = list(inputs)
    batch = ConversionBatch()
    for index, item in enumerate(items, start=1):
        try:
            batch.artifacts.append(convert_image(item, target, quality))
        except (DecodeError, EncodeError) as exc:
            if not isolate_failures:
                raise
            LOGGER.warning("Skipping %s: %s", item.name, exc)
            batch.errors.append(ItemFailure(name=item.name, message=str(exc)))
        if progress_callback is not None:
            progress_callback(index, len(items))

    LOGGER.info(
        "Converted %d of %d image(s) to %s", len(batch.artifacts), len(items), target.value
    )
    return batch


__all__ = [
    "ConversionBatch",
    "RasterFormat",
    "ProgressCallback",
    "decode_image",
    "encode_image",
    "flatten_alpha",
    "image_geometry",
    "convert_image",
    "convert_images",
]
