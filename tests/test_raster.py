from __future__ import annotations

import io
from typing import Callable

import pytest
from PIL import Image

from pdftoolbox.core.exceptions import DecodeError, InputValidationError
from pdftoolbox.core.model import InputFile
from pdftoolbox.core.utils import replace_extension
from pdftoolbox.raster import RasterFormat, convert_image, convert_images, decode_image, encode_image
from pdftoolbox.raster import converter


def _open(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def test_png_to_jpeg_keeps_dimensions(image_factory: Callable[..., InputFile]) -> None:
    source = image_factory("photo.png", size=(120, 45))

    artifact = convert_image(source, RasterFormat.JPEG, 0.8)

    assert artifact.name == "photo.jpeg"
    assert artifact.mime_type == "image/jpeg"
    decoded = _open(artifact.data)
    assert decoded.format == "JPEG"
    assert decoded.size == (120, 45)


def test_transparent_png_to_jpeg_is_flattened_on_white(image_factory: Callable[..., InputFile]) -> None:
    source = image_factory("clear.png", size=(16, 16), mode="RGBA", color=(0, 0, 0, 0))

    artifact = convert_image(source, "jpeg", 1.0)

    pixel = _open(artifact.data).convert("RGB").getpixel((8, 8))
    assert all(channel > 240 for channel in pixel)


def test_png_output_keeps_alpha(image_factory: Callable[..., InputFile]) -> None:
    source = image_factory("logo.webp", size=(10, 20), fmt="WEBP", mode="RGBA", color=(1, 2, 3, 128))

    artifact = convert_image(source, RasterFormat.PNG, quality=0.1)

    decoded = _open(artifact.data)
    assert artifact.name == "logo.png"
    assert decoded.mode == "RGBA"
    assert decoded.size == (10, 20)


def test_webp_quality_changes_output(image_factory: Callable[..., InputFile]) -> None:
    image = Image.effect_noise((128, 128), 64).convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    source = InputFile(name="noise.png", data=buffer.getvalue(), mime_type="image/png")

    low = convert_image(source, RasterFormat.WEBP, 0.1)
    high = convert_image(source, RasterFormat.WEBP, 1.0)

    assert low.mime_type == "image/webp"
    assert len(low.data) < len(high.data)


def test_quality_is_clamped() -> None:
    assert converter._codec_quality(5.0) == 100
    assert converter._codec_quality(-3) == 1
    assert converter._codec_quality(0.9) == 90

    image = Image.new("RGBA", (4, 4), (10, 20, 30, 255))
    assert encode_image(image, RasterFormat.JPEG, 7.5)
    assert encode_image(image, RasterFormat.WEBP, -1)


def test_decode_materialises_rgba(image_factory: Callable[..., InputFile]) -> None:
    image = decode_image(image_factory("grey.bmp", fmt="BMP", mode="L", color=90))

    assert image.mode == "RGBA"
    assert image.size == (64, 32)


def test_decode_failure_raises(corrupt_image: InputFile) -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode_image(corrupt_image)
    assert "broken.png" in str(excinfo.value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("jpeg", RasterFormat.JPEG),
        ("JPG", RasterFormat.JPEG),
        (".png", RasterFormat.PNG),
        ("image/webp", RasterFormat.WEBP),
        (RasterFormat.PNG, RasterFormat.PNG),
    ],
)
def test_raster_format_parse(value: object, expected: RasterFormat) -> None:
    assert RasterFormat.parse(value) is expected


def test_raster_format_parse_rejects_unknown() -> None:
    with pytest.raises(InputValidationError):
        RasterFormat.parse("tiff")


@pytest.mark.parametrize(
    "name,extension,expected",
    [
        ("photo.png", "jpeg", "photo.jpeg"),
        ("archive.tar.gz", "png", "archive.tar.png"),
        ("README", "webp", "README.webp"),
    ],
)
def test_replace_extension(name: str, extension: str, expected: str) -> None:
    assert replace_extension(name, extension) == expected


def test_convert_images_isolates_failures(
    image_factory: Callable[..., InputFile], corrupt_image: InputFile
) -> None:
    inputs = [image_factory("a.png"), corrupt_image, image_factory("c.gif", fmt="GIF")]
    calls: list[tuple[int, int]] = []

    batch = convert_images(inputs, "webp", 0.5, progress_callback=lambda c, t: calls.append((c, t)))

    assert [artifact.name for artifact in batch.artifacts] == ["a.webp", "c.webp"]
    assert [failure.name for failure in batch.errors] == ["broken.png"]
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_convert_images_can_abort_on_first_failure(
    image_factory: Callable[..., InputFile], corrupt_image: InputFile
) -> None:
    with pytest.raises(DecodeError):
        convert_images([corrupt_image, image_factory("b.png")], "png", isolate_failures=False)


def _rotated_jpeg(name: str = "phone.jpg") -> InputFile:
    # Stored 200x100, displayed 100x200 (orientation 6: rotate 90 clockwise).
    exif = Image.Exif()
    exif[0x0112] = 6
    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), (10, 120, 200)).save(buffer, format="JPEG", exif=exif.tobytes())
    return InputFile(name=name, data=buffer.getvalue(), mime_type="image/jpeg")


def test_exif_orientation_is_applied_on_decode() -> None:
    image = decode_image(_rotated_jpeg())

    assert image.size == (100, 200)


def test_rotated_photo_converts_in_display_orientation() -> None:
    artifact = convert_image(_rotated_jpeg(), "png", 0.9)

    assert _open(artifact.data).size == (100, 200)


def test_sixteen_bit_greyscale_is_scaled_not_clipped() -> None:
    buffer = io.BytesIO()
    Image.new("I", (8, 8), 40000).save(buffer, format="PNG")
    source = InputFile(name="depth.png", data=buffer.getvalue(), mime_type="image/png")

    decoded = decode_image(source)
    red, green, blue, alpha = decoded.getpixel((4, 4))
    assert red == green == blue
    assert 150 <= red <= 160
    assert alpha == 255

    artifact = convert_image(source, RasterFormat.JPEG, 1.0)
    pixel = _open(artifact.data).convert("RGB").getpixel((4, 4))
    assert all(145 <= channel <= 165 for channel in pixel)
