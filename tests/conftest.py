from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PdfReader, PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdftoolbox.core.model import InputFile  # noqa: E402


def build_pdf(page_widths: Sequence[float], height: float = 200, title: str | None = None) -> bytes:
    writer = PdfWriter()
    for width in page_widths:
        writer.add_blank_page(width=width, height=height)
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def read_page_widths(data: bytes) -> list[float]:
    reader = PdfReader(io.BytesIO(data))
    return [float(page.mediabox.width) for page in reader.pages]


@pytest.fixture()
def pdf_factory() -> Callable[..., InputFile]:
    def _create(name: str, page_widths: Sequence[float] = (72,), title: str | None = None) -> InputFile:
        return InputFile(name=name, data=build_pdf(page_widths, title=title), mime_type="application/pdf")

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., InputFile]) -> InputFile:
    return pdf_factory("sample.pdf", page_widths=(101, 102, 103, 104, 105), title="Sample")


@pytest.fixture()
def empty_pdf() -> InputFile:
    return InputFile(name="empty.pdf", data=build_pdf(()), mime_type="application/pdf")


@pytest.fixture()
def corrupt_pdf() -> InputFile:
    return InputFile(name="broken.pdf", data=b"not a pdf", mime_type="application/pdf")


@pytest.fixture()
def image_factory() -> Callable[..., InputFile]:
    def _create(
        name: str,
        size: tuple[int, int] = (64, 32),
        fmt: str = "PNG",
        mode: str = "RGB",
        color: object = (200, 30, 30),
    ) -> InputFile:
        buffer = io.BytesIO()
        Image.new(mode, size, color).save(buffer, format=fmt)
        return InputFile(name=name, data=buffer.getvalue(), mime_type=f"image/{fmt.lower()}")

    return _create


@pytest.fixture()
def corrupt_image() -> InputFile:
    return InputFile(name="broken.png", data=b"\x89PNG garbage", mime_type="image/png")
