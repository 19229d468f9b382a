from __future__ import annotations

from typing import Callable

import pytest

from conftest import read_page_widths
from pdftoolbox.compose import merge_documents, page_count, split_document
from pdftoolbox.core.exceptions import DecodeError
from pdftoolbox.core.model import InputFile


def test_split_creates_one_artifact_per_page(sample_pdf: InputFile) -> None:
    artifacts = split_document(sample_pdf)

    assert [artifact.name for artifact in artifacts] == [f"page-{n}.pdf" for n in range(1, 6)]
    assert all(artifact.mime_type == "application/pdf" for artifact in artifacts)
    assert all(page_count(artifact.data) == 1 for artifact in artifacts)
    assert [read_page_widths(artifact.data)[0] for artifact in artifacts] == [101, 102, 103, 104, 105]


def test_split_empty_document_yields_nothing(empty_pdf: InputFile) -> None:
    assert split_document(empty_pdf) == []


def test_split_single_page_document(pdf_factory: Callable[..., InputFile]) -> None:
    artifacts = split_document(pdf_factory("single.pdf", page_widths=(300,)))

    assert [artifact.name for artifact in artifacts] == ["page-1.pdf"]


def test_split_then_merge_reconstructs_document(sample_pdf: InputFile) -> None:
    pages = split_document(sample_pdf)
    inputs = [InputFile(artifact.name, artifact.data, artifact.mime_type) for artifact in pages]

    merged = merge_documents(inputs)

    assert read_page_widths(merged.data) == read_page_widths(sample_pdf.data)


def test_split_custom_name_template(pdf_factory: Callable[..., InputFile]) -> None:
    artifacts = split_document(
        pdf_factory("doc.pdf", page_widths=(72, 72)), name_template="chapter_{number}.pdf"
    )

    assert [artifact.name for artifact in artifacts] == ["chapter_1.pdf", "chapter_2.pdf"]


def test_split_corrupt_document(corrupt_pdf: InputFile) -> None:
    with pytest.raises(DecodeError):
        split_document(corrupt_pdf)
