"""Tests for DocumentLoader."""

import pytest
from pypdf import PdfWriter

from smart_rlm.data import DocumentLoader
from smart_rlm.utils.exceptions import DocumentLoadingError


def test_loads_text_file_verbatim(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("line one\nline two £22\n", encoding="utf-8")

    assert DocumentLoader().load(path) == "line one\nline two £22\n"


def test_loads_pdf_pages(tmp_path):
    path = tmp_path / "blank.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.add_blank_page(width=200, height=200)
    with open(path, "wb") as f:
        writer.write(f)

    text = DocumentLoader().load(str(path))

    assert isinstance(text, str)
    assert text.strip() == ""


def test_missing_file(tmp_path):
    with pytest.raises(DocumentLoadingError, match="not found"):
        DocumentLoader().load(tmp_path / "nope.txt")


def test_directory_is_rejected(tmp_path):
    with pytest.raises(DocumentLoadingError):
        DocumentLoader().load(tmp_path)


def test_corrupt_pdf(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(DocumentLoadingError):
        DocumentLoader().load(path)


def test_undecodable_text(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(DocumentLoadingError):
        DocumentLoader().load(path)
