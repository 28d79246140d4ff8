"""Unit tests for text acquisition from files and bytes."""

import fitz
import pytest

from src.input_handler import InputHandler, PDFProcessor
from src.utils.exceptions import (
    FileNotFoundError as BillFileNotFoundError,
    TextAcquisitionError,
    UnsupportedFileTypeError,
)


def test_load_text_file(tmp_path, bill_with_items: str) -> None:
    """Test a plain text bill."""
    path = tmp_path / "bill.txt"
    path.write_text(bill_with_items, encoding="utf-8")

    document = InputHandler().load(path)

    assert document.text == bill_with_items
    assert document.file_type == "text"
    assert document.filename == "bill.txt"
    assert document.filepath == str(path)
    assert document.page_count == 1


def test_load_text_strips_byte_order_mark() -> None:
    """Test that a UTF-8 BOM does not reach the extractor."""
    document = InputHandler().load_bytes("\ufeff#VENDBILL1".encode("utf-8"), "bill.txt")

    assert document.text == "#VENDBILL1"


def test_missing_file(tmp_path) -> None:
    """Test the project's not-found error."""
    with pytest.raises(BillFileNotFoundError):
        InputHandler().load(tmp_path / "absent.txt")


def test_unsupported_extension(tmp_path) -> None:
    """Test that other file types are refused."""
    path = tmp_path / "bill.docx"
    path.write_bytes(b"data")

    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        InputHandler().load(path)

    assert exc_info.value.details["file_type"] == ".docx"


def test_invalid_utf8_text() -> None:
    """Test undecodable text input."""
    with pytest.raises(TextAcquisitionError):
        InputHandler().load_bytes(b"\xff\xfe\xfa", "bill.txt")


def test_unreadable_pdf(tmp_path) -> None:
    """Test that a file no PDF backend can open is reported by name."""
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(TextAcquisitionError) as exc_info:
        InputHandler().load(path)

    assert exc_info.value.details["source"] == "broken.pdf"
    assert "pdfplumber" in exc_info.value.details["reason"]
    assert "pymupdf" in exc_info.value.details["reason"]


def test_load_pdf_text_layer() -> None:
    """Test a generated single-page PDF."""
    pdf = fitz.open()
    page = pdf.new_page()
    page.insert_text((72, 72), "VENDBILL42")
    data = pdf.tobytes()
    pdf.close()

    document = InputHandler().load_bytes(data, "bill.pdf")

    assert document.file_type == "pdf"
    assert "VENDBILL42" in document.text
    assert document.page_count == 1
    assert document.metadata["backend"] == "pdfplumber"


def test_pdf_processor_reads_file(tmp_path) -> None:
    """Test PDF text extraction straight from a path."""
    pdf = fitz.open()
    pdf.new_page().insert_text((72, 72), "Amount PHP1.00")
    path = tmp_path / "bill.pdf"
    pdf.save(str(path))
    pdf.close()

    text, metadata = PDFProcessor().extract_text(path)

    assert "PHP1.00" in text
    assert metadata["total_pages"] == 1


def _single_page_pdf(text: str = "") -> bytes:
    pdf = fitz.open()
    page = pdf.new_page()
    if text:
        page.insert_text((72, 72), text)
    data = pdf.tobytes()
    pdf.close()
    return data


def test_pdf_without_text_is_reported() -> None:
    """Test that a PDF with no text layer fails on every backend."""
    with pytest.raises(TextAcquisitionError) as exc_info:
        PDFProcessor().extract_text_from_bytes(_single_page_pdf(), "scan.pdf")

    reason = exc_info.value.details["reason"]
    assert "pdfplumber: no text on any page" in reason
    assert "pymupdf: no text on any page" in reason


def test_blank_pdfplumber_text_falls_back_to_pymupdf(monkeypatch) -> None:
    """Test that blank pages from the first backend hand over to the second."""
    monkeypatch.setattr(PDFProcessor, "_read_with_pdfplumber", lambda self, data: (["  \n"], 1))

    text, metadata = PDFProcessor().extract_text_from_bytes(_single_page_pdf("VENDBILL7"), "bill.pdf")

    assert "VENDBILL7" in text
    assert metadata["backend"] == "pymupdf"
