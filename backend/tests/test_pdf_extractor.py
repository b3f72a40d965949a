"""
Unit tests for PDF text extraction
"""
import fitz  # PyMuPDF
import pytest

from beach_tracker.services.pdf_extractor import ExtractionError, extract_text
from beach_tracker.services.profile_parser import ProfileType, parse_pdf, split_lines
from tests.conftest import make_pdf


def test_extract_text_keeps_line_breaks():
    pdf_bytes = make_pdf("Skills\nJava, Python\nAspirations\nBecome a lead")

    lines = split_lines(extract_text(pdf_bytes))

    assert lines == ["Skills", "Java, Python", "Aspirations", "Become a lead"]


def test_extract_text_reads_pages_in_order():
    pdf_bytes = make_pdf("First page", "Second page")

    lines = split_lines(extract_text(pdf_bytes))

    assert lines == ["First page", "Second page"]


@pytest.mark.parametrize("data", [b"", b"not a pdf at all"])
def test_unreadable_bytes_raise_extraction_error(data):
    with pytest.raises(ExtractionError):
        extract_text(data)


def test_encrypted_pdf_raises_extraction_error():
    doc = fitz.open()
    doc.new_page().insert_text((72, 72), "Skills\nSecret")
    encrypted = doc.tobytes(
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner",
        user_pw="user",
    )
    doc.close()

    with pytest.raises(ExtractionError):
        extract_text(encrypted)


def test_parse_pdf_with_explicit_type():
    parsed = parse_pdf(make_pdf("Skills\nJava, Python"), ProfileType.WORKDAY)

    assert parsed.skills == ["Java, Python"]


def test_parse_pdf_auto_detects_source():
    pdf_bytes = make_pdf("Workday Talent Profile\nEmployment\nAcme Corp consultant")

    parsed = parse_pdf(pdf_bytes)

    assert parsed.experience == ["Acme Corp consultant"]
