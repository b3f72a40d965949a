"""
PDF text extraction using PyMuPDF.
"""
import logging

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """The uploaded bytes could not be read as a PDF."""


def extract_text(pdf_bytes: bytes) -> str:
    """
    Extract the embedded text of every page, in page order.

    Args:
        pdf_bytes: Raw PDF file bytes

    Returns:
        Page texts joined by newlines; line breaks inside a page are kept.

    Raises:
        ExtractionError: corrupt, empty, encrypted or non-PDF input. No
            partial text is returned.
    """
    try:
        pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        logger.error(f"Error opening PDF: {e}")
        raise ExtractionError("Failed to extract text from PDF") from e

    try:
        if pdf_document.needs_pass:
            raise ExtractionError("PDF is encrypted")
        pages = [page.get_text() for page in pdf_document]
    except ExtractionError:
        raise
    except Exception as e:
        logger.error(f"Error extracting text from PDF: {e}")
        raise ExtractionError("Failed to extract text from PDF") from e
    finally:
        pdf_document.close()

    return "\n".join(pages)
