"""PDF text extraction with PyMuPDF."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


class PdfReadError(ValueError):
    """Raised when a payload cannot be read as a PDF."""


@dataclass
class PdfText:
    """Plain text pulled out of a PDF."""

    text: str
    page_count: int


def read_pdf(data: bytes) -> PdfText:
    """Extract the text of every page, joined with newlines.

    Args:
        data: Raw PDF bytes.

    Returns:
        A ``PdfText`` with the concatenated text and the page count.

    Raises:
        PdfReadError: If the payload is empty or not a readable PDF.
    """
    if not data:
        raise PdfReadError("Empty PDF payload.")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise PdfReadError(f"Unreadable PDF: {exc}") from exc

    try:
        page_count = doc.page_count
        if page_count == 0:
            raise PdfReadError("PDF has no pages.")
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()

    logger.info("Read PDF: %d pages", page_count)
    return PdfText(text="\n".join(pages), page_count=page_count)
