"""Tests for core/pdf_reader.py: PyMuPDF text extraction."""

from __future__ import annotations

import fitz
import pytest

from core.extractor import extract_pdf_topics
from core.pdf_reader import PdfReadError, read_pdf


def make_pdf(*pages: list[str]) -> bytes:
    """Build an in-memory PDF with one line of text per entry, one page per list."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        for i, line in enumerate(lines):
            page.insert_text((72, 72 + i * 20), line)
    data = doc.tobytes()
    doc.close()
    return data


class TestReadPdf:
    def test_page_count(self):
        pdf = read_pdf(make_pdf(["1. Arrays"], ["2. Graphs"]))
        assert pdf.page_count == 2

    def test_text_from_every_page(self):
        pdf = read_pdf(make_pdf(["1. Arrays"], ["2. Graphs"]))
        assert "Arrays" in pdf.text
        assert "Graphs" in pdf.text

    def test_feeds_extractor(self):
        pdf = read_pdf(make_pdf(["Unit 1: Stacks", "1. Queues", "Binary Trees"]))
        assert extract_pdf_topics(pdf.text) == ["Stacks", "Queues", "Binary Trees"]

    def test_empty_payload(self):
        with pytest.raises(PdfReadError):
            read_pdf(b"")

    def test_not_a_pdf(self):
        with pytest.raises(PdfReadError):
            read_pdf(b"this is plainly not a pdf document")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            read_pdf(b"")
