"""Tests for core/extractor.py: full-text topic extraction."""

from __future__ import annotations

import pytest

from core.extractor import (
    MAX_TOPICS,
    PDF_TEXT,
    PLAIN_TEXT,
    extract_pdf_topics,
    extract_topics,
    parse_pasted_text,
)

SYLLABUS = (
    "1. OSI Model\n"
    "2. TCP/IP\n"
    "• Routing\n"
    "Unit 1: Data Link Layer\n"
    "short\n"
    "http://example.com line that is long enough to pass length filter but contains http"
)


class TestExtractTopics:
    @pytest.mark.parametrize("profile", [PDF_TEXT, PLAIN_TEXT])
    def test_mixed_syllabus(self, profile):
        assert extract_topics(SYLLABUS, profile) == [
            "OSI Model", "TCP/IP", "Routing", "Data Link Layer",
        ]

    def test_case_insensitive_dedup_keeps_first(self):
        text = "1. Arrays\n2. ARRAYS\n- arrays\n3. Graphs"
        assert extract_topics(text) == ["Arrays", "Graphs"]

    def test_short_keys_dropped(self):
        assert extract_topics("1. AI\n2. Sorting") == ["Sorting"]

    def test_lines_outside_length_window_ignored(self):
        long_line = "1. " + "x" * 200
        assert extract_topics(f"a.\n{long_line}\n2. Queues") == ["Queues"]

    def test_crlf_line_endings(self):
        assert extract_topics("1. Stacks\r\n2. Queues\r\n") == ["Stacks", "Queues"]

    def test_capped_at_fifty(self):
        text = "\n".join(f"{i}. Topic number {i}" for i in range(1, 80))
        topics = extract_topics(text)
        assert len(topics) == MAX_TOPICS
        assert topics[0] == "Topic number 1"
        assert topics[-1] == "Topic number 50"

    def test_deterministic(self):
        assert extract_topics(SYLLABUS) == extract_topics(SYLLABUS)

    def test_every_key_unique_and_long_enough(self):
        text = SYLLABUS + "\n4. osi model\n5. Ab\n• Routing:"
        topics = extract_topics(text, PDF_TEXT)
        keys = [t.lower() for t in topics]
        assert len(keys) == len(set(keys))
        assert all(len(k) > 2 for k in keys)


class TestProfiles:
    TEXT = "Introduction to Algorithms\n1. Sorting"

    def test_pdf_profile_accepts_headings(self):
        assert extract_pdf_topics(self.TEXT) == ["Introduction to Algorithms", "Sorting"]

    def test_plain_profile_ignores_headings(self):
        assert parse_pasted_text(self.TEXT) == ["Sorting"]

    def test_reextracting_headings_is_stable(self):
        first = extract_pdf_topics("Memory Management\n1. Paging\nVirtual Memory")
        assert extract_pdf_topics("\n".join(first)) == first


class TestMalformedInput:
    def test_empty_text(self):
        assert extract_topics("") == []

    def test_none(self):
        assert extract_topics(None) == []

    def test_non_string(self):
        assert extract_topics(42) == []

    def test_no_markers(self):
        assert parse_pasted_text("just some prose\nwith nothing to find") == []
