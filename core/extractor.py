"""Topic extraction over a full body of syllabus text.

Pipeline: split lines → trim → length window → classify → dedup → cap.

Two profiles are provided:

- ``PDF_TEXT``   accepts capitalised heading lines; used for text pulled out of
  uploaded PDFs, where headings often lose their numbering.
- ``PLAIN_TEXT`` only accepts lines with an explicit marker (unit header,
  number, bullet); used for text a user pastes in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.classifier import classify_line

logger = logging.getLogger(__name__)

#: Maximum number of topics returned by one extraction.
MAX_TOPICS = 50
#: Exclusive bounds on trimmed line length.
MIN_LINE_LEN = 2
MAX_LINE_LEN = 200
#: Dedup keys must be longer than this.
MIN_KEY_LEN = 2


@dataclass(frozen=True)
class ExtractionProfile:
    """Named extractor configuration."""

    name: str
    allow_headings: bool


PDF_TEXT = ExtractionProfile(name="pdf_text", allow_headings=True)
PLAIN_TEXT = ExtractionProfile(name="plain_text", allow_headings=False)


def candidate_lines(text: str) -> list[str]:
    """Return trimmed lines of *text* that fall inside the length window."""
    lines = (line.strip() for line in text.split("\n"))
    return [line for line in lines if MIN_LINE_LEN < len(line) < MAX_LINE_LEN]


def extract_topics(text: object, profile: ExtractionProfile = PLAIN_TEXT) -> list[str]:
    """Extract an ordered, deduplicated topic list from raw text.

    Args:
        text: Raw syllabus text. Anything that is not a string is treated as
            empty input.
        profile: Which rule set to apply (``PDF_TEXT`` or ``PLAIN_TEXT``).

    Returns:
        Up to ``MAX_TOPICS`` topic names in first-occurrence order.

    Examples:
        >>> extract_topics("1. Arrays\\n2. arrays\\n• Graphs")
        ['Arrays', 'Graphs']
    """
    if not isinstance(text, str) or not text:
        return []

    topics: list[str] = []
    seen: set[str] = set()

    for line in candidate_lines(text):
        classified = classify_line(line, allow_headings=profile.allow_headings)
        if classified is None:
            continue

        key = classified.key
        if len(key) > MIN_KEY_LEN and key not in seen:
            seen.add(key)
            topics.append(classified.name)
            if len(topics) >= MAX_TOPICS:
                break

    logger.debug("Extracted %d topics with profile=%s", len(topics), profile.name)
    return topics


def extract_pdf_topics(text: object) -> list[str]:
    """Extract topics from PDF-derived text (heading rule enabled)."""
    return extract_topics(text, PDF_TEXT)


def parse_pasted_text(text: object) -> list[str]:
    """Extract topics from user-supplied text (marker rules only)."""
    return extract_topics(text, PLAIN_TEXT)
