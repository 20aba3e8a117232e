"""Line classification for syllabus text.

Classifies a single trimmed line into one of five kinds and extracts the
candidate topic name:

- UNIT      ``Unit 3: Memory Management``, ``Chapter 2 - Graphs``
- NUMBERED  ``1. Arrays``, ``IV) Deadlocks``, ``b. Hashing``
- BULLET    ``• Routing``, ``- Indexing``, ``► Virtual Memory``
- HEADING   ``Process Synchronization`` (capitalised line, PDF text only)
- NONE      anything else

Rules are tried in the order above. A rule only wins when it captures a
non-empty remainder; otherwise the next rule gets a chance.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class LineKind(str, Enum):
    """How a line was recognised as a topic."""

    UNIT = "unit"
    NUMBERED = "numbered"
    BULLET = "bullet"
    HEADING = "heading"
    NONE = "none"


@dataclass(frozen=True)
class ClassifiedLine:
    """A line recognised as a topic, with its cleaned name."""

    kind: LineKind
    name: str

    @property
    def key(self) -> str:
        """Lowercase key used for case-insensitive deduplication."""
        return self.name.lower()


# ── Patterns ───────────────────────────────────────────────────────────────────

_UNIT_RE = re.compile(
    r"^(?:unit|chapter|module|topic|lesson|section)\s*[\d:.\-–]+\s*(.*)",
    re.IGNORECASE,
)
_NUMBERED_RE = re.compile(
    r"^(?:\d+[.)]\s*|[IVXLC]+[.)]\s*|[a-z][.)]\s*)(.*)",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[•\-*►▪]\s*(.*)")
_TRAILING_PUNCT_RE = re.compile(r"[:–\-]+$")

_MARKER_RULES: tuple[tuple[LineKind, re.Pattern[str]], ...] = (
    (LineKind.UNIT, _UNIT_RE),
    (LineKind.NUMBERED, _NUMBERED_RE),
    (LineKind.BULLET, _BULLET_RE),
)

#: Exclusive length bounds for a capitalised heading line.
HEADING_MIN_LEN = 5
HEADING_MAX_LEN = 100


def clean_topic_name(name: str) -> str:
    """Strip trailing ``:``/``-``/``–`` runs and surrounding whitespace.

    Examples:
        >>> clean_topic_name("Data Link Layer:")
        'Data Link Layer'
        >>> clean_topic_name("Graphs --")
        'Graphs'
    """
    return _TRAILING_PUNCT_RE.sub("", name).strip()


def is_heading(line: str) -> bool:
    """Return True if *line* looks like a capitalised heading."""
    return (
        "A" <= line[:1] <= "Z"
        and HEADING_MIN_LEN < len(line) < HEADING_MAX_LEN
        and "http" not in line
    )


def classify_line(line: str, allow_headings: bool = False) -> Optional[ClassifiedLine]:
    """Classify a single trimmed line of syllabus text.

    Args:
        line: One line of text, already trimmed and length-filtered.
        allow_headings: Also accept capitalised heading lines. Enabled for
            noisy PDF text, disabled for pasted text.

    Returns:
        A ``ClassifiedLine``, or ``None`` if the line carries no topic.

    Examples:
        >>> classify_line("Unit 1: Data Link Layer")
        ClassifiedLine(kind=<LineKind.UNIT: 'unit'>, name='Data Link Layer')
        >>> classify_line("Process Synchronization") is None
        True
    """
    if not isinstance(line, str) or not line:
        return None

    kind = LineKind.NONE
    candidate = ""
    for rule_kind, pattern in _MARKER_RULES:
        match = pattern.match(line)
        if match and match.group(1):
            kind, candidate = rule_kind, match.group(1)
            break
    else:
        if allow_headings and is_heading(line):
            kind, candidate = LineKind.HEADING, line

    if kind is LineKind.NONE:
        return None

    name = clean_topic_name(candidate)
    if not name:
        logger.debug("Discarding %s line with empty name: %r", kind.value, line)
        return None
    return ClassifiedLine(kind=kind, name=name)
