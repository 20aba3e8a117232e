"""Hybrid topic generation.

Answers one question: is there a known curriculum template for this subject?

Precedence, stopping at the first non-empty answer:

1. Predefined template (``core.templates``)  → source ``template``
2. Persisted template (``core.store``)       → source ``template``
3. Nothing                                   → source ``none``

PDF upload and AI extraction are separate, caller-driven alternatives and are
never triggered from here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from core import store
from core.models import ExtractionSource, GenerationResult
from core.templates import get_template_topics, has_template, normalize_subject

logger = logging.getLogger(__name__)

#: Persisted-template lookup: subject name → topic list, or None if absent.
TemplateLookup = Callable[[str], Optional[list[str]]]


def generate(
    subject_name: object,
    lookup: Optional[TemplateLookup] = None,
) -> GenerationResult:
    """Pick a topic list for *subject_name* from the known templates.

    Args:
        subject_name: Free-form subject name. Non-strings and blank names
            produce ``source="none"``.
        lookup: Persisted-template lookup. Defaults to ``store.get_template``.
            A lookup that raises is treated as "not found".

    Returns:
        A ``GenerationResult`` with the provenance tag and topic list.

    Examples:
        >>> generate("Computer Networks").topics[0]
        'OSI Model'
        >>> generate("").source
        <ExtractionSource.NONE: 'none'>
    """
    if not normalize_subject(subject_name):
        return GenerationResult(source=ExtractionSource.NONE)

    if has_template(subject_name):
        return GenerationResult(
            source=ExtractionSource.TEMPLATE,
            topics=get_template_topics(subject_name),
        )

    if lookup is None:
        lookup = store.get_template

    try:
        persisted = lookup(subject_name)
    except Exception:
        logger.exception("Persisted template lookup failed for subject=%r", subject_name)
        persisted = None

    if persisted:
        return GenerationResult(source=ExtractionSource.TEMPLATE, topics=list(persisted))

    logger.info("No template for subject=%r", subject_name)
    return GenerationResult(source=ExtractionSource.NONE)
