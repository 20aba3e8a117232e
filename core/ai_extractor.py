"""AI topic extraction using the Claude API.

``AIExtractor.extract()`` sends a syllabus excerpt to Claude and asks for a
JSON array of topic names. ``parse_ai_response()`` turns whatever comes back
into a topic list: it prefers a JSON array found anywhere in the reply and
falls back to line splitting when the reply is not valid JSON.

The Anthropic client is lazy-initialised so that the class can be
instantiated in tests without requiring a live API key.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

#: System prompt for the extraction call.
_EXTRACT_SYSTEM = (
    "You are an academic assistant. Extract main topic names from syllabus text. "
    'Return ONLY a JSON array of topic name strings, nothing else. '
    'Example: ["Topic 1", "Topic 2"]'
)

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_LEADING_MARKER_RE = re.compile(r"^[-•*\d.)\s]+")

#: Exclusive bounds on the length of an accepted topic.
_MIN_TOPIC_LEN = 2
_MAX_TOPIC_LEN = 200


def _keep(name: str) -> bool:
    return _MIN_TOPIC_LEN < len(name) < _MAX_TOPIC_LEN


def _split_lines(content: str) -> list[str]:
    """Fallback parser: one topic per line, list markers stripped."""
    names = (_LEADING_MARKER_RE.sub("", line).strip() for line in content.split("\n"))
    return [name for name in names if _keep(name)]


def parse_ai_response(content: object) -> list[str]:
    """Parse a model reply into topic names without ever raising.

    Args:
        content: Raw text returned by the model.

    Returns:
        Topic names from the first-to-last bracket span if it decodes to a
        JSON list, otherwise from line splitting.

    Examples:
        >>> parse_ai_response('Sure! ["Arrays", "Graphs"]')
        ['Arrays', 'Graphs']
        >>> parse_ai_response("1. Arrays\\n2. Graphs")
        ['Arrays', 'Graphs']
    """
    if not isinstance(content, str) or not content.strip():
        return []

    match = _JSON_ARRAY_RE.search(content)
    if match:
        try:
            data = json.loads(match.group(0))
        except ValueError:
            logger.debug("AI reply had a bracket span that is not JSON; splitting lines")
        else:
            if isinstance(data, list):
                names = (item.strip() for item in data if isinstance(item, str))
                return [name for name in names if _keep(name)]

    return _split_lines(content)


class AIExtractor:
    """Extracts topic names from syllabus text with Claude."""

    def __init__(self, settings: Settings) -> None:
        """Initialise the extractor.

        Args:
            settings: Application configuration.
        """
        self.settings = settings
        self._client: object = None  # Lazy-initialised anthropic.Anthropic

    @property
    def available(self) -> bool:
        return self.settings.ai_available

    @property
    def client(self) -> object:
        """Lazy-initialise and return the Anthropic SDK client."""
        if self._client is None:
            import anthropic
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                max_retries=3,
            )
        return self._client

    def extract(self, text: str) -> list[str]:
        """Ask Claude for the main topics in *text*.

        Args:
            text: Syllabus text; truncated to ``settings.ai_input_chars``.

        Returns:
            The parsed topic list (possibly empty).

        Raises:
            ValueError: If the text is too short to be worth a call.
            anthropic.APIError: On API failures.
        """
        text = text.strip() if isinstance(text, str) else ""
        if len(text) < self.settings.ai_min_text_chars:
            raise ValueError("Text is too short for AI extraction.")

        excerpt = text[: self.settings.ai_input_chars]
        logger.info("AI extraction request: %d chars", len(excerpt))

        response = self.client.messages.create(
            model=self.settings.extraction_model,
            max_tokens=1000,
            temperature=0.3,
            system=_EXTRACT_SYSTEM,
            messages=[{
                "role": "user",
                "content": f"Extract main topics from this syllabus text:\n\n{excerpt}",
            }],
        )
        content = "".join(
            getattr(block, "text", "") or "" for block in response.content
        ) or "[]"

        topics = parse_ai_response(content)
        logger.info("AI extraction returned %d topics", len(topics))
        return topics
