"""In-memory topic preview editor.

Holds a candidate topic list while the user reviews it. Items can be removed,
appended and edited in place; nothing is persisted until ``commit`` runs the
final trim-and-filter pass. An item may carry its own unit number, which
survives edits and is handed to the writer on commit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Optional, Union

from core.models import SOURCE_LABELS, ExtractionSource, GenerationResult

logger = logging.getLogger(__name__)

#: A topic name, or a mapping with ``name`` and an optional ``unit``.
TopicItem = Union[str, Mapping[str, object]]
#: Writes committed items: (user_id, subject_id, items, default_unit) → count.
TopicWriter = Callable[[str, str, list[TopicItem], int], int]
#: Optional follow-up after a successful commit: (user_id, count) → None.
CommitHook = Callable[[str, int], None]


def _parse_unit(value: object) -> Optional[int]:
    try:
        return int(value) or None  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


@dataclass
class PreviewItem:
    """One editable row of the preview."""

    name: str
    unit: Optional[int] = None


class PreviewEditor:
    """Mutable, ordered list of candidate topics.

    Display numbering is derived from list position, so it stays contiguous
    after every removal.
    """

    def __init__(
        self,
        topics: Iterable[TopicItem] = (),
        source: ExtractionSource = ExtractionSource.MANUAL,
    ) -> None:
        self.source = ExtractionSource(source)
        self._items: list[PreviewItem] = []
        for topic in topics:
            if isinstance(topic, str):
                self._items.append(PreviewItem(topic))
            elif isinstance(topic, Mapping) and isinstance(topic.get("name"), str):
                self._items.append(PreviewItem(topic["name"], _parse_unit(topic.get("unit"))))

    @classmethod
    def from_result(cls, result: GenerationResult) -> PreviewEditor:
        """Build an editor from a hybrid generation result."""
        return cls(result.topics, result.source)

    # ── Inspection ─────────────────────────────────────────────────────────

    @property
    def items(self) -> list[str]:
        return [item.name for item in self._items]

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def source_label(self) -> str:
        return SOURCE_LABELS.get(self.source, str(self.source))

    def numbered(self) -> list[tuple[int, str]]:
        """Return ``(display_number, name)`` pairs, numbered from 1."""
        return [(i + 1, item.name) for i, item in enumerate(self._items)]

    # ── Mutation ───────────────────────────────────────────────────────────

    def remove(self, index: int) -> bool:
        """Remove the item at *index*; out-of-range indices are ignored."""
        if not 0 <= index < len(self._items):
            return False
        del self._items[index]
        return True

    def add(self, name: str, unit: Optional[int] = None) -> bool:
        """Append a trimmed topic; blank names are rejected."""
        if not isinstance(name, str) or not name.strip():
            return False
        self._items.append(PreviewItem(name.strip(), _parse_unit(unit)))
        return True

    def edit(self, index: int, new_name: str) -> bool:
        """Replace the name at *index* as typed, keeping its unit.

        Blank edits are kept until ``commit`` filters them out.
        """
        if not isinstance(new_name, str) or not 0 <= index < len(self._items):
            return False
        self._items[index].name = new_name
        return True

    # ── Commit ─────────────────────────────────────────────────────────────

    def commit(self) -> list[str]:
        """Return the final topic list: every item trimmed, blanks dropped.

        Duplicates are kept; a user may list the same topic twice on purpose.
        """
        return [item.name.strip() for item in self._items if item.name.strip()]

    def commit_items(self) -> list[TopicItem]:
        """Like ``commit`` but keeps per-item units as ``{"name", "unit"}`` mappings."""
        return [
            item.name.strip() if item.unit is None
            else {"name": item.name.strip(), "unit": item.unit}
            for item in self._items
            if item.name.strip()
        ]

    def commit_to(
        self,
        writer: TopicWriter,
        user_id: str,
        subject_id: str,
        default_unit: int = 1,
        on_committed: Optional[CommitHook] = None,
    ) -> int:
        """Commit through *writer* and notify *on_committed* if anything was written.

        Args:
            writer: Persistence callable, normally ``core.store.save_topics``.
            user_id: Owner of the subject.
            subject_id: Target subject.
            default_unit: Unit for items that carry none.
            on_committed: Optional capability run after a non-empty commit,
                e.g. a study-streak updater.

        Returns:
            The number of topics written.
        """
        items = self.commit_items()
        if not items:
            return 0

        written = writer(user_id, subject_id, items, default_unit)
        if written and on_committed is not None:
            on_committed(user_id, written)
        logger.info("Committed %d %s topics to subject=%r", written, self.source.value, subject_id)
        return written
