"""
SQLite-backed user-document store.

Schema
──────
table: subject_templates
  key        TEXT PRIMARY KEY      (normalised name, spaces → underscores)
  name       TEXT NOT NULL
  topics     TEXT NOT NULL         (JSON array of topic names)
  created_at TEXT NOT NULL         (ISO-8601 UTC)

table: topics
  id          INTEGER PRIMARY KEY AUTOINCREMENT
  user_id     TEXT NOT NULL
  subject_id  TEXT NOT NULL
  name        TEXT NOT NULL
  completed   INTEGER NOT NULL DEFAULT 0
  score       REAL
  unit        INTEGER NOT NULL
  position    INTEGER NOT NULL
  created_at  TEXT NOT NULL        (ISO-8601 UTC)
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from core.models import SubjectTemplate, TopicRecord
from core.templates import iter_templates, normalize_subject, template_key

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "topics.db"

TopicItem = Union[str, Mapping[str, object]]


def _db_path() -> Path:
    """Return the database file path, honouring a DB_PATH env var if set."""
    env = os.getenv("DB_PATH")
    return Path(env) if env else DEFAULT_DB_PATH


@contextmanager
def _connect():
    """Yield a connected sqlite3.Connection, creating the file/dir if needed."""
    path = _db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def init_db() -> None:
    """Create the store tables if they don't exist yet."""
    with _connect() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS subject_templates (
                key        TEXT PRIMARY KEY,
                name       TEXT NOT NULL,
                topics     TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS topics (
                id         INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id    TEXT NOT NULL,
                subject_id TEXT NOT NULL,
                name       TEXT NOT NULL,
                completed  INTEGER NOT NULL DEFAULT 0,
                score      REAL,
                unit       INTEGER NOT NULL,
                position   INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_topics_subject "
            "ON topics (user_id, subject_id, position)"
        )
    logger.info("Topic store initialised at %s", _db_path())


# ── Subject templates ──────────────────────────────────────────────────────


def _insert_template(conn: sqlite3.Connection, name: str, topics: list[str]) -> bool:
    """Create a template row unless its key already exists."""
    cursor = conn.execute(
        "INSERT OR IGNORE INTO subject_templates (key, name, topics, created_at) "
        "VALUES (?, ?, ?, ?)",
        (template_key(name), normalize_subject(name), json.dumps(topics), _now()),
    )
    return cursor.rowcount > 0


def ensure_seeded() -> int:
    """Copy every predefined template into an empty template table.

    Each row is written with ``INSERT OR IGNORE`` so two processes seeding at
    the same time cannot clobber each other. Store errors are logged and
    skipped; predefined templates remain usable without the store.

    Returns:
        The number of templates inserted (0 if the table was already seeded).
    """
    try:
        with _connect() as conn:
            # Take the write lock before the emptiness check so concurrent
            # seeders run one after another.
            conn.execute("BEGIN IMMEDIATE")
            existing = conn.execute("SELECT 1 FROM subject_templates LIMIT 1").fetchone()
            if existing is not None:
                return 0
            inserted = sum(
                _insert_template(conn, name, topics) for name, topics in iter_templates()
            )
    except sqlite3.Error as exc:
        logger.warning("Template seeding skipped: %s", exc)
        return 0

    logger.info("Seeded %d subject templates", inserted)
    return inserted


def get_template(subject_name: object) -> Optional[list[str]]:
    """Look up a persisted template by subject name.

    Args:
        subject_name: Free-form subject name; normalised before lookup.

    Returns:
        The stored topic list, or None if absent or the store is unavailable.
    """
    key = template_key(subject_name)
    if not key:
        return None

    try:
        with _connect() as conn:
            row = conn.execute(
                "SELECT topics FROM subject_templates WHERE key = ?", (key,)
            ).fetchone()
    except sqlite3.Error as exc:
        logger.warning("Template lookup failed for key=%r: %s", key, exc)
        return None

    if row is None:
        return None
    try:
        topics = json.loads(row["topics"])
    except ValueError:
        logger.warning("Skipping corrupt template key=%r", key)
        return None
    return [t for t in topics if isinstance(t, str)] if isinstance(topics, list) else None


def add_template(subject_name: str, topics: Iterable[str]) -> bool:
    """Persist a new template. Existing templates are never overwritten.

    Args:
        subject_name: The subject the template belongs to.
        topics: Topic names; blank entries are dropped.

    Returns:
        True if the template was created, False if the key already existed.

    Raises:
        ValueError: If the subject name or the cleaned topic list is empty.
    """
    cleaned = [t.strip() for t in topics if isinstance(t, str) and t.strip()]
    if not template_key(subject_name):
        raise ValueError("Subject name must not be empty.")
    if not cleaned:
        raise ValueError("A template needs at least one topic.")

    with _connect() as conn:
        created = _insert_template(conn, subject_name, cleaned)

    if created:
        logger.info("Added template key=%r with %d topics", template_key(subject_name), len(cleaned))
    return created


def list_templates() -> list[SubjectTemplate]:
    """Return all persisted templates ordered by key."""
    with _connect() as conn:
        rows = conn.execute(
            "SELECT key, name, topics FROM subject_templates ORDER BY key"
        ).fetchall()

    templates: list[SubjectTemplate] = []
    for row in rows:
        try:
            templates.append(
                SubjectTemplate(key=row["key"], name=row["name"], topics=json.loads(row["topics"]))
            )
        except Exception as exc:
            logger.warning("Skipping corrupt template key=%r: %s", row["key"], exc)
    return templates


# ── Committed topics ───────────────────────────────────────────────────────


def _parse_unit(value: object, default: int) -> int:
    try:
        unit = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return unit or default


def save_topics(
    user_id: str,
    subject_id: str,
    items: Iterable[TopicItem],
    default_unit: int = 1,
) -> int:
    """Append topics to a user's subject.

    Args:
        user_id: Owner of the subject.
        subject_id: Subject the topics belong to.
        items: Topic names, or mappings with ``name`` and optional ``unit``.
        default_unit: Unit used when an item carries none.

    Returns:
        The number of topics written. Blank names are skipped.
    """
    if not user_id or not subject_id:
        return 0

    default_unit = _parse_unit(default_unit, 1)
    rows: list[tuple[str, int]] = []
    for item in items:
        if isinstance(item, Mapping):
            name, unit = item.get("name"), _parse_unit(item.get("unit"), default_unit)
        else:
            name, unit = item, default_unit
        if isinstance(name, str) and name.strip():
            rows.append((name.strip(), unit))

    if not rows:
        return 0

    now = _now()
    with _connect() as conn:
        # Positions are derived from the current count; hold the write lock
        # from the read onwards so concurrent commits append one after another.
        conn.execute("BEGIN IMMEDIATE")
        (start,) = conn.execute(
            "SELECT COUNT(*) FROM topics WHERE user_id = ? AND subject_id = ?",
            (user_id, subject_id),
        ).fetchone()
        conn.executemany(
            "INSERT INTO topics (user_id, subject_id, name, unit, position, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            [
                (user_id, subject_id, name, unit, start + offset, now)
                for offset, (name, unit) in enumerate(rows)
            ],
        )

    logger.info(
        "Saved %d topics for user=%r subject=%r", len(rows), user_id, subject_id
    )
    return len(rows)


def get_topics(user_id: str, subject_id: str) -> list[TopicRecord]:
    """Return a subject's committed topics in position order."""
    with _connect() as conn:
        rows = conn.execute(
            "SELECT * FROM topics WHERE user_id = ? AND subject_id = ? "
            "ORDER BY position, id",
            (user_id, subject_id),
        ).fetchall()

    return [
        TopicRecord(
            id=row["id"],
            user_id=row["user_id"],
            subject_id=row["subject_id"],
            name=row["name"],
            completed=bool(row["completed"]),
            score=row["score"],
            unit=row["unit"],
            position=row["position"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
        for row in rows
    ]
