"""
Tests for core/store.py

Uses a temporary SQLite file so the real store is never touched.

Run with: pytest tests/test_store.py
"""

import sqlite3
import threading

import pytest

import core.store as store
from core.templates import SUBJECT_TEMPLATES


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    """Point DB_PATH to a fresh temp file for each test."""
    db_file = tmp_path / "test_topics.db"
    monkeypatch.setenv("DB_PATH", str(db_file))
    store.init_db()
    yield


class TestSeeding:
    def test_seeds_every_predefined_template(self):
        assert store.ensure_seeded() == len(SUBJECT_TEMPLATES)
        assert store.get_template("Computer Networks")[0] == "OSI Model"

    def test_second_seed_is_noop(self):
        store.ensure_seeded()
        assert store.ensure_seeded() == 0
        assert len(store.list_templates()) == len(SUBJECT_TEMPLATES)

    def test_skips_non_empty_store(self):
        store.add_template("Compiler Design", ["Lexical Analysis"])
        assert store.ensure_seeded() == 0
        assert store.get_template("dbms") is None

    def test_concurrent_seeding_inserts_once(self):
        results: list[int] = []
        threads = [
            threading.Thread(target=lambda: results.append(store.ensure_seeded()))
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(results) == len(SUBJECT_TEMPLATES)
        assert len(store.list_templates()) == len(SUBJECT_TEMPLATES)

    def test_store_error_is_swallowed(self, monkeypatch):
        def broken():
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(store, "_connect", broken)
        assert store.ensure_seeded() == 0


class TestTemplates:
    def test_lookup_uses_underscore_key(self):
        store.add_template("Compiler Design", ["Lexical Analysis", "Parsing"])
        assert store.get_template("  compiler   DESIGN ") == ["Lexical Analysis", "Parsing"]

    def test_missing_template_is_none(self):
        assert store.get_template("Quantum Computing") is None

    def test_blank_name_is_none(self):
        assert store.get_template("   ") is None

    def test_add_is_create_once(self):
        assert store.add_template("Compiler Design", ["Parsing"]) is True
        assert store.add_template("compiler design", ["Something Else"]) is False
        assert store.get_template("Compiler Design") == ["Parsing"]

    def test_add_cleans_topics(self):
        store.add_template("Compiler Design", ["  Parsing ", "", "   "])
        assert store.get_template("Compiler Design") == ["Parsing"]

    def test_add_rejects_empty_topics(self):
        with pytest.raises(ValueError):
            store.add_template("Compiler Design", ["   "])

    def test_add_rejects_blank_name(self):
        with pytest.raises(ValueError):
            store.add_template("  ", ["Parsing"])

    def test_lookup_error_is_none(self, monkeypatch):
        def broken():
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(store, "_connect", broken)
        assert store.get_template("Compiler Design") is None


class TestTopics:
    def test_save_returns_count(self):
        assert store.save_topics("u1", "s1", ["Arrays", "Graphs"]) == 2

    def test_positions_continue_across_commits(self):
        store.save_topics("u1", "s1", ["Arrays", "Graphs"])
        store.save_topics("u1", "s1", ["Hashing"])

        records = store.get_topics("u1", "s1")
        assert [r.name for r in records] == ["Arrays", "Graphs", "Hashing"]
        assert [r.position for r in records] == [0, 1, 2]

    def test_new_records_start_incomplete(self):
        store.save_topics("u1", "s1", ["Arrays"])
        record = store.get_topics("u1", "s1")[0]
        assert record.completed is False
        assert record.score is None

    def test_units_from_items_and_default(self):
        store.save_topics(
            "u1", "s1",
            [{"name": "Arrays", "unit": "2"}, {"name": "Graphs"}, "Hashing"],
            default_unit=3,
        )
        assert [r.unit for r in store.get_topics("u1", "s1")] == [2, 3, 3]

    def test_invalid_unit_falls_back(self):
        store.save_topics("u1", "s1", [{"name": "Arrays", "unit": "abc"}])
        assert store.get_topics("u1", "s1")[0].unit == 1

    def test_blank_names_skipped(self):
        assert store.save_topics("u1", "s1", ["  ", {"name": ""}, " Trees "]) == 1
        assert store.get_topics("u1", "s1")[0].name == "Trees"

    def test_missing_ids_write_nothing(self):
        assert store.save_topics("", "s1", ["Arrays"]) == 0

    def test_subjects_are_isolated(self):
        store.save_topics("u1", "s1", ["Arrays"])
        store.save_topics("u2", "s1", ["Graphs"])
        assert [r.name for r in store.get_topics("u2", "s1")] == ["Graphs"]

    def test_concurrent_commits_get_distinct_positions(self):
        errors: list[Exception] = []

        def commit(i: int) -> None:
            try:
                store.save_topics("u1", "s1", [f"Topic {i}a", f"Topic {i}b"])
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=commit, args=(i,)) for i in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        positions = sorted(r.position for r in store.get_topics("u1", "s1"))
        assert positions == list(range(12))
