"""
Tests for SqliteStorage against a temporary DB file.

Run with: python -m pytest tests/test_sqlite_storage.py -v
"""
from __future__ import annotations

import asyncio
import os
import random
import sqlite3
import tempfile
from datetime import datetime, timezone

import pytest

from taskmind.constants import DEFAULT_CATEGORIES
from taskmind.domain.common.errors import ConflictError, NotFoundError, ValidationError
from taskmind.domain.models import NewCategory, NewContextEntry, NewTask
from taskmind.infra.db.repo.storage_sqlite import SqliteStorage
from taskmind.setup_db import prepare_database


def _temp_db_path() -> str:
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    return path


async def _run_with_db(test_fn):
    path = _temp_db_path()
    try:
        storage = SqliteStorage(path, rng=random.Random(3))
        await storage.init()
        await test_fn(storage)
    finally:
        for suffix in ("", "-wal", "-shm"):
            if os.path.exists(path + suffix):
                os.unlink(path + suffix)


def test_create_task_counts_category_usage():
    async def check(storage: SqliteStorage):
        work = await storage.create_category(NewCategory(name="Work", color="blue"))
        assert work.usage_count == 0
        task = await storage.create_task(NewTask(title="X", category="Work", priority="high"))
        assert 7 <= task.priority_score <= 9
        assert task.status == "pending"
        assert task.ai_enhanced is False
        categories = await storage.get_categories()
        assert [(c.name, c.color, c.usage_count) for c in categories] == [("Work", "blue", 1)]

    asyncio.run(_run_with_db(check))


def test_unknown_category_is_auto_created():
    async def check(storage: SqliteStorage):
        await storage.create_task(NewTask(title="X", category="Unknown", priority="low"))
        categories = await storage.get_categories()
        assert len(categories) == 1
        assert categories[0].name == "Unknown"
        assert categories[0].usage_count == 1
        assert categories[0].color == "gray"

    asyncio.run(_run_with_db(check))


def test_task_round_trips_json_and_deadline():
    async def check(storage: SqliteStorage):
        deadline = datetime(2025, 7, 5, 12, 0, tzinfo=timezone.utc)
        task = await storage.create_task(
            NewTask(
                title="Slides",
                category="Work",
                priority="medium",
                deadline=deadline,
                ai_enhanced=True,
                ai_suggestions={"confidence": 0.9, "suggestedActions": ["a", "b"]},
                tags=["q1", "urgent"],
            )
        )
        loaded = await storage.get_task_by_id(task.id)
        assert loaded == task
        assert loaded.deadline == deadline
        assert loaded.ai_enhanced is True
        assert loaded.ai_suggestions == {"confidence": 0.9, "suggestedActions": ["a", "b"]}
        assert loaded.tags == ["q1", "urgent"]
        assert loaded.created_at.tzinfo is not None

    asyncio.run(_run_with_db(check))


def test_get_tasks_newest_first():
    async def check(storage: SqliteStorage):
        first = await storage.create_task(NewTask(title="first", category="Work", priority="low"))
        second = await storage.create_task(NewTask(title="second", category="Work", priority="low"))
        assert [t.id for t in await storage.get_tasks()] == [second.id, first.id]

    asyncio.run(_run_with_db(check))


def test_update_task_partial():
    async def check(storage: SqliteStorage):
        task = await storage.create_task(NewTask(title="X", category="Work", priority="high", tags=["a"]))
        updated = await storage.update_task(task.id, {"status": "completed", "tags": ["a", "b"]})
        assert updated.status == "completed"
        assert updated.tags == ["a", "b"]
        assert updated.title == "X"
        assert updated.created_at == task.created_at
        assert updated.updated_at > task.updated_at

    asyncio.run(_run_with_db(check))


def test_update_and_delete_missing_task():
    async def check(storage: SqliteStorage):
        with pytest.raises(NotFoundError, match="not found"):
            await storage.update_task(42, {"title": "nope"})
        with pytest.raises(NotFoundError, match="not found"):
            await storage.delete_task(42)
        with pytest.raises(ValidationError):
            await storage.update_task(42, {"created_at": "now"})
        assert await storage.get_tasks() == []

    asyncio.run(_run_with_db(check))


def test_delete_task():
    async def check(storage: SqliteStorage):
        task = await storage.create_task(NewTask(title="X", category="Work", priority="high"))
        await storage.delete_task(task.id)
        assert await storage.get_task_by_id(task.id) is None

    asyncio.run(_run_with_db(check))


def test_context_entry_lifecycle():
    async def check(storage: SqliteStorage):
        raw = {"content": "test", "sourceType": "note", "isProcessed": True, "extractedTasks": [{}]}
        entry = await storage.create_context_entry(NewContextEntry.from_dict(raw))
        assert entry.is_processed is False
        assert entry.processed_insights is None
        assert entry.extracted_tasks is None

        insights = {"extractedTasks": [{"title": "Call Bob"}], "suggestions": []}
        updated = await storage.update_context_entry(
            entry.id,
            {"processed_insights": insights, "extracted_tasks": insights["extractedTasks"], "is_processed": True},
        )
        assert updated.is_processed is True
        assert updated.processed_insights == insights
        assert updated.extracted_tasks == [{"title": "Call Bob"}]

        with pytest.raises(NotFoundError, match="not found"):
            await storage.update_context_entry(999, {"is_processed": True})

    asyncio.run(_run_with_db(check))


def test_duplicate_category_conflicts():
    async def check(storage: SqliteStorage):
        await storage.create_category(NewCategory(name="Work", color="blue"))
        with pytest.raises(ConflictError):
            await storage.create_category(NewCategory(name="Work", color="red"))

    asyncio.run(_run_with_db(check))


def test_concurrent_usage_increments_are_not_lost():
    async def check(storage: SqliteStorage):
        await asyncio.gather(*(storage.update_category_usage("Busy") for _ in range(10)))
        categories = await storage.get_categories()
        assert [(c.name, c.usage_count) for c in categories] == [("Busy", 10)]

    asyncio.run(_run_with_db(check))


def test_prepare_database_seeds_default_categories_once():
    async def run():
        tmpdir = tempfile.mkdtemp()
        path = os.path.join(tmpdir, "nested", "taskmind.db")
        storage = await prepare_database(path)
        await prepare_database(path)
        names = {c.name for c in await storage.get_categories()}
        assert names == {name for name, _ in DEFAULT_CATEGORIES}
        assert len(await storage.get_categories()) == len(DEFAULT_CATEGORIES)

    asyncio.run(run())


def test_get_tasks_fails_without_schema():
    async def run():
        path = _temp_db_path()
        try:
            with pytest.raises(sqlite3.OperationalError):
                await SqliteStorage(path).get_tasks()
        finally:
            os.unlink(path)

    asyncio.run(run())


def test_update_task_rejects_null_flag():
    async def check(storage: SqliteStorage):
        task = await storage.create_task(NewTask(title="X", category="Work", priority="high", ai_enhanced=True))
        with pytest.raises(ValidationError):
            await storage.update_task(task.id, {"ai_enhanced": None})
        assert (await storage.get_task_by_id(task.id)).ai_enhanced is True

    asyncio.run(_run_with_db(check))
