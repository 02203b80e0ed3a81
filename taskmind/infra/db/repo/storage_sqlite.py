from __future__ import annotations

import json
import random
import sqlite3
from typing import Any, Mapping, Optional, Sequence

import aiosqlite

from taskmind.constants import DEFAULT_CATEGORIES, DEFAULT_CATEGORY_COLOR
from taskmind.domain.common.errors import ConflictError, NotFoundError
from taskmind.domain.common.time import as_utc, from_iso, next_after, to_iso
from taskmind.domain.models import (
    Category,
    ContextEntry,
    NewCategory,
    NewContextEntry,
    NewTask,
    Task,
)
from taskmind.domain.ports import Clock, Storage
from taskmind.domain.rules import (
    validate_context_updates,
    validate_new_category,
    validate_new_context_entry,
    validate_task_updates,
    with_task_defaults,
)
from taskmind.infra.clock.system_clock import SystemClock
from taskmind.infra.db.connection import Database
from taskmind.infra.db.schema import SCHEMA_SQL

_JSON_COLUMNS = frozenset({"ai_suggestions", "tags", "processed_insights", "extracted_tasks"})
_BOOL_COLUMNS = frozenset({"ai_enhanced", "is_processed"})

# single statement so concurrent task creations cannot lose an increment
_UPSERT_CATEGORY_USAGE_SQL = """
INSERT INTO categories(name, color, usage_count, created_at)
VALUES (?, ?, 1, ?)
ON CONFLICT(name) DO UPDATE SET usage_count = COALESCE(usage_count, 0) + 1;
"""


def _encode(column: str, value: Any) -> Any:
    if column in _BOOL_COLUMNS:
        return 1 if value else 0
    if value is None:
        return None
    if column in _JSON_COLUMNS:
        return json.dumps(value, ensure_ascii=False)
    if column == "deadline":
        return to_iso(as_utc(value))
    return value


def _decode_json(raw: Optional[str]) -> Any:
    return json.loads(raw) if raw else None


class SqliteStorage(Storage):
    """
    Storage backed by a SQLite file.

    Ids and category-name uniqueness come from the schema (AUTOINCREMENT, UNIQUE).
    Every call goes straight to the database; nothing is cached here.
    """

    def __init__(
        self,
        db: Database | str,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._db = db if isinstance(db, Database) else Database(str(db))
        self._clock = clock or SystemClock()
        self._rng = rng

    async def init(self) -> None:
        await self._db.executescript(SCHEMA_SQL)

    async def seed_default_categories(self) -> None:
        now_iso = to_iso(self._clock.now())
        await self._db.executemany(
            "INSERT OR IGNORE INTO categories(name, color, usage_count, created_at) VALUES (?, ?, 0, ?);",
            [(name, color, now_iso) for name, color in DEFAULT_CATEGORIES],
        )

    # ---- tasks ----

    async def get_tasks(self) -> Sequence[Task]:
        rows = await self._db.fetchall("SELECT * FROM tasks ORDER BY created_at DESC, id DESC;")
        return [self._row_to_task(r) for r in rows]

    async def get_task_by_id(self, task_id: int) -> Optional[Task]:
        row = await self._db.fetchone("SELECT * FROM tasks WHERE id = ?;", (task_id,))
        return self._row_to_task(row) if row else None

    async def create_task(self, task: NewTask) -> Task:
        task = with_task_defaults(task, self._rng)
        now_iso = to_iso(self._clock.now())
        async with self._db.transaction() as db:
            cur = await db.execute(
                """
                INSERT INTO tasks(
                  title, description, category, priority, priority_score, status,
                  deadline, estimated_time, ai_enhanced, ai_suggestions, tags,
                  created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    task.title,
                    task.description,
                    task.category,
                    task.priority,
                    task.priority_score,
                    task.status,
                    _encode("deadline", task.deadline),
                    task.estimated_time,
                    _encode("ai_enhanced", task.ai_enhanced),
                    _encode("ai_suggestions", task.ai_suggestions),
                    _encode("tags", task.tags),
                    now_iso,
                    now_iso,
                ),
            )
            task_id = cur.lastrowid
            await db.execute(_UPSERT_CATEGORY_USAGE_SQL, (task.category, DEFAULT_CATEGORY_COLOR, now_iso))
            cur = await db.execute("SELECT * FROM tasks WHERE id = ?;", (task_id,))
            row = await cur.fetchone()
        return self._row_to_task(row)

    async def update_task(self, task_id: int, updates: Mapping[str, Any]) -> Task:
        validate_task_updates(updates)
        async with self._db.transaction() as db:
            cur = await db.execute("SELECT updated_at FROM tasks WHERE id = ?;", (task_id,))
            current = await cur.fetchone()
            if current is None:
                raise NotFoundError(f"Task with id {task_id} not found")

            updated_at = next_after(self._clock.now(), from_iso(current["updated_at"]))
            fields = [f"{name} = ?" for name in updates] + ["updated_at = ?"]
            params = [_encode(name, value) for name, value in updates.items()]
            params += [to_iso(updated_at), task_id]
            await db.execute(f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?;", params)

            cur = await db.execute("SELECT * FROM tasks WHERE id = ?;", (task_id,))
            row = await cur.fetchone()
        return self._row_to_task(row)

    async def delete_task(self, task_id: int) -> None:
        deleted = await self._db.execute("DELETE FROM tasks WHERE id = ?;", (task_id,))
        if deleted == 0:
            raise NotFoundError(f"Task with id {task_id} not found")

    # ---- context entries ----

    async def get_context_entries(self) -> Sequence[ContextEntry]:
        rows = await self._db.fetchall("SELECT * FROM context_entries ORDER BY created_at DESC, id DESC;")
        return [self._row_to_entry(r) for r in rows]

    async def create_context_entry(self, entry: NewContextEntry) -> ContextEntry:
        validate_new_context_entry(entry)
        entry_id = await self._db.insert(
            """
            INSERT INTO context_entries(
              content, source_type, processed_insights, extracted_tasks, is_processed, created_at
            ) VALUES (?, ?, NULL, NULL, 0, ?);
            """,
            (entry.content, entry.source_type, to_iso(self._clock.now())),
        )
        row = await self._db.fetchone("SELECT * FROM context_entries WHERE id = ?;", (entry_id,))
        return self._row_to_entry(row)

    async def update_context_entry(self, entry_id: int, updates: Mapping[str, Any]) -> ContextEntry:
        validate_context_updates(updates)
        async with self._db.transaction() as db:
            if updates:
                fields = [f"{name} = ?" for name in updates]
                params = [_encode(name, value) for name, value in updates.items()] + [entry_id]
                await db.execute(f"UPDATE context_entries SET {', '.join(fields)} WHERE id = ?;", params)
            cur = await db.execute("SELECT * FROM context_entries WHERE id = ?;", (entry_id,))
            row = await cur.fetchone()
        if row is None:
            raise NotFoundError(f"Context entry with id {entry_id} not found")
        return self._row_to_entry(row)

    # ---- categories ----

    async def get_categories(self) -> Sequence[Category]:
        rows = await self._db.fetchall("SELECT * FROM categories ORDER BY COALESCE(usage_count, 0) DESC, id ASC;")
        return [self._row_to_category(r) for r in rows]

    async def create_category(self, category: NewCategory) -> Category:
        validate_new_category(category)
        try:
            category_id = await self._db.insert(
                "INSERT INTO categories(name, color, usage_count, created_at) VALUES (?, ?, 0, ?);",
                (category.name, category.color, to_iso(self._clock.now())),
            )
        except sqlite3.IntegrityError as e:
            raise ConflictError(f'Category with name "{category.name}" already exists') from e
        row = await self._db.fetchone("SELECT * FROM categories WHERE id = ?;", (category_id,))
        return self._row_to_category(row)

    async def update_category_usage(self, name: str) -> None:
        await self._db.execute(_UPSERT_CATEGORY_USAGE_SQL, (name, DEFAULT_CATEGORY_COLOR, to_iso(self._clock.now())))

    # ---- row mapping ----

    def _row_to_task(self, row: aiosqlite.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=row["title"],
            description=row["description"],
            category=row["category"],
            priority=row["priority"],
            priority_score=int(row["priority_score"]) if row["priority_score"] is not None else None,
            status=row["status"],
            deadline=from_iso(row["deadline"]) if row["deadline"] else None,
            estimated_time=row["estimated_time"],
            ai_enhanced=bool(row["ai_enhanced"]),
            ai_suggestions=_decode_json(row["ai_suggestions"]),
            tags=_decode_json(row["tags"]),
            created_at=from_iso(row["created_at"]),
            updated_at=from_iso(row["updated_at"]),
        )

    def _row_to_entry(self, row: aiosqlite.Row) -> ContextEntry:
        return ContextEntry(
            id=int(row["id"]),
            content=row["content"],
            source_type=row["source_type"],
            processed_insights=_decode_json(row["processed_insights"]),
            extracted_tasks=_decode_json(row["extracted_tasks"]),
            is_processed=bool(row["is_processed"]),
            created_at=from_iso(row["created_at"]),
        )

    def _row_to_category(self, row: aiosqlite.Row) -> Category:
        return Category(
            id=int(row["id"]),
            name=row["name"],
            color=row["color"],
            usage_count=int(row["usage_count"]) if row["usage_count"] is not None else None,
            created_at=from_iso(row["created_at"]),
        )
