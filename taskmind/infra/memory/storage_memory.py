from __future__ import annotations

import copy
import random
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from taskmind.constants import DEFAULT_CATEGORY_COLOR
from taskmind.domain.common.errors import ConflictError, NotFoundError
from taskmind.domain.common.time import as_utc, next_after
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
from taskmind.infra.memory.seed import seed_categories, seed_context_entries, seed_tasks


class MemoryStorage(Storage):
    """
    Process-local Storage used when the database is unreachable.

    Starts from the demonstration fixture in seed.py (unless seed=False) and
    forgets everything on restart. Methods are async only to match the
    Storage contract; none of them suspend.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        seed: bool = True,
    ) -> None:
        self._clock = clock or SystemClock()
        self._rng = rng
        self._tasks: list[Task] = seed_tasks() if seed else []
        self._context_entries: list[ContextEntry] = seed_context_entries() if seed else []
        self._categories: list[Category] = seed_categories() if seed else []
        self._next_task_id = max((t.id for t in self._tasks), default=0) + 1
        self._next_context_id = max((e.id for e in self._context_entries), default=0) + 1
        self._next_category_id = max((c.id for c in self._categories), default=0) + 1

    # ---- tasks ----

    async def get_tasks(self) -> Sequence[Task]:
        return sorted(self._tasks, key=lambda t: (t.created_at, t.id), reverse=True)

    async def get_task_by_id(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    async def create_task(self, task: NewTask) -> Task:
        task = with_task_defaults(task, self._rng)
        now = self._clock.now()
        created = Task(
            id=self._next_task_id,
            title=task.title,
            description=task.description,
            category=task.category,
            priority=task.priority,
            priority_score=task.priority_score,
            status=task.status,
            deadline=as_utc(task.deadline) if task.deadline else None,
            estimated_time=task.estimated_time,
            ai_enhanced=bool(task.ai_enhanced),
            ai_suggestions=copy.deepcopy(task.ai_suggestions),
            tags=copy.deepcopy(task.tags),
            created_at=now,
            updated_at=now,
        )
        self._next_task_id += 1
        self._tasks.append(created)
        await self.update_category_usage(created.category)
        return created

    async def update_task(self, task_id: int, updates: Mapping[str, Any]) -> Task:
        validate_task_updates(updates)
        index = self._task_index(task_id)
        current = self._tasks[index]
        # detach from the caller so later mutation does not reach the store
        changes = copy.deepcopy(dict(updates))
        if changes.get("deadline") is not None:
            changes["deadline"] = as_utc(changes["deadline"])
        updated = replace(
            current,
            **changes,
            updated_at=next_after(self._clock.now(), current.updated_at),
        )
        self._tasks[index] = updated
        return updated

    async def delete_task(self, task_id: int) -> None:
        index = self._task_index(task_id)
        del self._tasks[index]

    def _task_index(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(f"Task with id {task_id} not found")

    # ---- context entries ----

    async def get_context_entries(self) -> Sequence[ContextEntry]:
        return sorted(self._context_entries, key=lambda e: (e.created_at, e.id), reverse=True)

    async def create_context_entry(self, entry: NewContextEntry) -> ContextEntry:
        validate_new_context_entry(entry)
        created = ContextEntry(
            id=self._next_context_id,
            content=entry.content,
            source_type=entry.source_type,
            processed_insights=None,
            extracted_tasks=None,
            is_processed=False,
            created_at=self._clock.now(),
        )
        self._next_context_id += 1
        self._context_entries.append(created)
        return created

    async def update_context_entry(self, entry_id: int, updates: Mapping[str, Any]) -> ContextEntry:
        validate_context_updates(updates)
        for i, entry in enumerate(self._context_entries):
            if entry.id == entry_id:
                updated = replace(entry, **copy.deepcopy(dict(updates)))
                self._context_entries[i] = updated
                return updated
        raise NotFoundError(f"Context entry with id {entry_id} not found")

    # ---- categories ----

    async def get_categories(self) -> Sequence[Category]:
        # stable sort keeps insertion order between equal counts
        return sorted(self._categories, key=lambda c: c.usage_count or 0, reverse=True)

    async def create_category(self, category: NewCategory) -> Category:
        validate_new_category(category)
        if self._find_category(category.name) is not None:
            raise ConflictError(f'Category with name "{category.name}" already exists')
        return self._insert_category(category.name, category.color, usage_count=0)

    async def update_category_usage(self, name: str) -> None:
        index = self._find_category(name)
        if index is None:
            self._insert_category(name, DEFAULT_CATEGORY_COLOR, usage_count=1)
            return
        current = self._categories[index]
        self._categories[index] = replace(current, usage_count=(current.usage_count or 0) + 1)

    def _find_category(self, name: str) -> Optional[int]:
        for i, category in enumerate(self._categories):
            if category.name == name:
                return i
        return None

    def _insert_category(self, name: str, color: str, usage_count: int) -> Category:
        created = Category(
            id=self._next_category_id,
            name=name,
            color=color,
            usage_count=usage_count,
            created_at=self._clock.now(),
        )
        self._next_category_id += 1
        self._categories.append(created)
        return created
