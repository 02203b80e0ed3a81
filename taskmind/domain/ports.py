from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from taskmind.constants import TASK_STATUS_COMPLETED, TASK_STATUS_PENDING
from taskmind.domain.models import (
    Category,
    ContextEntry,
    NewCategory,
    NewContextEntry,
    NewTask,
    StorageStats,
    Task,
)


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class Storage(ABC):
    """
    CRUD contract shared by the sqlite and in-memory backends.

    Missing ids on update/delete raise NotFoundError; get_task_by_id returns None instead.
    """

    # ---- tasks ----

    @abstractmethod
    async def get_tasks(self) -> Sequence[Task]: ...

    @abstractmethod
    async def get_task_by_id(self, task_id: int) -> Optional[Task]: ...

    @abstractmethod
    async def create_task(self, task: NewTask) -> Task: ...

    @abstractmethod
    async def update_task(self, task_id: int, updates: Mapping[str, Any]) -> Task: ...

    @abstractmethod
    async def delete_task(self, task_id: int) -> None: ...

    # ---- context entries ----

    @abstractmethod
    async def get_context_entries(self) -> Sequence[ContextEntry]: ...

    @abstractmethod
    async def create_context_entry(self, entry: NewContextEntry) -> ContextEntry: ...

    @abstractmethod
    async def update_context_entry(self, entry_id: int, updates: Mapping[str, Any]) -> ContextEntry: ...

    # ---- categories ----

    @abstractmethod
    async def get_categories(self) -> Sequence[Category]: ...

    @abstractmethod
    async def create_category(self, category: NewCategory) -> Category: ...

    @abstractmethod
    async def update_category_usage(self, name: str) -> None: ...

    # ---- shared ----

    async def get_stats(self) -> StorageStats:
        tasks = await self.get_tasks()
        entries = await self.get_context_entries()
        categories = await self.get_categories()
        return StorageStats(
            total_tasks=len(tasks),
            pending_tasks=sum(1 for t in tasks if t.status == TASK_STATUS_PENDING),
            completed_tasks=sum(1 for t in tasks if t.status == TASK_STATUS_COMPLETED),
            ai_enhanced_tasks=sum(1 for t in tasks if t.ai_enhanced),
            total_context_entries=len(entries),
            processed_context_entries=sum(1 for e in entries if e.is_processed),
            total_categories=len(categories),
        )
