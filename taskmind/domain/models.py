from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from taskmind.constants import TASK_STATUS_PENDING


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: Optional[str]
    category: str  # Category.name, not enforced
    priority: str  # 'high' | 'medium' | 'low'
    priority_score: Optional[int]
    status: str  # 'pending' | 'completed'
    deadline: Optional[datetime]
    estimated_time: Optional[str]
    ai_enhanced: bool
    ai_suggestions: Optional[Any]
    tags: Optional[list[str]]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ContextEntry:
    id: int
    content: str
    source_type: str  # 'email' | 'message' | 'note'
    processed_insights: Optional[Any]
    extracted_tasks: Optional[list[dict[str, Any]]]
    is_processed: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    color: str
    usage_count: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class NewTask:
    title: str
    category: str
    priority: str
    description: Optional[str] = None
    priority_score: Optional[int] = None
    status: str = TASK_STATUS_PENDING
    deadline: Optional[datetime] = None
    estimated_time: Optional[str] = None
    ai_enhanced: bool = False
    ai_suggestions: Optional[Any] = None
    tags: Optional[list[str]] = None


@dataclass(frozen=True)
class NewContextEntry:
    content: str
    source_type: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NewContextEntry:
        """Build from raw input. Anything besides content/sourceType is dropped."""
        source_type = data.get("source_type", data.get("sourceType"))
        return cls(content=str(data.get("content") or ""), source_type=str(source_type or ""))


@dataclass(frozen=True)
class NewCategory:
    name: str
    color: str


# Fields a partial update may touch. id/created_at/updated_at are owned by the store.
TASK_UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "category",
        "priority",
        "priority_score",
        "status",
        "deadline",
        "estimated_time",
        "ai_enhanced",
        "ai_suggestions",
        "tags",
    }
)
CONTEXT_UPDATABLE_FIELDS = frozenset(
    {"content", "source_type", "processed_insights", "extracted_tasks", "is_processed"}
)


@dataclass(frozen=True)
class StorageStats:
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    ai_enhanced_tasks: int
    total_context_entries: int
    processed_context_entries: int
    total_categories: int
