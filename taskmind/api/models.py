"""Request/response models for the JSON API.

Python fields are snake_case; JSON bodies and responses are camelCase.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from taskmind.domain.models import NewCategory, NewContextEntry, NewTask

Priority = Literal["high", "medium", "low"]
TaskStatus = Literal["pending", "completed"]
SourceType = Literal["email", "message", "note"]


def _to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    """Base model with camelCase JSON serialization."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════
# REQUEST MODELS
# ═══════════════════════════════════════════════════════════════


class TaskCreateRequest(CamelModel):
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    priority: Priority
    description: Optional[str] = None
    priority_score: Optional[int] = None
    status: TaskStatus = "pending"
    deadline: Optional[datetime] = None
    estimated_time: Optional[str] = None
    ai_enhanced: bool = False
    ai_suggestions: Optional[Any] = None
    tags: Optional[list[str]] = None

    def to_new_task(self) -> NewTask:
        return NewTask(**self.model_dump())


class TaskUpdateRequest(CamelModel):
    title: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    description: Optional[str] = None
    priority_score: Optional[int] = None
    status: Optional[TaskStatus] = None
    deadline: Optional[datetime] = None
    estimated_time: Optional[str] = None
    ai_enhanced: Optional[bool] = None
    ai_suggestions: Optional[Any] = None
    tags: Optional[list[str]] = None

    def to_updates(self) -> dict[str, Any]:
        # only what the client sent; explicit nulls clear nullable fields
        return self.model_dump(exclude_unset=True)


class EnhanceTaskRequest(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None


class ContextCreateRequest(CamelModel):
    content: str = Field(min_length=1)
    source_type: SourceType

    def to_new_entry(self) -> NewContextEntry:
        return NewContextEntry(content=self.content, source_type=self.source_type)


class ProcessContextRequest(CamelModel):
    entries: list[ContextCreateRequest]


class CategoryCreateRequest(CamelModel):
    name: str = Field(min_length=1)
    color: str = Field(min_length=1)

    def to_new_category(self) -> NewCategory:
        return NewCategory(name=self.name, color=self.color)


# ═══════════════════════════════════════════════════════════════
# RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════


class TaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str]
    category: str
    priority: str
    priority_score: Optional[int]
    status: str
    deadline: Optional[datetime]
    estimated_time: Optional[str]
    ai_enhanced: bool
    ai_suggestions: Optional[Any]
    tags: Optional[list[str]]
    created_at: datetime
    updated_at: datetime


class ContextEntryResponse(CamelModel):
    id: int
    content: str
    source_type: str
    processed_insights: Optional[Any]
    extracted_tasks: Optional[list[dict[str, Any]]]
    is_processed: bool
    created_at: datetime


class CategoryResponse(CamelModel):
    id: int
    name: str
    color: str
    usage_count: Optional[int]
    created_at: datetime


class StorageInfoResponse(CamelModel):
    kind: str  # 'database' | 'mock' | 'untested'
    message: str


class StatsResponse(CamelModel):
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    ai_enhanced_tasks: int
    total_context_entries: int
    processed_context_entries: int
    total_categories: int
