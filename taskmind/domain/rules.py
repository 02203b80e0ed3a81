from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Mapping, Optional

from taskmind.constants import SOURCE_TYPES, TASK_PRIORITIES, TASK_STATUSES
from taskmind.domain.common.errors import ValidationError
from taskmind.priority import compute_priority_score
from taskmind.domain.models import (
    CONTEXT_UPDATABLE_FIELDS,
    TASK_UPDATABLE_FIELDS,
    NewCategory,
    NewContextEntry,
    NewTask,
)


def validate_required_text(value: Any, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required.")


def validate_priority(priority: Any) -> None:
    if priority not in TASK_PRIORITIES:
        raise ValidationError(f"Priority must be one of {', '.join(TASK_PRIORITIES)}.")


def validate_status(status: Any) -> None:
    if status not in TASK_STATUSES:
        raise ValidationError(f"Status must be one of {', '.join(TASK_STATUSES)}.")


def validate_source_type(source_type: Any) -> None:
    if source_type not in SOURCE_TYPES:
        raise ValidationError(f"Source type must be one of {', '.join(SOURCE_TYPES)}.")


def validate_flag(value: Any, label: str) -> None:
    if not isinstance(value, bool):
        raise ValidationError(f"{label} must be true or false.")


def validate_new_task(task: NewTask) -> None:
    validate_required_text(task.title, "Title")
    validate_required_text(task.category, "Category")
    validate_priority(task.priority)
    validate_status(task.status)


def validate_task_updates(updates: Mapping[str, Any]) -> None:
    unknown = set(updates) - TASK_UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot update task fields: {', '.join(sorted(unknown))}.")
    if "title" in updates:
        validate_required_text(updates["title"], "Title")
    if "category" in updates:
        validate_required_text(updates["category"], "Category")
    if "priority" in updates:
        validate_priority(updates["priority"])
    if "status" in updates:
        validate_status(updates["status"])
    if "ai_enhanced" in updates:
        validate_flag(updates["ai_enhanced"], "aiEnhanced")


def validate_new_context_entry(entry: NewContextEntry) -> None:
    validate_required_text(entry.content, "Content")
    validate_source_type(entry.source_type)


def validate_context_updates(updates: Mapping[str, Any]) -> None:
    unknown = set(updates) - CONTEXT_UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot update context entry fields: {', '.join(sorted(unknown))}.")
    if "content" in updates:
        validate_required_text(updates["content"], "Content")
    if "source_type" in updates:
        validate_source_type(updates["source_type"])
    if "is_processed" in updates:
        validate_flag(updates["is_processed"], "isProcessed")
    extracted = updates.get("extracted_tasks")
    if extracted is not None and (
        not isinstance(extracted, list) or not all(isinstance(t, dict) for t in extracted)
    ):
        raise ValidationError("Extracted tasks must be a list of objects.")


def validate_new_category(category: NewCategory) -> None:
    validate_required_text(category.name, "Category name")
    validate_required_text(category.color, "Category color")


def with_task_defaults(task: NewTask, rng: Optional[random.Random] = None) -> NewTask:
    """Validate and fill the store-side defaults (priority score) of a new task."""
    validate_new_task(task)
    if task.priority_score is not None:
        return task
    return replace(task, priority_score=compute_priority_score(task.priority, rng))
