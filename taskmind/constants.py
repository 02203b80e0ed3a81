"""
Constants for task priority/status, context sources and storage selection.
"""
from __future__ import annotations

# Task priority (stored in tasks.priority)
PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
TASK_PRIORITIES = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)

# Task status (stored in tasks.status)
TASK_STATUS_PENDING = "pending"
TASK_STATUS_COMPLETED = "completed"
TASK_STATUSES = (TASK_STATUS_PENDING, TASK_STATUS_COMPLETED)

# Context entry source (stored in context_entries.source_type)
SOURCE_EMAIL = "email"
SOURCE_MESSAGE = "message"
SOURCE_NOTE = "note"
SOURCE_TYPES = (SOURCE_EMAIL, SOURCE_MESSAGE, SOURCE_NOTE)

# Color given to categories created implicitly by a task
DEFAULT_CATEGORY_COLOR = "gray"

# Categories created by setup_db on an empty database
DEFAULT_CATEGORIES = (
    ("Work", "blue"),
    ("Personal", "green"),
    ("Learning", "purple"),
    ("Health", "red"),
    ("Shopping", "orange"),
)

# Storage selector
STORAGE_KIND_DATABASE = "database"
STORAGE_KIND_MOCK = "mock"
STORAGE_KIND_UNTESTED = "untested"
DEFAULT_PROBE_TIMEOUT_SECONDS = 5.0

# How much recent context the AI routes send along
AI_ENHANCE_CONTEXT_LIMIT = 5
AI_PRIORITIZE_CONTEXT_LIMIT = 10
AI_SUGGESTIONS_CONTEXT_LIMIT = 5
