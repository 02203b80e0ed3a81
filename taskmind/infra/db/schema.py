# taskmind/infra/db/schema.py
"""Tables for tasks, context entries and categories. Idempotent."""
from __future__ import annotations

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    category TEXT NOT NULL,
    priority TEXT NOT NULL CHECK (priority IN ('high', 'medium', 'low')),
    priority_score INTEGER DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'pending' CHECK (status IN ('pending', 'completed')),
    deadline TEXT,
    estimated_time TEXT,
    ai_enhanced INTEGER NOT NULL DEFAULT 0,
    ai_suggestions TEXT,            -- JSON
    tags TEXT,                      -- JSON array
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS category_idx ON tasks(category);
CREATE INDEX IF NOT EXISTS priority_idx ON tasks(priority);
CREATE INDEX IF NOT EXISTS status_idx ON tasks(status);

CREATE TABLE IF NOT EXISTS context_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content TEXT NOT NULL,
    source_type TEXT NOT NULL CHECK (source_type IN ('email', 'message', 'note')),
    processed_insights TEXT,        -- JSON
    extracted_tasks TEXT,           -- JSON array
    is_processed INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS source_type_idx ON context_entries(source_type);
CREATE INDEX IF NOT EXISTS processed_idx ON context_entries(is_processed);

CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    color TEXT NOT NULL,
    usage_count INTEGER DEFAULT 0,
    created_at TEXT NOT NULL
);
"""
