"""
Tests for AIService with a fake OpenAI client (no network).
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from taskmind.ai_service import AIService, merge_prioritized
from taskmind.domain.common.errors import AIServiceError
from taskmind.domain.models import ContextEntry, Task

NOW = datetime(2025, 7, 4, 12, 0, tzinfo=timezone.utc)


def _task(task_id: int, title: str = "t") -> Task:
    return Task(
        id=task_id,
        title=title,
        description=None,
        category="Work",
        priority="medium",
        priority_score=5,
        status="pending",
        deadline=None,
        estimated_time=None,
        ai_enhanced=False,
        ai_suggestions=None,
        tags=None,
        created_at=NOW,
        updated_at=NOW,
    )


def _entry(entry_id: int, content: str) -> ContextEntry:
    return ContextEntry(
        id=entry_id,
        content=content,
        source_type="email",
        processed_insights=None,
        extracted_tasks=None,
        is_processed=False,
        created_at=NOW,
    )


class FakeCompletions:
    def __init__(self, content=None, error=None) -> None:
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(payload=None, error=None):
    completions = FakeCompletions(json.dumps(payload) if payload is not None else None, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_merge_prioritized_puts_listed_first():
    tasks = [_task(1), _task(2), _task(3)]
    assert [t.id for t in merge_prioritized(tasks, [3, 1])] == [3, 1, 2]


def test_merge_prioritized_skips_unknown_and_repeated_ids():
    tasks = [_task(1), _task(2), _task(3)]
    ordered = merge_prioritized(tasks, [2, 99, 2, "1", True, 3])
    assert [t.id for t in ordered] == [2, 3, 1]


def test_unconfigured_service():
    ai = AIService(api_key=None)
    assert ai.available is False
    with pytest.raises(AIServiceError):
        ai.enhance_task("Write report")
    with pytest.raises(AIServiceError):
        ai.process_context([_entry(1, "x")])
    tasks = [_task(1), _task(2)]
    assert ai.prioritize_tasks(tasks, []) == tasks
    assert ai.generate_suggestions(tasks, []) == []


def test_enhance_task_returns_json_and_sends_context():
    payload = {"enhancedDescription": "Do it well", "suggestedPriority": "high"}
    client, completions = _client(payload)
    ai = AIService(client=client, model="test-model")
    result = ai.enhance_task("Write report", None, "Work", [_entry(1, "Boss wants it Friday")])
    assert result == payload
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["response_format"] == {"type": "json_object"}
    assert "Boss wants it Friday" in call["messages"][1]["content"]
    assert "No description provided" in call["messages"][1]["content"]


def test_process_context_fills_missing_lists():
    client, completions = _client({"extractedTasks": [{"title": "Call Bob"}]})
    ai = AIService(client=client)
    result = ai.process_context([_entry(1, "Call Bob tomorrow")])
    assert result["extractedTasks"] == [{"title": "Call Bob"}]
    assert result["priorityUpdates"] == []
    assert result["suggestions"] == []
    assert "[EMAIL] Call Bob tomorrow" in completions.calls[0]["messages"][1]["content"]


def test_prioritize_tasks_uses_returned_ids():
    client, _ = _client({"prioritizedTaskIds": [2], "reasoning": "due first"})
    ai = AIService(client=client)
    tasks = [_task(1), _task(2), _task(3)]
    assert [t.id for t in ai.prioritize_tasks(tasks, [])] == [2, 1, 3]


def test_prioritize_tasks_keeps_order_on_error():
    client, _ = _client(error=RuntimeError("rate limited"))
    ai = AIService(client=client)
    tasks = [_task(1), _task(2)]
    assert ai.prioritize_tasks(tasks, []) == tasks


def test_invalid_json_raises_service_error():
    client, completions = _client()
    completions.content = "not json"
    ai = AIService(client=client)
    with pytest.raises(AIServiceError):
        ai.enhance_task("x")


def test_generate_suggestions_filters_non_dicts():
    client, _ = _client({"suggestions": [{"type": "break", "message": "Rest"}, "junk"]})
    ai = AIService(client=client)
    assert ai.generate_suggestions([_task(1)], []) == [{"type": "break", "message": "Rest"}]


@pytest.mark.parametrize(
    "extracted, expected",
    [
        ({"title": "x"}, []),
        (["x", {"title": "y"}], [{"title": "y"}]),
        (None, []),
    ],
)
def test_process_context_normalizes_extracted_tasks(extracted, expected):
    client, _ = _client({"extractedTasks": extracted})
    ai = AIService(client=client)
    assert ai.process_context([_entry(1, "x")])["extractedTasks"] == expected
