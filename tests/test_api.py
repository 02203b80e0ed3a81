"""
HTTP API tests through FastAPI's TestClient, with in-memory storage and a fake AI client.
"""
from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from taskmind.ai_service import AIService
from taskmind.api.app import create_app
from taskmind.config import Settings
from taskmind.domain.storage_manager import StorageManager
from taskmind.infra.memory.storage_memory import MemoryStorage


class ScriptedCompletions:
    """Returns the queued JSON payloads in order."""

    def __init__(self, *payloads) -> None:
        self.payloads = list(payloads)

    def create(self, **kwargs):
        content = json.dumps(self.payloads.pop(0))
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _settings() -> Settings:
    return Settings(
        database_path=Path("unused.db"),
        probe_timeout=1.0,
        auto_init_schema=False,
        openai_api_key=None,
        openai_model="gpt-4o",
        host="127.0.0.1",
        port=5000,
        log_level="INFO",
    )


def _client(*ai_payloads, seed: bool = True, persistent_ok: bool = True) -> TestClient:
    def persistent():
        if not persistent_ok:
            raise OSError("database unreachable")
        return MemoryStorage(seed=seed)

    manager = StorageManager(persistent, MemoryStorage, probe_timeout=1.0)
    if ai_payloads:
        fake = SimpleNamespace(chat=SimpleNamespace(completions=ScriptedCompletions(*ai_payloads)))
        ai = AIService(client=fake)
    else:
        ai = AIService(api_key=None)
    return TestClient(create_app(_settings(), storage_manager=manager, ai_service=ai))


def test_list_tasks_uses_camel_case():
    with _client() as client:
        resp = client.get("/api/tasks")
        assert resp.status_code == 200
        tasks = resp.json()
        assert len(tasks) == 5
        assert "priorityScore" in tasks[0]
        assert "aiEnhanced" in tasks[0]
        assert "priority_score" not in tasks[0]


def test_get_task_not_found():
    with _client() as client:
        resp = client.get("/api/tasks/999")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Task not found"}


def test_create_update_delete_task():
    with _client(seed=False) as client:
        resp = client.post("/api/tasks", json={"title": "X", "category": "Work", "priority": "high"})
        assert resp.status_code == 201
        task = resp.json()
        assert 7 <= task["priorityScore"] <= 9
        assert task["status"] == "pending"

        resp = client.patch(f"/api/tasks/{task['id']}", json={"status": "completed"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "completed"
        assert resp.json()["title"] == "X"

        categories = client.get("/api/categories").json()
        assert [(c["name"], c["usageCount"]) for c in categories] == [("Work", 1)]

        assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
        assert client.get("/api/tasks").json() == []


def test_delete_missing_task_is_404():
    with _client() as client:
        resp = client.delete("/api/tasks/999")
        assert resp.status_code == 404
        assert "not found" in resp.json()["error"]
        assert len(client.get("/api/tasks").json()) == 5


def test_invalid_task_body_is_400():
    with _client() as client:
        resp = client.post("/api/tasks", json={"title": "X", "category": "Work", "priority": "urgent"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request body"


def test_patch_rejects_null_title():
    with _client() as client:
        resp = client.patch("/api/tasks/1", json={"title": None})
        assert resp.status_code == 400


def test_create_context_entry_ignores_processing_fields():
    with _client(seed=False) as client:
        resp = client.post(
            "/api/context",
            json={"content": "test", "sourceType": "note", "isProcessed": True, "processedInsights": {"a": 1}},
        )
        assert resp.status_code == 201
        entry = resp.json()
        assert entry["isProcessed"] is False
        assert entry["processedInsights"] is None
        assert entry["extractedTasks"] is None


def test_duplicate_category_is_500():
    with _client() as client:
        resp = client.post("/api/categories", json={"name": "Work", "color": "blue"})
        assert resp.status_code == 500
        assert "already exists" in resp.json()["error"]


def test_process_context_marks_entries():
    insights = {"extractedTasks": [{"title": "Call Bob"}], "priorityUpdates": [], "suggestions": []}
    with _client(insights, seed=False) as client:
        resp = client.post(
            "/api/context/process",
            json={"entries": [{"content": "Call Bob", "sourceType": "message"}]},
        )
        assert resp.status_code == 200
        assert resp.json() == insights
        entries = client.get("/api/context").json()
        assert len(entries) == 1
        assert entries[0]["isProcessed"] is True
        assert entries[0]["extractedTasks"] == [{"title": "Call Bob"}]


def test_ai_enhance_without_key_is_500():
    with _client() as client:
        resp = client.post("/api/tasks/ai-enhance", json={"title": "Write report"})
        assert resp.status_code == 500
        assert "error" in resp.json()


def test_ai_enhance_with_client():
    payload = {"enhancedDescription": "Outline first", "suggestedPriority": "high"}
    with _client(payload) as client:
        resp = client.post("/api/tasks/ai-enhance", json={"title": "Write report", "category": "Work"})
        assert resp.status_code == 200
        assert resp.json() == payload


def test_prioritize_reorders_tasks():
    with _client({"prioritizedTaskIds": [4, 2]}) as client:
        resp = client.post("/api/tasks/prioritize")
        assert resp.status_code == 200
        assert [t["id"] for t in resp.json()] == [4, 2, 5, 1, 3]


def test_suggestions_empty_without_ai():
    with _client() as client:
        resp = client.get("/api/ai/suggestions")
        assert resp.status_code == 200
        assert resp.json() == []


@pytest.mark.parametrize("persistent_ok, kind", [(True, "database"), (False, "mock")])
def test_storage_info(persistent_ok, kind):
    with _client(persistent_ok=persistent_ok) as client:
        resp = client.get("/api/storage")
        assert resp.status_code == 200
        assert resp.json()["kind"] == kind
        assert resp.json()["message"]


def test_reprobe_reports_kind():
    with _client(persistent_ok=False) as client:
        resp = client.post("/api/storage/reprobe")
        assert resp.status_code == 200
        assert resp.json()["kind"] == "mock"


def test_stats():
    with _client() as client:
        stats = client.get("/api/stats").json()
        assert stats["totalTasks"] == 5
        assert stats["completedTasks"] == 1
        assert stats["totalCategories"] == 5


def test_patch_null_ai_enhanced_is_400_and_list_still_works():
    with _client() as client:
        resp = client.patch("/api/tasks/1", json={"aiEnhanced": None})
        assert resp.status_code == 400
        resp = client.get("/api/tasks")
        assert resp.status_code == 200
        assert [t for t in resp.json() if t["id"] == 1][0]["aiEnhanced"] is True


def test_process_context_with_malformed_extracted_tasks():
    with _client({"extractedTasks": {"title": "x"}}, seed=False) as client:
        resp = client.post(
            "/api/context/process",
            json={"entries": [{"content": "Call Bob", "sourceType": "message"}]},
        )
        assert resp.status_code == 200
        assert resp.json()["extractedTasks"] == []
        resp = client.get("/api/context")
        assert resp.status_code == 200
        assert resp.json()[0]["extractedTasks"] == []
        assert resp.json()[0]["isProcessed"] is True
