# -*- coding: utf-8 -*-
"""
AI collaborator for task enhancement, context extraction, prioritization and suggestions.

Uses the OpenAI Chat Completions API with JSON output. API key from
OPENAI_API_KEY; do not log user data or the key. Calls are blocking: async
callers go through asyncio.to_thread.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from openai import OpenAI

from taskmind.domain.common.errors import AIServiceError
from taskmind.domain.models import ContextEntry, Task

logger = logging.getLogger(__name__)

DEFAULT_AI_MODEL = "gpt-4o"

# --- Prompt constants ---

ENHANCE_SYSTEM_PROMPT = (
    "You are an AI task management assistant. Analyze tasks and provide intelligent "
    "enhancements based on context. Always respond with valid JSON."
)
ENHANCE_USER_TEMPLATE = (
    "Analyze this task and provide enhancements based on the context provided.\n\n"
    "Task Details:\n"
    "- Title: {title}\n"
    "- Description: {description}\n"
    "- Category: {category}\n\n"
    "Context Information:\n{context_text}\n\n"
    "Respond with JSON:\n"
    '{{"enhancedDescription": "...", "suggestedCategory": "...", '
    '"suggestedPriority": "high|medium|low", "suggestedDeadline": "YYYY-MM-DD or relative time", '
    '"estimatedTime": "...", "reasoning": "..."}}'
)

CONTEXT_SYSTEM_PROMPT = (
    "You are an AI context analysis assistant. Extract actionable task management insights "
    "from daily context. Always respond with valid JSON."
)
CONTEXT_USER_TEMPLATE = (
    "Analyze the following daily context and extract actionable insights for task management.\n\n"
    "Context Data:\n{context_text}\n\n"
    "Respond with JSON:\n"
    '{{"extractedTasks": [{{"title": "...", "description": "...", "category": "...", '
    '"priority": "high|medium|low", "urgency": 1}}], '
    '"priorityUpdates": [{{"taskId": 0, "newPriority": "high|medium|low", "reasoning": "..."}}], '
    '"suggestions": [{{"type": "schedule|optimize|delegate", "message": "...", "actionable": true}}]}}'
)

PRIORITIZE_SYSTEM_PROMPT = (
    "You are an AI task prioritization assistant. Analyze tasks and context to determine "
    "optimal priority order. Always respond with valid JSON."
)
PRIORITIZE_USER_TEMPLATE = (
    "Reorder these tasks by priority (most urgent first) based on the context.\n\n"
    "Current Tasks:\n{tasks_text}\n\n"
    "Context:\n{context_text}\n\n"
    'Respond with JSON: {{"prioritizedTaskIds": [1, 3, 2], "reasoning": "..."}}'
)

SUGGESTIONS_SYSTEM_PROMPT = (
    "You are an AI productivity assistant. Provide actionable suggestions for better task "
    "management. Always respond with valid JSON."
)
SUGGESTIONS_USER_TEMPLATE = (
    "Based on the user's current tasks and recent context, provide 3-5 actionable suggestions.\n\n"
    "Current Tasks:\n{tasks_text}\n\n"
    "Recent Context:\n{context_text}\n\n"
    'Respond with JSON: {{"suggestions": [{{"type": "schedule|optimize|delegate|break", '
    '"message": "...", "actionable": true}}]}}'
)


def merge_prioritized(tasks: Sequence[Task], prioritized_ids: Sequence[Any]) -> list[Task]:
    """
    Order tasks by an AI-provided id list.

    Listed ids come first, in listed order; unknown and repeated ids are
    skipped. Tasks the list does not mention follow in their original order.

    Examples:
        ids [3, 1] over tasks [1, 2, 3] -> [3, 1, 2]
    """
    by_id = {t.id: t for t in tasks}
    ordered: list[Task] = []
    seen: set[int] = set()
    for raw_id in prioritized_ids:
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            continue
        if raw_id in by_id and raw_id not in seen:
            ordered.append(by_id[raw_id])
            seen.add(raw_id)
    ordered.extend(t for t in tasks if t.id not in seen)
    return ordered


def _context_text(entries: Sequence[ContextEntry], with_source: bool = False) -> str:
    if with_source:
        return "\n\n".join(f"[{e.source_type.upper()}] {e.content}" for e in entries)
    return "\n\n".join(e.content for e in entries)


class AIService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_AI_MODEL,
        client: Any = None,
    ) -> None:
        self._model = model
        if client is None and api_key and api_key.strip():
            client = OpenAI(api_key=api_key)
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None

    def _complete_json(self, system_prompt: str, user_prompt: str, temperature: float) -> dict[str, Any]:
        if self._client is None:
            raise AIServiceError("AI service is not configured (OPENAI_API_KEY missing)")
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=temperature,
            )
            content = response.choices[0].message.content or "{}"
            result = json.loads(content)
        except Exception as e:
            raise AIServiceError(f"AI completion failed: {type(e).__name__}") from e
        if not isinstance(result, dict):
            raise AIServiceError("AI completion did not return a JSON object")
        return result

    def enhance_task(
        self,
        title: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        context_entries: Sequence[ContextEntry] = (),
    ) -> dict[str, Any]:
        prompt = ENHANCE_USER_TEMPLATE.format(
            title=title,
            description=description or "No description provided",
            category=category or "Not specified",
            context_text=_context_text(context_entries),
        )
        return self._complete_json(ENHANCE_SYSTEM_PROMPT, prompt, temperature=0.7)

    def process_context(self, entries: Sequence[ContextEntry]) -> dict[str, Any]:
        prompt = CONTEXT_USER_TEMPLATE.format(context_text=_context_text(entries, with_source=True))
        result = self._complete_json(CONTEXT_SYSTEM_PROMPT, prompt, temperature=0.3)
        extracted = result.get("extractedTasks")
        # stored on context entries, which only hold task-shaped dicts
        result["extractedTasks"] = [t for t in extracted if isinstance(t, dict)] if isinstance(extracted, list) else []
        result.setdefault("priorityUpdates", [])
        result.setdefault("suggestions", [])
        return result

    def prioritize_tasks(self, tasks: Sequence[Task], context_entries: Sequence[ContextEntry]) -> list[Task]:
        """Return tasks in AI order; on any failure the original order is kept."""
        tasks_text = "\n".join(
            f"ID: {t.id}, Title: {t.title}, Category: {t.category}, Current Priority: {t.priority}"
            for t in tasks
        )
        prompt = PRIORITIZE_USER_TEMPLATE.format(
            tasks_text=tasks_text,
            context_text=_context_text(context_entries),
        )
        try:
            result = self._complete_json(PRIORITIZE_SYSTEM_PROMPT, prompt, temperature=0.2)
        except AIServiceError as e:
            logger.warning("AI prioritization unavailable, keeping original order: %s", e)
            return list(tasks)
        ids = result.get("prioritizedTaskIds")
        return merge_prioritized(tasks, ids if isinstance(ids, list) else [])

    def generate_suggestions(
        self,
        tasks: Sequence[Task],
        context_entries: Sequence[ContextEntry],
    ) -> list[dict[str, Any]]:
        """Return 3-5 suggestion dicts, or [] when the AI is unavailable."""
        tasks_text = "\n".join(f"{t.title} ({t.priority} priority, {t.category})" for t in list(tasks)[:10])
        prompt = SUGGESTIONS_USER_TEMPLATE.format(
            tasks_text=tasks_text,
            context_text=_context_text(list(context_entries)[:5]),
        )
        try:
            result = self._complete_json(SUGGESTIONS_SYSTEM_PROMPT, prompt, temperature=0.6)
        except AIServiceError as e:
            logger.warning("AI suggestions unavailable: %s", e)
            return []
        suggestions = result.get("suggestions")
        if not isinstance(suggestions, list):
            return []
        return [s for s in suggestions if isinstance(s, dict)]
