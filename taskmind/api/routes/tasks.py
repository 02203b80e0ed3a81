"""Task routes, including AI enhancement and prioritization."""
from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from taskmind.ai_service import AIService
from taskmind.api.deps import get_ai_service, get_storage
from taskmind.api.models import (
    EnhanceTaskRequest,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)
from taskmind.constants import AI_ENHANCE_CONTEXT_LIMIT, AI_PRIORITIZE_CONTEXT_LIMIT
from taskmind.domain.ports import Storage

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(storage: Storage = Depends(get_storage)) -> list[TaskResponse]:
    """All tasks, newest first."""
    return [TaskResponse.model_validate(t) for t in await storage.get_tasks()]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, storage: Storage = Depends(get_storage)) -> Any:
    task = await storage.get_task_by_id(task_id)
    if task is None:
        return JSONResponse(status_code=404, content={"error": "Task not found"})
    return TaskResponse.model_validate(task)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(request: TaskCreateRequest, storage: Storage = Depends(get_storage)) -> TaskResponse:
    task = await storage.create_task(request.to_new_task())
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    request: TaskUpdateRequest,
    storage: Storage = Depends(get_storage),
) -> TaskResponse:
    task = await storage.update_task(task_id, request.to_updates())
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int, storage: Storage = Depends(get_storage)) -> Response:
    await storage.delete_task(task_id)
    return Response(status_code=204)


@router.post("/ai-enhance")
async def enhance_task(
    request: EnhanceTaskRequest,
    storage: Storage = Depends(get_storage),
    ai: AIService = Depends(get_ai_service),
) -> dict[str, Any]:
    """Ask the AI to flesh out a draft task using the most recent context."""
    recent = list(await storage.get_context_entries())[:AI_ENHANCE_CONTEXT_LIMIT]
    return await asyncio.to_thread(
        ai.enhance_task,
        request.title,
        request.description,
        request.category,
        recent,
    )


@router.post("/prioritize", response_model=list[TaskResponse])
async def prioritize_tasks(
    storage: Storage = Depends(get_storage),
    ai: AIService = Depends(get_ai_service),
) -> list[TaskResponse]:
    tasks = await storage.get_tasks()
    recent = list(await storage.get_context_entries())[:AI_PRIORITIZE_CONTEXT_LIMIT]
    ordered = await asyncio.to_thread(ai.prioritize_tasks, tasks, recent)
    return [TaskResponse.model_validate(t) for t in ordered]
