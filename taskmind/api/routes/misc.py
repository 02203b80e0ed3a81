"""AI suggestions, storage status and stats."""
from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends

from taskmind.ai_service import AIService
from taskmind.api.deps import get_ai_service, get_storage, get_storage_manager
from taskmind.api.models import StatsResponse, StorageInfoResponse
from taskmind.constants import AI_SUGGESTIONS_CONTEXT_LIMIT
from taskmind.domain.ports import Storage
from taskmind.domain.storage_manager import StorageManager

router = APIRouter(prefix="/api", tags=["misc"])


@router.get("/ai/suggestions")
async def get_suggestions(
    storage: Storage = Depends(get_storage),
    ai: AIService = Depends(get_ai_service),
) -> list[dict[str, Any]]:
    tasks = await storage.get_tasks()
    recent = list(await storage.get_context_entries())[:AI_SUGGESTIONS_CONTEXT_LIMIT]
    return await asyncio.to_thread(ai.generate_suggestions, tasks, recent)


@router.get("/storage", response_model=StorageInfoResponse)
async def get_storage_info(manager: StorageManager = Depends(get_storage_manager)) -> StorageInfoResponse:
    return StorageInfoResponse.model_validate(manager.get_storage_info())


@router.post("/storage/reprobe", response_model=StorageInfoResponse)
async def reprobe_storage(manager: StorageManager = Depends(get_storage_manager)) -> StorageInfoResponse:
    """Retry the database; switches back from mock storage if it answers now."""
    return StorageInfoResponse.model_validate(await manager.reprobe())


@router.get("/stats", response_model=StatsResponse)
async def get_stats(storage: Storage = Depends(get_storage)) -> StatsResponse:
    return StatsResponse.model_validate(await storage.get_stats())
