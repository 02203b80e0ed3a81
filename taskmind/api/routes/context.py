"""Context entry routes and AI context processing."""
from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends

from taskmind.ai_service import AIService
from taskmind.api.deps import get_ai_service, get_storage
from taskmind.api.models import ContextCreateRequest, ContextEntryResponse, ProcessContextRequest
from taskmind.domain.ports import Storage

router = APIRouter(prefix="/api/context", tags=["context"])


@router.get("", response_model=list[ContextEntryResponse])
async def list_context_entries(storage: Storage = Depends(get_storage)) -> list[ContextEntryResponse]:
    return [ContextEntryResponse.model_validate(e) for e in await storage.get_context_entries()]


@router.post("", response_model=ContextEntryResponse, status_code=201)
async def create_context_entry(
    request: ContextCreateRequest,
    storage: Storage = Depends(get_storage),
) -> ContextEntryResponse:
    entry = await storage.create_context_entry(request.to_new_entry())
    return ContextEntryResponse.model_validate(entry)


@router.post("/process")
async def process_context(
    request: ProcessContextRequest,
    storage: Storage = Depends(get_storage),
    ai: AIService = Depends(get_ai_service),
) -> dict[str, Any]:
    """
    Store the submitted entries, run them through the AI, and write the
    insights back onto every entry. Returns the insights.
    """
    entries = []
    for item in request.entries:
        entries.append(await storage.create_context_entry(item.to_new_entry()))

    insights = await asyncio.to_thread(ai.process_context, entries)

    for entry in entries:
        await storage.update_context_entry(
            entry.id,
            {
                "processed_insights": insights,
                "extracted_tasks": insights.get("extractedTasks"),
                "is_processed": True,
            },
        )
    return insights
