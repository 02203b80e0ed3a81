"""FastAPI dependencies: the storage manager and AI service live on app.state."""
from __future__ import annotations

from fastapi import Depends, Request

from taskmind.ai_service import AIService
from taskmind.domain.ports import Storage
from taskmind.domain.storage_manager import StorageManager


def get_storage_manager(request: Request) -> StorageManager:
    return request.app.state.storage_manager


async def get_storage(manager: StorageManager = Depends(get_storage_manager)) -> Storage:
    return await manager.get_storage()


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service
