"""Category routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from taskmind.api.deps import get_storage
from taskmind.api.models import CategoryCreateRequest, CategoryResponse
from taskmind.domain.ports import Storage

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(storage: Storage = Depends(get_storage)) -> list[CategoryResponse]:
    """Categories, most used first."""
    return [CategoryResponse.model_validate(c) for c in await storage.get_categories()]


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    request: CategoryCreateRequest,
    storage: Storage = Depends(get_storage),
) -> CategoryResponse:
    category = await storage.create_category(request.to_new_category())
    return CategoryResponse.model_validate(category)
