"""
Category API endpoints.

Besides the standard CRUD set:
- GET /categories/registry-holder/{registry_holder_id}?include_related=
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.categories import CTCreateItem, CTFilter, CTReadItem, CTUpdateItem
from finance_manager.catalog.services.category_service import CategoryService
from finance_manager.common.api.responses import result_to_response

category_router = APIRouter(prefix="/categories", tags=["categories"])


@category_router.get("/registry-holder/{registry_holder_id}", response_model=List[CTReadItem])
async def list_holder_categories(
    registry_holder_id: UUID,
    request: Request,
    include_related: bool = Query(False),
    session: AsyncSession = Depends(get_session),
    ):
    result = await CategoryService(session).get_by_registry_holder_id(registry_holder_id, include_related)
    return result_to_response(result, request)


@category_router.get("/{category_id}", response_model=CTReadItem)
async def get_category(
    category_id: UUID,
    request: Request,
    include_related: bool = Query(True, description="Embed the registry holder and parent"),
    session: AsyncSession = Depends(get_session),
    ):
    result = await CategoryService(session).get_by_id(category_id, include_related)
    return result_to_response(result, request)


@category_router.get("", response_model=List[CTReadItem])
async def list_categories(
    filter_: Annotated[CTFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await CategoryService(session).get_paged(filter_)
    return result_to_response(result, request)


@category_router.post("", response_model=CTReadItem, status_code=status.HTTP_201_CREATED)
async def create_category(item: CTCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CategoryService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@category_router.put("", response_model=CTReadItem)
async def update_category(item: CTUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CategoryService(session).update(item)
    return result_to_response(result, request)


@category_router.delete("/{category_id}/soft")
async def soft_delete_category(category_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CategoryService(session).soft_delete(category_id)
    return result_to_response(result, request)


@category_router.post("/{category_id}/restore")
async def restore_category(category_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CategoryService(session).restore(category_id)
    return result_to_response(result, request)


@category_router.delete("/{category_id}")
async def delete_category(category_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CategoryService(session).delete(category_id)
    return result_to_response(result, request)
