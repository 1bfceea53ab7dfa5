"""
Registry holder API endpoints.
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.registry_holders import RHCreateItem, RHFilter, RHReadItem, RHUpdateItem
from finance_manager.catalog.services.registry_holder_service import RegistryHolderService
from finance_manager.common.api.responses import result_to_response

registry_holder_router = APIRouter(prefix="/registry-holders", tags=["registry-holders"])


@registry_holder_router.get("/{holder_id}", response_model=RHReadItem)
async def get_registry_holder(holder_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await RegistryHolderService(session).get_by_id(holder_id)
    return result_to_response(result, request)


@registry_holder_router.get("", response_model=List[RHReadItem])
async def list_registry_holders(
    filter_: Annotated[RHFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await RegistryHolderService(session).get_paged(filter_)
    return result_to_response(result, request)


@registry_holder_router.post("", response_model=RHReadItem, status_code=status.HTTP_201_CREATED)
async def create_registry_holder(item: RHCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await RegistryHolderService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@registry_holder_router.put("", response_model=RHReadItem)
async def update_registry_holder(item: RHUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await RegistryHolderService(session).update(item)
    return result_to_response(result, request)


@registry_holder_router.delete("/{holder_id}")
async def delete_registry_holder(holder_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await RegistryHolderService(session).delete(holder_id)
    return result_to_response(result, request)
