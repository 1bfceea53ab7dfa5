"""
Account type API endpoints.

Besides the standard CRUD set:
- GET /account-types/all                    every type, unpaged
- GET /account-types/exists?code=           natural-key existence check
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.account_types import ATCreateItem, ATFilter, ATReadItem, ATUpdateItem
from finance_manager.catalog.services.account_type_service import AccountTypeService
from finance_manager.common.api.responses import result_to_response

account_type_router = APIRouter(prefix="/account-types", tags=["account-types"])


@account_type_router.get("/all", response_model=List[ATReadItem])
async def list_all_account_types(request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).get_all()
    return result_to_response(result, request)


@account_type_router.get("/exists")
async def account_type_exists(code: str = Query(..., min_length=1), session: AsyncSession = Depends(get_session)):
    return {"code": code, "exists": await AccountTypeService(session).exists_by_code(code)}


@account_type_router.get("/{account_type_id}", response_model=ATReadItem)
async def get_account_type(account_type_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).get_by_id(account_type_id)
    return result_to_response(result, request)


@account_type_router.get("", response_model=List[ATReadItem])
async def list_account_types(
    filter_: Annotated[ATFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await AccountTypeService(session).get_paged(filter_)
    return result_to_response(result, request)


@account_type_router.post("", response_model=ATReadItem, status_code=status.HTTP_201_CREATED)
async def create_account_type(item: ATCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@account_type_router.put("", response_model=ATReadItem)
async def update_account_type(item: ATUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).update(item)
    return result_to_response(result, request)


@account_type_router.delete("/{account_type_id}/soft")
async def soft_delete_account_type(account_type_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).soft_delete(account_type_id)
    return result_to_response(result, request)


@account_type_router.post("/{account_type_id}/restore")
async def restore_account_type(account_type_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).restore(account_type_id)
    return result_to_response(result, request)


@account_type_router.delete("/{account_type_id}")
async def delete_account_type(account_type_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountTypeService(session).delete(account_type_id)
    return result_to_response(result, request)
