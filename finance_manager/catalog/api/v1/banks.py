"""
Bank API endpoints.

Besides the standard CRUD set:
- GET /banks/{id}/accounts-count?include_archived=&include_deleted=
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.banks import BKAccountsCount, BKCreateItem, BKFilter, BKReadItem, BKUpdateItem
from finance_manager.catalog.services.bank_service import BankService
from finance_manager.common.api.responses import result_to_response

bank_router = APIRouter(prefix="/banks", tags=["banks"])


@bank_router.get("/{bank_id}/accounts-count", response_model=BKAccountsCount)
async def get_bank_accounts_count(
    bank_id: UUID,
    request: Request,
    include_archived: bool = Query(False),
    include_deleted: bool = Query(False),
    session: AsyncSession = Depends(get_session),
    ):
    result = await BankService(session).get_accounts_count(bank_id, include_archived, include_deleted)
    return result_to_response(result, request)


@bank_router.get("/{bank_id}", response_model=BKReadItem)
async def get_bank(
    bank_id: UUID,
    request: Request,
    include_related: bool = Query(True, description="Embed the country"),
    session: AsyncSession = Depends(get_session),
    ):
    result = await BankService(session).get_by_id(bank_id, include_related)
    return result_to_response(result, request)


@bank_router.get("", response_model=List[BKReadItem])
async def list_banks(
    filter_: Annotated[BKFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await BankService(session).get_paged(filter_)
    return result_to_response(result, request)


@bank_router.post("", response_model=BKReadItem, status_code=status.HTTP_201_CREATED)
async def create_bank(item: BKCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await BankService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@bank_router.put("", response_model=BKReadItem)
async def update_bank(item: BKUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await BankService(session).update(item)
    return result_to_response(result, request)


@bank_router.delete("/{bank_id}/soft")
async def soft_delete_bank(bank_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await BankService(session).soft_delete(bank_id)
    return result_to_response(result, request)


@bank_router.post("/{bank_id}/restore")
async def restore_bank(bank_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await BankService(session).restore(bank_id)
    return result_to_response(result, request)


@bank_router.delete("/{bank_id}")
async def delete_bank(bank_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await BankService(session).delete(bank_id)
    return result_to_response(result, request)
