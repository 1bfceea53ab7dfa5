"""
Currency API endpoints.
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.currencies import CUCreateItem, CUFilter, CUReadItem, CUUpdateItem
from finance_manager.catalog.services.currency_service import CurrencyService
from finance_manager.common.api.responses import result_to_response
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)

currency_router = APIRouter(prefix="/currencies", tags=["currencies"])


@currency_router.get("/{currency_id}", response_model=CUReadItem)
async def get_currency(currency_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CurrencyService(session).get_by_id(currency_id)
    return result_to_response(result, request)


@currency_router.get("", response_model=List[CUReadItem])
async def list_currencies(
    filter_: Annotated[CUFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await CurrencyService(session).get_paged(filter_)
    return result_to_response(result, request)


@currency_router.post("", response_model=CUReadItem, status_code=status.HTTP_201_CREATED)
async def create_currency(item: CUCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    logger.info(f"Creating currency {item.char_code}")
    result = await CurrencyService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@currency_router.put("", response_model=CUReadItem)
async def update_currency(item: CUUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CurrencyService(session).update(item)
    return result_to_response(result, request)


@currency_router.delete("/{currency_id}/soft")
async def soft_delete_currency(currency_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CurrencyService(session).soft_delete(currency_id)
    return result_to_response(result, request)


@currency_router.post("/{currency_id}/restore")
async def restore_currency(currency_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CurrencyService(session).restore(currency_id)
    return result_to_response(result, request)


@currency_router.delete("/{currency_id}")
async def delete_currency(currency_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CurrencyService(session).delete(currency_id)
    return result_to_response(result, request)
