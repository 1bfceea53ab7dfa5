"""
Transaction API endpoints.
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.api.responses import result_to_response
from finance_manager.transactions.db.session import get_session
from finance_manager.transactions.schemas.transactions import TXCount, TXCreateItem, TXFilter, TXReadItem, TXUpdateItem
from finance_manager.transactions.services.transaction_service import TransactionService

transaction_router = APIRouter(prefix="/transactions", tags=["transactions"])


@transaction_router.get("/count", response_model=TXCount)
async def count_transactions(
    filter_: Annotated[TXFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await TransactionService(session).get_count(filter_)
    return result_to_response(result, request)


@transaction_router.get("/{transaction_id}", response_model=TXReadItem)
async def get_transaction(transaction_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransactionService(session).get_by_id(transaction_id)
    return result_to_response(result, request)


@transaction_router.get("", response_model=List[TXReadItem])
async def list_transactions(
    filter_: Annotated[TXFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await TransactionService(session).get_paged(filter_)
    return result_to_response(result, request)


@transaction_router.post("", response_model=TXReadItem, status_code=status.HTTP_201_CREATED)
async def create_transaction(item: TXCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransactionService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@transaction_router.put("", response_model=TXReadItem)
async def update_transaction(item: TXUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransactionService(session).update(item)
    return result_to_response(result, request)


@transaction_router.delete("/{transaction_id}")
async def delete_transaction(transaction_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransactionService(session).delete(transaction_id)
    return result_to_response(result, request)
