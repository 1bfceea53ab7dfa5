"""
Replicated account endpoints (read-only).
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.api.responses import result_to_response
from finance_manager.transactions.db.session import get_session
from finance_manager.transactions.schemas.accounts import TAFilter, TAReadItem
from finance_manager.transactions.services.transaction_account_service import TransactionAccountService

transaction_account_router = APIRouter(prefix="/transaction-accounts", tags=["transaction-accounts"])


@transaction_account_router.get("/{account_id}", response_model=TAReadItem)
async def get_transaction_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransactionAccountService(session).get_by_id(account_id)
    return result_to_response(result, request)


@transaction_account_router.get("", response_model=List[TAReadItem])
async def list_transaction_accounts(
    filter_: Annotated[TAFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await TransactionAccountService(session).get_paged(filter_)
    return result_to_response(result, request)
