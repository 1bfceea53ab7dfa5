"""
Transfer API endpoints.
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.api.responses import result_to_response
from finance_manager.transactions.db.session import get_session
from finance_manager.transactions.schemas.transfers import TRCount, TRCreateItem, TRFilter, TRReadItem, TRUpdateItem
from finance_manager.transactions.services.transfer_service import TransferService

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])


@transfer_router.get("/count", response_model=TRCount)
async def count_transfers(
    filter_: Annotated[TRFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await TransferService(session).get_count(filter_)
    return result_to_response(result, request)


@transfer_router.get("/{transfer_id}", response_model=TRReadItem)
async def get_transfer(transfer_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransferService(session).get_by_id(transfer_id)
    return result_to_response(result, request)


@transfer_router.get("", response_model=List[TRReadItem])
async def list_transfers(
    filter_: Annotated[TRFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await TransferService(session).get_paged(filter_)
    return result_to_response(result, request)


@transfer_router.post("", response_model=TRReadItem, status_code=status.HTTP_201_CREATED)
async def create_transfer(item: TRCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransferService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@transfer_router.put("", response_model=TRReadItem)
async def update_transfer(item: TRUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransferService(session).update(item)
    return result_to_response(result, request)


@transfer_router.delete("/{transfer_id}")
async def delete_transfer(transfer_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await TransferService(session).delete(transfer_id)
    return result_to_response(result, request)
