"""
Exchange rate API endpoints.

Besides the standard CRUD set:
- POST   /exchange-rates/range                  all-or-nothing batch insert
- GET    /exchange-rates/last-date/{currency_id}
- DELETE /exchange-rates/by-period              bulk delete for a date range
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.exchange_rates import (
    ERCreateItem,
    ERCreateRange,
    ERDeleteByPeriod,
    ERDeletedCount,
    ERFilter,
    ERLastDate,
    ERReadItem,
    ERUpdateItem,
    )
from finance_manager.catalog.services.exchange_rate_service import ExchangeRateService
from finance_manager.common.api.responses import result_to_response

exchange_rate_router = APIRouter(prefix="/exchange-rates", tags=["exchange-rates"])


@exchange_rate_router.get("/last-date/{currency_id}", response_model=ERLastDate)
async def get_last_rate_date(currency_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await ExchangeRateService(session).get_last_rate_date(currency_id)
    return result_to_response(result, request)


@exchange_rate_router.get("/{rate_id}", response_model=ERReadItem)
async def get_exchange_rate(
    rate_id: UUID,
    request: Request,
    include_related: bool = Query(True, description="Embed the currency"),
    session: AsyncSession = Depends(get_session),
    ):
    result = await ExchangeRateService(session).get_by_id(rate_id, include_related)
    return result_to_response(result, request)


@exchange_rate_router.get("", response_model=List[ERReadItem])
async def list_exchange_rates(
    filter_: Annotated[ERFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await ExchangeRateService(session).get_paged(filter_)
    return result_to_response(result, request)


@exchange_rate_router.post("", response_model=ERReadItem, status_code=status.HTTP_201_CREATED)
async def create_exchange_rate(item: ERCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await ExchangeRateService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@exchange_rate_router.post("/range", response_model=List[ERReadItem], status_code=status.HTTP_201_CREATED)
async def create_exchange_rate_range(body: ERCreateRange, request: Request, session: AsyncSession = Depends(get_session)):
    result = await ExchangeRateService(session).add_range(body.items)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@exchange_rate_router.put("", response_model=ERReadItem)
async def update_exchange_rate(item: ERUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await ExchangeRateService(session).update(item)
    return result_to_response(result, request)


@exchange_rate_router.delete("/by-period", response_model=ERDeletedCount)
async def delete_exchange_rates_by_period(
    body: ERDeleteByPeriod,
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await ExchangeRateService(session).delete_by_period(body.currency_id, body.date_from, body.date_to)
    return result_to_response(result, request)


@exchange_rate_router.delete("/{rate_id}")
async def delete_exchange_rate(rate_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await ExchangeRateService(session).delete(rate_id)
    return result_to_response(result, request)
