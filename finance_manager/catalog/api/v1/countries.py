"""
Country API endpoints.
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.countries import CNCreateItem, CNFilter, CNReadItem, CNUpdateItem
from finance_manager.catalog.services.country_service import CountryService
from finance_manager.common.api.responses import result_to_response

country_router = APIRouter(prefix="/countries", tags=["countries"])


@country_router.get("/{country_id}", response_model=CNReadItem)
async def get_country(country_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CountryService(session).get_by_id(country_id)
    return result_to_response(result, request)


@country_router.get("", response_model=List[CNReadItem])
async def list_countries(
    filter_: Annotated[CNFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await CountryService(session).get_paged(filter_)
    return result_to_response(result, request)


@country_router.post("", response_model=CNReadItem, status_code=status.HTTP_201_CREATED)
async def create_country(item: CNCreateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CountryService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@country_router.put("", response_model=CNReadItem)
async def update_country(item: CNUpdateItem, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CountryService(session).update(item)
    return result_to_response(result, request)


@country_router.delete("/{country_id}/soft")
async def soft_delete_country(country_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CountryService(session).soft_delete(country_id)
    return result_to_response(result, request)


@country_router.post("/{country_id}/restore")
async def restore_country(country_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CountryService(session).restore(country_id)
    return result_to_response(result, request)


@country_router.delete("/{country_id}")
async def delete_country(country_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await CountryService(session).delete(country_id)
    return result_to_response(result, request)
