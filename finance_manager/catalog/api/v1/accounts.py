"""
Account API endpoints.

- GET    /accounts/{id}                     account (with related data by default)
- GET    /accounts                          paged, filtered list
- GET    /accounts/default/{holder_id}      default account of a registry holder
- POST   /accounts                          create
- PUT    /accounts                          partial update (id in body)
- DELETE /accounts/{id}/soft                soft delete
- POST   /accounts/{id}/restore             restore a soft-deleted account
- DELETE /accounts/{id}                     hard delete
- POST   /accounts/{id}/archive | unarchive
- POST   /accounts/{id}/set-default
- POST   /accounts/{id}/unset-default?replacement_id=...
"""
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.session import get_session
from finance_manager.catalog.schemas.accounts import ACCreateItem, ACFilter, ACReadItem, ACUpdateItem
from finance_manager.catalog.services.account_service import AccountService
from finance_manager.common.api.responses import result_to_response
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)

account_router = APIRouter(prefix="/accounts", tags=["accounts"])


# =============================================================================
# READ
# =============================================================================

@account_router.get("/default/{registry_holder_id}", response_model=ACReadItem)
async def get_default_account(
    registry_holder_id: UUID,
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    """Get the default account of a registry holder (404 ACCOUNT_DEFAULT_NOT_FOUND if none)."""
    result = await AccountService(session).get_default_account(registry_holder_id)
    return result_to_response(result, request)


@account_router.get("/{account_id}", response_model=ACReadItem)
async def get_account(
    account_id: UUID,
    request: Request,
    include_related: bool = Query(True, description="Embed holder, type, currency and bank"),
    session: AsyncSession = Depends(get_session),
    ):
    result = await AccountService(session).get_by_id(account_id, include_related)
    return result_to_response(result, request)


@account_router.get("", response_model=List[ACReadItem])
async def list_accounts(
    filter_: Annotated[ACFilter, Query()],
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    result = await AccountService(session).get_paged(filter_)
    return result_to_response(result, request)


# =============================================================================
# CREATE / UPDATE
# =============================================================================

@account_router.post("", response_model=ACReadItem, status_code=status.HTTP_201_CREATED)
async def create_account(
    item: ACCreateItem,
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    logger.info("Creating account", registry_holder_id=str(item.registry_holder_id), is_default=item.is_default)
    result = await AccountService(session).create(item)
    return result_to_response(result, request, status.HTTP_201_CREATED)


@account_router.put("", response_model=ACReadItem)
async def update_account(
    item: ACUpdateItem,
    request: Request,
    session: AsyncSession = Depends(get_session),
    ):
    logger.info("Updating account", id=str(item.id))
    result = await AccountService(session).update(item)
    return result_to_response(result, request)


# =============================================================================
# DELETE / RESTORE
# =============================================================================

@account_router.delete("/{account_id}/soft")
async def soft_delete_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountService(session).soft_delete(account_id)
    return result_to_response(result, request)


@account_router.post("/{account_id}/restore")
async def restore_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountService(session).restore(account_id)
    return result_to_response(result, request)


@account_router.delete("/{account_id}")
async def delete_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountService(session).delete(account_id)
    return result_to_response(result, request)


# =============================================================================
# ARCHIVE / DEFAULT FLAG
# =============================================================================

@account_router.post("/{account_id}/archive")
async def archive_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountService(session).archive(account_id)
    return result_to_response(result, request)


@account_router.post("/{account_id}/unarchive")
async def unarchive_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountService(session).unarchive(account_id)
    return result_to_response(result, request)


@account_router.post("/{account_id}/set-default")
async def set_default_account(account_id: UUID, request: Request, session: AsyncSession = Depends(get_session)):
    result = await AccountService(session).set_as_default(account_id)
    return result_to_response(result, request)


@account_router.post("/{account_id}/unset-default")
async def unset_default_account(
    account_id: UUID,
    request: Request,
    replacement_id: UUID = Query(..., description="Account that becomes the new default"),
    session: AsyncSession = Depends(get_session),
    ):
    result = await AccountService(session).unset_as_default(account_id, replacement_id)
    return result_to_response(result, request)
