"""
Account type service.

Design Notes:
- code is the natural key, unique case-insensitively
- Hard delete is refused while accounts reference the type
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import AccountType
from finance_manager.catalog.errors import AccountTypeErrors
from finance_manager.catalog.repositories.account_types import AccountTypeRepository
from finance_manager.catalog.schemas.account_types import ATCreateItem, ATFilter, ATReadItem, ATUpdateItem
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class AccountTypeService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = AccountTypeRepository(session)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, account_type_id: UUID) -> Result[ATReadItem]:
        account_type = await self.repository.get_by_id(account_type_id, disable_tracking=True)
        if account_type is None:
            return Result.fail(AccountTypeErrors.not_found(account_type_id))
        return Result.ok(ATReadItem.model_validate(account_type))

    async def get_paged(self, filter_: ATFilter) -> Result[List[ATReadItem]]:
        account_types = await self.repository.get_paged(filter_)
        return Result.ok([ATReadItem.model_validate(t) for t in account_types])

    async def get_all(self) -> Result[List[ATReadItem]]:
        account_types = await self.repository.get_all()
        return Result.ok([ATReadItem.model_validate(t) for t in account_types])

    async def is_code_unique(self, code: str, exclude_id: Optional[UUID] = None) -> bool:
        return await self.repository.is_code_unique(code, exclude_id)

    async def exists_by_code(self, code: str) -> bool:
        return await self.repository.exists_by_code(code)

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: ATCreateItem) -> Result[ATReadItem]:
        if not item.code:
            return Result.fail(AccountTypeErrors.code_required())
        if not await self.repository.is_code_unique(item.code):
            return Result.fail(AccountTypeErrors.code_exists(item.code))

        account_type = await self.repository.add(AccountType(code=item.code, description=item.description))
        await self.session.commit()

        logger.info("Account type created", id=str(account_type.id), code=account_type.code)
        return Result.ok(ATReadItem.model_validate(account_type))

    async def update(self, item: ATUpdateItem) -> Result[ATReadItem]:
        account_type = await self.repository.get_by_id(item.id)
        if account_type is None:
            return Result.fail(AccountTypeErrors.not_found(item.id))

        changes = {}
        if item.code is not None and item.code != account_type.code:
            if not item.code:
                return Result.fail(AccountTypeErrors.code_required())
            if not await self.repository.is_code_unique(item.code, exclude_id=account_type.id):
                return Result.fail(AccountTypeErrors.code_exists(item.code))
            changes["code"] = item.code

        if item.description is not None and item.description != account_type.description:
            changes["description"] = item.description

        if changes:
            for field, value in changes.items():
                setattr(account_type, field, value)
            await self.session.commit()
            logger.info("Account type updated", id=str(account_type.id), fields=sorted(changes))

        return Result.ok(ATReadItem.model_validate(account_type))

    async def soft_delete(self, account_type_id: UUID) -> Result[None]:
        account_type = await self.repository.get_by_id(account_type_id)
        if account_type is None:
            return Result.fail(AccountTypeErrors.not_found(account_type_id))
        if account_type.is_deleted:
            return Result.ok()

        account_type.mark_as_deleted()
        await self.session.commit()
        logger.info("Account type soft deleted", id=str(account_type_id))
        return Result.ok()

    async def restore(self, account_type_id: UUID) -> Result[None]:
        account_type = await self.repository.get_by_id(account_type_id)
        if account_type is None:
            return Result.fail(AccountTypeErrors.not_found(account_type_id))
        if not account_type.is_deleted:
            return Result.ok()

        account_type.restore()
        await self.session.commit()
        logger.info("Account type restored", id=str(account_type_id))
        return Result.ok()

    async def delete(self, account_type_id: UUID) -> Result[None]:
        account_type = await self.repository.get_by_id(account_type_id)
        if account_type is None:
            return Result.fail(AccountTypeErrors.not_found(account_type_id))
        if not await self.repository.can_be_deleted(account_type_id):
            return Result.fail(AccountTypeErrors.in_use(account_type_id))

        await self.repository.delete(account_type)
        await self.session.commit()
        logger.info("Account type deleted", id=str(account_type_id))
        return Result.ok()
