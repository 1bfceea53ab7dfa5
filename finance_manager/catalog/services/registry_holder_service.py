"""
Registry holder service.

Design Notes:
- telegram_id is the natural key: non-zero and unique
- Deleting a holder is refused while it owns categories or accounts
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import RegistryHolder
from finance_manager.catalog.errors import RegistryHolderErrors
from finance_manager.catalog.repositories.registry_holders import RegistryHolderRepository
from finance_manager.catalog.schemas.registry_holders import RHCreateItem, RHFilter, RHReadItem, RHUpdateItem
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class RegistryHolderService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = RegistryHolderRepository(session)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, holder_id: UUID) -> Result[RHReadItem]:
        holder = await self.repository.get_by_id(holder_id, disable_tracking=True)
        if holder is None:
            return Result.fail(RegistryHolderErrors.not_found(holder_id))
        return Result.ok(RHReadItem.model_validate(holder))

    async def get_paged(self, filter_: RHFilter) -> Result[List[RHReadItem]]:
        holders = await self.repository.get_paged(filter_)
        return Result.ok([RHReadItem.model_validate(h) for h in holders])

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: RHCreateItem) -> Result[RHReadItem]:
        if not item.telegram_id:
            return Result.fail(RegistryHolderErrors.telegram_id_required())
        if not await self.repository.is_telegram_id_unique(item.telegram_id):
            return Result.fail(RegistryHolderErrors.telegram_id_exists(item.telegram_id))

        holder = await self.repository.add(RegistryHolder(telegram_id=item.telegram_id, role=item.role))
        await self.session.commit()

        logger.info("Registry holder created", id=str(holder.id), telegram_id=holder.telegram_id)
        return Result.ok(RHReadItem.model_validate(holder))

    async def update(self, item: RHUpdateItem) -> Result[RHReadItem]:
        holder = await self.repository.get_by_id(item.id)
        if holder is None:
            return Result.fail(RegistryHolderErrors.not_found(item.id))

        changed = False
        if item.telegram_id is not None and item.telegram_id != holder.telegram_id:
            if item.telegram_id == 0:
                return Result.fail(RegistryHolderErrors.telegram_id_required())
            if not await self.repository.is_telegram_id_unique(item.telegram_id, exclude_id=holder.id):
                return Result.fail(RegistryHolderErrors.telegram_id_exists(item.telegram_id))
            holder.telegram_id = item.telegram_id
            changed = True

        if item.role is not None and item.role != holder.role:
            holder.role = item.role
            changed = True

        if changed:
            await self.session.commit()
            logger.info("Registry holder updated", id=str(holder.id))

        return Result.ok(RHReadItem.model_validate(holder))

    async def delete(self, holder_id: UUID) -> Result[None]:
        holder = await self.repository.get_by_id(holder_id, include_related=False)
        if holder is None:
            return Result.fail(RegistryHolderErrors.not_found(holder_id))
        if not await self.repository.can_be_deleted(holder_id):
            return Result.fail(RegistryHolderErrors.in_use(holder_id))

        await self.repository.delete(holder)
        await self.session.commit()

        logger.info("Registry holder deleted", id=str(holder_id))
        return Result.ok()
