"""Registry holder persistence."""
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, select

from finance_manager.catalog.db.models import Account, Category, RegistryHolder
from finance_manager.catalog.schemas.registry_holders import RHFilter
from finance_manager.common.db.repository import BaseRepository


class RegistryHolderRepository(BaseRepository[RegistryHolder, RHFilter]):
    model = RegistryHolder

    def _apply_filter(self, stmt: Select, filter_: RHFilter) -> Select:
        if filter_.telegram_id is not None:
            stmt = stmt.where(RegistryHolder.telegram_id == filter_.telegram_id)
        if filter_.role is not None:
            stmt = stmt.where(RegistryHolder.role == filter_.role)
        return stmt

    async def is_telegram_id_unique(self, telegram_id: int, exclude_id: Optional[UUID] = None) -> bool:
        stmt = select(RegistryHolder.id).where(RegistryHolder.telegram_id == telegram_id)
        if exclude_id is not None:
            stmt = stmt.where(RegistryHolder.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is None

    async def can_be_deleted(self, holder_id: UUID) -> bool:
        """A holder that still owns categories or accounts cannot be deleted."""
        if await self._exists_where(Category, Category.registry_holder_id == holder_id):
            return False
        return not await self._exists_where(Account, Account.registry_holder_id == holder_id)
