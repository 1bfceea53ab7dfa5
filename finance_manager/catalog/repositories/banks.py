"""Bank persistence."""
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from finance_manager.catalog.db.models import Account, Bank
from finance_manager.catalog.schemas.banks import BKFilter
from finance_manager.common.db.repository import BaseRepository


class BankRepository(BaseRepository[Bank, BKFilter]):
    model = Bank

    def _apply_filter(self, stmt: Select, filter_: BKFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(Bank.is_deleted.is_(False))
        if filter_.country_id is not None:
            stmt = stmt.where(Bank.country_id == filter_.country_id)
        if filter_.name_contains:
            stmt = stmt.where(Bank.name.icontains(filter_.name_contains))
        return stmt

    def _related_options(self) -> list:
        return [selectinload(Bank.country)]

    def _order_by(self) -> list:
        return [Bank.name, Bank.id]

    async def is_name_unique(self, name: str, country_id: UUID, exclude_id: Optional[UUID] = None) -> bool:
        """Bank names are unique per country."""
        return await self.is_unique(Bank.name, name, exclude_id, scope=[Bank.country_id == country_id])

    async def can_be_deleted(self, bank_id: UUID) -> bool:
        return not await self._exists_where(Account, Account.bank_id == bank_id)

    async def get_accounts_count(self, bank_id: UUID, include_archived: bool = False, include_deleted: bool = False) -> int:
        stmt = select(func.count()).select_from(Account).where(Account.bank_id == bank_id)
        if not include_archived:
            stmt = stmt.where(Account.is_archived.is_(False))
        if not include_deleted:
            stmt = stmt.where(Account.is_deleted.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar_one()
