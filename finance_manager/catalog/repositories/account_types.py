"""Account type persistence."""
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, select

from finance_manager.catalog.db.models import Account, AccountType
from finance_manager.catalog.schemas.account_types import ATFilter
from finance_manager.common.db.repository import BaseRepository


class AccountTypeRepository(BaseRepository[AccountType, ATFilter]):
    model = AccountType

    def _apply_filter(self, stmt: Select, filter_: ATFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(AccountType.is_deleted.is_(False))
        if filter_.code_contains:
            stmt = stmt.where(AccountType.code.icontains(filter_.code_contains))
        if filter_.description_contains:
            stmt = stmt.where(AccountType.description.icontains(filter_.description_contains))
        return stmt

    def _order_by(self) -> list:
        return [AccountType.code, AccountType.id]

    async def is_code_unique(self, code: str, exclude_id: Optional[UUID] = None) -> bool:
        return await self.is_unique(AccountType.code, code, exclude_id)

    async def exists_by_code(self, code: str) -> bool:
        stmt = select(AccountType.id).where(func.lower(AccountType.code) == code.lower()).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def can_be_deleted(self, account_type_id: UUID) -> bool:
        return not await self._exists_where(Account, Account.account_type_id == account_type_id)
