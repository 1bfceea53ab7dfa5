"""Currency persistence."""
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func

from finance_manager.catalog.db.models import Account, Currency, ExchangeRate
from finance_manager.catalog.schemas.currencies import CUFilter
from finance_manager.common.db.repository import BaseRepository


class CurrencyRepository(BaseRepository[Currency, CUFilter]):
    model = Currency

    def _apply_filter(self, stmt: Select, filter_: CUFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(Currency.is_deleted.is_(False))
        if filter_.name_contains:
            stmt = stmt.where(Currency.name.icontains(filter_.name_contains))
        if filter_.char_code:
            stmt = stmt.where(func.lower(Currency.char_code) == filter_.char_code.lower())
        if filter_.num_code:
            stmt = stmt.where(Currency.num_code == filter_.num_code)
        return stmt

    def _order_by(self) -> list:
        return [Currency.char_code, Currency.id]

    async def is_char_code_unique(self, char_code: str, exclude_id: Optional[UUID] = None) -> bool:
        return await self.is_unique(Currency.char_code, char_code, exclude_id)

    async def is_num_code_unique(self, num_code: str, exclude_id: Optional[UUID] = None) -> bool:
        return await self.is_unique(Currency.num_code, num_code, exclude_id)

    async def can_be_deleted(self, currency_id: UUID) -> bool:
        if await self._exists_where(Account, Account.currency_id == currency_id):
            return False
        return not await self._exists_where(ExchangeRate, ExchangeRate.currency_id == currency_id)
