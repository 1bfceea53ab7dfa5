"""Exchange rate persistence."""
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.orm import selectinload

from finance_manager.catalog.db.models import ExchangeRate
from finance_manager.catalog.schemas.exchange_rates import ERFilter
from finance_manager.common.db.repository import BaseRepository


class ExchangeRateRepository(BaseRepository[ExchangeRate, ERFilter]):
    model = ExchangeRate

    def _apply_filter(self, stmt: Select, filter_: ERFilter) -> Select:
        if filter_.currency_id is not None:
            stmt = stmt.where(ExchangeRate.currency_id == filter_.currency_id)
        if filter_.date_from is not None:
            stmt = stmt.where(ExchangeRate.rate_date >= filter_.date_from)
        if filter_.date_to is not None:
            stmt = stmt.where(ExchangeRate.rate_date <= filter_.date_to)
        return stmt

    def _related_options(self) -> list:
        return [selectinload(ExchangeRate.currency)]

    def _order_by(self) -> list:
        return [ExchangeRate.rate_date.desc(), ExchangeRate.id]

    async def exists_for_currency_and_date(
        self,
        currency_id: UUID,
        rate_date: date,
        exclude_id: Optional[UUID] = None,
        ) -> bool:
        stmt = select(ExchangeRate.id).where(
            ExchangeRate.currency_id == currency_id,
            ExchangeRate.rate_date == rate_date,
            )
        if exclude_id is not None:
            stmt = stmt.where(ExchangeRate.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def get_last_rate_date(self, currency_id: UUID) -> Optional[date]:
        stmt = select(func.max(ExchangeRate.rate_date)).where(ExchangeRate.currency_id == currency_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_period(self, currency_id: UUID, date_from: date, date_to: date) -> int:
        """Bulk delete (inclusive bounds); returns the number of removed rows."""
        stmt = (
            delete(ExchangeRate)
            .where(
                ExchangeRate.currency_id == currency_id,
                ExchangeRate.rate_date >= date_from,
                ExchangeRate.rate_date <= date_to,
                )
            .execution_options(synchronize_session="fetch")
            )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
