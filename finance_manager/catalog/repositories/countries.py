"""Country persistence."""
from typing import Optional
from uuid import UUID

from sqlalchemy import Select

from finance_manager.catalog.db.models import Bank, Country
from finance_manager.catalog.schemas.countries import CNFilter
from finance_manager.common.db.repository import BaseRepository


class CountryRepository(BaseRepository[Country, CNFilter]):
    model = Country

    def _apply_filter(self, stmt: Select, filter_: CNFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(Country.is_deleted.is_(False))
        if filter_.name_contains:
            stmt = stmt.where(Country.name.icontains(filter_.name_contains))
        return stmt

    def _order_by(self) -> list:
        return [Country.name, Country.id]

    async def is_name_unique(self, name: str, exclude_id: Optional[UUID] = None) -> bool:
        return await self.is_unique(Country.name, name, exclude_id)

    async def can_be_deleted(self, country_id: UUID) -> bool:
        return not await self._exists_where(Bank, Bank.country_id == country_id)
