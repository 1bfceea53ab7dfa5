"""
Country service.

Design Notes:
- Country names are unique case-insensitively
- A country referenced by any bank (deleted or not) cannot be hard-deleted
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import Country
from finance_manager.catalog.errors import CountryErrors
from finance_manager.catalog.repositories.countries import CountryRepository
from finance_manager.catalog.schemas.countries import CNCreateItem, CNFilter, CNReadItem, CNUpdateItem
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class CountryService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = CountryRepository(session)

    async def get_by_id(self, country_id: UUID) -> Result[CNReadItem]:
        country = await self.repository.get_by_id(country_id, disable_tracking=True)
        if country is None:
            return Result.fail(CountryErrors.not_found(country_id))
        return Result.ok(CNReadItem.model_validate(country))

    async def get_paged(self, filter_: CNFilter) -> Result[List[CNReadItem]]:
        countries = await self.repository.get_paged(filter_)
        return Result.ok([CNReadItem.model_validate(c) for c in countries])

    async def create(self, item: CNCreateItem) -> Result[CNReadItem]:
        if not item.name:
            return Result.fail(CountryErrors.name_required())
        if not await self.repository.is_name_unique(item.name):
            return Result.fail(CountryErrors.name_exists(item.name))

        country = await self.repository.add(Country(name=item.name))
        await self.session.commit()

        logger.info("Country created", id=str(country.id), name=country.name)
        return Result.ok(CNReadItem.model_validate(country))

    async def update(self, item: CNUpdateItem) -> Result[CNReadItem]:
        country = await self.repository.get_by_id(item.id)
        if country is None:
            return Result.fail(CountryErrors.not_found(item.id))

        changed = False
        if item.name is not None and item.name != country.name:
            if not item.name:
                return Result.fail(CountryErrors.name_required())
            if not await self.repository.is_name_unique(item.name, exclude_id=country.id):
                return Result.fail(CountryErrors.name_exists(item.name))
            country.name = item.name
            changed = True

        if changed:
            await self.session.commit()
            logger.info("Country updated", id=str(country.id))

        return Result.ok(CNReadItem.model_validate(country))

    async def soft_delete(self, country_id: UUID) -> Result[None]:
        country = await self.repository.get_by_id(country_id)
        if country is None:
            return Result.fail(CountryErrors.not_found(country_id))
        if country.is_deleted:
            return Result.ok()

        country.mark_as_deleted()
        await self.session.commit()
        logger.info("Country soft deleted", id=str(country_id))
        return Result.ok()

    async def restore(self, country_id: UUID) -> Result[None]:
        country = await self.repository.get_by_id(country_id)
        if country is None:
            return Result.fail(CountryErrors.not_found(country_id))
        if not country.is_deleted:
            return Result.ok()

        country.restore()
        await self.session.commit()
        logger.info("Country restored", id=str(country_id))
        return Result.ok()

    async def delete(self, country_id: UUID) -> Result[None]:
        country = await self.repository.get_by_id(country_id)
        if country is None:
            return Result.fail(CountryErrors.not_found(country_id))
        if not await self.repository.can_be_deleted(country_id):
            return Result.fail(CountryErrors.in_use(country_id))

        await self.repository.delete(country)
        await self.session.commit()
        logger.info("Country deleted", id=str(country_id))
        return Result.ok()
