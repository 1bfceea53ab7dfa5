"""
Bank service.

Design Notes:
- A bank belongs to a country that must exist
- Names are unique per country (case-insensitive)
- Hard delete is refused while any account references the bank
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import Bank
from finance_manager.catalog.errors import BankErrors
from finance_manager.catalog.repositories.banks import BankRepository
from finance_manager.catalog.repositories.countries import CountryRepository
from finance_manager.catalog.schemas.banks import BKAccountsCount, BKCreateItem, BKFilter, BKReadItem, BKUpdateItem
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class BankService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = BankRepository(session)
        self.countries = CountryRepository(session)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, bank_id: UUID, include_related: bool = True) -> Result[BKReadItem]:
        bank = await self.repository.get_by_id(bank_id, include_related=include_related, disable_tracking=True)
        if bank is None:
            return Result.fail(BankErrors.not_found(bank_id))
        return Result.ok(BKReadItem.from_entity(bank, include_related))

    async def get_paged(self, filter_: BKFilter) -> Result[List[BKReadItem]]:
        banks = await self.repository.get_paged(filter_)
        return Result.ok([BKReadItem.from_entity(b) for b in banks])

    async def get_accounts_count(
        self,
        bank_id: UUID,
        include_archived: bool = False,
        include_deleted: bool = False,
        ) -> Result[BKAccountsCount]:
        if not await self.repository.any(bank_id):
            return Result.fail(BankErrors.not_found(bank_id))
        count = await self.repository.get_accounts_count(bank_id, include_archived, include_deleted)
        return Result.ok(BKAccountsCount(bank_id=bank_id, count=count))

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: BKCreateItem) -> Result[BKReadItem]:
        if not item.name:
            return Result.fail(BankErrors.name_required())
        if not await self.countries.any(item.country_id):
            return Result.fail(BankErrors.country_not_found(item.country_id))
        if not await self.repository.is_name_unique(item.name, item.country_id):
            return Result.fail(BankErrors.name_exists(item.name))

        bank = await self.repository.add(Bank(country_id=item.country_id, name=item.name))
        await self.session.commit()

        logger.info("Bank created", id=str(bank.id), name=bank.name, country_id=str(bank.country_id))
        return Result.ok(BKReadItem.from_entity(bank))

    async def update(self, item: BKUpdateItem) -> Result[BKReadItem]:
        bank = await self.repository.get_by_id(item.id, include_related=False)
        if bank is None:
            return Result.fail(BankErrors.not_found(item.id))

        new_name = bank.name
        new_country_id = bank.country_id

        if item.name is not None and item.name != bank.name:
            if not item.name:
                return Result.fail(BankErrors.name_required())
            new_name = item.name

        if item.country_id is not None and item.country_id != bank.country_id:
            if not await self.countries.any(item.country_id):
                return Result.fail(BankErrors.country_not_found(item.country_id))
            new_country_id = item.country_id

        changed = new_name != bank.name or new_country_id != bank.country_id
        if changed:
            # Either the name or the country changed: the (country, name) pair must stay unique
            if not await self.repository.is_name_unique(new_name, new_country_id, exclude_id=bank.id):
                return Result.fail(BankErrors.name_exists(new_name))
            bank.name = new_name
            bank.country_id = new_country_id
            await self.session.commit()
            logger.info("Bank updated", id=str(bank.id))

        return Result.ok(BKReadItem.from_entity(bank))

    async def soft_delete(self, bank_id: UUID) -> Result[None]:
        bank = await self.repository.get_by_id(bank_id, include_related=False)
        if bank is None:
            return Result.fail(BankErrors.not_found(bank_id))
        if bank.is_deleted:
            return Result.ok()

        bank.mark_as_deleted()
        await self.session.commit()
        logger.info("Bank soft deleted", id=str(bank_id))
        return Result.ok()

    async def restore(self, bank_id: UUID) -> Result[None]:
        bank = await self.repository.get_by_id(bank_id, include_related=False)
        if bank is None:
            return Result.fail(BankErrors.not_found(bank_id))
        if not bank.is_deleted:
            return Result.ok()

        bank.restore()
        await self.session.commit()
        logger.info("Bank restored", id=str(bank_id))
        return Result.ok()

    async def delete(self, bank_id: UUID) -> Result[None]:
        bank = await self.repository.get_by_id(bank_id, include_related=False)
        if bank is None:
            return Result.fail(BankErrors.not_found(bank_id))
        if not await self.repository.can_be_deleted(bank_id):
            return Result.fail(BankErrors.in_use(bank_id))

        await self.repository.delete(bank)
        await self.session.commit()
        logger.info("Bank deleted", id=str(bank_id))
        return Result.ok()
