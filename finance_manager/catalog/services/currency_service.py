"""
Currency service.

Design Notes:
- name, char_code and num_code are mandatory
- char_code and num_code are each unique case-insensitively ("rub" blocks "RUB")
- Hard delete is refused while accounts or exchange rates reference the currency
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import Currency
from finance_manager.catalog.errors import CurrencyErrors
from finance_manager.catalog.repositories.currencies import CurrencyRepository
from finance_manager.catalog.schemas.currencies import CUCreateItem, CUFilter, CUReadItem, CUUpdateItem
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class CurrencyService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = CurrencyRepository(session)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, currency_id: UUID) -> Result[CUReadItem]:
        currency = await self.repository.get_by_id(currency_id, disable_tracking=True)
        if currency is None:
            return Result.fail(CurrencyErrors.not_found(currency_id))
        return Result.ok(CUReadItem.model_validate(currency))

    async def get_paged(self, filter_: CUFilter) -> Result[List[CUReadItem]]:
        currencies = await self.repository.get_paged(filter_)
        return Result.ok([CUReadItem.model_validate(c) for c in currencies])

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: CUCreateItem) -> Result[CUReadItem]:
        if not item.char_code:
            return Result.fail(CurrencyErrors.char_code_required())
        if not item.num_code:
            return Result.fail(CurrencyErrors.num_code_required())
        if not item.name:
            return Result.fail(CurrencyErrors.name_required())
        if not await self.repository.is_char_code_unique(item.char_code):
            return Result.fail(CurrencyErrors.char_code_exists(item.char_code))
        if not await self.repository.is_num_code_unique(item.num_code):
            return Result.fail(CurrencyErrors.num_code_exists(item.num_code))

        currency = await self.repository.add(Currency(
            name=item.name,
            char_code=item.char_code,
            num_code=item.num_code,
            sign=item.sign,
            emoji=item.emoji,
            ))
        await self.session.commit()

        logger.info("Currency created", id=str(currency.id), char_code=currency.char_code)
        return Result.ok(CUReadItem.model_validate(currency))

    async def update(self, item: CUUpdateItem) -> Result[CUReadItem]:
        currency = await self.repository.get_by_id(item.id)
        if currency is None:
            return Result.fail(CurrencyErrors.not_found(item.id))

        # Validate every provided field first, mutate afterwards
        changes = {}

        if item.name is not None and item.name != currency.name:
            if not item.name:
                return Result.fail(CurrencyErrors.name_required())
            changes["name"] = item.name

        if item.char_code is not None and item.char_code != currency.char_code:
            if not item.char_code:
                return Result.fail(CurrencyErrors.char_code_required())
            if not await self.repository.is_char_code_unique(item.char_code, exclude_id=currency.id):
                return Result.fail(CurrencyErrors.char_code_exists(item.char_code))
            changes["char_code"] = item.char_code

        if item.num_code is not None and item.num_code != currency.num_code:
            if not item.num_code:
                return Result.fail(CurrencyErrors.num_code_required())
            if not await self.repository.is_num_code_unique(item.num_code, exclude_id=currency.id):
                return Result.fail(CurrencyErrors.num_code_exists(item.num_code))
            changes["num_code"] = item.num_code

        if item.sign is not None and item.sign != currency.sign:
            changes["sign"] = item.sign

        if item.emoji is not None and item.emoji != currency.emoji:
            changes["emoji"] = item.emoji

        if changes:
            for field, value in changes.items():
                setattr(currency, field, value)
            await self.session.commit()
            logger.info("Currency updated", id=str(currency.id), fields=sorted(changes))

        return Result.ok(CUReadItem.model_validate(currency))

    async def soft_delete(self, currency_id: UUID) -> Result[None]:
        currency = await self.repository.get_by_id(currency_id)
        if currency is None:
            return Result.fail(CurrencyErrors.not_found(currency_id))
        if currency.is_deleted:
            return Result.ok()

        currency.mark_as_deleted()
        await self.session.commit()
        logger.info("Currency soft deleted", id=str(currency_id))
        return Result.ok()

    async def restore(self, currency_id: UUID) -> Result[None]:
        currency = await self.repository.get_by_id(currency_id)
        if currency is None:
            return Result.fail(CurrencyErrors.not_found(currency_id))
        if not currency.is_deleted:
            return Result.ok()

        currency.restore()
        await self.session.commit()
        logger.info("Currency restored", id=str(currency_id))
        return Result.ok()

    async def delete(self, currency_id: UUID) -> Result[None]:
        currency = await self.repository.get_by_id(currency_id)
        if currency is None:
            return Result.fail(CurrencyErrors.not_found(currency_id))
        if not await self.repository.can_be_deleted(currency_id):
            return Result.fail(CurrencyErrors.in_use(currency_id))

        await self.repository.delete(currency)
        await self.session.commit()
        logger.info("Currency deleted", id=str(currency_id))
        return Result.ok()
