"""
Exchange rate service.

Design Notes:
- One rate per (currency, rate_date); checked before writing
- add_range is all-or-nothing: every item is validated (including duplicates
  inside the batch) before a single commit
- delete_by_period removes rates in an inclusive date window
"""
from datetime import date
from typing import List, Optional, Set, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import ExchangeRate
from finance_manager.catalog.errors import ExchangeRateErrors
from finance_manager.catalog.repositories.currencies import CurrencyRepository
from finance_manager.catalog.repositories.exchange_rates import ExchangeRateRepository
from finance_manager.catalog.schemas.exchange_rates import (
    ERCreateItem,
    ERDeletedCount,
    ERFilter,
    ERLastDate,
    ERReadItem,
    ERUpdateItem,
    )
from finance_manager.common.errors import AppError
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class ExchangeRateService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ExchangeRateRepository(session)
        self.currencies = CurrencyRepository(session)

    async def _validate(self, item: ERCreateItem) -> Optional[AppError]:
        if item.currency_id is None:
            return ExchangeRateErrors.currency_required()
        if item.rate_date is None:
            return ExchangeRateErrors.rate_date_required()
        if item.rate is None or item.rate <= 0:
            return ExchangeRateErrors.value_required()
        if not await self.currencies.any(item.currency_id):
            return ExchangeRateErrors.currency_not_found(item.currency_id)
        if await self.repository.exists_for_currency_and_date(item.currency_id, item.rate_date):
            return ExchangeRateErrors.already_exists(item.currency_id, item.rate_date)
        return None

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, rate_id: UUID, include_related: bool = True) -> Result[ERReadItem]:
        rate = await self.repository.get_by_id(rate_id, include_related=include_related, disable_tracking=True)
        if rate is None:
            return Result.fail(ExchangeRateErrors.not_found(rate_id))
        return Result.ok(ERReadItem.from_entity(rate, include_related))

    async def get_paged(self, filter_: ERFilter) -> Result[List[ERReadItem]]:
        rates = await self.repository.get_paged(filter_)
        return Result.ok([ERReadItem.from_entity(r) for r in rates])

    async def exists_for_currency_and_date(self, currency_id: UUID, rate_date: date) -> bool:
        return await self.repository.exists_for_currency_and_date(currency_id, rate_date)

    async def get_last_rate_date(self, currency_id: UUID) -> Result[ERLastDate]:
        if not await self.currencies.any(currency_id):
            return Result.fail(ExchangeRateErrors.currency_not_found(currency_id))
        last_date = await self.repository.get_last_rate_date(currency_id)
        return Result.ok(ERLastDate(currency_id=currency_id, last_rate_date=last_date))

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: ERCreateItem) -> Result[ERReadItem]:
        error = await self._validate(item)
        if error is not None:
            return Result.fail(error)

        rate = await self.repository.add(ExchangeRate(
            currency_id=item.currency_id,
            rate_date=item.rate_date,
            rate=item.rate,
            ))
        await self.session.commit()

        logger.info("Exchange rate created", id=str(rate.id), currency_id=str(rate.currency_id), rate_date=str(rate.rate_date))
        return Result.ok(ERReadItem.from_entity(rate))

    async def add_range(self, items: List[ERCreateItem]) -> Result[List[ERReadItem]]:
        seen: Set[Tuple[UUID, date]] = set()
        for item in items:
            error = await self._validate(item)
            if error is not None:
                return Result.fail(error)
            key = (item.currency_id, item.rate_date)
            if key in seen:
                return Result.fail(ExchangeRateErrors.already_exists(item.currency_id, item.rate_date))
            seen.add(key)

        rates = [ExchangeRate(currency_id=i.currency_id, rate_date=i.rate_date, rate=i.rate) for i in items]
        if rates:
            await self.repository.add_range(rates)
            await self.session.commit()

        logger.info("Exchange rates added", count=len(rates))
        return Result.ok([ERReadItem.from_entity(r) for r in rates])

    async def update(self, item: ERUpdateItem) -> Result[ERReadItem]:
        rate = await self.repository.get_by_id(item.id, include_related=False)
        if rate is None:
            return Result.fail(ExchangeRateErrors.not_found(item.id))

        changes: dict = {}
        if item.rate_date is not None and item.rate_date != rate.rate_date:
            if await self.repository.exists_for_currency_and_date(rate.currency_id, item.rate_date, exclude_id=rate.id):
                return Result.fail(ExchangeRateErrors.already_exists(rate.currency_id, item.rate_date))
            changes["rate_date"] = item.rate_date

        if item.rate is not None and item.rate != rate.rate:
            if item.rate <= 0:
                return Result.fail(ExchangeRateErrors.value_required())
            changes["rate"] = item.rate

        if changes:
            for field, value in changes.items():
                setattr(rate, field, value)
            await self.session.commit()
            logger.info("Exchange rate updated", id=str(rate.id), fields=sorted(changes))

        return Result.ok(ERReadItem.from_entity(rate))

    async def delete(self, rate_id: UUID) -> Result[None]:
        rate = await self.repository.get_by_id(rate_id, include_related=False)
        if rate is None:
            return Result.fail(ExchangeRateErrors.not_found(rate_id))

        await self.repository.delete(rate)
        await self.session.commit()
        logger.info("Exchange rate deleted", id=str(rate_id))
        return Result.ok()

    async def delete_by_period(self, currency_id: UUID, date_from: date, date_to: date) -> Result[ERDeletedCount]:
        if not await self.currencies.any(currency_id):
            return Result.fail(ExchangeRateErrors.currency_not_found(currency_id))
        if date_from > date_to:
            raise ValueError(f"date_from {date_from} is after date_to {date_to}")

        deleted = await self.repository.delete_by_period(currency_id, date_from, date_to)
        await self.session.commit()

        logger.info("Exchange rates deleted by period", currency_id=str(currency_id), count=deleted)
        return Result.ok(ERDeletedCount(deleted=deleted))
