"""ExchangeRateService tests."""
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from finance_manager.catalog.db.models import ExchangeRate
from finance_manager.catalog.schemas.currencies import CUCreateItem
from finance_manager.catalog.schemas.exchange_rates import ERCreateItem, ERFilter, ERUpdateItem
from finance_manager.catalog.services.currency_service import CurrencyService
from finance_manager.catalog.services.exchange_rate_service import ExchangeRateService
from finance_manager.test_scripts.test_utils import count_rows


async def _currency_id(session, char_code: str = "USD", num_code: str = "840"):
    result = await CurrencyService(session).create(CUCreateItem(name=char_code, char_code=char_code, num_code=num_code))
    return result.value.id


class TestExchangeRateCreate:

    @pytest.mark.asyncio
    async def test_create(self, session):
        """EX-U-001: Rate is stored for a currency and date"""
        currency_id = await _currency_id(session)

        result = await ExchangeRateService(session).create(
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 10), rate=Decimal("90.5"))
            )
        assert result.is_success
        assert result.value.rate == Decimal("90.5")

    @pytest.mark.asyncio
    async def test_one_rate_per_day(self, session):
        """EX-U-002: Second rate for the same currency and date fails with EXCHANGERATE_EXISTS"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)
        item = ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 10), rate=Decimal("90"))
        await service.create(item)

        result = await service.create(item)
        assert result.error.code == "EXCHANGERATE_EXISTS"
        assert result.error.status_code == 409

    @pytest.mark.asyncio
    async def test_required_values(self, session):
        """EX-U-003: Missing currency, date or a non-positive rate are rejected"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)

        missing_currency = await service.create(ERCreateItem(rate_date=date(2024, 1, 1), rate=Decimal("1")))
        missing_date = await service.create(ERCreateItem(currency_id=currency_id, rate=Decimal("1")))
        zero_rate = await service.create(ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("0")))

        assert missing_currency.error.code == "EXCHANGERATE_CURRENCY_REQUIRED"
        assert missing_date.error.code == "EXCHANGERATE_RATEDATE_REQUIRED"
        assert zero_rate.error.code == "EXCHANGERATE_VALUE_REQUIRED"

    @pytest.mark.asyncio
    async def test_unknown_currency(self, session):
        """EX-U-004: Unknown currency fails with EXCHANGERATE_CURRENCY_NOT_FOUND"""
        result = await ExchangeRateService(session).create(
            ERCreateItem(currency_id=uuid4(), rate_date=date(2024, 1, 1), rate=Decimal("1"))
            )
        assert result.error.code == "EXCHANGERATE_CURRENCY_NOT_FOUND"


class TestExchangeRateRange:

    @pytest.mark.asyncio
    async def test_add_range(self, session):
        """EX-U-010: add_range stores every item"""
        currency_id = await _currency_id(session)
        items = [
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, day), rate=Decimal(90 + day))
            for day in range(1, 6)
            ]

        result = await ExchangeRateService(session).add_range(items)
        assert len(result.value) == 5
        assert await count_rows(session, ExchangeRate) == 5

    @pytest.mark.asyncio
    async def test_add_range_duplicate_in_batch(self, session):
        """EX-U-011: Duplicate inside the batch rejects the whole batch"""
        currency_id = await _currency_id(session)
        items = [
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("1")),
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 2), rate=Decimal("2")),
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("3")),
            ]

        result = await ExchangeRateService(session).add_range(items)
        assert result.error.code == "EXCHANGERATE_EXISTS"
        assert await count_rows(session, ExchangeRate) == 0

    @pytest.mark.asyncio
    async def test_add_range_conflict_with_stored(self, session):
        """EX-U-012: Item clashing with a stored rate rejects the whole batch"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)
        await service.create(ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 2), rate=Decimal("2")))

        result = await service.add_range([
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("1")),
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 2), rate=Decimal("2")),
            ])
        assert result.is_failed
        assert await count_rows(session, ExchangeRate) == 1

    @pytest.mark.asyncio
    async def test_last_rate_date(self, session):
        """EX-U-013: get_last_rate_date returns the newest date, or None without rates"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)

        assert (await service.get_last_rate_date(currency_id)).value.last_rate_date is None

        await service.add_range([
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 3, 1), rate=Decimal("1")),
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 2, 1), rate=Decimal("1")),
            ])
        assert (await service.get_last_rate_date(currency_id)).value.last_rate_date == date(2024, 3, 1)

    @pytest.mark.asyncio
    async def test_delete_by_period(self, session):
        """EX-U-014: delete_by_period removes rates inside the inclusive window only"""
        usd = await _currency_id(session)
        eur = await _currency_id(session, "EUR", "978")
        service = ExchangeRateService(session)
        await service.add_range([
            ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, day), rate=Decimal("1"))
            for currency_id in (usd, eur)
            for day in (1, 2, 3, 4)
            ])

        result = await service.delete_by_period(usd, date(2024, 1, 2), date(2024, 1, 3))
        assert result.value.deleted == 2

        remaining = await service.get_paged(ERFilter(currency_id=usd))
        assert sorted(r.rate_date.day for r in remaining.value) == [1, 4]
        assert len((await service.get_paged(ERFilter(currency_id=eur))).value) == 4

    @pytest.mark.asyncio
    async def test_delete_by_period_inverted(self, session):
        """EX-U-015: An inverted window raises ValueError"""
        currency_id = await _currency_id(session)

        with pytest.raises(ValueError):
            await ExchangeRateService(session).delete_by_period(currency_id, date(2024, 2, 1), date(2024, 1, 1))


class TestExchangeRateUpdate:

    @pytest.mark.asyncio
    async def test_move_onto_existing_date(self, session):
        """EX-U-020: Moving a rate onto an occupied date fails"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)
        await service.create(ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("1")))
        second = await service.create(ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 2), rate=Decimal("2")))

        result = await service.update(ERUpdateItem(id=second.value.id, rate_date=date(2024, 1, 1)))
        assert result.error.code == "EXCHANGERATE_EXISTS"

    @pytest.mark.asyncio
    async def test_update_rate(self, session):
        """EX-U-021: Rate value is updated; a non-positive value is rejected"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)
        rate = await service.create(ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("1")))

        assert (await service.update(ERUpdateItem(id=rate.value.id, rate=Decimal("-1")))).error.code == "EXCHANGERATE_VALUE_REQUIRED"
        assert (await service.update(ERUpdateItem(id=rate.value.id, rate=Decimal("2.5")))).value.rate == Decimal("2.5")

    @pytest.mark.asyncio
    async def test_delete(self, session):
        """EX-U-022: Deleted rate is gone; deleting again fails with 404"""
        currency_id = await _currency_id(session)
        service = ExchangeRateService(session)
        rate = await service.create(ERCreateItem(currency_id=currency_id, rate_date=date(2024, 1, 1), rate=Decimal("1")))

        assert (await service.delete(rate.value.id)).is_success
        assert (await service.delete(rate.value.id)).error.code == "EXCHANGERATE_NOT_FOUND"
