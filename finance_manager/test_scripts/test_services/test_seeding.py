"""Reference data seeding (pycountry based)."""
import pytest
from sqlalchemy import select

from finance_manager.catalog.db.models import Country, Currency
from finance_manager.catalog.schemas.countries import CNCreateItem
from finance_manager.catalog.seeding import seed_reference_data
from finance_manager.catalog.services.country_service import CountryService
from finance_manager.test_scripts.test_utils import count_rows


class TestSeeding:

    @pytest.mark.asyncio
    async def test_seed_empty_database(self, session):
        """SD-U-001: Countries and the configured currencies are seeded"""
        await seed_reference_data(session, ["RUB", "USD"])

        assert await count_rows(session, Country) > 200
        result = await session.execute(select(Currency).order_by(Currency.char_code))
        currencies = result.scalars().all()
        assert [(c.char_code, c.num_code, c.sign) for c in currencies] == [("RUB", "643", "₽"), ("USD", "840", "$")]

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, session):
        """SD-U-002: Seeding twice does not duplicate rows"""
        await seed_reference_data(session, ["EUR"])
        countries = await count_rows(session, Country)

        await seed_reference_data(session, ["EUR", "USD"])
        assert await count_rows(session, Country) == countries
        assert await count_rows(session, Currency) == 1

    @pytest.mark.asyncio
    async def test_unknown_code_skipped(self, session):
        """SD-U-003: Unknown ISO codes are skipped"""
        await seed_reference_data(session, ["XYZ", "EUR"])
        assert await count_rows(session, Currency) == 1

    @pytest.mark.asyncio
    async def test_existing_countries_kept(self, session):
        """SD-U-004: A non-empty countries table is left alone"""
        await CountryService(session).create(CNCreateItem(name="Atlantis"))

        await seed_reference_data(session, [])
        assert await count_rows(session, Country) == 1
