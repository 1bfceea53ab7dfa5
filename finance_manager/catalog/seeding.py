"""
Reference data seeding for the catalog database.

On an empty database:
- countries: every ISO 3166-1 entry known to pycountry
- currencies: the ISO 4217 codes listed in SEED_CURRENCY_CODES

Each table is seeded independently and only when it has no rows, so the
operation is idempotent across restarts.
"""
from typing import Iterable

import pycountry
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import Country, Currency
from finance_manager.catalog.repositories.countries import CountryRepository
from finance_manager.catalog.repositories.currencies import CurrencyRepository
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)

# Display signs for the most common seeded currencies (pycountry has none)
CURRENCY_SIGNS = {
    "RUB": "₽",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "CHF": "₣",
    }


async def seed_countries(session: AsyncSession) -> int:
    repository = CountryRepository(session)
    if not await repository.is_empty():
        return 0

    countries = [Country(name=c.name) for c in sorted(pycountry.countries, key=lambda c: c.name)]
    await repository.add_range(countries)
    logger.info("Seeded countries", count=len(countries))
    return len(countries)


async def seed_currencies(session: AsyncSession, codes: Iterable[str]) -> int:
    repository = CurrencyRepository(session)
    if not await repository.is_empty():
        return 0

    currencies = []
    for code in codes:
        iso = pycountry.currencies.get(alpha_3=code.upper())
        if iso is None:
            logger.warning("Unknown ISO 4217 code skipped during seeding", code=code)
            continue
        currencies.append(Currency(
            name=iso.name,
            char_code=iso.alpha_3,
            num_code=iso.numeric,
            sign=CURRENCY_SIGNS.get(iso.alpha_3),
            ))

    await repository.add_range(currencies)
    logger.info("Seeded currencies", count=len(currencies))
    return len(currencies)


async def seed_reference_data(session: AsyncSession, currency_codes: Iterable[str]) -> None:
    """Seed countries and currencies, then commit once."""
    countries = await seed_countries(session)
    currencies = await seed_currencies(session, currency_codes)
    if countries or currencies:
        await session.commit()
