"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database holding both the catalog
and the transactions tables, so tests never see each other's rows.
"""
import os

# Must be set before any finance_manager module reads the settings
os.environ.setdefault("FINANCE_MANAGER_TEST_MODE", "1")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from finance_manager.catalog.db.models import CATALOG_TABLES
from finance_manager.common.db.session import create_tables
from finance_manager.common.logging_config import configure_logging
from finance_manager.transactions.db.models import TRANSACTIONS_TABLES


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    configure_logging("WARNING", enable_file_logging=False)


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        )
    await create_tables(engine, CATALOG_TABLES + TRANSACTIONS_TABLES)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def session_factory(engine):
    """Factory opening new sessions on the test database (used by the replication job)."""
    def factory() -> AsyncSession:
        return AsyncSession(engine, expire_on_commit=False)
    return factory
