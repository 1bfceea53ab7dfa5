"""
HTTP clients bound to the two FastAPI applications.

Requests go through httpx.ASGITransport, so no server is started and the
application lifespan does not run: the test database comes from the shared
`engine` fixture through a get_session override.
"""
import httpx
import pytest_asyncio

from finance_manager.catalog.db.session import get_session as get_catalog_session
from finance_manager.catalog.main import app as catalog_app
from finance_manager.transactions.db.session import get_session as get_transactions_session
from finance_manager.transactions.main import app as transactions_app


def _session_override(session_factory):
    async def override():
        async with session_factory() as session:
            yield session
    return override


@pytest_asyncio.fixture
async def catalog_client(session_factory):
    catalog_app.dependency_overrides[get_catalog_session] = _session_override(session_factory)
    transport = httpx.ASGITransport(app=catalog_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api/v1") as client:
        yield client
    catalog_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def transactions_client(session_factory):
    transactions_app.dependency_overrides[get_transactions_session] = _session_override(session_factory)
    transport = httpx.ASGITransport(app=transactions_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api/v1") as client:
        yield client
    transactions_app.dependency_overrides.clear()
