"""
Catalog database session management.
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.config import get_settings
from finance_manager.common.db.session import create_async_engine_for

settings = get_settings()

async_engine = create_async_engine_for(settings.CATALOG_DATABASE_URL)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an async catalog database session for dependency injection.

    Usage in FastAPI:
        @router.get("/")
        async def endpoint(session: AsyncSession = Depends(get_session)):
            ...
    """
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        yield session
