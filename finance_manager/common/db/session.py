"""
Database engine and session helpers shared by both services.

Each service owns one SQLite database; the service's own db/session.py
creates its engine through create_async_engine_for() and exposes a
get_session() FastAPI dependency.
"""
from pathlib import Path
from typing import Iterable

from sqlalchemy import event, Engine, Table
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints for SQLite.

    Note: This event listener applies to ALL sync engines (including the one backing async).
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def to_async_url(db_url: str) -> str:
    """Convert sqlite:/// to sqlite+aiosqlite:/// and make sure the database directory exists."""
    if db_url.startswith("sqlite:///"):
        db_path = db_url.replace("sqlite:///", "")
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return db_url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return db_url


def create_async_engine_for(db_url: str) -> AsyncEngine:
    """
    Create the async engine for one service database.

    Args:
        db_url: Database URL from settings (plain sqlite:/// form accepted)

    Returns:
        AsyncEngine: SQLAlchemy async engine backed by aiosqlite
    """
    return create_async_engine(
        to_async_url(db_url),
        echo=False,
        # NullPool for SQLite - each connection is independent
        poolclass=NullPool,
        )


async def create_tables(engine: AsyncEngine, tables: Iterable[Table]) -> None:
    """
    Create the given tables if they don't exist yet.

    Both services register their models on the shared SQLModel.metadata, so
    each one passes only the tables it owns.
    """
    tables = list(tables)
    async with engine.begin() as conn:
        await conn.run_sync(lambda sync_conn: SQLModel.metadata.create_all(sync_conn, tables=tables))
    logger.info("Database tables ensured", tables=[t.name for t in tables])
