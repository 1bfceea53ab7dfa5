"""
Transactions service FastAPI application.

Records transactions and transfers against accounts and categories that are
replicated from the catalog service by a periodic background job.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finance_manager.common.api.exception_handlers import setup_exception_handlers
from finance_manager.common.api.middleware import setup_request_context
from finance_manager.common.config import get_settings, is_test_mode
from finance_manager.common.db.session import create_tables
from finance_manager.common.logging_config import configure_logging, get_logger
from finance_manager.transactions.api.v1.router import router as api_v1_router
from finance_manager.transactions.db.models import TRANSACTIONS_TABLES
from finance_manager.transactions.db.session import async_engine
from finance_manager.transactions.replication.job import ReplicationJob, ReplicationScheduler

settings = get_settings()
logger = get_logger(__name__)


async def init_transactions_db() -> None:
    """Create the transactions tables if missing (lifespan and `finance-manager init-db`)."""
    await create_tables(async_engine, TRANSACTIONS_TABLES)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE_ENABLED, settings.LOG_DIR, "transactions.log")
    logger.info(
        "Starting transactions service",
        version=settings.VERSION,
        database_url=settings.TRANSACTIONS_DATABASE_URL.split("///")[-1],
        catalog_api=settings.CATALOG_API_BASE_URL,
        test_mode=is_test_mode(),
        )

    await init_transactions_db()

    scheduler = None
    if settings.REPLICATION_ENABLED:
        scheduler = ReplicationScheduler(ReplicationJob(), settings.REPLICATION_INTERVAL_SECONDS)
        scheduler.start()
    app.state.replication_scheduler = scheduler

    yield

    if scheduler is not None:
        await scheduler.stop()
    await async_engine.dispose()
    logger.info("Shutting down transactions service")


app = FastAPI(
    title=f"{settings.PROJECT_NAME} Transactions",
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    )
setup_request_context(app)
setup_exception_handlers(app)

app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """
    Root endpoint.
    Provides basic API information.
    """
    return {
        "name": f"{settings.PROJECT_NAME} Transactions",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
        }
