"""
Catalog service FastAPI application.

Owns the reference data: registry holders, countries, banks, currencies,
account types, accounts, categories and exchange rates.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.api.v1.router import router as api_v1_router
from finance_manager.catalog.db.models import CATALOG_TABLES
from finance_manager.catalog.db.session import async_engine
from finance_manager.catalog.seeding import seed_reference_data
from finance_manager.common.api.exception_handlers import setup_exception_handlers
from finance_manager.common.api.middleware import setup_request_context
from finance_manager.common.config import get_settings, is_test_mode
from finance_manager.common.db.session import create_tables
from finance_manager.common.logging_config import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


async def init_catalog_db(seed: bool = True) -> None:
    """
    Create the catalog tables if missing and optionally seed reference data.

    Used by the application lifespan and by `finance-manager init-db`.
    """
    await create_tables(async_engine, CATALOG_TABLES)
    if seed:
        async with AsyncSession(async_engine, expire_on_commit=False) as session:
            await seed_reference_data(session, settings.SEED_CURRENCY_CODES)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE_ENABLED, settings.LOG_DIR, "catalog.log")
    logger.info(
        "Starting catalog service",
        version=settings.VERSION,
        database_url=settings.CATALOG_DATABASE_URL.split("///")[-1],
        test_mode=is_test_mode(),
        )

    await init_catalog_db(seed=settings.SEED_REFERENCE_DATA)

    yield
    await async_engine.dispose()
    logger.info("Shutting down catalog service")


app = FastAPI(
    title=f"{settings.PROJECT_NAME} Catalog",
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
        "name": f"{settings.PROJECT_NAME} Catalog",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
        }
