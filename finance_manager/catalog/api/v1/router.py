"""
Catalog API v1 router.
Aggregates all v1 endpoints.
"""
from fastapi import APIRouter

from finance_manager.catalog.api.v1.account_types import account_type_router
from finance_manager.catalog.api.v1.accounts import account_router
from finance_manager.catalog.api.v1.banks import bank_router
from finance_manager.catalog.api.v1.categories import category_router
from finance_manager.catalog.api.v1.countries import country_router
from finance_manager.catalog.api.v1.currencies import currency_router
from finance_manager.catalog.api.v1.exchange_rates import exchange_rate_router
from finance_manager.catalog.api.v1.registry_holders import registry_holder_router
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()

router.include_router(registry_holder_router)
router.include_router(country_router)
router.include_router(bank_router)
router.include_router(currency_router)
router.include_router(account_type_router)
router.include_router(account_router)
router.include_router(category_router)
router.include_router(exchange_rate_router)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status message
    """
    logger.debug("Health check requested")
    return {"status": "ok", "service": "catalog"}
