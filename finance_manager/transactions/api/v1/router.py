"""
Transactions API v1 router.
Aggregates all v1 endpoints.
"""
from fastapi import APIRouter

from finance_manager.common.logging_config import get_logger
from finance_manager.transactions.api.v1.replication import replication_router
from finance_manager.transactions.api.v1.transaction_accounts import transaction_account_router
from finance_manager.transactions.api.v1.transactions import transaction_router
from finance_manager.transactions.api.v1.transfers import transfer_router

logger = get_logger(__name__)

router = APIRouter()

router.include_router(transaction_router)
router.include_router(transfer_router)
router.include_router(transaction_account_router)
router.include_router(replication_router)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status message
    """
    logger.debug("Health check requested")
    return {"status": "ok", "service": "transactions"}
