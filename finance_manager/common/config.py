"""
Application configuration module.
Loads environment variables and provides settings shared by the catalog
and transactions services.
"""
import os
from pathlib import Path

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Project root (two levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Global flag to indicate test mode (set via set_test_mode() or FINANCE_MANAGER_TEST_MODE env var)
_test_mode = os.environ.get("FINANCE_MANAGER_TEST_MODE", "").lower() in ("1", "true", "yes")


def set_test_mode(enabled: bool = True):
    """
    Enable/disable test mode globally.
    When enabled, both service database URLs are swapped for their TEST_ counterparts.

    Args:
        enabled: True to enable test mode, False to disable
    """
    global _test_mode
    _test_mode = enabled
    os.environ["FINANCE_MANAGER_TEST_MODE"] = "1" if enabled else "0"


def is_test_mode() -> bool:
    """Check if test mode is enabled."""
    return _test_mode


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    (Note: Environment variables take precedence over .env file)
    """
    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "FinanceManager"
    VERSION: str = "0.1.0"

    # Databases (one per service)
    CATALOG_DATABASE_URL: str = "sqlite:///./data/catalog.db"
    TRANSACTIONS_DATABASE_URL: str = "sqlite:///./data/transactions.db"
    TEST_CATALOG_DATABASE_URL: str = "sqlite:///./data/test_catalog.db"
    TEST_TRANSACTIONS_DATABASE_URL: str = "sqlite:///./data/test_transactions.db"

    # Server
    CATALOG_PORT: int = 8000
    TRANSACTIONS_PORT: int = 8001

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE_ENABLED: bool = True
    LOG_DIR: str = "./logs"

    # CORS (for frontend development)
    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Pagination
    DEFAULT_ITEMS_PER_PAGE: int = 20
    MAX_ITEMS_PER_PAGE: int = 1000

    # Catalog reference data
    SEED_REFERENCE_DATA: bool = True
    SEED_CURRENCY_CODES: list[str] = ["RUB", "USD", "EUR"]

    # Replication (transactions service pulling from catalog)
    CATALOG_API_BASE_URL: str = "http://localhost:8000"
    CATALOG_API_TIMEOUT_SECONDS: float = 30.0
    CATALOG_API_PAGE_SIZE: int = 1000
    REPLICATION_ENABLED: bool = True
    REPLICATION_INTERVAL_SECONDS: int = 3600

    model_config = ConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=True,
        env_file_encoding='utf-8',
        extra="ignore",
        )


def get_settings() -> Settings:
    """
    Get settings instance.

    In test mode, both database URLs are overridden with their TEST_ variants.

    Returns:
        Settings: Application settings
    """
    settings = Settings()

    if is_test_mode():
        settings.CATALOG_DATABASE_URL = settings.TEST_CATALOG_DATABASE_URL
        settings.TRANSACTIONS_DATABASE_URL = settings.TEST_TRANSACTIONS_DATABASE_URL

    return settings
