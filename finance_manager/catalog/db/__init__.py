"""
Catalog database module exports.
"""
from finance_manager.catalog.db.models import (
    Role,
    RegistryHolder,
    Country,
    Bank,
    Currency,
    AccountType,
    Account,
    Category,
    ExchangeRate,
    CATALOG_TABLES,
    )

__all__ = [
    "Role",
    "RegistryHolder",
    "Country",
    "Bank",
    "Currency",
    "AccountType",
    "Account",
    "Category",
    "ExchangeRate",
    "CATALOG_TABLES",
    ]
