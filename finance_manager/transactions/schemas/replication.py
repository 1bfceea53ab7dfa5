"""
Catalog payloads consumed by the replication loader.

The catalog answers with its full read DTOs; only the fields replicated
locally are declared here, anything else is ignored.
"""
from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from finance_manager.catalog.db.models import Role


class _CatalogItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: UUID


class RPHolderItem(_CatalogItem):
    telegram_id: int
    role: Role = Role.USER


class RPAccountTypeItem(_CatalogItem):
    code: str
    description: str = ""
    is_deleted: bool = False


class RPCurrencyItem(_CatalogItem):
    name: str
    char_code: str
    num_code: str
    is_deleted: bool = False


class RPAccountItem(_CatalogItem):
    registry_holder_id: UUID
    account_type_id: UUID
    currency_id: UUID
    credit_limit: Optional[Decimal] = None
    is_archived: bool = False
    is_deleted: bool = False


class RPCategoryItem(_CatalogItem):
    registry_holder_id: UUID
    name: str
    income: bool = False
    expense: bool = False
    is_deleted: bool = False


class RPRunSummary(BaseModel):
    """Outcome of one replication pass: rows upserted per kind and the first failure, if any."""
    counts: Dict[str, int]
    success: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None
