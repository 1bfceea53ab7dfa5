"""
Account schemas.

**Naming Convention**:
- AC prefix: Account-related schemas

**Design Notes**:
- ACUpdateItem carries only the fields to change; None means "leave as is"
- Related objects (type, currency, bank, holder) are embedded in ACReadItem
  only when the account was loaded with related data
- is_default on create/update is honoured by clearing the holder's previous
  default in the same commit
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.catalog.db.models import Account
from finance_manager.catalog.schemas.account_types import ATReadItem
from finance_manager.catalog.schemas.banks import BKReadItem
from finance_manager.catalog.schemas.currencies import CUReadItem
from finance_manager.catalog.schemas.registry_holders import RHReadItem
from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text


# =============================================================================
# ACCOUNT CREATE / UPDATE
# =============================================================================

class ACCreateItem(BaseModel):
    """DTO for POST /accounts."""
    model_config = ConfigDict(extra="forbid")

    registry_holder_id: UUID
    account_type_id: UUID
    currency_id: UUID
    bank_id: UUID
    name: str = Field(default="", max_length=255)
    is_include_in_balance: bool = True
    is_default: bool = False
    is_archived: bool = False
    credit_limit: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class ACUpdateItem(BaseModel):
    """DTO for PUT /accounts. Only provided (non-None) fields are applied."""
    model_config = ConfigDict(extra="forbid")

    id: UUID
    account_type_id: Optional[UUID] = None
    currency_id: Optional[UUID] = None
    bank_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, max_length=255)
    is_include_in_balance: Optional[bool] = None
    is_default: Optional[bool] = None
    is_archived: Optional[bool] = None
    credit_limit: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


# =============================================================================
# ACCOUNT READ
# =============================================================================

class ACReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    registry_holder_id: UUID
    account_type_id: UUID
    currency_id: UUID
    bank_id: UUID
    name: str
    is_include_in_balance: bool
    is_default: bool
    is_archived: bool
    is_deleted: bool
    credit_limit: Optional[Decimal] = None
    created_at: datetime
    updated_at: datetime

    registry_holder: Optional[RHReadItem] = None
    account_type: Optional[ATReadItem] = None
    currency: Optional[CUReadItem] = None
    bank: Optional[BKReadItem] = None

    @classmethod
    def from_entity(cls, account: Account, include_related: bool = False) -> "ACReadItem":
        """
        Map an Account to its DTO.

        Relationships are only touched when include_related is True, i.e. when
        the repository eager-loaded them.
        """
        item = cls(
            id=account.id,
            registry_holder_id=account.registry_holder_id,
            account_type_id=account.account_type_id,
            currency_id=account.currency_id,
            bank_id=account.bank_id,
            name=account.name,
            is_include_in_balance=account.is_include_in_balance,
            is_default=account.is_default,
            is_archived=account.is_archived,
            is_deleted=account.is_deleted,
            credit_limit=account.credit_limit,
            created_at=account.created_at,
            updated_at=account.updated_at,
            )
        if include_related:
            if account.registry_holder:
                item.registry_holder = RHReadItem.model_validate(account.registry_holder)
            if account.account_type:
                item.account_type = ATReadItem.model_validate(account.account_type)
            if account.currency:
                item.currency = CUReadItem.model_validate(account.currency)
            if account.bank:
                item.bank = BKReadItem.from_entity(account.bank)
        return item


class ACFilter(PaginationFilter):
    registry_holder_id: Optional[UUID] = None
    account_type_id: Optional[UUID] = None
    currency_id: Optional[UUID] = None
    bank_id: Optional[UUID] = None
    name_contains: Optional[str] = None
    is_include_in_balance: Optional[bool] = None
    is_default: Optional[bool] = None
    is_archived: Optional[bool] = None
    include_deleted: bool = False
    credit_limit_from: Optional[Decimal] = None
    credit_limit_to: Optional[Decimal] = None
