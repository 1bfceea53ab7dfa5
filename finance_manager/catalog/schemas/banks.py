"""
Bank schemas.

**Naming Convention**:
- BK prefix: Bank-related schemas

**Design Notes**:
- BKReadItem.country is filled only when the bank is read with related data
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.catalog.db.models import Bank
from finance_manager.catalog.schemas.countries import CNReadItem
from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text


class BKCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    country_id: UUID
    name: str = Field(default="", max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class BKUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    country_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class BKReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    country_id: UUID
    name: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    country: Optional[CNReadItem] = None

    @classmethod
    def from_entity(cls, bank: Bank, include_related: bool = False) -> "BKReadItem":
        return cls(
            id=bank.id,
            country_id=bank.country_id,
            name=bank.name,
            is_deleted=bank.is_deleted,
            created_at=bank.created_at,
            updated_at=bank.updated_at,
            country=CNReadItem.model_validate(bank.country) if include_related and bank.country else None,
            )


class BKFilter(PaginationFilter):
    country_id: Optional[UUID] = None
    name_contains: Optional[str] = None
    include_deleted: bool = False


class BKAccountsCount(BaseModel):
    bank_id: UUID
    count: int
