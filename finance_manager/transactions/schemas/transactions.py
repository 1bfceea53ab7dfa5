"""
Transaction schemas.

**Naming Convention**:
- TX prefix: Transaction-related schemas

**Design Notes**:
- amount is signed (income positive, expense negative) and never zero
- TXUpdateItem fields are all optional; None means "leave as is"
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text
from finance_manager.common.utils.datetime_utils import ensure_utc


class TXCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: datetime
    account_id: UUID
    category_id: UUID
    amount: Decimal
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return strip_text(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        return ensure_utc(v)


class TXUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    date: Optional[datetime] = None
    account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return strip_text(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        return ensure_utc(v)


class TXReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    date: datetime
    account_id: UUID
    category_id: UUID
    amount: Decimal
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TXFilter(PaginationFilter):
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    amount_from: Optional[Decimal] = Field(default=None, description="Minimum amount, inclusive")
    amount_to: Optional[Decimal] = Field(default=None, description="Maximum amount, inclusive")
    description_contains: Optional[str] = None

    @field_validator('date_from', 'date_to')
    @classmethod
    def validate_dates(cls, v):
        return ensure_utc(v)


class TXCount(BaseModel):
    count: int
