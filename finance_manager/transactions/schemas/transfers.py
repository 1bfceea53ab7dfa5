"""
Transfer schemas.

**Naming Convention**:
- TR prefix: Transfer-related schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text
from finance_manager.common.utils.datetime_utils import ensure_utc


class TRCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: datetime
    from_account_id: UUID
    to_account_id: UUID
    from_amount: Decimal
    to_amount: Decimal
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return strip_text(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        return ensure_utc(v)


class TRUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    date: Optional[datetime] = None
    from_account_id: Optional[UUID] = None
    to_account_id: Optional[UUID] = None
    from_amount: Optional[Decimal] = None
    to_amount: Optional[Decimal] = None
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return strip_text(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        return ensure_utc(v)


class TRReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    date: datetime
    from_account_id: UUID
    to_account_id: UUID
    from_amount: Decimal
    to_amount: Decimal
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TRFilter(PaginationFilter):
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    account_id: Optional[UUID] = Field(default=None, description="Matches either side of the transfer")
    from_account_id: Optional[UUID] = None
    to_account_id: Optional[UUID] = None
    description_contains: Optional[str] = None

    @field_validator('date_from', 'date_to')
    @classmethod
    def validate_dates(cls, v):
        return ensure_utc(v)


class TRCount(BaseModel):
    count: int
