"""
Exchange rate schemas.

**Naming Convention**:
- ER prefix: ExchangeRate-related schemas

**Design Notes**:
- currency_id / rate_date / rate are Optional on create so that missing values
  surface as the structured *_REQUIRED errors rather than generic validation errors
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from finance_manager.catalog.db.models import ExchangeRate
from finance_manager.catalog.schemas.currencies import CUReadItem
from finance_manager.common.schemas.pagination import PaginationFilter


class ERCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currency_id: Optional[UUID] = None
    rate_date: Optional[date] = None
    rate: Optional[Decimal] = None


class ERCreateRange(BaseModel):
    model_config = ConfigDict(extra="forbid")

    items: List[ERCreateItem] = Field(default_factory=list)


class ERUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    rate_date: Optional[date] = None
    rate: Optional[Decimal] = None


class ERReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    currency_id: UUID
    rate_date: date
    rate: Decimal
    created_at: datetime
    updated_at: datetime
    currency: Optional[CUReadItem] = None

    @classmethod
    def from_entity(cls, rate: ExchangeRate, include_related: bool = False) -> "ERReadItem":
        return cls(
            id=rate.id,
            currency_id=rate.currency_id,
            rate_date=rate.rate_date,
            rate=rate.rate,
            created_at=rate.created_at,
            updated_at=rate.updated_at,
            currency=CUReadItem.model_validate(rate.currency) if include_related and rate.currency else None,
            )


class ERFilter(PaginationFilter):
    currency_id: Optional[UUID] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class ERDeleteByPeriod(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currency_id: UUID
    date_from: date
    date_to: date


class ERDeletedCount(BaseModel):
    deleted: int


class ERLastDate(BaseModel):
    currency_id: UUID
    last_rate_date: Optional[date] = None
