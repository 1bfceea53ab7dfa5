"""
Country schemas.

**Naming Convention**:
- CN prefix: Country-related schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text


class CNCreateItem(BaseModel):
    """DTO for POST /countries. Empty name is rejected by the service (COUNTRY_NAME_REQUIRED)."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="", max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class CNUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    name: Optional[str] = Field(default=None, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class CNReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    name: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class CNFilter(PaginationFilter):
    name_contains: Optional[str] = None
    include_deleted: bool = False
