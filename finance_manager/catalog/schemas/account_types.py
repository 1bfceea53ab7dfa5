"""
Account type schemas.

**Naming Convention**:
- AT prefix: AccountType-related schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text


class ATCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str = Field(default="", max_length=50)
    description: str = Field(default="", max_length=500)

    @field_validator('code', 'description')
    @classmethod
    def validate_text(cls, v):
        return strip_text(v)


class ATUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    code: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator('code', 'description')
    @classmethod
    def validate_text(cls, v):
        return strip_text(v)


class ATReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    code: str
    description: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class ATFilter(PaginationFilter):
    code_contains: Optional[str] = None
    description_contains: Optional[str] = None
    include_deleted: bool = False
