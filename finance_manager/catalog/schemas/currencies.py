"""
Currency schemas.

**Naming Convention**:
- CU prefix: Currency-related schemas

**Design Notes**:
- char_code is upper-cased on input; uniqueness is still checked case-insensitively
- num_code is kept as a string (ISO 4217 numeric codes have leading zeros: "008")
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text


class CUCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="", max_length=100)
    char_code: str = Field(default="", max_length=3)
    num_code: str = Field(default="", max_length=3)
    sign: Optional[str] = Field(default=None, max_length=10)
    emoji: Optional[str] = Field(default=None, max_length=10)

    @field_validator('name', 'char_code', 'num_code', 'sign', 'emoji')
    @classmethod
    def validate_text(cls, v):
        return strip_text(v)

    @field_validator('char_code')
    @classmethod
    def upper_char_code(cls, v):
        return v.upper()


class CUUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    name: Optional[str] = Field(default=None, max_length=100)
    char_code: Optional[str] = Field(default=None, max_length=3)
    num_code: Optional[str] = Field(default=None, max_length=3)
    sign: Optional[str] = Field(default=None, max_length=10)
    emoji: Optional[str] = Field(default=None, max_length=10)

    @field_validator('name', 'char_code', 'num_code', 'sign', 'emoji')
    @classmethod
    def validate_text(cls, v):
        return strip_text(v)

    @field_validator('char_code')
    @classmethod
    def upper_char_code(cls, v):
        return v.upper() if v is not None else v


class CUReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    name: str
    char_code: str
    num_code: str
    sign: Optional[str] = None
    emoji: Optional[str] = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class CUFilter(PaginationFilter):
    name_contains: Optional[str] = None
    char_code: Optional[str] = None
    num_code: Optional[str] = None
    include_deleted: bool = False
