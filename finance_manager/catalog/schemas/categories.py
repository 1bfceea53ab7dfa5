"""
Category schemas.

**Naming Convention**:
- CT prefix: Category-related schemas

**Design Notes**:
- parent_id in CTUpdateItem: omitted means unchanged; to detach a category
  from its parent send `"detach_parent": true`
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_manager.catalog.db.models import Category
from finance_manager.catalog.schemas.registry_holders import RHReadItem
from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.common.schemas.text import strip_text


class CTCreateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    registry_holder_id: UUID
    name: str = Field(default="", max_length=255)
    income: bool = False
    expense: bool = False
    emoji: Optional[str] = Field(default=None, max_length=10)
    icon: Optional[str] = Field(default=None, max_length=255)
    parent_id: Optional[UUID] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class CTUpdateItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    name: Optional[str] = Field(default=None, max_length=255)
    income: Optional[bool] = None
    expense: Optional[bool] = None
    emoji: Optional[str] = Field(default=None, max_length=10)
    icon: Optional[str] = Field(default=None, max_length=255)
    parent_id: Optional[UUID] = None
    detach_parent: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_text(v)


class CTParentItem(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True)

    id: UUID
    name: str
    parent_id: Optional[UUID] = None


class CTReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: UUID
    registry_holder_id: UUID
    name: str
    income: bool
    expense: bool
    emoji: Optional[str] = None
    icon: Optional[str] = None
    parent_id: Optional[UUID] = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    registry_holder: Optional[RHReadItem] = None
    parent: Optional[CTParentItem] = None

    @classmethod
    def from_entity(cls, category: Category, include_related: bool = False) -> "CTReadItem":
        item = cls(
            id=category.id,
            registry_holder_id=category.registry_holder_id,
            name=category.name,
            income=category.income,
            expense=category.expense,
            emoji=category.emoji,
            icon=category.icon,
            parent_id=category.parent_id,
            is_deleted=category.is_deleted,
            created_at=category.created_at,
            updated_at=category.updated_at,
            )
        if include_related:
            if category.registry_holder:
                item.registry_holder = RHReadItem.model_validate(category.registry_holder)
            if category.parent_id is not None and category.parent:
                item.parent = CTParentItem.model_validate(category.parent)
        return item


class CTFilter(PaginationFilter):
    registry_holder_id: Optional[UUID] = None
    name_contains: Optional[str] = None
    income: Optional[bool] = None
    expense: Optional[bool] = None
    parent_id: Optional[UUID] = None
    include_deleted: bool = False
