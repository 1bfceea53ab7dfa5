"""
Shared SQLModel building blocks.

- IdentityModel: UUID primary key
- TimestampedModel: created_at / updated_at in UTC (updated_at is refreshed
  by a before_update listener registered next to each table model)
- SoftDeletableModel: is_deleted flag with mark_as_deleted() / restore()
"""
from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from finance_manager.common.utils.datetime_utils import utcnow


class IdentityModel(SQLModel):
    id: UUID = Field(default_factory=uuid4, primary_key=True)


class TimestampedModel(IdentityModel):
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class SoftDeletableModel(TimestampedModel):
    is_deleted: bool = Field(default=False, index=True)

    def mark_as_deleted(self) -> None:
        self.is_deleted = True

    def restore(self) -> None:
        self.is_deleted = False
