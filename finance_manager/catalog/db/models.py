"""
Database models for the catalog service.

All models use SQLModel (SQLAlchemy 2.x) with the following conventions:
- UUID primary keys
- Decimal columns use Numeric(18, 6) (exchange rates Numeric(24, 10))
- Timestamps in UTC (created_at, updated_at)
- Soft delete through an is_deleted flag, never a separate table
- Foreign keys enforced with PRAGMA foreign_keys=ON

Uniqueness of natural keys (char code, telegram id, names, ...) is checked
by the services with case-insensitive queries before writing, so that a
violation surfaces as a structured error and not an IntegrityError.
"""
from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from sqlalchemy import Column, Numeric, UniqueConstraint, event
from sqlmodel import Field, Relationship

from finance_manager.common.db.base import SoftDeletableModel, TimestampedModel
from finance_manager.common.utils.datetime_utils import utcnow


# ============================================================================
# ENUMS
# ============================================================================

class Role(str, Enum):
    """Role of a registry holder."""
    USER = "User"
    ADMINISTRATOR = "Administrator"


# ============================================================================
# REFERENCE DATA
# ============================================================================

class RegistryHolder(TimestampedModel, table=True):
    """Owner of accounts and categories, identified by a Telegram user id."""
    __tablename__ = "registry_holders"

    telegram_id: int = Field(nullable=False, index=True)
    role: Role = Field(default=Role.USER, nullable=False)


class Country(SoftDeletableModel, table=True):
    __tablename__ = "countries"

    name: str = Field(nullable=False, max_length=100, index=True)


class Bank(SoftDeletableModel, table=True):
    __tablename__ = "banks"

    country_id: UUID = Field(foreign_key="countries.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100)

    country: Optional[Country] = Relationship()


class Currency(SoftDeletableModel, table=True):
    """ISO-4217 style currency: alphabetic char code, numeric code, display sign/emoji."""
    __tablename__ = "currencies"

    name: str = Field(nullable=False, max_length=100)
    char_code: str = Field(nullable=False, max_length=3, index=True)
    num_code: str = Field(nullable=False, max_length=3, index=True)
    sign: Optional[str] = Field(default=None, max_length=10)
    emoji: Optional[str] = Field(default=None, max_length=10)


class AccountType(SoftDeletableModel, table=True):
    __tablename__ = "account_types"

    code: str = Field(nullable=False, max_length=50, index=True)
    description: str = Field(default="", max_length=500)


# ============================================================================
# HOLDER-OWNED DATA
# ============================================================================

class Account(SoftDeletableModel, table=True):
    """
    Holder account.

    Invariants (enforced by AccountService):
    - at most one is_default account per registry holder
    - a default account is never archived nor deleted
    """
    __tablename__ = "accounts"

    registry_holder_id: UUID = Field(foreign_key="registry_holders.id", nullable=False, index=True)
    account_type_id: UUID = Field(foreign_key="account_types.id", nullable=False, index=True)
    currency_id: UUID = Field(foreign_key="currencies.id", nullable=False, index=True)
    bank_id: UUID = Field(foreign_key="banks.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=255)
    is_include_in_balance: bool = Field(default=True)
    is_default: bool = Field(default=False, index=True)
    is_archived: bool = Field(default=False, index=True)
    credit_limit: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 6), nullable=True))

    registry_holder: Optional[RegistryHolder] = Relationship()
    account_type: Optional[AccountType] = Relationship()
    currency: Optional[Currency] = Relationship()
    bank: Optional[Bank] = Relationship()

    def set_as_default(self) -> None:
        self.is_default = True

    def unset_as_default(self) -> None:
        self.is_default = False

    def archive(self) -> None:
        self.is_archived = True

    def unarchive(self) -> None:
        self.is_archived = False


class Category(SoftDeletableModel, table=True):
    """
    Income/expense category, optionally nested under a parent category.

    Name is unique within the (registry holder, parent) scope.
    """
    __tablename__ = "categories"

    registry_holder_id: UUID = Field(foreign_key="registry_holders.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=255)
    income: bool = Field(default=False)
    expense: bool = Field(default=False)
    emoji: Optional[str] = Field(default=None, max_length=10)
    icon: Optional[str] = Field(default=None, max_length=255)
    parent_id: Optional[UUID] = Field(default=None, foreign_key="categories.id", index=True)

    registry_holder: Optional[RegistryHolder] = Relationship()
    parent: Optional["Category"] = Relationship(
        sa_relationship_kwargs={"remote_side": "Category.id"},
        )


class ExchangeRate(TimestampedModel, table=True):
    """Daily rate of one currency: one record per (currency, rate_date)."""
    __tablename__ = "exchange_rates"
    __table_args__ = (
        UniqueConstraint("currency_id", "rate_date", name="uq_exchange_rates_currency_date"),
        )

    currency_id: UUID = Field(foreign_key="currencies.id", nullable=False, index=True)
    rate_date: date_type = Field(nullable=False, index=True)
    rate: Decimal = Field(sa_column=Column(Numeric(24, 10), nullable=False))

    currency: Optional[Currency] = Relationship()


CATALOG_TABLES = [
    RegistryHolder.__table__,
    Country.__table__,
    Bank.__table__,
    Currency.__table__,
    AccountType.__table__,
    Account.__table__,
    Category.__table__,
    ExchangeRate.__table__,
    ]


# ============================================================================
# EVENT LISTENERS
# ============================================================================

@event.listens_for(RegistryHolder, "before_update")
@event.listens_for(Country, "before_update")
@event.listens_for(Bank, "before_update")
@event.listens_for(Currency, "before_update")
@event.listens_for(AccountType, "before_update")
@event.listens_for(Account, "before_update")
@event.listens_for(Category, "before_update")
@event.listens_for(ExchangeRate, "before_update")
def receive_before_update(mapper, connection, target):
    """Update updated_at timestamp on update."""
    target.updated_at = utcnow()
