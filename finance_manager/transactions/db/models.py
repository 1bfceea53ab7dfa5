"""
Database models for the transactions service.

Two groups of tables:
- replicated: local copies of catalog data (holders, account types,
  currencies, accounts, categories). Rows keep the catalog ids and are
  written only by the replication loader.
- owned: transactions and transfers, which reference the replicated
  accounts and categories.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Column, Numeric, event
from sqlmodel import Field, Relationship

from finance_manager.catalog.db.models import Role
from finance_manager.common.db.base import IdentityModel, TimestampedModel
from finance_manager.common.utils.datetime_utils import utcnow


# ============================================================================
# REPLICATED FROM CATALOG
# ============================================================================

class TransactionHolder(IdentityModel, table=True):
    __tablename__ = "transaction_holders"

    telegram_id: int = Field(nullable=False, index=True)
    role: Role = Field(default=Role.USER, nullable=False)


class TransactionsAccountType(IdentityModel, table=True):
    __tablename__ = "transactions_account_types"

    code: str = Field(nullable=False, max_length=50)
    description: str = Field(default="", max_length=500)
    is_deleted: bool = Field(default=False)


class TransactionsCurrency(IdentityModel, table=True):
    __tablename__ = "transactions_currencies"

    name: str = Field(nullable=False, max_length=100)
    char_code: str = Field(nullable=False, max_length=3)
    num_code: str = Field(nullable=False, max_length=3)
    is_deleted: bool = Field(default=False)


class TransactionsAccount(IdentityModel, table=True):
    __tablename__ = "transactions_accounts"

    holder_id: UUID = Field(foreign_key="transaction_holders.id", nullable=False, index=True)
    account_type_id: UUID = Field(foreign_key="transactions_account_types.id", nullable=False, index=True)
    currency_id: UUID = Field(foreign_key="transactions_currencies.id", nullable=False, index=True)
    credit_limit: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 6), nullable=True))
    is_archived: bool = Field(default=False, index=True)
    is_deleted: bool = Field(default=False, index=True)

    holder: Optional[TransactionHolder] = Relationship()
    account_type: Optional[TransactionsAccountType] = Relationship()
    currency: Optional[TransactionsCurrency] = Relationship()


class TransactionsCategory(IdentityModel, table=True):
    __tablename__ = "transactions_categories"

    holder_id: UUID = Field(foreign_key="transaction_holders.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=255)
    income: bool = Field(default=False)
    expense: bool = Field(default=False)
    is_deleted: bool = Field(default=False, index=True)


# ============================================================================
# OWNED
# ============================================================================

class Transaction(TimestampedModel, table=True):
    """Single income or expense movement on one account (amount is signed, never zero)."""
    __tablename__ = "transactions"

    date: datetime = Field(nullable=False, index=True)
    account_id: UUID = Field(foreign_key="transactions_accounts.id", nullable=False, index=True)
    category_id: UUID = Field(foreign_key="transactions_categories.id", nullable=False, index=True)
    amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    description: Optional[str] = Field(default=None, max_length=1000)


class Transfer(TimestampedModel, table=True):
    """Movement between two accounts of possibly different currencies."""
    __tablename__ = "transfers"

    date: datetime = Field(nullable=False, index=True)
    from_account_id: UUID = Field(foreign_key="transactions_accounts.id", nullable=False, index=True)
    to_account_id: UUID = Field(foreign_key="transactions_accounts.id", nullable=False, index=True)
    from_amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    to_amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    description: Optional[str] = Field(default=None, max_length=1000)


TRANSACTIONS_TABLES = [
    TransactionHolder.__table__,
    TransactionsAccountType.__table__,
    TransactionsCurrency.__table__,
    TransactionsAccount.__table__,
    TransactionsCategory.__table__,
    Transaction.__table__,
    Transfer.__table__,
    ]


@event.listens_for(Transaction, "before_update")
@event.listens_for(Transfer, "before_update")
def receive_before_update(mapper, connection, target):
    """Update updated_at timestamp on update."""
    target.updated_at = utcnow()
