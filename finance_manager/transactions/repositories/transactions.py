"""Transaction persistence."""
from sqlalchemy import Select

from finance_manager.common.db.repository import BaseRepository
from finance_manager.transactions.db.models import Transaction
from finance_manager.transactions.schemas.transactions import TXFilter


class TransactionRepository(BaseRepository[Transaction, TXFilter]):
    model = Transaction

    def _apply_filter(self, stmt: Select, filter_: TXFilter) -> Select:
        if filter_.date_from is not None:
            stmt = stmt.where(Transaction.date >= filter_.date_from)
        if filter_.date_to is not None:
            stmt = stmt.where(Transaction.date <= filter_.date_to)
        if filter_.account_id is not None:
            stmt = stmt.where(Transaction.account_id == filter_.account_id)
        if filter_.category_id is not None:
            stmt = stmt.where(Transaction.category_id == filter_.category_id)
        if filter_.amount_from is not None:
            stmt = stmt.where(Transaction.amount >= filter_.amount_from)
        if filter_.amount_to is not None:
            stmt = stmt.where(Transaction.amount <= filter_.amount_to)
        if filter_.description_contains:
            stmt = stmt.where(Transaction.description.icontains(filter_.description_contains))
        return stmt

    def _order_by(self) -> list:
        return [Transaction.date.desc(), Transaction.id]
