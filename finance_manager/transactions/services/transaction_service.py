"""
Transaction service.

Design Notes:
- amount must be non-zero on create and on update
- account and category must exist locally (replicated) and be usable:
  account neither deleted nor archived, category not deleted
- delete of an unknown id succeeds without doing anything
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.errors import AppError
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result
from finance_manager.transactions.db.models import Transaction
from finance_manager.transactions.errors import TransactionErrors
from finance_manager.transactions.repositories.replicated import TransactionsCategoryRepository
from finance_manager.transactions.repositories.transactions import TransactionRepository
from finance_manager.transactions.schemas.transactions import TXCount, TXCreateItem, TXFilter, TXReadItem, TXUpdateItem
from finance_manager.transactions.services.transaction_account_service import TransactionAccountService

logger = get_logger(__name__)


class TransactionService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = TransactionRepository(session)
        self.categories = TransactionsCategoryRepository(session)
        self.accounts = TransactionAccountService(session)

    async def _check_category(self, category_id: UUID) -> Optional[AppError]:
        category = await self.categories.get_by_id(category_id, disable_tracking=True)
        if category is None:
            return TransactionErrors.category_not_found(category_id)
        if category.is_deleted:
            return TransactionErrors.category_soft_deleted(category_id)
        return None

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, transaction_id: UUID) -> Result[TXReadItem]:
        transaction = await self.repository.get_by_id(transaction_id, disable_tracking=True)
        if transaction is None:
            return Result.fail(TransactionErrors.not_found(transaction_id))
        return Result.ok(TXReadItem.model_validate(transaction))

    async def get_paged(self, filter_: TXFilter) -> Result[List[TXReadItem]]:
        transactions = await self.repository.get_paged(filter_)
        logger.debug("Transactions listed", count=len(transactions), page=filter_.page)
        return Result.ok([TXReadItem.model_validate(t) for t in transactions])

    async def get_count(self, filter_: TXFilter) -> Result[TXCount]:
        return Result.ok(TXCount(count=await self.repository.count(filter_)))

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: TXCreateItem) -> Result[TXReadItem]:
        if item.amount == 0:
            return Result.fail(TransactionErrors.invalid_amount())

        error = (
            await self.accounts.check_account(item.account_id, TransactionErrors)
            or await self._check_category(item.category_id)
            )
        if error is not None:
            return Result.fail(error)

        transaction = await self.repository.add(Transaction(
            date=item.date,
            account_id=item.account_id,
            category_id=item.category_id,
            amount=item.amount,
            description=item.description,
            ))
        await self.session.commit()

        logger.info("Transaction created", id=str(transaction.id), account_id=str(transaction.account_id))
        return Result.ok(TXReadItem.model_validate(transaction))

    async def update(self, item: TXUpdateItem) -> Result[TXReadItem]:
        transaction = await self.repository.get_by_id(item.id)
        if transaction is None:
            return Result.fail(TransactionErrors.not_found(item.id))

        changes: dict = {}
        if item.date is not None and item.date != transaction.date:
            changes["date"] = item.date

        if item.account_id is not None and item.account_id != transaction.account_id:
            error = await self.accounts.check_account(item.account_id, TransactionErrors)
            if error is not None:
                return Result.fail(error)
            changes["account_id"] = item.account_id

        if item.category_id is not None and item.category_id != transaction.category_id:
            error = await self._check_category(item.category_id)
            if error is not None:
                return Result.fail(error)
            changes["category_id"] = item.category_id

        if item.amount is not None and item.amount != transaction.amount:
            if item.amount == 0:
                return Result.fail(TransactionErrors.invalid_amount())
            changes["amount"] = item.amount

        if item.description is not None and item.description != transaction.description:
            changes["description"] = item.description

        if changes:
            for field, value in changes.items():
                setattr(transaction, field, value)
            await self.session.commit()
            logger.info("Transaction updated", id=str(transaction.id), fields=sorted(changes))
        else:
            logger.info("No changes detected for transaction", id=str(transaction.id))

        return Result.ok(TXReadItem.model_validate(transaction))

    async def delete(self, transaction_id: UUID) -> Result[None]:
        transaction = await self.repository.get_by_id(transaction_id)
        if transaction is None:
            return Result.ok()

        await self.repository.delete(transaction)
        await self.session.commit()
        logger.info("Transaction deleted", id=str(transaction_id))
        return Result.ok()
