"""
Transactions service error factories.
"""
from typing import Any
from uuid import UUID

from fastapi import status

from finance_manager.common.errors import AppError, ErrorsFactory
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)


def _logged(error: AppError, **context: Any) -> AppError:
    logger.warning(error.message, code=error.code, **context)
    return error


class TransactionErrors:
    ENTITY = "Transaction"

    @classmethod
    def not_found(cls, transaction_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("TRANSACTION_NOT_FOUND", cls.ENTITY, transaction_id), id=str(transaction_id))

    @classmethod
    def invalid_amount(cls) -> AppError:
        return _logged(AppError(
            "TRANSACTION_INVALID_AMOUNT",
            status.HTTP_400_BAD_REQUEST,
            "Transaction amount must not be zero",
            ))

    @classmethod
    def account_not_found(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("TRANSACTION_ACCOUNT_NOT_FOUND", "Account", account_id), id=str(account_id))

    @classmethod
    def account_soft_deleted(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.soft_deleted("TRANSACTION_ACCOUNT_SOFT_DELETED", "Account", account_id), id=str(account_id))

    @classmethod
    def account_archived(cls, account_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "TRANSACTION_ACCOUNT_ARCHIVED",
                f"Account '{account_id}' is archived and cannot be used for transactions",
                ),
            id=str(account_id),
            )

    @classmethod
    def category_not_found(cls, category_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("TRANSACTION_CATEGORY_NOT_FOUND", "Category", category_id), id=str(category_id))

    @classmethod
    def category_soft_deleted(cls, category_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.soft_deleted("TRANSACTION_CATEGORY_SOFT_DELETED", "Category", category_id),
            id=str(category_id),
            )


class TransferErrors:
    ENTITY = "Transfer"

    @classmethod
    def not_found(cls, transfer_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("TRANSFER_NOT_FOUND", cls.ENTITY, transfer_id), id=str(transfer_id))

    @classmethod
    def invalid_amount(cls) -> AppError:
        return _logged(AppError(
            "TRANSFER_INVALID_AMOUNT",
            status.HTTP_400_BAD_REQUEST,
            "Transfer amounts must not be zero",
            ))

    @classmethod
    def same_account(cls, account_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "TRANSFER_SAME_ACCOUNT",
                f"Cannot transfer from account '{account_id}' to itself",
                ),
            id=str(account_id),
            )

    @classmethod
    def account_not_found(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("TRANSFER_ACCOUNT_NOT_FOUND", "Account", account_id), id=str(account_id))

    @classmethod
    def account_soft_deleted(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.soft_deleted("TRANSFER_ACCOUNT_SOFT_DELETED", "Account", account_id), id=str(account_id))

    @classmethod
    def account_archived(cls, account_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "TRANSFER_ACCOUNT_ARCHIVED",
                f"Account '{account_id}' is archived and cannot be used for transfers",
                ),
            id=str(account_id),
            )


class TransactionAccountErrors:

    @classmethod
    def not_found(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("TRANSACTION_ACCOUNT_NOT_FOUND", "Account", account_id), id=str(account_id))


class ReplicationErrors:

    @classmethod
    def external_api(cls, kind: str, message: str) -> AppError:
        return _logged(
            ErrorsFactory.external_api("EXTERNAL_API_ERROR", f"Failed to load {kind} from catalog: {message}"),
            kind=kind,
            )
