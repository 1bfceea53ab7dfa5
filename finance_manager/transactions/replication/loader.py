"""
Upsert of catalog data into the local replicated tables.

Every kind (holders, account types, currencies, accounts, categories) is
loaded under its own asyncio.Lock, so two overlapping runs never upsert
the same kind at the same time. Locks are kept per event loop. A kind is
committed once, after the whole collection has been processed; a failed
fetch rolls the session back and leaves the kind's tables untouched.
"""
import asyncio
import weakref
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.errors import ExternalApiError
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result
from finance_manager.transactions.clients.catalog_api import CatalogApiClient
from finance_manager.transactions.errors import ReplicationErrors
from finance_manager.transactions.repositories.replicated import (
    ReplicaRepository,
    TransactionHolderRepository,
    TransactionsAccountRepository,
    TransactionsAccountTypeRepository,
    TransactionsCategoryRepository,
    TransactionsCurrencyRepository,
    )
from finance_manager.transactions.schemas.replication import (
    RPAccountItem,
    RPAccountTypeItem,
    RPCategoryItem,
    RPCurrencyItem,
    RPHolderItem,
    )

logger = get_logger(__name__)

HOLDERS = "holders"
ACCOUNT_TYPES = "account_types"
CURRENCIES = "currencies"
ACCOUNTS = "accounts"
CATEGORIES = "categories"

REPLICATED_KINDS = (HOLDERS, ACCOUNT_TYPES, CURRENCIES, ACCOUNTS, CATEGORIES)

# One lock set per event loop: an asyncio.Lock binds to the loop it is first contended on.
_kind_locks: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def get_kind_lock(kind: str) -> asyncio.Lock:
    """Lock guarding the upsert of one replicated kind in the running event loop."""
    if kind not in REPLICATED_KINDS:
        raise ValueError(f"Unknown replicated kind: {kind}")
    loop = asyncio.get_running_loop()
    locks = _kind_locks.get(loop)
    if locks is None:
        locks = {k: asyncio.Lock() for k in REPLICATED_KINDS}
        _kind_locks[loop] = locks
    return locks[kind]


class ExternalDataLoaderService:

    def __init__(self, session: AsyncSession, client: CatalogApiClient):
        self.session = session
        self.client = client

    async def _load(
        self,
        kind: str,
        fetch: Callable[[], Awaitable[Sequence[Any]]],
        repository: ReplicaRepository,
        to_values: Callable[[Any], Dict[str, Any]],
        ) -> Result[int]:
        async with get_kind_lock(kind):
            try:
                items = await fetch()
                created = 0
                for item in items:
                    _, is_new = await repository.upsert(item.id, to_values(item))
                    created += is_new
                await self.session.commit()
            except ExternalApiError as e:
                await self.session.rollback()
                return Result.fail(ReplicationErrors.external_api(kind, e.message))
            except SQLAlchemyError:
                await self.session.rollback()
                logger.error("Replication upsert failed", kind=kind, exc_info=True)
                raise

        logger.info("Replicated catalog data", kind=kind, total=len(items), created=created, updated=len(items) - created)
        return Result.ok(len(items))

    async def load_holders(self) -> Result[int]:
        def to_values(item: RPHolderItem) -> Dict[str, Any]:
            return {"telegram_id": item.telegram_id, "role": item.role}

        return await self._load(HOLDERS, self.client.get_all_holders, TransactionHolderRepository(self.session), to_values)

    async def load_account_types(self) -> Result[int]:
        def to_values(item: RPAccountTypeItem) -> Dict[str, Any]:
            return {"code": item.code, "description": item.description, "is_deleted": item.is_deleted}

        return await self._load(
            ACCOUNT_TYPES,
            self.client.get_all_account_types,
            TransactionsAccountTypeRepository(self.session),
            to_values,
            )

    async def load_currencies(self) -> Result[int]:
        def to_values(item: RPCurrencyItem) -> Dict[str, Any]:
            return {
                "name": item.name,
                "char_code": item.char_code,
                "num_code": item.num_code,
                "is_deleted": item.is_deleted,
                }

        return await self._load(
            CURRENCIES,
            self.client.get_all_currencies,
            TransactionsCurrencyRepository(self.session),
            to_values,
            )

    async def load_accounts(self) -> Result[int]:
        def to_values(item: RPAccountItem) -> Dict[str, Any]:
            return {
                "holder_id": item.registry_holder_id,
                "account_type_id": item.account_type_id,
                "currency_id": item.currency_id,
                "credit_limit": item.credit_limit,
                "is_archived": item.is_archived,
                "is_deleted": item.is_deleted,
                }

        return await self._load(ACCOUNTS, self.client.get_all_accounts, TransactionsAccountRepository(self.session), to_values)

    async def load_categories(self) -> Result[int]:
        def to_values(item: RPCategoryItem) -> Dict[str, Any]:
            return {
                "holder_id": item.registry_holder_id,
                "name": item.name,
                "income": item.income,
                "expense": item.expense,
                "is_deleted": item.is_deleted,
                }

        return await self._load(
            CATEGORIES,
            self.client.get_all_categories,
            TransactionsCategoryRepository(self.session),
            to_values,
            )

    def loaders(self) -> List[tuple[str, Callable[[], Awaitable[Result[int]]]]]:
        """Loaders in dependency order: referenced kinds come before the kinds referencing them."""
        return [
            (HOLDERS, self.load_holders),
            (ACCOUNT_TYPES, self.load_account_types),
            (CURRENCIES, self.load_currencies),
            (ACCOUNTS, self.load_accounts),
            (CATEGORIES, self.load_categories),
            ]
