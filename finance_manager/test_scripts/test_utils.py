"""
Builders shared by the test modules.

Catalog helpers go through the services (so they exercise the same checks
as the API); replicated transactions data is inserted directly, the way
the replication loader writes it.
"""
from dataclasses import dataclass
from itertools import count
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

import httpx
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.schemas.account_types import ATCreateItem
from finance_manager.catalog.schemas.accounts import ACCreateItem, ACReadItem
from finance_manager.catalog.schemas.banks import BKCreateItem
from finance_manager.catalog.schemas.countries import CNCreateItem
from finance_manager.catalog.schemas.currencies import CUCreateItem
from finance_manager.catalog.schemas.registry_holders import RHCreateItem
from finance_manager.catalog.services.account_service import AccountService
from finance_manager.catalog.services.account_type_service import AccountTypeService
from finance_manager.catalog.services.bank_service import BankService
from finance_manager.catalog.services.country_service import CountryService
from finance_manager.catalog.services.currency_service import CurrencyService
from finance_manager.catalog.services.registry_holder_service import RegistryHolderService
from finance_manager.transactions.clients.catalog_api import CatalogApiClient
from finance_manager.transactions.db.models import (
    TransactionHolder,
    TransactionsAccount,
    TransactionsAccountType,
    TransactionsCategory,
    TransactionsCurrency,
    )

_telegram_ids = count(1000)


@dataclass
class CatalogRefs:
    """Ids of the reference rows an account needs."""
    holder_id: UUID
    account_type_id: UUID
    currency_id: UUID
    bank_id: UUID
    country_id: UUID


async def count_rows(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def create_holder(session: AsyncSession, telegram_id: Optional[int] = None) -> UUID:
    result = await RegistryHolderService(session).create(RHCreateItem(telegram_id=telegram_id or next(_telegram_ids)))
    assert result.is_success, result.error
    return result.value.id


async def create_catalog_refs(session: AsyncSession, telegram_id: Optional[int] = None) -> CatalogRefs:
    holder_id = await create_holder(session, telegram_id)

    country = await CountryService(session).create(CNCreateItem(name="Testland"))
    bank = await BankService(session).create(BKCreateItem(country_id=country.value.id, name="Test Bank"))
    currency = await CurrencyService(session).create(CUCreateItem(name="Russian ruble", char_code="RUB", num_code="643"))
    account_type = await AccountTypeService(session).create(ATCreateItem(code="CARD", description="Bank card"))

    return CatalogRefs(
        holder_id=holder_id,
        account_type_id=account_type.value.id,
        currency_id=currency.value.id,
        bank_id=bank.value.id,
        country_id=country.value.id,
        )


async def create_account(
    session: AsyncSession,
    refs: CatalogRefs,
    name: str = "Wallet",
    is_default: bool = False,
    is_archived: bool = False,
    holder_id: Optional[UUID] = None,
    ) -> ACReadItem:
    result = await AccountService(session).create(ACCreateItem(
        registry_holder_id=holder_id or refs.holder_id,
        account_type_id=refs.account_type_id,
        currency_id=refs.currency_id,
        bank_id=refs.bank_id,
        name=name,
        is_default=is_default,
        is_archived=is_archived,
        ))
    assert result.is_success, result.error
    return result.value


# ============================================================================
# REPLICATED DATA (transactions service)
# ============================================================================

@dataclass
class ReplicaRefs:
    holder_id: UUID
    account_id: UUID
    other_account_id: UUID
    archived_account_id: UUID
    deleted_account_id: UUID
    category_id: UUID
    deleted_category_id: UUID


async def create_replica_refs(session: AsyncSession) -> ReplicaRefs:
    holder = TransactionHolder(id=uuid4(), telegram_id=next(_telegram_ids))
    account_type = TransactionsAccountType(id=uuid4(), code="CARD")
    currency = TransactionsCurrency(id=uuid4(), name="Euro", char_code="EUR", num_code="978")
    session.add_all([holder, account_type, currency])
    await session.flush()

    def account(**flags) -> TransactionsAccount:
        return TransactionsAccount(
            id=uuid4(),
            holder_id=holder.id,
            account_type_id=account_type.id,
            currency_id=currency.id,
            **flags,
            )

    accounts = [account(), account(), account(is_archived=True), account(is_deleted=True)]
    categories = [
        TransactionsCategory(id=uuid4(), holder_id=holder.id, name="Food", expense=True),
        TransactionsCategory(id=uuid4(), holder_id=holder.id, name="Old", expense=True, is_deleted=True),
        ]
    session.add_all(accounts + categories)
    await session.commit()

    return ReplicaRefs(
        holder_id=holder.id,
        account_id=accounts[0].id,
        other_account_id=accounts[1].id,
        archived_account_id=accounts[2].id,
        deleted_account_id=accounts[3].id,
        category_id=categories[0].id,
        deleted_category_id=categories[1].id,
        )


# ============================================================================
# FAKE CATALOG API (httpx.MockTransport)
# ============================================================================

class FakeCatalog:
    """
    In-process stand-in for the catalog's read endpoints.

    Collections are lists of JSON objects keyed by path ("/accounts", ...).
    `failures` maps a path to the HTTP status it should answer with, or to an
    exception instance the transport raises.
    """
    PREFIX = "/api/v1"

    def __init__(self):
        self.collections: Dict[str, List[Dict[str, Any]]] = {
            "/registry-holders": [],
            "/account-types": [],
            "/currencies": [],
            "/accounts": [],
            "/categories": [],
            }
        self.failures: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, page_size: int = 100) -> CatalogApiClient:
        return CatalogApiClient(base_url="http://catalog.test", page_size=page_size, transport=self.transport())

    def paths_requested(self) -> List[str]:
        return [r.url.path.removeprefix(self.PREFIX) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(self.PREFIX)

        failure = self.failures.get(path)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return httpx.Response(failure, json={"detail": "failure"})

        if path in self.collections:
            page = int(request.url.params.get("Page", 1))
            size = int(request.url.params.get("ItemsPerPage", 100))
            rows = self.collections[path][(page - 1) * size:page * size]
            return httpx.Response(200, json=rows)

        collection, _, entity_id = path.rpartition("/")
        for row in self.collections.get(collection, []):
            if row["id"] == entity_id:
                return httpx.Response(200, json=row)
        return httpx.Response(404, json={"detail": "not found"})

    # Builders returning the catalog's snake_case JSON

    def add_holder(self, telegram_id: int) -> Dict[str, Any]:
        row = {"id": str(uuid4()), "telegram_id": telegram_id, "role": "User"}
        self.collections["/registry-holders"].append(row)
        return row

    def add_account_type(self, code: str = "CARD", is_deleted: bool = False) -> Dict[str, Any]:
        row = {"id": str(uuid4()), "code": code, "description": code.title(), "is_deleted": is_deleted}
        self.collections["/account-types"].append(row)
        return row

    def add_currency(self, char_code: str = "EUR", num_code: str = "978", is_deleted: bool = False) -> Dict[str, Any]:
        row = {"id": str(uuid4()), "name": char_code, "char_code": char_code, "num_code": num_code, "is_deleted": is_deleted}
        self.collections["/currencies"].append(row)
        return row

    def add_account(self, holder, account_type, currency, **flags) -> Dict[str, Any]:
        row = {
            "id": str(uuid4()),
            "registry_holder_id": holder["id"],
            "account_type_id": account_type["id"],
            "currency_id": currency["id"],
            "name": "Catalog only field",
            "credit_limit": flags.pop("credit_limit", None),
            "is_archived": flags.pop("is_archived", False),
            "is_deleted": flags.pop("is_deleted", False),
            }
        self.collections["/accounts"].append(row)
        return row

    def add_category(self, holder, name: str = "Food", is_deleted: bool = False) -> Dict[str, Any]:
        row = {
            "id": str(uuid4()),
            "registry_holder_id": holder["id"],
            "name": name,
            "income": False,
            "expense": True,
            "is_deleted": is_deleted,
            }
        self.collections["/categories"].append(row)
        return row

    def populate(self) -> Dict[str, Dict[str, Any]]:
        """One row of every kind, linked together."""
        holder = self.add_holder(111)
        account_type = self.add_account_type()
        currency = self.add_currency()
        account = self.add_account(holder, account_type, currency)
        category = self.add_category(holder)
        return {
            "holder": holder,
            "account_type": account_type,
            "currency": currency,
            "account": account,
            "category": category,
            }
