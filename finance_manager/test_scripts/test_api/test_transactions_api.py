"""Transactions HTTP API tests, including the on-demand replication endpoint."""
from uuid import uuid4

import pytest

from finance_manager.common.api.responses import PROBLEM_JSON
from finance_manager.transactions.api.v1.replication import get_replication_job
from finance_manager.transactions.main import app as transactions_app
from finance_manager.transactions.replication.job import ReplicationJob
from finance_manager.test_scripts.test_utils import FakeCatalog, create_replica_refs


def _transaction(refs, **overrides) -> dict:
    payload = {
        "date": "2024-05-01T12:00:00",
        "account_id": str(refs.account_id),
        "category_id": str(refs.category_id),
        "amount": "-150.00",
        "description": "  Groceries  ",
        }
    payload.update(overrides)
    return payload


class TestTransactionsApi:

    @pytest.mark.asyncio
    async def test_create_read_count_delete(self, session, transactions_client):
        """API-T-001: Transaction lifecycle over HTTP"""
        refs = await create_replica_refs(session)

        created = await transactions_client.post("/transactions", json=_transaction(refs))
        assert created.status_code == 201
        body = created.json()
        assert body["description"] == "Groceries"
        assert float(body["amount"]) == -150.0

        read = await transactions_client.get(f"/transactions/{body['id']}")
        assert read.json()["account_id"] == str(refs.account_id)

        count = await transactions_client.get("/transactions/count", params={"account_id": str(refs.account_id)})
        assert count.json() == {"count": 1}

        assert (await transactions_client.delete(f"/transactions/{body['id']}")).status_code == 200
        assert (await transactions_client.get(f"/transactions/{body['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_zero_amount(self, session, transactions_client):
        """API-T-002: Zero amount answers 400 TRANSACTION_INVALID_AMOUNT"""
        refs = await create_replica_refs(session)

        response = await transactions_client.post("/transactions", json=_transaction(refs, amount="0"))
        assert response.status_code == 400
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        assert response.json()["code"] == "TRANSACTION_INVALID_AMOUNT"

    @pytest.mark.asyncio
    async def test_archived_account(self, session, transactions_client):
        """API-T-003: Archived account answers 409"""
        refs = await create_replica_refs(session)

        response = await transactions_client.post(
            "/transactions",
            json=_transaction(refs, account_id=str(refs.archived_account_id)),
            )
        assert response.status_code == 409
        assert response.json()["code"] == "TRANSACTION_ACCOUNT_ARCHIVED"

    @pytest.mark.asyncio
    async def test_partial_update(self, session, transactions_client):
        """API-T-004: PUT changes only the provided fields"""
        refs = await create_replica_refs(session)
        created = (await transactions_client.post("/transactions", json=_transaction(refs))).json()

        response = await transactions_client.put("/transactions", json={"id": created["id"], "description": "Market"})
        assert response.status_code == 200
        assert response.json()["description"] == "Market"
        assert response.json()["category_id"] == str(refs.category_id)

    @pytest.mark.asyncio
    async def test_delete_unknown(self, transactions_client):
        """API-T-005: Deleting an unknown transaction answers 200 with an empty body"""
        response = await transactions_client.delete(f"/transactions/{uuid4()}")
        assert response.status_code == 200
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_transfer_same_account(self, session, transactions_client):
        """API-T-006: Transfer onto the same account answers 409 TRANSFER_SAME_ACCOUNT"""
        refs = await create_replica_refs(session)

        response = await transactions_client.post("/transfers", json={
            "date": "2024-05-01T12:00:00",
            "from_account_id": str(refs.account_id),
            "to_account_id": str(refs.account_id),
            "from_amount": "10",
            "to_amount": "10",
            })
        assert response.status_code == 409
        assert response.json()["code"] == "TRANSFER_SAME_ACCOUNT"

    @pytest.mark.asyncio
    async def test_transfer_listing(self, session, transactions_client):
        """API-T-007: Transfers are listed by either side"""
        refs = await create_replica_refs(session)
        created = await transactions_client.post("/transfers", json={
            "date": "2024-05-01T12:00:00",
            "from_account_id": str(refs.account_id),
            "to_account_id": str(refs.other_account_id),
            "from_amount": "10",
            "to_amount": "9.5",
            })
        assert created.status_code == 201

        listed = await transactions_client.get("/transfers", params={"account_id": str(refs.other_account_id)})
        assert [t["id"] for t in listed.json()] == [created.json()["id"]]

    @pytest.mark.asyncio
    async def test_transaction_accounts(self, session, transactions_client):
        """API-T-008: Replicated accounts are exposed read-only"""
        refs = await create_replica_refs(session)

        listed = await transactions_client.get("/transaction-accounts", params={"holder_id": str(refs.holder_id)})
        assert len(listed.json()) == 3

        missing = await transactions_client.get(f"/transaction-accounts/{uuid4()}")
        assert missing.status_code == 404
        assert missing.json()["code"] == "TRANSACTION_ACCOUNT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_date_without_timezone(self, session, transactions_client):
        """API-T-010: A date without timezone is stored as UTC and usable in date filters"""
        refs = await create_replica_refs(session)

        created = await transactions_client.post("/transactions", json=_transaction(refs))
        assert created.status_code == 201
        assert created.json()["date"] == "2024-05-01T12:00:00Z"

        shifted = await transactions_client.post(
            "/transactions",
            json=_transaction(refs, date="2024-05-03T12:00:00+02:00"),
            )
        assert shifted.json()["date"] == "2024-05-03T10:00:00Z"

        listed = await transactions_client.get("/transactions", params={"date_from": "2024-05-02T00:00:00"})
        assert listed.status_code == 200
        assert [t["id"] for t in listed.json()] == [shifted.json()["id"]]

    @pytest.mark.asyncio
    async def test_health(self, transactions_client):
        """API-T-009: Health endpoint answers ok"""
        response = await transactions_client.get("/health")
        assert response.json() == {"status": "ok", "service": "transactions"}


class TestReplicationApi:

    @pytest.mark.asyncio
    async def test_run(self, session_factory, transactions_client):
        """API-T-020: POST /replication/run returns the per-kind counts"""
        catalog = FakeCatalog()
        catalog.populate()
        transactions_app.dependency_overrides[get_replication_job] = lambda: ReplicationJob(catalog.client(), session_factory)

        response = await transactions_client.post("/replication/run")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["counts"]["accounts"] == 1

    @pytest.mark.asyncio
    async def test_run_failure(self, session_factory, transactions_client):
        """API-T-021: A failing catalog answers 502 with the partial counts"""
        catalog = FakeCatalog()
        catalog.populate()
        catalog.failures["/registry-holders"] = 500
        transactions_app.dependency_overrides[get_replication_job] = lambda: ReplicationJob(catalog.client(), session_factory)

        response = await transactions_client.post("/replication/run")

        assert response.status_code == 502
        body = response.json()
        assert body["code"] == "EXTERNAL_API_ERROR"
        assert body["counts"] == {}
