"""Catalog HTTP API tests (FastAPI app through httpx.ASGITransport)."""
from uuid import uuid4

import pytest

from finance_manager.common.api.responses import PROBLEM_JSON


async def _post(client, path: str, payload: dict) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _reference_data(client, telegram_id: int = 111) -> dict:
    holder = await _post(client, "/registry-holders", {"telegram_id": telegram_id})
    country = await _post(client, "/countries", {"name": "Testland"})
    bank = await _post(client, "/banks", {"country_id": country["id"], "name": "Test Bank"})
    currency = await _post(client, "/currencies", {"name": "Russian ruble", "char_code": "rub", "num_code": "643"})
    account_type = await _post(client, "/account-types", {"code": "CARD", "description": "Bank card"})
    return {
        "registry_holder_id": holder["id"],
        "account_type_id": account_type["id"],
        "currency_id": currency["id"],
        "bank_id": bank["id"],
        }


class TestAccountsApi:

    @pytest.mark.asyncio
    async def test_default_account_scenario(self, catalog_client):
        """API-C-001: Second default account replaces the first; the default cannot be soft deleted"""
        refs = await _reference_data(catalog_client)
        first = await _post(catalog_client, "/accounts", {**refs, "name": "Cash", "is_default": True})
        second = await _post(catalog_client, "/accounts", {**refs, "name": "Card", "is_default": True})

        first_read = await catalog_client.get(f"/accounts/{first['id']}")
        assert first_read.json()["is_default"] is False
        assert first_read.json()["currency"]["char_code"] == "RUB"

        default = await catalog_client.get(f"/accounts/default/{refs['registry_holder_id']}")
        assert default.json()["id"] == second["id"]

        response = await catalog_client.delete(f"/accounts/{second['id']}/soft")
        assert response.status_code == 409
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        body = response.json()
        assert body["code"] == "ACCOUNT_CANNOT_SOFT_DELETE_DEFAULT"
        assert body["status"] == 409
        assert body["instance"] == f"/api/v1/accounts/{second['id']}/soft"
        assert body["traceId"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_unset_default_with_replacement(self, catalog_client):
        """API-C-002: unset-default moves the flag to the replacement account"""
        refs = await _reference_data(catalog_client)
        current = await _post(catalog_client, "/accounts", {**refs, "name": "Current", "is_default": True})
        replacement = await _post(catalog_client, "/accounts", {**refs, "name": "Replacement"})

        response = await catalog_client.post(
            f"/accounts/{current['id']}/unset-default",
            params={"replacement_id": replacement["id"]},
            )
        assert response.status_code == 200
        assert response.content == b""

        default = await catalog_client.get(f"/accounts/default/{refs['registry_holder_id']}")
        assert default.json()["id"] == replacement["id"]

    @pytest.mark.asyncio
    async def test_paging_query_parameters(self, catalog_client):
        """API-C-003: Page / ItemsPerPage query parameters page the listing"""
        refs = await _reference_data(catalog_client)
        for name in ("A", "B", "C"):
            await _post(catalog_client, "/accounts", {**refs, "name": name})

        response = await catalog_client.get(
            "/accounts",
            params={"registry_holder_id": refs["registry_holder_id"], "Page": 2, "ItemsPerPage": 2},
            )
        assert [a["name"] for a in response.json()] == ["C"]

    @pytest.mark.asyncio
    async def test_invalid_body(self, catalog_client):
        """API-C-004: Malformed body answers 400 VALIDATION_ERROR"""
        response = await catalog_client.post("/accounts", json={"name": "No references"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["errors"]

    @pytest.mark.asyncio
    async def test_unknown_account(self, catalog_client):
        """API-C-005: Unknown id answers 404 problem details; hard delete of it answers 200"""
        missing = uuid4()

        response = await catalog_client.get(f"/accounts/{missing}")
        assert response.status_code == 404
        assert response.json()["code"] == "ACCOUNT_NOT_FOUND"

        assert (await catalog_client.delete(f"/accounts/{missing}")).status_code == 200

    @pytest.mark.asyncio
    async def test_bank_accounts_count(self, catalog_client):
        """API-C-006: accounts-count honours include_archived"""
        refs = await _reference_data(catalog_client)
        await _post(catalog_client, "/accounts", {**refs, "name": "Active"})
        await _post(catalog_client, "/accounts", {**refs, "name": "Old", "is_archived": True})

        default_count = await catalog_client.get(f"/banks/{refs['bank_id']}/accounts-count")
        with_archived = await catalog_client.get(
            f"/banks/{refs['bank_id']}/accounts-count",
            params={"include_archived": True},
            )
        assert default_count.json()["count"] == 1
        assert with_archived.json()["count"] == 2


class TestReferenceDataApi:

    @pytest.mark.asyncio
    async def test_health(self, catalog_client):
        """API-C-010: Health endpoint answers ok"""
        response = await catalog_client.get("/health")
        assert response.json() == {"status": "ok", "service": "catalog"}

    @pytest.mark.asyncio
    async def test_duplicate_currency_code(self, catalog_client):
        """API-C-011: Duplicate char code (any case) answers 409"""
        await _post(catalog_client, "/currencies", {"name": "Euro", "char_code": "EUR", "num_code": "978"})

        response = await catalog_client.post("/currencies", json={"name": "Euro 2", "char_code": "eur", "num_code": "999"})
        assert response.status_code == 409
        assert response.json()["code"] == "CURRENCY_CHARCODE_EXISTS"

    @pytest.mark.asyncio
    async def test_account_type_exists(self, catalog_client):
        """API-C-012: /account-types/exists reports stored codes"""
        await _post(catalog_client, "/account-types", {"code": "CASH"})

        found = await catalog_client.get("/account-types/exists", params={"code": "CASH"})
        missing = await catalog_client.get("/account-types/exists", params={"code": "LOAN"})
        assert found.json() == {"code": "CASH", "exists": True}
        assert missing.json() == {"code": "LOAN", "exists": False}

    @pytest.mark.asyncio
    async def test_duplicate_account_type_code(self, catalog_client):
        """API-C-016: Duplicate account type code (any case) answers 409 ACCOUNTTYPE_CODE_EXISTS"""
        await _post(catalog_client, "/account-types", {"code": "cash"})

        response = await catalog_client.post("/account-types", json={"code": "CASH"})
        assert response.status_code == 409
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        assert response.json()["code"] == "ACCOUNTTYPE_CODE_EXISTS"

        other = await _post(catalog_client, "/account-types", {"code": "CARD"})
        renamed = await catalog_client.put("/account-types", json={"id": other["id"], "code": "Cash"})
        assert renamed.status_code == 409
        assert renamed.json()["code"] == "ACCOUNTTYPE_CODE_EXISTS"

    @pytest.mark.asyncio
    async def test_country_in_use(self, catalog_client):
        """API-C-013: Country with banks answers 409 COUNTRY_IN_USE until its bank is deleted"""
        country = await _post(catalog_client, "/countries", {"name": "Freedonia"})
        bank = await _post(catalog_client, "/banks", {"country_id": country["id"], "name": "First"})

        blocked = await catalog_client.delete(f"/countries/{country['id']}")
        assert blocked.status_code == 409
        assert blocked.json()["code"] == "COUNTRY_IN_USE"

        assert (await catalog_client.delete(f"/banks/{bank['id']}")).status_code == 200
        assert (await catalog_client.delete(f"/countries/{country['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_update_without_changes(self, catalog_client):
        """API-C-014: PUT with identical values returns the stored row"""
        currency = await _post(catalog_client, "/currencies", {"name": "Euro", "char_code": "EUR", "num_code": "978"})

        response = await catalog_client.put("/currencies", json={"id": currency["id"], "name": "Euro"})
        assert response.status_code == 200
        fields = ("id", "name", "char_code", "num_code", "sign", "emoji", "is_deleted")
        assert {f: response.json()[f] for f in fields} == {f: currency[f] for f in fields}

    @pytest.mark.asyncio
    async def test_categories_by_holder(self, catalog_client):
        """API-C-015: Categories of a holder are listed with their parent"""
        holder = await _post(catalog_client, "/registry-holders", {"telegram_id": 5})
        food = await _post(catalog_client, "/categories", {"registry_holder_id": holder["id"], "name": "Food"})
        await _post(
            catalog_client,
            "/categories",
            {"registry_holder_id": holder["id"], "name": "Cafe", "parent_id": food["id"]},
            )

        response = await catalog_client.get(f"/categories/registry-holder/{holder['id']}")
        assert [c["name"] for c in response.json()] == ["Cafe", "Food"]


class TestExchangeRatesApi:

    @pytest.mark.asyncio
    async def test_range_last_date_and_delete_by_period(self, catalog_client):
        """API-C-020: Batch insert, last date lookup and period delete"""
        currency = await _post(catalog_client, "/currencies", {"name": "Dollar", "char_code": "USD", "num_code": "840"})
        items = [
            {"currency_id": currency["id"], "rate_date": f"2024-01-0{day}", "rate": f"9{day}.5"}
            for day in range(1, 5)
            ]

        created = await catalog_client.post("/exchange-rates/range", json={"items": items})
        assert created.status_code == 201
        assert len(created.json()) == 4

        last = await catalog_client.get(f"/exchange-rates/last-date/{currency['id']}")
        assert last.json()["last_rate_date"] == "2024-01-04"

        deleted = await catalog_client.request(
            "DELETE",
            "/exchange-rates/by-period",
            json={"currency_id": currency["id"], "date_from": "2024-01-02", "date_to": "2024-01-03"},
            )
        assert deleted.json() == {"deleted": 2}

    @pytest.mark.asyncio
    async def test_inverted_period(self, catalog_client):
        """API-C-021: An inverted period answers 400 INVALID_ARGUMENT"""
        currency = await _post(catalog_client, "/currencies", {"name": "Dollar", "char_code": "USD", "num_code": "840"})

        response = await catalog_client.request(
            "DELETE",
            "/exchange-rates/by-period",
            json={"currency_id": currency["id"], "date_from": "2024-02-01", "date_to": "2024-01-01"},
            )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ARGUMENT"

    @pytest.mark.asyncio
    async def test_duplicate_rate(self, catalog_client):
        """API-C-022: Second rate for the same day answers 409 EXCHANGERATE_EXISTS"""
        currency = await _post(catalog_client, "/currencies", {"name": "Dollar", "char_code": "USD", "num_code": "840"})
        payload = {"currency_id": currency["id"], "rate_date": "2024-01-01", "rate": "90"}
        await _post(catalog_client, "/exchange-rates", payload)

        response = await catalog_client.post("/exchange-rates", json=payload)
        assert response.status_code == 409
        assert response.json()["code"] == "EXCHANGERATE_EXISTS"
