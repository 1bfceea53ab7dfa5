"""
Tests for the Result type, the error primitives and the problem-details mapping.
"""
from uuid import uuid4

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from finance_manager.common.api.exception_handlers import setup_exception_handlers
from finance_manager.common.api.middleware import REQUEST_ID_HEADER, setup_request_context
from finance_manager.common.api.responses import PROBLEM_JSON, result_to_response
from finance_manager.common.errors import AppError, ErrorsFactory, InvalidOperationError
from finance_manager.common.result import Result


# ============================================================================
# RESULT
# ============================================================================

class TestResult:

    def test_ok_carries_value(self):
        """RS-U-001: Result.ok is a success with its value."""
        result = Result.ok(42)
        assert result.is_success
        assert not result.is_failed
        assert result.value == 42
        assert result.error is None

    def test_fail_carries_first_error(self):
        """RS-U-002: Result.fail exposes the first error."""
        first = AppError("A", 404, "a")
        second = AppError("B", 409, "b")
        result = Result.fail(first, second)
        assert result.is_failed
        assert result.error == first
        assert result.errors == [first, second]

    def test_fail_requires_an_error(self):
        """RS-U-003: Result.fail() without errors is a programming error."""
        with pytest.raises(ValueError):
            Result.fail()


# ============================================================================
# ERROR FACTORY
# ============================================================================

class TestErrorsFactory:

    def test_not_found_message(self):
        """ER-U-001: not_found -> 404 with the entity id in the message."""
        entity_id = uuid4()
        error = ErrorsFactory.not_found("ACCOUNT_NOT_FOUND", "Account", entity_id)
        assert error.status_code == 404
        assert error.message == f"Account with id '{entity_id}' not found."

    def test_already_exists_message(self):
        """ER-U-002: already_exists -> 409 naming property and value."""
        error = ErrorsFactory.already_exists("CURRENCY_CHARCODE_EXISTS", "Currency", "CharCode", "RUB")
        assert error.status_code == 409
        assert error.message == "Currency with CharCode 'RUB' already exists."

    def test_required_and_in_use(self):
        """ER-U-003: required -> 400, cannot_delete_used_entity -> 409."""
        assert ErrorsFactory.required("X", "Bank", "Name").status_code == 400
        assert ErrorsFactory.cannot_delete_used_entity("X", "Bank", "1").status_code == 409

    def test_external_api_is_bad_gateway(self):
        """ER-U-004: external_api -> 502."""
        assert ErrorsFactory.external_api("EXTERNAL_API_ERROR", "down").status_code == 502


# ============================================================================
# HTTP BOUNDARY
# ============================================================================

def _build_app() -> FastAPI:
    app = FastAPI()
    setup_request_context(app)
    setup_exception_handlers(app)

    @app.get("/ok")
    async def ok(request: Request):
        return result_to_response(Result.ok({"answer": 42}), request)

    @app.get("/void")
    async def void(request: Request):
        return result_to_response(Result.ok(), request)

    @app.get("/missing")
    async def missing(request: Request):
        return result_to_response(Result.fail(ErrorsFactory.not_found("THING_NOT_FOUND", "Thing", "t1")), request)

    @app.get("/bad-argument")
    async def bad_argument():
        raise ValueError("page must be positive")

    @app.get("/unreachable")
    async def unreachable():
        raise InvalidOperationError("state should not happen")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    @app.get("/typed/{value}")
    async def typed(value: int):
        return {"value": value}

    return app


class TestProblemDetails:

    @pytest.fixture
    def client(self):
        return TestClient(_build_app(), raise_server_exceptions=False)

    def test_success_body(self, client):
        """PD-U-001: A success result is serialized as plain JSON."""
        response = client.get("/ok")
        assert response.status_code == 200
        assert response.json() == {"answer": 42}

    def test_void_success_has_empty_body(self, client):
        """PD-U-002: A void success answers with an empty body."""
        response = client.get("/void")
        assert response.status_code == 200
        assert response.content == b""

    def test_failure_shape(self, client):
        """PD-U-003: A failed result becomes RFC 7807 problem details with code and trace id."""
        response = client.get("/missing", headers={REQUEST_ID_HEADER: "trace-123"})
        assert response.status_code == 404
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        body = response.json()
        assert body["code"] == "THING_NOT_FOUND"
        assert body["title"] == "Not Found"
        assert body["status"] == 404
        assert body["instance"] == "/missing"
        assert body["traceId"] == "trace-123"
        assert response.headers[REQUEST_ID_HEADER] == "trace-123"

    def test_value_error_maps_to_400(self, client):
        """PD-U-004: ValueError -> 400 INVALID_ARGUMENT."""
        response = client.get("/bad-argument")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ARGUMENT"

    def test_invalid_operation_maps_to_422(self, client):
        """PD-U-005: InvalidOperationError -> 422 INVALID_OPERATION."""
        response = client.get("/unreachable")
        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_OPERATION"

    def test_unhandled_maps_to_500(self, client):
        """PD-U-006: Any other exception -> 500 with a generic detail."""
        response = client.get("/crash")
        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "INTERNAL_ERROR"
        assert "boom" not in body["detail"]

    def test_request_validation_maps_to_400(self, client):
        """PD-U-007: Malformed request -> 400 VALIDATION_ERROR listing the errors."""
        response = client.get("/typed/not-a-number")
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"]
