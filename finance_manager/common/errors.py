"""
Structured application errors.

Expected business-rule violations are returned as AppError values inside a
Result instead of being raised. Each AppError carries:
- code: stable machine-readable code (e.g. ACCOUNT_NOT_FOUND)
- status_code: HTTP status the boundary should answer with
- message: human readable text

Per-entity modules (catalog/errors.py, transactions/errors.py) build on the
ErrorsFactory primitives below so the message wording stays uniform.

Exceptions are reserved for conditions that should never happen at runtime;
those are mapped to 400/422/500 by common.api.exception_handlers.
"""
from dataclasses import dataclass
from typing import Any

from fastapi import status


@dataclass(frozen=True)
class AppError:
    code: str
    status_code: int
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class InvalidOperationError(Exception):
    """Raised when code reaches a state that should be unreachable (maps to HTTP 422)."""


class ExternalApiError(Exception):
    """Raised by HTTP clients when a sibling service call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ErrorsFactory:
    """Primitive error constructors shared by every entity error module."""

    @staticmethod
    def not_found(code: str, entity: str, entity_id: Any) -> AppError:
        return AppError(code, status.HTTP_404_NOT_FOUND, f"{entity} with id '{entity_id}' not found.")

    @staticmethod
    def already_exists(code: str, entity: str, prop: str, value: Any) -> AppError:
        return AppError(code, status.HTTP_409_CONFLICT, f"{entity} with {prop} '{value}' already exists.")

    @staticmethod
    def required(code: str, entity: str, prop: str) -> AppError:
        return AppError(code, status.HTTP_400_BAD_REQUEST, f"{entity} {prop} can't be empty.")

    @staticmethod
    def cannot_delete_used_entity(code: str, entity: str, entity_id: Any) -> AppError:
        return AppError(
            code,
            status.HTTP_409_CONFLICT,
            f"Cannot delete {entity} '{entity_id}' because it is used in other entities",
            )

    @staticmethod
    def soft_deleted(code: str, entity: str, entity_id: Any) -> AppError:
        return AppError(code, status.HTTP_409_CONFLICT, f"{entity} '{entity_id}' is soft deleted")

    @staticmethod
    def custom_conflict(code: str, message: str) -> AppError:
        return AppError(code, status.HTTP_409_CONFLICT, message)

    @staticmethod
    def custom_not_found(code: str, message: str) -> AppError:
        return AppError(code, status.HTTP_404_NOT_FOUND, message)

    @staticmethod
    def external_api(code: str, message: str) -> AppError:
        return AppError(code, status.HTTP_502_BAD_GATEWAY, message)
