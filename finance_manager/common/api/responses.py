"""
Translation of service Results into HTTP responses.

Success: JSON body of the result value (or an empty body for void results).
Failure: RFC 7807 problem details built from the first AppError:

    {
        "type": "https://httpstatuses.io/404",
        "title": "Not Found",
        "status": 404,
        "detail": "Account with id '...' not found.",
        "code": "ACCOUNT_NOT_FOUND",
        "instance": "/api/v1/accounts/...",
        "traceId": "..."
    }
"""
from http import HTTPStatus
from typing import Any, Optional

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from finance_manager.common.result import Result

PROBLEM_JSON = "application/problem+json"


def get_trace_id(request: Request) -> Optional[str]:
    return getattr(request.state, "trace_id", None)


def problem_details(
    request: Request,
    status_code: int,
    detail: str,
    code: str,
    extra: Optional[dict[str, Any]] = None,
    ) -> JSONResponse:
    """Build a problem-details response."""
    try:
        title = HTTPStatus(status_code).phrase
    except ValueError:
        title = "Error"

    content: dict[str, Any] = {
        "type": f"https://httpstatuses.io/{status_code}",
        "title": title,
        "status": status_code,
        "detail": detail,
        "code": code,
        "instance": request.url.path,
        "traceId": get_trace_id(request),
        }
    if extra:
        content.update(extra)

    return JSONResponse(status_code=status_code, content=jsonable_encoder(content), media_type=PROBLEM_JSON)


def result_to_response(
    result: Result,
    request: Request,
    status_code: int = status.HTTP_200_OK,
    ) -> Response:
    """
    Convert a service Result into a response.

    Args:
        result: Service outcome
        request: Current request (for instance path and trace id)
        status_code: Status used on success (201 for creates)
    """
    if result.is_failed:
        error = result.error
        return problem_details(request, error.status_code, error.message, error.code)

    if result.value is None:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(result.value))
