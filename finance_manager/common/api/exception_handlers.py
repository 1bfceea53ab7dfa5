"""
Centralized exception handlers for both FastAPI applications.

Expected failures travel as Result values and never reach these handlers.
What does reach them is mapped to a problem-details body:

- ValueError / TypeError (bad argument)        -> 400
- RequestValidationError (malformed request)   -> 400
- InvalidOperationError (unreachable state)    -> 422
- anything else                                -> 500

Usage:
    app = FastAPI()
    setup_exception_handlers(app)
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from finance_manager.common.api.responses import problem_details
from finance_manager.common.errors import InvalidOperationError
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Request validation failed", method=request.method, path=request.url.path, errors=exc.errors())
        return problem_details(
            request,
            status.HTTP_400_BAD_REQUEST,
            "One or more validation errors occurred.",
            "VALIDATION_ERROR",
            extra={"errors": exc.errors()},
            )

    @app.exception_handler(ValueError)
    @app.exception_handler(TypeError)
    async def argument_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.warning("Invalid argument", method=request.method, path=request.url.path, error=str(exc))
        return problem_details(request, status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_ARGUMENT")

    @app.exception_handler(InvalidOperationError)
    async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
        logger.warning("Invalid operation", method=request.method, path=request.url.path, error=str(exc))
        return problem_details(request, status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc), "INVALID_OPERATION")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=exc,
            )
        return problem_details(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred.",
            "INTERNAL_ERROR",
            )
