"""
Request enrichment middleware.

Assigns every request a trace id (reusing an inbound X-Request-ID header),
binds it to structlog contextvars so every log line of the request carries
it, and echoes it back in the response.
"""
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request

REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context(app: FastAPI) -> None:

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        trace_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.trace_id = trace_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            trace_id=trace_id,
            method=request.method,
            path=request.url.path,
            )
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = trace_id
        return response
