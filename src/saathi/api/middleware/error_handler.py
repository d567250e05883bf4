"""
Request Context and Error Middleware

Binds a correlation id for the lifetime of each request, stamps it and
the handling time on the response, and converts anything that escapes
a route into a sanitized 500.

PRIVACY: Request bodies carry transcripts; they are never logged and
never echoed in error bodies.
"""

import time
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from saathi.config.logging_config import bind_correlation_id, clear_context, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
TIMING_HEADER = "X-Response-Time-Ms"


def internal_error_response(correlation_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "correlation_id": correlation_id,
            "message": "Classification could not be completed. Please try again.",
        },
        headers={CORRELATION_HEADER: correlation_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Correlation ids, timing headers and a last-resort error boundary."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid4().hex
        bind_correlation_id(correlation_id)
        started = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
            )
            return internal_error_response(correlation_id)
        else:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            response.headers[CORRELATION_HEADER] = correlation_id
            response.headers[TIMING_HEADER] = str(elapsed_ms)
            logger.debug(
                "Request handled",
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=elapsed_ms,
            )
            return response
        finally:
            clear_context()
