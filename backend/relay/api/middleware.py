"""Request Middleware — request ids and access logging without query strings.

Invariants:
    - Every response carries X-Request-ID, including the 500 for an
      unhandled exception
    - Access log records method, path, status and duration — never the query
      string (list-accounts/holdings carry userSecret in the query)

Design Decisions:
    - Unhandled exceptions are answered here, not left to Starlette's outermost
      ServerErrorMiddleware: a response built there bypasses this middleware
      and CORS, so the browser could not read it
"""

import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from relay.api.error_handlers import internal_error_response

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request_id to every request and log its completion."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.url.path}: {exc}",
                exc_info=True,
                extra={"request_id": request_id, "path": request.url.path},
            )
            response = internal_error_response()

        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
