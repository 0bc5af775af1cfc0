"""Error Hierarchy — typed, categorized exceptions for relay failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the relay's REST envelope ({"error": ..., "details": ...})
    - UpstreamAPIError carries the upstream status/body verbatim; it is turned
      into a Failure outcome at the invoker boundary and never reaches a handler
      in normal operation

Design Decisions:
    - Single hierarchy with RelayError base: FastAPI global handler catches all
      locally raised errors (uniform error shape)
    - Upstream failures are exceptions only inside the client; routes consume
      them as values (see core/outcome.py)
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories for routing and observability."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


class RelayError(Exception):
    """Base exception for all relay errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the relay's REST error envelope."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ─── Local Errors (400-level) ───────────────────────────────────

class AdminDisabledError(RelayError):
    """Administrative route called while no admin token is configured."""
    def __init__(self):
        super().__init__(
            "Administrative operations are disabled",
            "ADMIN_DISABLED", ErrorCategory.AUTHORIZATION, 403,
        )


class AdminTokenError(RelayError):
    """Administrative route called with a missing or wrong admin token."""
    def __init__(self):
        super().__init__(
            "Invalid admin token",
            "ADMIN_TOKEN_INVALID", ErrorCategory.AUTHORIZATION, 403,
        )


# ─── Upstream Errors ────────────────────────────────────────────

class UpstreamAPIError(RelayError):
    """SnapTrade call failed: HTTP error status or transport failure.

    ``status`` and ``body`` are None when no HTTP response was received.
    """
    def __init__(
        self, message: str, status: int | None = None, body: Any = None,
    ):
        super().__init__(
            message, "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            status or 500, body,
        )
        self.status = status
        self.body = body
