"""Error Normalization — maps upstream failures to uniform HTTP error responses.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - status = upstream status when known, else 500
    - 401 and 404 always get the documented label, message and details
      (details = upstream body, or {} when absent)
    - Any other status passes the upstream body through verbatim; without a
      body a generic {error, message} envelope is synthesized
    - Never raises

Design Decisions:
    - One policy for every route: the 401/404 special cases are not
      route-specific (resolved inconsistency between route copies)
    - Empty-string bodies count as absent; an empty JSON object is a body
"""

from typing import Any

from relay.core.outcome import Failure

DEFAULT_STATUS = 500

AUTH_ERROR_LABEL = "Authentication error"
AUTH_ERROR_MESSAGE = "provided credentials are invalid"
NOT_FOUND_LABEL = "Not found"
NOT_FOUND_MESSAGE = (
    "the referenced resource does not exist or does not belong to the user"
)

_SPECIAL_CASES: dict[int, tuple[str, str]] = {
    401: (AUTH_ERROR_LABEL, AUTH_ERROR_MESSAGE),
    404: (NOT_FOUND_LABEL, NOT_FOUND_MESSAGE),
}


def has_body(body: Any) -> bool:
    """True when the upstream returned a usable response body."""
    return body is not None and body != ""


def resolve_status(failure: Failure) -> int:
    """Upstream-reported status, or 500 when the upstream never answered."""
    return failure.status or DEFAULT_STATUS


def normalize_failure(failure: Failure, default_error: str) -> tuple[int, Any]:
    """Return (status, body) for a failed upstream call."""
    status = resolve_status(failure)
    special = _SPECIAL_CASES.get(status)
    if special:
        label, message = special
        return status, {
            "error": label,
            "message": message,
            "details": failure.body if has_body(failure.body) else {},
        }
    if has_body(failure.body):
        return status, failure.body
    return status, {"error": default_error, "message": failure.message}
