"""Relay Pipeline — validate, invoke upstream once, write one JSON response.

Invariants:
    - invoke() awaits exactly one upstream call and NEVER raises: every
      exception becomes a Failure outcome (task cancellation excepted)
    - write_response() is the single place an Outcome becomes an HTTP response
    - 2xx only for a Success outcome
    - No retries, no timeout of its own (the client's timeout applies)

Design Decisions:
    - Explicit Outcome values over a router-level exception handler: success and
      failure take the same path to the response writer
    - Normalization and mapping delegated to pure core functions
"""

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from relay.core.domain_types import DEFAULT_ERROR_LABELS, ParamSource, RelayOperation
from relay.core.errors import UpstreamAPIError
from relay.core.normalize_errors import normalize_failure
from relay.core.outcome import Failure, Outcome, Success
from relay.core.validate_fields import check_required

logger = logging.getLogger(__name__)


def reject_missing(
    params: Mapping[str, Any],
    required: Sequence[str],
    source: ParamSource = ParamSource.BODY,
) -> JSONResponse | None:
    """400 response when a required field is missing, None when all present."""
    error = check_required(params, required, source)
    if error is None:
        return None
    logger.info(f"Rejected request: {error['error']}", extra={"error_code": "VALIDATION_ERROR"})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error)


async def invoke(
    call: Callable[[], Awaitable[Any]], *, operation: RelayOperation,
) -> Outcome:
    """Await one upstream call and capture its result as an Outcome."""
    try:
        payload = await call()
    except UpstreamAPIError as e:
        logger.warning(
            f"Upstream {operation.value} failed: {e.message}",
            extra={
                "operation": operation.value,
                "upstream_status": e.status,
                "error_code": e.code,
            },
        )
        return Failure(message=e.message, status=e.status, body=e.body)
    except Exception as e:
        logger.error(
            f"Unexpected error during upstream {operation.value}: {e}",
            exc_info=True,
            extra={"operation": operation.value, "error_code": "UPSTREAM_UNEXPECTED"},
        )
        return Failure(message=str(e) or e.__class__.__name__)
    return Success(payload)


def write_response(
    outcome: Outcome,
    *,
    on_success: Callable[[Any], Any],
    default_error: str,
) -> JSONResponse:
    """Turn an Outcome into the route's JSON response."""
    if isinstance(outcome, Success):
        return JSONResponse(
            status_code=status.HTTP_200_OK, content=on_success(outcome.payload),
        )
    status_code, body = normalize_failure(outcome, default_error)
    return JSONResponse(status_code=status_code, content=body)


async def relay_call(
    call: Callable[[], Awaitable[Any]],
    *,
    operation: RelayOperation,
    on_success: Callable[[Any], Any],
) -> JSONResponse:
    """Invoke + write_response with the operation's default error label."""
    outcome = await invoke(call, operation=operation)
    return write_response(
        outcome,
        on_success=on_success,
        default_error=DEFAULT_ERROR_LABELS[operation],
    )
