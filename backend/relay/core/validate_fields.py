"""Request Validation — presence checks for required route fields.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - A field is missing when absent, None, or an empty string
    - Missing fields reported in declaration order
    - Presence only: no type or format checks

Design Decisions:
    - Return values (not exceptions): the route answers 400 itself and the
      upstream client is never reached on failure
"""

from collections.abc import Mapping, Sequence
from typing import Any

from relay.core.domain_types import ParamSource


def is_present(value: Any) -> bool:
    """True unless value is None or an empty string."""
    return value is not None and value != ""


def missing_fields(params: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    """Return the required names not present in params."""
    return [name for name in required if not is_present(params.get(name))]


def _join_names(names: Sequence[str]) -> str:
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} and {names[-1]}"


def validation_error_body(
    missing: Sequence[str], source: ParamSource = ParamSource.BODY,
) -> dict:
    """Build the 400 envelope naming the missing fields."""
    verb = "is" if len(missing) == 1 else "are"
    message = f"{_join_names(missing)} {verb} required"
    if source == ParamSource.QUERY:
        message += " as a query parameter" if len(missing) == 1 else " as query parameters"
    return {"error": message}


def check_required(
    params: Mapping[str, Any],
    required: Sequence[str],
    source: ParamSource = ParamSource.BODY,
) -> dict | None:
    """Return a 400 envelope if any required field is missing, None otherwise."""
    missing = missing_fields(params, required)
    if missing:
        return validation_error_body(missing, source)
    return None
