"""Outcome — explicit result type returned by the upstream invoker.

Invariants:
    - Exactly one of Success / Failure per upstream call
    - Failure.status is None when the upstream never answered (transport failure)
    - Failure.body is the upstream response body verbatim, or None

Design Decisions:
    - Tagged values over exceptions: the route consumes success and failure
      through the same code path, no framework-wide error interception needed
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """Upstream call resolved."""
    payload: Any


@dataclass(frozen=True)
class Failure:
    """Upstream call rejected."""
    message: str
    status: int | None = None
    body: Any = None


Outcome = Union[Success, Failure]
