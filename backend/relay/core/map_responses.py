"""Response Mapping — wraps successful upstream payloads in route envelopes.

Invariants:
    - All functions are PURE and never inspect payload internals beyond the
      top-level keys they wrap
    - Only called with a Success outcome: no local success fabrication
    - Never raise on an unexpected payload shape: a missing key maps to None
"""

from typing import Any

DELETE_USER_MESSAGE = "User deleted successfully"


def map_register_user(payload: Any) -> dict:
    """Registration returns the SnapTrade-issued credential pair."""
    if not isinstance(payload, dict):
        payload = {}
    return {"userId": payload.get("userId"), "userSecret": payload.get("userSecret")}


def map_login(payload: Any) -> dict:
    return {"redirectUri": payload}


def map_list_users(payload: Any) -> Any:
    return payload


def map_delete_user(payload: Any) -> dict:
    return {"message": DELETE_USER_MESSAGE, "data": payload}


def map_accounts(payload: Any) -> dict:
    return {"accounts": payload}


def map_holdings(payload: Any) -> dict:
    return {"holdings": payload}
