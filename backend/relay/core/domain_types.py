"""Domain Types — credential, account and operation types used across the relay.

Invariants:
    - CredentialPair.user_secret never appears in repr() or logs
    - Every relayed operation is a RelayOperation member — no raw string matching
    - Each RelayOperation has exactly one default error label

Design Decisions:
    - Frozen dataclasses: credentials are request-scoped and never mutated locally
    - str Enums: serialize into log extras without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum


# ─── Credentials ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CredentialPair:
    """SnapTrade-issued (userId, userSecret) tuple, required on authenticated calls."""
    user_id: str
    user_secret: str = field(repr=False)


@dataclass(frozen=True)
class AccountRef:
    """A brokerage account at SnapTrade plus the credentials of its owner."""
    account_id: str
    credentials: CredentialPair


# ─── Enums ───────────────────────────────────────────────────────

class RelayOperation(str, Enum):
    """The six relayed upstream operations."""
    REGISTER_USER = "register_user"
    LOGIN = "login"
    LIST_USERS = "list_users"
    DELETE_USER = "delete_user"
    LIST_ACCOUNTS = "list_accounts"
    GET_HOLDINGS = "get_holdings"


class ParamSource(str, Enum):
    """Where a route reads its required fields from."""
    BODY = "body"
    QUERY = "query"


DEFAULT_ERROR_LABELS: dict[RelayOperation, str] = {
    RelayOperation.REGISTER_USER: "Failed to register user",
    RelayOperation.LOGIN: "Failed to generate connection portal url",
    RelayOperation.LIST_USERS: "Failed to list users",
    RelayOperation.DELETE_USER: "Failed to delete user",
    RelayOperation.LIST_ACCOUNTS: "Failed to list accounts",
    RelayOperation.GET_HOLDINGS: "Failed to list account holdings",
}
