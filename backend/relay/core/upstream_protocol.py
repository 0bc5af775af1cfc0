"""Upstream Protocol — contract between the relay and the brokerage-aggregation API.

Invariants:
    - Every operation either resolves with the decoded JSON payload or raises
      UpstreamAPIError (core/errors.py) carrying the upstream status and body
    - Implementations hold only immutable configuration: one instance is shared
      read-only by all requests
    - No retries, no caching inside implementations

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Implementation injected per request (api/dependencies.py), never a
      module-level global
"""

from typing import Any, Protocol

from relay.core.domain_types import AccountRef, CredentialPair


class UpstreamClient(Protocol):
    """Async operations the relay forwards to."""

    async def register_user(self, user_id: str) -> Any: ...

    async def login(
        self,
        credentials: CredentialPair,
        *,
        broker: str | None = None,
        immediate_redirect: bool | None = None,
        custom_redirect: str | None = None,
    ) -> Any: ...

    async def list_users(self) -> Any: ...

    async def delete_user(self, user_id: str) -> Any: ...

    async def list_accounts(self, credentials: CredentialPair) -> Any: ...

    async def get_holdings(self, account: AccountRef) -> Any: ...
