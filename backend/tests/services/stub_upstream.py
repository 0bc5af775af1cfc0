"""Stub Upstream Client — programmable stand-in for SnapTradeClient in route tests.

Invariants:
    - Implements every UpstreamClient operation with the same signature
    - Every call is recorded in `log` before its result is produced, so tests
      can assert zero upstream calls on rejected requests
    - results[op] may be: a payload, an Exception (raised), or a list consumed
      one item per call (each item itself a payload or an Exception)

Design Decisions:
    - Flat class, no inheritance: structural match with the Protocol is enough
"""

from collections import Counter
from typing import Any


class StubUpstream:
    """Records calls and replays configured results per operation."""

    def __init__(self, **results: Any):
        self.results: dict[str, Any] = dict(results)
        self.log: list[dict] = []
        self.calls: Counter = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def _respond(self, operation: str, **args: Any) -> Any:
        self.log.append({"operation": operation, "args": args})
        self.calls[operation] += 1
        result = self.results.get(operation)
        if isinstance(result, list):
            result = result.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def register_user(self, user_id):
        return await self._respond("register_user", user_id=user_id)

    async def login(
        self, credentials, *, broker=None, immediate_redirect=None, custom_redirect=None,
    ):
        return await self._respond(
            "login",
            credentials=credentials,
            broker=broker,
            immediate_redirect=immediate_redirect,
            custom_redirect=custom_redirect,
        )

    async def list_users(self):
        return await self._respond("list_users")

    async def delete_user(self, user_id):
        return await self._respond("delete_user", user_id=user_id)

    async def list_accounts(self, credentials):
        return await self._respond("list_accounts", credentials=credentials)

    async def get_holdings(self, account):
        return await self._respond("get_holdings", account=account)
