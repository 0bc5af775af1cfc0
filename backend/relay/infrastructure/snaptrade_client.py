"""SnapTrade Client — signed async HTTP client for the SnapTrade REST API.

Invariants:
    - Every request carries clientId + timestamp in the query and a Signature header
    - Non-2xx responses: UpstreamAPIError with status and decoded body (verbatim)
    - Transport failures (connect, timeout, protocol): UpstreamAPIError with no status
    - No retries: exactly one HTTP request per operation
    - Credentials never logged (query strings are not logged at all)

Design Decisions:
    - Wrapper over httpx.AsyncClient: one pooled connection set shared read-only
      by all requests, closed at shutdown via aclose()
    - Signature = base64(HMAC-SHA256(consumer key, compact sorted JSON of
      {content, path, query})), matching SnapTrade's request-signing scheme
    - Query string built once and sent verbatim, so the signed bytes are the sent bytes
    - An empty JSON body is signed as content null, the way SnapTrade's own
      SDK signs it; the {} is still sent on the wire
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any
from urllib.parse import urlencode, urlsplit

import httpx

from relay.config import Settings
from relay.core.domain_types import AccountRef, CredentialPair
from relay.core.errors import UpstreamAPIError

logger = logging.getLogger(__name__)


def compute_signature(
    consumer_key: str, path: str, query: str, content: Any,
) -> str:
    """Sign a request the way the SnapTrade API verifies it."""
    sig_object = {"content": content or None, "path": path, "query": query}
    sig_content = json.dumps(sig_object, separators=(",", ":"), sort_keys=True)
    digest = hmac.new(
        consumer_key.encode(), sig_content.encode(), hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode()


def _decode_body(response: httpx.Response) -> Any:
    """JSON body if parseable, else raw text, else None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict):
        for key in ("detail", "message"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return response.reason_phrase or f"HTTP {response.status_code}"


class SnapTradeClient:
    """Implements relay.core.upstream_protocol.UpstreamClient against SnapTrade."""

    def __init__(
        self,
        client_id: str,
        consumer_key: str,
        base_url: str = "https://api.snaptrade.com/api/v1",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client_id = client_id
        self._consumer_key = consumer_key
        self._base_url = base_url.rstrip("/")
        self._base_path = urlsplit(self._base_url).path
        self._http = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SnapTradeClient":
        return cls(
            client_id=settings.client_id,
            consumer_key=settings.consumer_secret.get_secret_value(),
            base_url=settings.snaptrade_base_url,
            timeout_seconds=settings.snaptrade_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # ─── Operations ──────────────────────────────────────────────

    async def register_user(self, user_id: str) -> Any:
        return await self._request(
            "POST", "/snapTrade/registerUser", body={"userId": user_id},
        )

    async def login(
        self,
        credentials: CredentialPair,
        *,
        broker: str | None = None,
        immediate_redirect: bool | None = None,
        custom_redirect: str | None = None,
    ) -> Any:
        options = {
            "broker": broker,
            "immediateRedirect": immediate_redirect,
            "customRedirect": custom_redirect,
        }
        return await self._request(
            "POST", "/snapTrade/login",
            params=_credential_params(credentials),
            body={k: v for k, v in options.items() if v is not None},
        )

    async def list_users(self) -> Any:
        return await self._request("GET", "/snapTrade/listUsers")

    async def delete_user(self, user_id: str) -> Any:
        return await self._request(
            "DELETE", "/snapTrade/deleteUser", params={"userId": user_id},
        )

    async def list_accounts(self, credentials: CredentialPair) -> Any:
        return await self._request(
            "GET", "/accounts", params=_credential_params(credentials),
        )

    async def get_holdings(self, account: AccountRef) -> Any:
        return await self._request(
            "GET", f"/accounts/{account.account_id}/holdings",
            params=_credential_params(account.credentials),
        )

    # ─── Transport ───────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, str] | None = None,
        body: dict | None = None,
    ) -> Any:
        """Send one signed request; raise UpstreamAPIError on any failure."""
        query = urlencode({
            "clientId": self._client_id,
            "timestamp": str(int(time.time())),
            **(params or {}),
        })
        signature = compute_signature(
            self._consumer_key, self._base_path + endpoint, query, body,
        )
        headers = {"Signature": signature}
        content = None
        if body is not None:
            content = json.dumps(body, separators=(",", ":"))
            headers["Content-Type"] = "application/json"

        try:
            response = await self._http.request(
                method, f"{self._base_url}{endpoint}?{query}",
                content=content, headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(
                f"SnapTrade transport failure: {e.__class__.__name__}",
                extra={"operation": endpoint},
            )
            raise UpstreamAPIError(str(e) or e.__class__.__name__) from e

        payload = _decode_body(response)
        if response.is_error:
            logger.warning(
                "SnapTrade API error",
                extra={"operation": endpoint, "upstream_status": response.status_code},
            )
            raise UpstreamAPIError(
                _error_message(response, payload),
                status=response.status_code,
                body=payload,
            )
        logger.info(
            "SnapTrade API success",
            extra={"operation": endpoint, "upstream_status": response.status_code},
        )
        return payload


def _credential_params(credentials: CredentialPair) -> dict[str, str]:
    return {"userId": credentials.user_id, "userSecret": credentials.user_secret}
