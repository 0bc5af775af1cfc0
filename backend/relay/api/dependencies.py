"""Route Dependencies — inject the upstream client and enforce admin authorization.

Invariants:
    - The upstream client comes from app.state (set by create_app), never a global
    - Admin routes require X-Admin-Token == settings.admin_token (constant-time)
    - No admin token configured → admin routes disabled (403)

Design Decisions:
    - FastAPI Depends over module globals: tests swap the client through
      create_app(upstream=...) or dependency_overrides, no env mutation
"""

import hmac

from fastapi import Header, Request

from relay.config import Settings
from relay.core.errors import AdminDisabledError, AdminTokenError
from relay.core.upstream_protocol import UpstreamClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream(request: Request) -> UpstreamClient:
    upstream = request.app.state.upstream
    if upstream is None:
        raise RuntimeError("Upstream client not initialized")
    return upstream


def require_admin(
    request: Request, x_admin_token: str | None = Header(None),
) -> None:
    """Gate operations that act on any user of the SnapTrade client."""
    expected = get_app_settings(request).admin_token
    if expected is None:
        raise AdminDisabledError()
    if x_admin_token is None or not hmac.compare_digest(
        x_admin_token.encode(), expected.get_secret_value().encode(),
    ):
        raise AdminTokenError()
