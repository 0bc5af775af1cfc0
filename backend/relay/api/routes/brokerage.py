"""Brokerage Routes — the six SnapTrade relay endpoints.

Invariants:
    - Each route: validate required fields → one upstream call → one response
    - Missing fields answer 400 and never reach the upstream client
    - list-users and delete-user require admin authorization (api/dependencies.py)
    - Credentials are passed through, never logged or stored

Design Decisions:
    - Prefix applied in main.py from settings (RELAY_API_PREFIX)
    - Body routes take optional Pydantic models so an empty body still yields
      the field-naming 400 instead of a schema error
"""

from fastapi import APIRouter, Depends, Query

from relay.api.dependencies import get_upstream, require_admin
from relay.core.domain_types import (
    AccountRef, CredentialPair, ParamSource, RelayOperation,
)
from relay.core.map_responses import (
    map_accounts, map_delete_user, map_holdings,
    map_list_users, map_login, map_register_user,
)
from relay.core.upstream_protocol import UpstreamClient
from relay.schemas.brokerage import (
    ConnectPortalRequest, DeleteUserRequest, RegisterUserRequest,
)
from relay.services.relay_pipeline import reject_missing, relay_call

router = APIRouter(tags=["snaptrade"])


@router.post("/register-user")
async def register_user(
    body: RegisterUserRequest | None = None,
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Register a SnapTrade user; returns the issued userId/userSecret."""
    body = body or RegisterUserRequest()
    rejected = reject_missing(body.wire_params(), ["userId"])
    if rejected:
        return rejected
    return await relay_call(
        lambda: upstream.register_user(body.user_id),
        operation=RelayOperation.REGISTER_USER,
        on_success=map_register_user,
    )


@router.post("/connect-portal-url")
async def connect_portal_url(
    body: ConnectPortalRequest | None = None,
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Generate a one-time connection portal link for the user."""
    body = body or ConnectPortalRequest()
    rejected = reject_missing(body.wire_params(), ["userId", "userSecret"])
    if rejected:
        return rejected
    credentials = CredentialPair(body.user_id, body.user_secret)
    return await relay_call(
        lambda: upstream.login(
            credentials,
            broker=body.broker,
            immediate_redirect=body.immediate_redirect,
            custom_redirect=body.custom_redirect,
        ),
        operation=RelayOperation.LOGIN,
        on_success=map_login,
    )


@router.get("/list-users", dependencies=[Depends(require_admin)])
async def list_users(upstream: UpstreamClient = Depends(get_upstream)):
    """List every user registered under this SnapTrade client (admin)."""
    return await relay_call(
        upstream.list_users,
        operation=RelayOperation.LIST_USERS,
        on_success=map_list_users,
    )


@router.delete("/delete-user", dependencies=[Depends(require_admin)])
async def delete_user(
    body: DeleteUserRequest | None = None,
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Delete a SnapTrade user and all its connections (admin)."""
    body = body or DeleteUserRequest()
    rejected = reject_missing(body.wire_params(), ["userId"])
    if rejected:
        return rejected
    return await relay_call(
        lambda: upstream.delete_user(body.user_id),
        operation=RelayOperation.DELETE_USER,
        on_success=map_delete_user,
    )


@router.get("/list-accounts")
async def list_accounts(
    user_id: str | None = Query(None, alias="userId"),
    user_secret: str | None = Query(None, alias="userSecret"),
    upstream: UpstreamClient = Depends(get_upstream),
):
    """List the brokerage accounts a user has connected."""
    params = {"userId": user_id, "userSecret": user_secret}
    rejected = reject_missing(params, list(params), ParamSource.QUERY)
    if rejected:
        return rejected
    credentials = CredentialPair(user_id, user_secret)
    return await relay_call(
        lambda: upstream.list_accounts(credentials),
        operation=RelayOperation.LIST_ACCOUNTS,
        on_success=map_accounts,
    )


@router.get("/list-account-holdings")
async def list_account_holdings(
    account_id: str | None = Query(None, alias="accountId"),
    user_id: str | None = Query(None, alias="userId"),
    user_secret: str | None = Query(None, alias="userSecret"),
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Balances, positions and orders for one account."""
    params = {"accountId": account_id, "userId": user_id, "userSecret": user_secret}
    rejected = reject_missing(params, list(params), ParamSource.QUERY)
    if rejected:
        return rejected
    account = AccountRef(account_id, CredentialPair(user_id, user_secret))
    return await relay_call(
        lambda: upstream.get_holdings(account),
        operation=RelayOperation.GET_HOLDINGS,
        on_success=map_holdings,
    )
