"""Brokerage Routes — success paths and field validation over a stub upstream.

Invariants:
    - Missing required fields → 400 with an `error` key and ZERO upstream calls
    - Successful upstream calls → 200 with the route's envelope
    - Inputs are forwarded to the upstream client unchanged
"""

import pytest

from relay.core.domain_types import AccountRef, CredentialPair

API = "/api/snaptrade"


# ─── Validation: zero upstream calls ────────────────────────────

@pytest.mark.parametrize(
    "method, path, kwargs, expected_error",
    [
        ("POST", "/register-user", {"json": {}}, "userId is required"),
        ("POST", "/register-user", {}, "userId is required"),
        ("POST", "/register-user", {"json": {"userId": ""}}, "userId is required"),
        (
            "POST", "/connect-portal-url", {"json": {"userId": "u1"}},
            "userSecret is required",
        ),
        (
            "POST", "/connect-portal-url", {"json": {"broker": "ALPACA"}},
            "userId and userSecret are required",
        ),
        ("DELETE", "/delete-user", {"json": {}}, "userId is required"),
        (
            "GET", "/list-accounts", {"params": {"userId": "u1"}},
            "userSecret is required as a query parameter",
        ),
        (
            "GET", "/list-accounts", {},
            "userId and userSecret are required as query parameters",
        ),
        (
            "GET", "/list-account-holdings",
            {"params": {"userId": "u1", "userSecret": "s1"}},
            "accountId is required as a query parameter",
        ),
        (
            "GET", "/list-account-holdings", {"params": {"accountId": ""}},
            "accountId, userId and userSecret are required as query parameters",
        ),
    ],
)
async def test_missing_fields_return_400_without_upstream_call(
    client, stub, admin_headers, method, path, kwargs, expected_error,
):
    res = await client.request(method, f"{API}{path}", headers=admin_headers, **kwargs)
    assert res.status_code == 400
    assert res.json() == {"error": expected_error}
    assert stub.total_calls == 0


# ─── register-user ───────────────────────────────────────────────

async def test_register_user_returns_issued_credentials(client, stub):
    stub.results["register_user"] = {"userId": "u1", "userSecret": "s1"}
    res = await client.post(f"{API}/register-user", json={"userId": "u1"})
    assert res.status_code == 200
    assert res.json() == {"userId": "u1", "userSecret": "s1"}
    assert stub.log == [{"operation": "register_user", "args": {"user_id": "u1"}}]


async def test_register_user_coerces_numeric_user_id(client, stub):
    stub.results["register_user"] = {"userId": "42", "userSecret": "s1"}
    res = await client.post(f"{API}/register-user", json={"userId": 42})
    assert res.status_code == 200
    assert stub.log[0]["args"]["user_id"] == "42"


# ─── connect-portal-url ──────────────────────────────────────────

async def test_connect_portal_url_wraps_login_payload(client, stub):
    portal = {"redirectURI": "https://app.snaptrade.com/snapTrade/redeemToken?token=x", "sessionId": "sess-1"}
    stub.results["login"] = portal
    res = await client.post(
        f"{API}/connect-portal-url",
        json={"userId": "u1", "userSecret": "s1"},
    )
    assert res.status_code == 200
    assert res.json() == {"redirectUri": portal}


async def test_connect_portal_url_forwards_options(client, stub):
    stub.results["login"] = {"redirectURI": "https://example.test"}
    await client.post(
        f"{API}/connect-portal-url",
        json={
            "userId": "u1",
            "userSecret": "s1",
            "broker": "ALPACA",
            "immediateRedirect": True,
            "customRedirect": "https://frontend.test/done",
        },
    )
    args = stub.log[0]["args"]
    assert args["credentials"] == CredentialPair("u1", "s1")
    assert args["broker"] == "ALPACA"
    assert args["immediate_redirect"] is True
    assert args["custom_redirect"] == "https://frontend.test/done"


async def test_connect_portal_url_coerces_numeric_credentials(client, stub):
    stub.results["login"] = {"redirectURI": "https://example.test"}
    res = await client.post(
        f"{API}/connect-portal-url", json={"userId": 42, "userSecret": 9001},
    )
    assert res.status_code == 200
    assert stub.log[0]["args"]["credentials"] == CredentialPair("42", "9001")


async def test_connect_portal_url_options_default_to_none(client, stub):
    stub.results["login"] = {"redirectURI": "https://example.test"}
    await client.post(
        f"{API}/connect-portal-url", json={"userId": "u1", "userSecret": "s1"},
    )
    args = stub.log[0]["args"]
    assert args["broker"] is None
    assert args["immediate_redirect"] is None
    assert args["custom_redirect"] is None


# ─── list-users / delete-user (admin) ────────────────────────────

async def test_list_users_returns_raw_payload(client, stub, admin_headers):
    stub.results["list_users"] = ["u1", "u2"]
    res = await client.get(f"{API}/list-users", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == ["u1", "u2"]
    assert stub.calls["list_users"] == 1


async def test_delete_user_wraps_payload(client, stub, admin_headers):
    deleted = {"status": "deleted", "detail": "User queued for deletion", "userId": "u1"}
    stub.results["delete_user"] = deleted
    res = await client.request(
        "DELETE", f"{API}/delete-user", json={"userId": "u1"}, headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted successfully", "data": deleted}
    assert stub.log[0]["args"] == {"user_id": "u1"}


# ─── list-accounts / list-account-holdings ───────────────────────

async def test_list_accounts_wraps_payload(client, stub):
    accounts = [{"id": "acc-1", "name": "Brokerage", "institution_name": "Alpaca"}]
    stub.results["list_accounts"] = accounts
    res = await client.get(
        f"{API}/list-accounts", params={"userId": "u1", "userSecret": "s1"},
    )
    assert res.status_code == 200
    assert res.json() == {"accounts": accounts}
    assert stub.log[0]["args"]["credentials"] == CredentialPair("u1", "s1")


async def test_list_account_holdings_wraps_payload(client, stub):
    holdings = {"account": {"id": "acc-1"}, "balances": [], "positions": [], "orders": []}
    stub.results["get_holdings"] = holdings
    res = await client.get(
        f"{API}/list-account-holdings",
        params={"accountId": "acc-1", "userId": "u1", "userSecret": "s1"},
    )
    assert res.status_code == 200
    assert res.json() == {"holdings": holdings}
    assert stub.log[0]["args"]["account"] == AccountRef(
        "acc-1", CredentialPair("u1", "s1"),
    )


async def test_each_request_makes_exactly_one_upstream_call(client, stub):
    stub.results["list_accounts"] = []
    for _ in range(3):
        await client.get(
            f"{API}/list-accounts", params={"userId": "u1", "userSecret": "s1"},
        )
    assert stub.calls["list_accounts"] == 3
    assert stub.total_calls == 3
