"""Response Mapping — tests for route success envelopes.

Tests cover:
    - each route wraps the payload under its own key
    - payload internals are passed through untouched
"""

from relay.core.map_responses import (
    DELETE_USER_MESSAGE,
    map_accounts,
    map_delete_user,
    map_holdings,
    map_list_users,
    map_login,
    map_register_user,
)


def test_register_user_returns_credential_pair_only():
    payload = {"userId": "u1", "userSecret": "s1", "extra": "ignored"}
    assert map_register_user(payload) == {"userId": "u1", "userSecret": "s1"}


def test_login_wraps_whole_payload_as_redirect_uri():
    payload = {"redirectURI": "https://app.snaptrade.com/portal", "sessionId": "abc"}
    assert map_login(payload) == {"redirectUri": payload}


def test_list_users_is_raw():
    payload = ["u1", "u2"]
    assert map_list_users(payload) is payload


def test_delete_user_envelope():
    payload = {"status": "deleted", "userId": "u1"}
    assert map_delete_user(payload) == {"message": DELETE_USER_MESSAGE, "data": payload}


def test_accounts_and_holdings_envelopes():
    accounts = [{"id": "acc-1"}]
    holdings = {"account": {"id": "acc-1"}, "positions": []}
    assert map_accounts(accounts) == {"accounts": accounts}
    assert map_holdings(holdings) == {"holdings": holdings}


def test_register_user_tolerates_non_object_payload():
    for payload in (None, "unexpected", ["u1"]):
        assert map_register_user(payload) == {"userId": None, "userSecret": None}
