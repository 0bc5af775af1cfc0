"""Request Validation — tests for pure presence checks on route fields.

Tests cover:
    - missing_fields treats absent, None and "" as missing, in declaration order
    - validation_error_body names exactly the missing fields
    - query-sourced errors mention query parameters
    - check_required returns None when everything is present
"""

from relay.core.domain_types import ParamSource
from relay.core.validate_fields import (
    check_required,
    is_present,
    missing_fields,
    validation_error_body,
)


# ─── is_present / missing_fields ─────────────────────────────────

def test_is_present_rejects_none_and_empty_string():
    assert not is_present(None)
    assert not is_present("")


def test_is_present_accepts_falsy_non_empty_values():
    assert is_present(0)
    assert is_present(False)
    assert is_present(" ")


def test_missing_fields_reports_absent_none_and_empty():
    params = {"userId": "", "userSecret": None}
    assert missing_fields(params, ["accountId", "userId", "userSecret"]) == [
        "accountId", "userId", "userSecret",
    ]


def test_missing_fields_keeps_declaration_order():
    params = {"userId": "u1"}
    assert missing_fields(params, ["userSecret", "userId", "accountId"]) == [
        "userSecret", "accountId",
    ]


def test_missing_fields_empty_when_all_present():
    assert missing_fields({"userId": "u1"}, ["userId"]) == []


def test_missing_fields_with_no_requirements():
    assert missing_fields({}, []) == []


# ─── validation_error_body ───────────────────────────────────────

def test_single_missing_field_message():
    assert validation_error_body(["userId"]) == {"error": "userId is required"}


def test_two_missing_fields_message():
    body = validation_error_body(["userId", "userSecret"])
    assert body == {"error": "userId and userSecret are required"}


def test_three_missing_fields_message_for_query():
    body = validation_error_body(
        ["accountId", "userId", "userSecret"], ParamSource.QUERY,
    )
    assert body == {
        "error": "accountId, userId and userSecret are required as query parameters",
    }


def test_single_missing_query_field_message():
    body = validation_error_body(["userSecret"], ParamSource.QUERY)
    assert body == {"error": "userSecret is required as a query parameter"}


# ─── check_required ──────────────────────────────────────────────

def test_check_required_returns_none_when_satisfied():
    assert check_required({"userId": "u1", "userSecret": "s1"}, ["userId", "userSecret"]) is None


def test_check_required_names_only_missing_fields():
    error = check_required({"userId": "u1"}, ["userId", "userSecret"])
    assert error == {"error": "userSecret is required"}
