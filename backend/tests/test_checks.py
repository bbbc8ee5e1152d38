#!/usr/bin/env python3
"""
backend/tests/test_checks.py

Unit tests for the request body pre-conditions in backend/utils/checks.py.

Usage:
    pytest backend/tests/test_checks.py -v
"""

import pytest

from backend.utils.checks import (
    ENTRY_CHECKS,
    LOGIN_CHECKS,
    MAX_AMOUNT,
    REGISTER_CHECKS,
    is_iso_date,
    parse_positive_number,
    required,
    run_checks,
)

VALID_ENTRY = {"type": "income", "amount": 100, "date": "2025-02-28", "description": "salary"}


class TestRunChecks:
    """The pipeline collects every failure in declaration order."""

    def test_all_pass_returns_empty_list(self):
        assert run_checks(VALID_ENTRY, ENTRY_CHECKS) == []

    def test_every_failure_is_reported(self):
        failures = run_checks({}, ENTRY_CHECKS)
        assert failures == [
            "type must be either expense or income",
            "amount must be a number greater than 0",
            "date must be a valid date in YYYY-MM-DD format",
            "description must not be empty",
        ]

    def test_non_object_payload_is_treated_as_empty(self):
        assert run_checks(["not", "a", "dict"], LOGIN_CHECKS) == [
            "Username is required",
            "Password is required",
        ]

    def test_single_check_passes_and_fails(self):
        check = required("name", "name is required")
        assert check({"name": "x"}) is None
        assert check({"name": ""}) == "name is required"
        assert check({}) == "name is required"


class TestRegisterChecks:

    def test_short_username_and_password(self):
        assert run_checks({"username": "abc", "password": "123"}, REGISTER_CHECKS) == [
            "Username must be at least 4 characters",
            "Password must be at least 4 characters",
        ]

    def test_missing_username_reports_required_and_length(self):
        failures = run_checks({"password": "pass1234"}, REGISTER_CHECKS)
        assert failures == [
            "Username is required",
            "Username must be at least 4 characters",
        ]

    def test_long_password_has_no_upper_bound(self):
        assert run_checks({"username": "alice", "password": "p" * 80}, REGISTER_CHECKS) == []

    def test_minimum_lengths_pass(self):
        assert run_checks({"username": "abcd", "password": "1234"}, REGISTER_CHECKS) == []


class TestEntryChecks:

    @pytest.mark.parametrize("entry_type", ["Expense", "refund", "", None, 1])
    def test_bad_type(self, entry_type):
        payload = {**VALID_ENTRY, "type": entry_type}
        assert run_checks(payload, ENTRY_CHECKS) == ["type must be either expense or income"]

    @pytest.mark.parametrize("amount", [0, -5, "abc", None, True, float("nan"), [1], 10 ** 400, "1e400"])
    def test_bad_amount(self, amount):
        payload = {**VALID_ENTRY, "amount": amount}
        assert run_checks(payload, ENTRY_CHECKS) == ["amount must be a number greater than 0"]

    @pytest.mark.parametrize("value", ["2025-02-30", "2025-13-01", "05/01/2025", "2025-1-5", "", 20250105])
    def test_bad_date(self, value):
        payload = {**VALID_ENTRY, "date": value}
        assert run_checks(payload, ENTRY_CHECKS) == ["date must be a valid date in YYYY-MM-DD format"]

    @pytest.mark.parametrize("description", ["", None, 42])
    def test_bad_description(self, description):
        payload = {**VALID_ENTRY, "description": description}
        assert run_checks(payload, ENTRY_CHECKS) == ["description must not be empty"]

    def test_whitespace_description_is_content(self):
        assert run_checks({**VALID_ENTRY, "description": "   "}, ENTRY_CHECKS) == []

    def test_amount_upper_bound(self):
        assert run_checks({**VALID_ENTRY, "amount": MAX_AMOUNT}, ENTRY_CHECKS) == []
        assert run_checks({**VALID_ENTRY, "amount": 1.7e308}, ENTRY_CHECKS) == [
            f"amount must be at most {MAX_AMOUNT}"
        ]


class TestHelpers:

    def test_parse_positive_number(self):
        assert parse_positive_number(12.5) == 12.5
        assert parse_positive_number(3) == 3.0
        assert parse_positive_number(" 7.25 ") == 7.25
        assert parse_positive_number(0) is None
        assert parse_positive_number(False) is None
        assert parse_positive_number("inf") is None

    def test_is_iso_date(self):
        assert is_iso_date("2024-02-29") is True
        assert is_iso_date("2023-02-29") is False
        assert is_iso_date("2025-01-05T10:00:00") is False
