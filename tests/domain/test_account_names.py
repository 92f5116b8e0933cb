"""Tests for the account naming policy."""

import pytest

from wealth_ledger.domain.policies.account_names import (
    MAX_NAME_LENGTH,
    is_valid_account_name,
)


@pytest.mark.parametrize("name", ["Main", "  Savings 2024 ", "mBank EUR"])
def test_regular_names_are_accepted(name: str) -> None:
    assert is_valid_account_name(name)


@pytest.mark.parametrize(
    "name",
    [
        "",
        "   ",
        "x" * (MAX_NAME_LENGTH + 1),
        "0123456789abcdef0123456789ABCDEF",
    ],
)
def test_blank_long_or_guid_like_names_are_rejected(name: str) -> None:
    assert not is_valid_account_name(name)
