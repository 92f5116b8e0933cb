"""Tests for normalization and validation helpers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from wealth_ledger.domain.constants import AccountType
from wealth_ledger.domain.errors import InvalidArgumentError
from wealth_ledger.domain.services.normalization import (
    normalize_currency,
    normalize_symbol,
    normalize_tags,
)
from wealth_ledger.domain.services.validation import (
    require_non_negative,
    require_positive,
    to_decimal,
    validate_balance_sign,
)


def test_normalize_symbol_upper_cases_and_strips() -> None:
    assert normalize_symbol(" btc ") == "BTC"
    assert normalize_symbol("   ") is None
    assert normalize_symbol(None) is None


def test_normalize_currency_falls_back_to_default() -> None:
    assert normalize_currency(" eur", "PLN") == "EUR"
    assert normalize_currency("", "PLN") == "PLN"
    assert normalize_currency(None, "USD") == "USD"


def test_normalize_tags_drops_blanks_and_duplicates() -> None:
    assert normalize_tags([" food", "", "food", "travel ", None]) == (
        "food",
        "travel",
    )
    assert normalize_tags(None) == ()


@pytest.mark.parametrize("value", ["12.5", 12.5, 12, Decimal("12.5")])
def test_to_decimal_accepts_numbers(value) -> None:
    assert to_decimal("amount", value) == Decimal(str(value))


@pytest.mark.parametrize("value", [None, True, "abc", "NaN", "Infinity", object()])
def test_to_decimal_rejects_non_numbers(value) -> None:
    with pytest.raises(InvalidArgumentError):
        to_decimal("amount", value)


def test_require_helpers_enforce_bounds() -> None:
    assert require_non_negative("amount", Decimal("0")) == Decimal("0")
    with pytest.raises(InvalidArgumentError):
        require_non_negative("amount", Decimal("-0.01"))
    with pytest.raises(InvalidArgumentError):
        require_positive("quantity", Decimal("0"))


def test_validate_balance_sign_warns_only_on_violations() -> None:
    logger = MagicMock()
    assets = (AccountType.CHECKING,)
    liabilities = (AccountType.CREDIT_CARD,)

    validate_balance_sign(
        AccountType.CHECKING, Decimal("1"), assets, liabilities, logger
    )
    logger.warning.assert_not_called()

    validate_balance_sign(
        AccountType.CREDIT_CARD, Decimal("1"), assets, liabilities, logger
    )
    logger.warning.assert_called_once()
