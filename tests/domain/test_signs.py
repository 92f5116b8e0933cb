"""Tests for the transaction sign table."""

from decimal import Decimal

import pytest

from wealth_ledger.domain.constants import TransactionType
from wealth_ledger.domain.services.signs import (
    CREDIT_TYPES,
    DEBIT_TYPES,
    reversed_effect,
    sign_of,
    signed_effect,
)


def test_every_type_has_exactly_one_sign() -> None:
    """Credit and debit sets should partition the transaction types."""
    assert CREDIT_TYPES | DEBIT_TYPES == set(TransactionType)
    assert not CREDIT_TYPES & DEBIT_TYPES


@pytest.mark.parametrize(
    ("transaction_type", "expected"),
    [
        (TransactionType.INCOME, 1),
        (TransactionType.TRANSFER_IN, 1),
        (TransactionType.DIVIDEND, 1),
        (TransactionType.INTEREST, 1),
        (TransactionType.INVESTMENT_SALE, 1),
        (TransactionType.EXPENSE, -1),
        (TransactionType.TRANSFER_OUT, -1),
        (TransactionType.INVESTMENT, -1),
    ],
)
def test_sign_of_matches_table(transaction_type, expected) -> None:
    assert sign_of(transaction_type) == expected


def test_signed_and_reversed_effects_cancel() -> None:
    """Undoing an entry should restore the original balance."""
    amount = Decimal("12.34")
    for transaction_type in TransactionType:
        effect = signed_effect(transaction_type, amount)
        assert abs(effect) == amount
        assert effect + reversed_effect(transaction_type, amount) == 0


def test_sign_of_rejects_unknown_values() -> None:
    with pytest.raises(ValueError):
        sign_of("refund")
