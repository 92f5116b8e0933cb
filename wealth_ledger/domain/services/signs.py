"""Sign table mapping transaction types to their balance effect.

This is the only place where a transaction type is turned into a balance
delta; every writer and every replay goes through :func:`signed_effect`.
"""

from decimal import Decimal

from wealth_ledger.domain.constants import TransactionType

CREDIT_TYPES = frozenset(
    {
        TransactionType.INCOME,
        TransactionType.TRANSFER_IN,
        TransactionType.DIVIDEND,
        TransactionType.INTEREST,
        TransactionType.INVESTMENT_SALE,
    }
)

DEBIT_TYPES = frozenset(
    {
        TransactionType.EXPENSE,
        TransactionType.TRANSFER_OUT,
        TransactionType.INVESTMENT,
    }
)

_unsigned = set(TransactionType) - CREDIT_TYPES - DEBIT_TYPES
if _unsigned or CREDIT_TYPES & DEBIT_TYPES:
    raise RuntimeError(
        f"Transaction sign table is not exhaustive: {sorted(_unsigned)}"
    )


def sign_of(transaction_type: TransactionType) -> int:
    """Return +1 for balance-increasing types and -1 otherwise."""
    if transaction_type in CREDIT_TYPES:
        return 1
    if transaction_type in DEBIT_TYPES:
        return -1
    raise ValueError(f"Unknown transaction type: {transaction_type!r}")


def signed_effect(
    transaction_type: TransactionType,
    amount: Decimal,
) -> Decimal:
    """Return the balance delta caused by a transaction.

    Args:
        transaction_type: Type of the journal entry.
        amount: Non-negative magnitude of the entry.

    Returns:
        Decimal: ``+amount`` or ``-amount`` according to the sign table.
    """
    return amount if sign_of(transaction_type) > 0 else -amount


def reversed_effect(
    transaction_type: TransactionType,
    amount: Decimal,
) -> Decimal:
    """Return the delta that undoes a transaction (used by backward replay)."""
    return -signed_effect(transaction_type, amount)


__all__ = [
    "CREDIT_TYPES",
    "DEBIT_TYPES",
    "sign_of",
    "signed_effect",
    "reversed_effect",
]
