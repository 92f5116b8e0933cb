"""Domain validation helpers."""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from logging import Logger

from wealth_ledger.domain.errors import InvalidArgumentError


def to_decimal(name: str, value) -> Decimal:
    """Convert a caller-supplied number to a finite Decimal.

    Raises:
        InvalidArgumentError: If the value is missing, not numeric or not
            finite.
    """
    if value is None or isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a number: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgumentError(f"{name} must be a number: {value!r}") from None
    if not result.is_finite():
        raise InvalidArgumentError(f"{name} must be finite: {value!r}")
    return result


def require_non_negative(name: str, value: Decimal) -> Decimal:
    """Reject negative values.

    Raises:
        InvalidArgumentError: If ``value`` is below zero.
    """
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative: {value}")
    return value


def require_positive(name: str, value: Decimal) -> Decimal:
    """Reject zero and negative values.

    Raises:
        InvalidArgumentError: If ``value`` is not strictly positive.
    """
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be positive: {value}")
    return value


def validate_balance_sign(
    account_type: str,
    balance: Decimal,
    asset_types: Iterable[str],
    liability_types: Iterable[str],
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Args:
        account_type: Account type of the balance.
        balance: Raw balance amount.
        asset_types: Account types treated as assets.
        liability_types: Account types treated as liabilities.
        logger: Logger used for warnings.
    """
    if account_type in asset_types and balance < 0:
        logger.warning(
            f"Asset balance is negative for account_type={account_type}: {balance}"
        )
    if account_type in liability_types and balance > 0:
        logger.warning(
            f"Liability balance is positive for account_type={account_type}: {balance}"
        )


__all__ = [
    "to_decimal",
    "require_non_negative",
    "require_positive",
    "validate_balance_sign",
]
