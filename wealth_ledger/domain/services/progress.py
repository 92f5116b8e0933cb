"""Progress maths for budgets and goals."""

from datetime import date
from decimal import Decimal

from wealth_ledger.utils.decimal_utils import quantize_money

HUNDRED = Decimal("100")


def capped_percentage(value: Decimal, limit: Decimal) -> Decimal:
    """Return ``min(100, 100 * value / limit)`` with ``limit == 0`` as 0.

    Args:
        value: Amount spent or saved.
        limit: Budget limit or goal target.

    Returns:
        Decimal: Percentage in ``[0, 100]`` for non-negative inputs.
    """
    if limit <= 0:
        return Decimal("0")
    percentage = value / limit * HUNDRED
    if percentage < 0:
        return Decimal("0")
    return quantize_money(min(percentage, HUNDRED))


def remaining_amount(target: Decimal, current: Decimal) -> Decimal:
    """Return the amount still missing, floored at zero."""
    return max(target - current, Decimal("0"))


def days_left(target_date: date | None, today: date) -> int | None:
    """Return days until ``target_date``, floored at zero."""
    if target_date is None:
        return None
    return max((target_date - today).days, 0)


__all__ = ["capped_percentage", "remaining_amount", "days_left"]
