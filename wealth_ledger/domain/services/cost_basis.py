"""Weighted-average cost basis accounting for asset positions."""

from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP, Decimal

from wealth_ledger.utils.decimal_utils import quantize_money, quantize_price


def trade_value(
    quantity: Decimal,
    price: Decimal,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    """Return the cash value of a trade rounded to cents."""
    return quantize_money(quantity * price, rounding)


def purchase_cost(quantity: Decimal, price: Decimal) -> Decimal:
    """Return the cash paid for a purchase, rounded up to the next cent."""
    return trade_value(quantity, price, ROUND_UP)


def sale_proceeds(quantity: Decimal, price: Decimal) -> Decimal:
    """Return the cash received for a sale, rounded down to the cent."""
    return trade_value(quantity, price, ROUND_DOWN)


def weighted_average(
    held_quantity: Decimal,
    held_avg_price: Decimal,
    bought_quantity: Decimal,
    bought_price: Decimal,
) -> tuple[Decimal, Decimal]:
    """Fold a purchase into an existing position.

    Args:
        held_quantity: Quantity held before the purchase.
        held_avg_price: Average buy price before the purchase.
        bought_quantity: Quantity purchased.
        bought_price: Unit price of the purchase.

    Returns:
        tuple[Decimal, Decimal]: New quantity and new average buy price.
    """
    new_quantity = held_quantity + bought_quantity
    if new_quantity == 0:
        return Decimal("0"), quantize_price(bought_price)
    total_cost = held_quantity * held_avg_price + bought_quantity * bought_price
    return new_quantity, quantize_price(total_cost / new_quantity)


def unrealized_pnl(
    quantity: Decimal,
    avg_buy_price: Decimal,
    current_price: Decimal,
) -> Decimal:
    """Return ``(current_price - avg_buy_price) * quantity``."""
    return (current_price - avg_buy_price) * quantity


def pnl_percentage(avg_buy_price: Decimal, current_price: Decimal) -> Decimal:
    """Return the price change relative to cost, in percent."""
    if avg_buy_price == 0:
        return Decimal("0")
    return (current_price - avg_buy_price) / avg_buy_price * Decimal("100")


__all__ = [
    "trade_value",
    "purchase_cost",
    "sale_proceeds",
    "weighted_average",
    "unrealized_pnl",
    "pnl_percentage",
]
