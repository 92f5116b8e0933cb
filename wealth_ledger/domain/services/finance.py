"""Domain services for finance aggregates."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from logging import Logger

from wealth_ledger.domain.constants import AccountType
from wealth_ledger.domain.models import AccountBalanceRow, NetWorthSummary
from wealth_ledger.domain.services.fx import convert_balance
from wealth_ledger.domain.services.validation import validate_balance_sign
from wealth_ledger.utils.decimal_utils import coerce_decimal, quantize_money


def compute_net_worth_summary(
    balances: list[AccountBalanceRow],
    rates: Mapping[str, Decimal],
    *,
    asset_types: Iterable[AccountType],
    liability_types: Iterable[AccountType],
    target_currency: str,
    logger: Logger,
) -> NetWorthSummary:
    """Compute net worth totals from per-account balances.

    Args:
        balances: Account balances in their own currencies.
        rates: Static FX multipliers.
        asset_types: Account types treated as assets.
        liability_types: Account types treated as liabilities.
        target_currency: Reporting currency code.
        logger: Logger used for warnings.

    Returns:
        NetWorthSummary: Computed asset, liability, and net worth totals.
    """
    asset_types = tuple(asset_types)
    liability_types = tuple(liability_types)
    asset_total = Decimal("0")
    liability_total = Decimal("0")

    for row in balances:
        account_type = row.account_type
        if (
            account_type not in asset_types
            and account_type not in liability_types
        ):
            continue
        balance = coerce_decimal(row.balance)
        validate_balance_sign(
            account_type,
            balance,
            asset_types,
            liability_types,
            logger,
        )
        converted = convert_balance(
            balance,
            row.currency_code,
            target_currency,
            rates,
            logger,
        )
        if account_type in asset_types:
            asset_total += converted
        else:
            liability_total -= converted

    asset_total = quantize_money(asset_total)
    liability_total = quantize_money(liability_total)
    return NetWorthSummary(
        asset_total=asset_total,
        liability_total=liability_total,
        net_worth=asset_total - liability_total,
        currency_code=target_currency,
    )


def compute_total_balance(
    balances: list[AccountBalanceRow],
    rates: Mapping[str, Decimal],
    *,
    target_currency: str,
    logger: Logger,
) -> Decimal:
    """Sum balances converted into the target currency."""
    total = Decimal("0")
    for row in balances:
        total += convert_balance(
            coerce_decimal(row.balance),
            row.currency_code,
            target_currency,
            rates,
            logger,
        )
    return quantize_money(total)


def compute_type_breakdown(
    balances: list[AccountBalanceRow],
    rates: Mapping[str, Decimal],
    *,
    target_currency: str,
    logger: Logger,
) -> dict[AccountType, Decimal]:
    """Total converted balances per account type, in enum order."""
    totals: dict[AccountType, Decimal] = {}
    for row in balances:
        converted = convert_balance(
            coerce_decimal(row.balance),
            row.currency_code,
            target_currency,
            rates,
            logger,
        )
        totals[row.account_type] = (
            totals.get(row.account_type, Decimal("0")) + converted
        )
    return {
        account_type: quantize_money(totals[account_type])
        for account_type in AccountType
        if account_type in totals
    }


__all__ = [
    "compute_net_worth_summary",
    "compute_total_balance",
    "compute_type_breakdown",
]
