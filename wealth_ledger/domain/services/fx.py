"""Static-rate currency conversion for cross-currency rollups."""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from logging import Logger

from wealth_ledger.domain.services.normalization import normalize_currency

DEFAULT_RATES: dict[str, Decimal] = {
    "PLN": Decimal("1"),
    "EUR": Decimal("4.35"),
    "USD": Decimal("4.10"),
    "GBP": Decimal("5.20"),
}


def build_rate_map(raw: str | None, logger: Logger) -> dict[str, Decimal]:
    """Parse ``CODE=RATE`` pairs on top of the default rate table.

    Args:
        raw: Comma separated pairs such as ``"EUR=4.35,USD=4.10"``.
        logger: Logger used for warnings about malformed pairs.

    Returns:
        dict[str, Decimal]: Multipliers into the base currency.
    """
    rates = dict(DEFAULT_RATES)
    if not raw:
        return rates
    for pair in raw.split(","):
        if not pair.strip():
            continue
        code, _, value = pair.partition("=")
        currency = normalize_currency(code, default="")
        try:
            rate = Decimal(value.strip())
        except InvalidOperation:
            logger.warning(f"Skipping malformed FX rate entry: {pair!r}")
            continue
        if not currency or rate <= 0:
            logger.warning(f"Skipping malformed FX rate entry: {pair!r}")
            continue
        rates[currency] = rate
    return rates


def convert_balance(
    balance: Decimal,
    currency_code: str,
    target_currency: str,
    rates: Mapping[str, Decimal],
    logger: Logger,
) -> Decimal:
    """Convert a balance into the target currency.

    Rates are multipliers into a common base currency, so conversion between
    two non-base currencies goes through the base. A balance whose currency
    has no rate is counted at face value.

    Args:
        balance: Balance in the source currency.
        currency_code: Source currency code.
        target_currency: Target currency code.
        rates: Mapping of currency code to base-currency multiplier.
        logger: Logger used for warnings.

    Returns:
        Decimal: Converted balance, or the unchanged balance when a rate is
        missing.
    """
    if currency_code == target_currency:
        return balance
    source_rate = rates.get(currency_code)
    target_rate = rates.get(target_currency)
    if source_rate is None or target_rate is None:
        logger.warning(
            f"Missing FX rate for {currency_code} to {target_currency}, "
            "counting the balance at face value"
        )
        return balance
    return balance * source_rate / target_rate


__all__ = ["DEFAULT_RATES", "build_rate_map", "convert_balance"]
