"""Domain services package."""

from .cost_basis import (
    pnl_percentage,
    purchase_cost,
    sale_proceeds,
    trade_value,
    unrealized_pnl,
    weighted_average,
)
from .finance import (
    compute_net_worth_summary,
    compute_total_balance,
    compute_type_breakdown,
)
from .fx import build_rate_map, convert_balance
from .normalization import normalize_currency, normalize_symbol, normalize_tags
from .signs import reversed_effect, sign_of, signed_effect
from .validation import (
    require_non_negative,
    require_positive,
    to_decimal,
    validate_balance_sign,
)

__all__ = [
    "build_rate_map",
    "convert_balance",
    "compute_net_worth_summary",
    "compute_total_balance",
    "compute_type_breakdown",
    "normalize_currency",
    "normalize_symbol",
    "normalize_tags",
    "pnl_percentage",
    "purchase_cost",
    "require_non_negative",
    "require_positive",
    "reversed_effect",
    "sale_proceeds",
    "sign_of",
    "signed_effect",
    "to_decimal",
    "trade_value",
    "unrealized_pnl",
    "validate_balance_sign",
    "weighted_average",
]
