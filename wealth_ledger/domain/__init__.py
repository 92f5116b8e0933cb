"""Domain package for ledger rules and core models."""

from .constants import (
    DEFAULT_ASSET_TYPES,
    DEFAULT_LIABILITY_TYPES,
    AccountType,
    AssetKind,
    BudgetPeriod,
    SeriesMetric,
    TransactionType,
)
from .errors import (
    AtomicityFailureError,
    InsufficientFundsError,
    InsufficientPositionError,
    InvalidArgumentError,
    LedgerError,
    NotFoundError,
    PriceUnavailableError,
)
from .policies import is_valid_account_name

__all__ = [
    "AccountType",
    "AssetKind",
    "BudgetPeriod",
    "SeriesMetric",
    "TransactionType",
    "DEFAULT_ASSET_TYPES",
    "DEFAULT_LIABILITY_TYPES",
    "LedgerError",
    "NotFoundError",
    "InvalidArgumentError",
    "InsufficientFundsError",
    "InsufficientPositionError",
    "PriceUnavailableError",
    "AtomicityFailureError",
    "is_valid_account_name",
]
