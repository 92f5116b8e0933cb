"""Domain constants and closed enumerations for the ledger."""

from enum import Enum


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT_CARD = "credit_card"
    INVESTMENT = "investment"
    CRYPTO = "crypto"
    RETIREMENT = "retirement"
    WALLET = "wallet"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    INVESTMENT = "investment"
    INVESTMENT_SALE = "investment_sale"
    DIVIDEND = "dividend"
    INTEREST = "interest"


class BudgetPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class AssetKind(str, Enum):
    CRYPTO = "crypto"


class SeriesMetric(str, Enum):
    NET_WORTH = "net_worth"
    DIVIDENDS = "dividends"


DEFAULT_ASSET_TYPES = (
    AccountType.CHECKING,
    AccountType.SAVINGS,
    AccountType.INVESTMENT,
    AccountType.CRYPTO,
    AccountType.RETIREMENT,
    AccountType.WALLET,
)

DEFAULT_LIABILITY_TYPES = (AccountType.CREDIT_CARD,)

DEFAULT_CURRENCY = "PLN"
DEFAULT_POSITION_CURRENCY = "USD"
DEFAULT_SERIES_MONTHS = 6
DEFAULT_TIMEZONE_NAME = "Europe/Warsaw"


__all__ = [
    "AccountType",
    "TransactionType",
    "BudgetPeriod",
    "AssetKind",
    "SeriesMetric",
    "DEFAULT_ASSET_TYPES",
    "DEFAULT_LIABILITY_TYPES",
    "DEFAULT_CURRENCY",
    "DEFAULT_POSITION_CURRENCY",
    "DEFAULT_SERIES_MONTHS",
    "DEFAULT_TIMEZONE_NAME",
]
