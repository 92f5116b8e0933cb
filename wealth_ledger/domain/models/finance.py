"""Domain models for financial aggregates."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from wealth_ledger.domain.constants import AccountType, SeriesMetric
from wealth_ledger.domain.models.ledger import (
    Budget,
    Goal,
    Position,
    Transaction,
)


@dataclass(frozen=True)
class AccountBalanceRow:
    """Balance of one account at a point in time, in its own currency."""

    account_guid: str
    account_type: AccountType
    currency_code: str
    balance: Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures.

    Attributes:
        asset_total: Sum of asset balances.
        liability_total: Outstanding liabilities as a positive amount.
        net_worth: Assets minus liabilities.
    """

    asset_total: Decimal
    liability_total: Decimal
    net_worth: Decimal
    currency_code: str


@dataclass(frozen=True)
class BudgetScope:
    """Accounts and category a budget measures spend against.

    Without an account the scope covers every account of the user.
    """

    user_guid: str
    account_guid: str | None = None
    category_guid: str | None = None


@dataclass(frozen=True)
class TransferResult:
    """Both legs of a transfer, sharing one transfer guid."""

    outgoing: Transaction
    incoming: Transaction


@dataclass(frozen=True)
class BudgetProgress:
    """Spend against a budget limit, computed at query time."""

    spent: Decimal
    limit: Decimal
    percentage: Decimal
    budget: Budget | None = None

    @property
    def remaining(self) -> Decimal:
        return max(self.limit - self.spent, Decimal("0"))


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a goal towards its target amount."""

    goal: Goal
    current_amount: Decimal
    percentage: Decimal
    remaining: Decimal
    days_left: int | None


@dataclass(frozen=True)
class MonthlyPoint:
    """Value of a metric for one calendar month."""

    label: str
    year: int
    month: int
    value: Decimal


@dataclass(frozen=True)
class MonthlySeries:
    """Ordered monthly points, oldest first."""

    metric: SeriesMetric
    currency_code: str
    points: list[MonthlyPoint] = field(default_factory=list)


@dataclass(frozen=True)
class MonthWindow:
    """Half-open calendar month ``[start, next_start)`` in local time."""

    year: int
    month: int
    label: str
    first_day: date
    last_day: date


@dataclass(frozen=True)
class TradeResult:
    """Outcome of a buy or sell.

    Attributes:
        transaction: Journal entry recorded for the cash leg.
        position: Position after the trade, or None once closed.
        balance: Account cash balance after the trade.
    """

    transaction: Transaction
    position: Position | None
    balance: Decimal


@dataclass(frozen=True)
class PositionValuation:
    """Read-time valuation of a position."""

    position: Position
    market_value: Decimal
    unrealized_pnl: Decimal
    pnl_percentage: Decimal


@dataclass(frozen=True)
class PortfolioView:
    """Cash and positions of one account."""

    account_guid: str
    cash_balance: Decimal
    positions: list[PositionValuation]
    total_value: Decimal


@dataclass(frozen=True)
class PriceRefreshResult:
    """Summary of a price refresh run."""

    updated_symbols: list[str]
    missing_symbols: list[str]
    updated_positions: int


__all__ = [
    "AccountBalanceRow",
    "NetWorthSummary",
    "BudgetScope",
    "TransferResult",
    "BudgetProgress",
    "GoalProgress",
    "MonthlyPoint",
    "MonthlySeries",
    "MonthWindow",
    "TradeResult",
    "PositionValuation",
    "PortfolioView",
    "PriceRefreshResult",
]
