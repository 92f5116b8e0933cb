"""Domain models package."""

from .finance import (
    AccountBalanceRow,
    BudgetProgress,
    BudgetScope,
    GoalProgress,
    MonthlyPoint,
    MonthlySeries,
    MonthWindow,
    NetWorthSummary,
    PortfolioView,
    PositionValuation,
    PriceRefreshResult,
    TradeResult,
    TransferResult,
)
from .ledger import (
    Account,
    Budget,
    Category,
    Goal,
    Position,
    Transaction,
    User,
)

__all__ = [
    "Account",
    "AccountBalanceRow",
    "Budget",
    "Category",
    "Goal",
    "Position",
    "Transaction",
    "User",
    "BudgetProgress",
    "BudgetScope",
    "GoalProgress",
    "MonthlyPoint",
    "MonthlySeries",
    "MonthWindow",
    "NetWorthSummary",
    "PortfolioView",
    "PositionValuation",
    "PriceRefreshResult",
    "TradeResult",
    "TransferResult",
]
