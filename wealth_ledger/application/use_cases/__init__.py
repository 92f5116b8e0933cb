"""Application use cases package."""

from .create_category import CreateCategoryUseCase
from .get_balance_as_of import GetBalanceAsOfUseCase
from .get_budget_progress import GetBudgetProgressUseCase
from .get_goal_progress import GetGoalProgressUseCase
from .get_monthly_series import GetMonthlySeriesUseCase
from .get_portfolio import GetPortfolioUseCase
from .list_transactions import ListTransactionsUseCase
from .manage_accounts import (
    DeactivateAccountUseCase,
    OpenAccountUseCase,
    RegisterUserUseCase,
)
from .manage_plans import CreateBudgetUseCase, CreateGoalUseCase
from .record_transaction import RecordTransactionUseCase
from .refresh_prices import RefreshPricesUseCase
from .trade_asset import BuyAssetUseCase, SellAssetUseCase
from .transfer_funds import TransferFundsUseCase

__all__ = [
    "BuyAssetUseCase",
    "CreateBudgetUseCase",
    "CreateCategoryUseCase",
    "CreateGoalUseCase",
    "DeactivateAccountUseCase",
    "GetBalanceAsOfUseCase",
    "GetBudgetProgressUseCase",
    "GetGoalProgressUseCase",
    "GetMonthlySeriesUseCase",
    "GetPortfolioUseCase",
    "ListTransactionsUseCase",
    "OpenAccountUseCase",
    "RecordTransactionUseCase",
    "RefreshPricesUseCase",
    "RegisterUserUseCase",
    "SellAssetUseCase",
    "TransferFundsUseCase",
]
