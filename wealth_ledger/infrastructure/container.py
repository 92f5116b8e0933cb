"""Composition root for wiring infrastructure adapters."""

from wealth_ledger.application.ports.database import DatabaseEnginePort
from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.application.ports.price_lookup import PriceLookupPort
from wealth_ledger.application.use_cases.create_category import (
    CreateCategoryUseCase,
)
from wealth_ledger.application.use_cases.get_balance_as_of import (
    GetBalanceAsOfUseCase,
)
from wealth_ledger.application.use_cases.get_budget_progress import (
    GetBudgetProgressUseCase,
)
from wealth_ledger.application.use_cases.get_goal_progress import (
    GetGoalProgressUseCase,
)
from wealth_ledger.application.use_cases.get_monthly_series import (
    GetMonthlySeriesUseCase,
)
from wealth_ledger.application.use_cases.get_portfolio import (
    GetPortfolioUseCase,
)
from wealth_ledger.application.use_cases.list_transactions import (
    ListTransactionsUseCase,
)
from wealth_ledger.application.use_cases.manage_accounts import (
    DeactivateAccountUseCase,
    OpenAccountUseCase,
    RegisterUserUseCase,
)
from wealth_ledger.application.use_cases.manage_plans import (
    CreateBudgetUseCase,
    CreateGoalUseCase,
)
from wealth_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from wealth_ledger.application.use_cases.refresh_prices import (
    RefreshPricesUseCase,
)
from wealth_ledger.application.use_cases.trade_asset import (
    BuyAssetUseCase,
    SellAssetUseCase,
)
from wealth_ledger.application.use_cases.transfer_funds import (
    TransferFundsUseCase,
)
from wealth_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from wealth_ledger.infrastructure.ledger_store import SqlAlchemyLedgerStore
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.infrastructure.price_lookup import (
    CoinGeckoPriceLookup,
    StaticPriceLookup,
)
from wealth_ledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the SQLAlchemy ledger store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerStore(resolved_db, logger=get_app_logger())


def build_price_lookup(
    settings: LedgerSettings | None = None,
) -> PriceLookupPort:
    """Return the configured price lookup."""
    resolved = settings or LedgerSettings.from_env()
    if resolved.price_backend == "static":
        return StaticPriceLookup.from_string(
            resolved.static_prices,
            logger=get_app_logger(),
        )
    return CoinGeckoPriceLookup(
        api_key=resolved.coingecko_api_key,
        base_url=resolved.coingecko_base_url,
        logger=get_app_logger(),
    )


def build_register_user(
    store: LedgerStorePort | None = None,
) -> RegisterUserUseCase:
    """Return the user registration use case."""
    return RegisterUserUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_open_account(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> OpenAccountUseCase:
    """Return the account opening use case."""
    resolved = settings or LedgerSettings.from_env()
    return OpenAccountUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
        default_currency=resolved.reporting_currency,
    )


def build_deactivate_account(
    store: LedgerStorePort | None = None,
) -> DeactivateAccountUseCase:
    """Return the account (de)activation use case."""
    return DeactivateAccountUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_create_category(
    store: LedgerStorePort | None = None,
) -> CreateCategoryUseCase:
    """Return the category creation use case."""
    return CreateCategoryUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_create_budget(
    store: LedgerStorePort | None = None,
) -> CreateBudgetUseCase:
    return CreateBudgetUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_create_goal(
    store: LedgerStorePort | None = None,
) -> CreateGoalUseCase:
    return CreateGoalUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_record_transaction(
    store: LedgerStorePort | None = None,
) -> RecordTransactionUseCase:
    """Return the transaction recorder."""
    return RecordTransactionUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_transfer_funds(
    store: LedgerStorePort | None = None,
) -> TransferFundsUseCase:
    """Return the two-leg transfer use case."""
    return TransferFundsUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_buy_asset(
    store: LedgerStorePort | None = None,
    price_lookup: PriceLookupPort | None = None,
    settings: LedgerSettings | None = None,
) -> BuyAssetUseCase:
    """Return the buy use case wired to the configured price lookup."""
    resolved = settings or LedgerSettings.from_env()
    return BuyAssetUseCase(
        store or build_ledger_store(),
        price_lookup or build_price_lookup(resolved),
        logger=get_app_logger(),
        position_currency=resolved.position_currency,
    )


def build_sell_asset(
    store: LedgerStorePort | None = None,
    price_lookup: PriceLookupPort | None = None,
    settings: LedgerSettings | None = None,
) -> SellAssetUseCase:
    """Return the sell use case wired to the configured price lookup."""
    resolved = settings or LedgerSettings.from_env()
    return SellAssetUseCase(
        store or build_ledger_store(),
        price_lookup or build_price_lookup(resolved),
        logger=get_app_logger(),
        position_currency=resolved.position_currency,
    )


def build_balance_as_of(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> GetBalanceAsOfUseCase:
    """Return the balance reconstructor."""
    resolved = settings or LedgerSettings.from_env()
    return GetBalanceAsOfUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
        rates=resolved.fx_rates,
        reporting_currency=resolved.reporting_currency,
        tz=resolved.timezone,
    )


def build_budget_progress(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> GetBudgetProgressUseCase:
    """Return the budget progress use case."""
    resolved = settings or LedgerSettings.from_env()
    return GetBudgetProgressUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
        tz=resolved.timezone,
    )


def build_goal_progress(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> GetGoalProgressUseCase:
    """Return the goal progress use case."""
    resolved = settings or LedgerSettings.from_env()
    return GetGoalProgressUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
        tz=resolved.timezone,
    )


def build_list_transactions(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> ListTransactionsUseCase:
    """Return the journal listing use case."""
    resolved = settings or LedgerSettings.from_env()
    return ListTransactionsUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
        tz=resolved.timezone,
    )


def build_portfolio(
    store: LedgerStorePort | None = None,
) -> GetPortfolioUseCase:
    """Return the portfolio valuation use case."""
    return GetPortfolioUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_monthly_series(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> GetMonthlySeriesUseCase:
    """Return the monthly series use case."""
    resolved = settings or LedgerSettings.from_env()
    resolved_store = store or build_ledger_store()
    return GetMonthlySeriesUseCase(
        resolved_store,
        logger=get_app_logger(),
        balance_reader=build_balance_as_of(resolved_store, resolved),
        rates=resolved.fx_rates,
        reporting_currency=resolved.reporting_currency,
        tz=resolved.timezone,
    )


def build_refresh_prices(
    store: LedgerStorePort | None = None,
    price_lookup: PriceLookupPort | None = None,
    settings: LedgerSettings | None = None,
) -> RefreshPricesUseCase:
    """Return the price refresh use case."""
    resolved = settings or LedgerSettings.from_env()
    return RefreshPricesUseCase(
        store or build_ledger_store(),
        price_lookup or build_price_lookup(resolved),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_store",
    "build_price_lookup",
    "build_register_user",
    "build_open_account",
    "build_deactivate_account",
    "build_create_category",
    "build_create_budget",
    "build_create_goal",
    "build_record_transaction",
    "build_transfer_funds",
    "build_buy_asset",
    "build_sell_asset",
    "build_balance_as_of",
    "build_budget_progress",
    "build_goal_progress",
    "build_list_transactions",
    "build_portfolio",
    "build_monthly_series",
    "build_refresh_prices",
]
