"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

from wealth_ledger.application.use_cases.get_monthly_series import (
    GetMonthlySeriesUseCase,
)
from wealth_ledger.application.use_cases.manage_accounts import (
    OpenAccountUseCase,
)
from wealth_ledger.application.use_cases.trade_asset import BuyAssetUseCase
from wealth_ledger.infrastructure import container
from wealth_ledger.infrastructure.ledger_store import SqlAlchemyLedgerStore
from wealth_ledger.infrastructure.price_lookup import (
    CoinGeckoPriceLookup,
    StaticPriceLookup,
)
from wealth_ledger.infrastructure.settings import LedgerSettings


def test_build_ledger_store_uses_given_port(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", MagicMock)
    db_port = MagicMock()

    store = container.build_ledger_store(db_port=db_port)

    assert isinstance(store, SqlAlchemyLedgerStore)
    db_port.get_ledger_engine.assert_not_called()


def test_build_price_lookup_honours_backend(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", MagicMock)

    static = container.build_price_lookup(
        LedgerSettings(price_backend="static", static_prices="BTC=50000")
    )
    remote = container.build_price_lookup(
        LedgerSettings(coingecko_api_key="demo")
    )

    assert isinstance(static, StaticPriceLookup)
    assert static.fetch_prices(["btc"]) == {"BTC": Decimal("50000")}
    assert isinstance(remote, CoinGeckoPriceLookup)


def test_build_trade_and_series_use_cases(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", MagicMock)
    store = MagicMock()
    settings = LedgerSettings(price_backend="static", reporting_currency="EUR")

    buy = container.build_buy_asset(store=store, settings=settings)
    series = container.build_monthly_series(store=store, settings=settings)

    assert isinstance(buy, BuyAssetUseCase)
    assert isinstance(series, GetMonthlySeriesUseCase)
    assert series._balance_reader.reporting_currency == "EUR"


def test_build_open_account_defaults_to_reporting_currency(
    monkeypatch,
) -> None:
    monkeypatch.setattr(container, "get_app_logger", MagicMock)
    settings = LedgerSettings(reporting_currency="EUR")

    open_account = container.build_open_account(
        store=MagicMock(),
        settings=settings,
    )

    assert isinstance(open_account, OpenAccountUseCase)
    assert open_account._default_currency == "EUR"
