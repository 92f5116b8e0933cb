"""Tests for the buy and sell use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from wealth_ledger.application.ports.ledger_store import TransactionFilter
from wealth_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from wealth_ledger.application.use_cases.trade_asset import (
    BuyAssetUseCase,
    SellAssetUseCase,
)
from wealth_ledger.domain.constants import AccountType, TransactionType
from wealth_ledger.domain.errors import (
    AtomicityFailureError,
    InsufficientFundsError,
    InsufficientPositionError,
    InvalidArgumentError,
    NotFoundError,
    PriceUnavailableError,
)
from wealth_ledger.infrastructure import db as db_module
from wealth_ledger.infrastructure.ledger_store import (
    SqlAlchemyLedgerSession,
    SqlAlchemyLedgerStore,
)
from wealth_ledger.infrastructure.price_lookup import StaticPriceLookup

PRICES = {"BTC": Decimal("60000"), "ETH": Decimal("2100")}


@pytest.fixture
def prices():
    return StaticPriceLookup(PRICES)


@pytest.fixture
def buy(store, prices, logger):
    return BuyAssetUseCase(store, prices, logger=logger)


@pytest.fixture
def sell(store, prices, logger):
    return SellAssetUseCase(store, prices, logger=logger)


def _crypto_account(seed, amount):
    return seed.funded_account(amount, name="Crypto", account_type=AccountType.CRYPTO)


def _journal(store, account_guid):
    with store.reader() as session:
        return session.list_transactions(
            TransactionFilter(account_guids=(account_guid,))
        )


def _position(store, account_guid, symbol):
    with store.reader() as session:
        return session.get_position(account_guid, symbol)


def test_buy_then_sell_round_trip(seed, store, buy, sell, balance_of) -> None:
    """Buying 0.01 BTC at 50000 and selling at 60000 should net 100."""
    _, account = _crypto_account(seed, 1000)

    bought = buy.execute(account.guid, "btc", "0.01", "50000")

    assert bought.balance == Decimal("500.00")
    assert bought.transaction.transaction_type is TransactionType.INVESTMENT
    assert bought.transaction.amount == Decimal("500.00")
    assert bought.transaction.description == "Purchase of 0.01 BTC at 50000"
    assert bought.position.symbol == "BTC"
    assert bought.position.quantity == Decimal("0.01")
    assert bought.position.avg_buy_price == Decimal("50000")
    assert bought.position.current_price == Decimal("60000")

    sold = sell.execute(account.guid, "BTC", "0.01", "60000")

    assert sold.balance == Decimal("1100.00")
    assert sold.position is None
    assert sold.transaction.transaction_type is TransactionType.INVESTMENT_SALE
    assert sold.transaction.description == "Sale of 0.01 BTC at 60000"
    assert balance_of(account.guid) == Decimal("1100.00")
    assert _position(store, account.guid, "BTC") is None


def test_buy_without_funds_changes_nothing(seed, store, logger, balance_of) -> None:
    """The price lookup should not even be consulted."""
    _, account = _crypto_account(seed, 100)
    lookup = MagicMock()
    buy = BuyAssetUseCase(store, lookup, logger=logger)

    with pytest.raises(InsufficientFundsError) as excinfo:
        buy.execute(account.guid, "ETH", "1", "2000")

    assert excinfo.value.required == Decimal("2000.00")
    assert excinfo.value.available == Decimal("100.00")
    lookup.fetch_prices.assert_not_called()
    assert balance_of(account.guid) == Decimal("100.00")
    assert _position(store, account.guid, "ETH") is None
    assert len(_journal(store, account.guid)) == 1


def test_repeated_buys_use_weighted_average(seed, store, buy, balance_of) -> None:
    _, account = _crypto_account(seed, 1000)

    buy.execute(account.guid, "ETH", "1", "100")
    result = buy.execute(account.guid, "ETH", "3", "140")

    assert result.position.quantity == Decimal("4")
    assert result.position.avg_buy_price == Decimal("130")
    assert balance_of(account.guid) == Decimal("480.00")
    with store.reader() as session:
        assert len(session.list_positions(account_guid=account.guid)) == 1


def test_partial_sale_keeps_average_and_refreshes_price(
    seed, store, buy, sell
) -> None:
    _, account = _crypto_account(seed, 5000)
    buy.execute(account.guid, "ETH", "2", "1500")

    result = sell.execute(account.guid, "eth", "0.5", "2500")

    assert result.position.quantity == Decimal("1.5")
    assert result.position.avg_buy_price == Decimal("1500")
    assert result.position.current_price == Decimal("2100")
    assert result.balance == Decimal("3250.00")


def test_sell_more_than_held_is_rejected(seed, store, buy, sell, balance_of) -> None:
    _, account = _crypto_account(seed, 1000)
    buy.execute(account.guid, "BTC", "0.01", "50000")

    with pytest.raises(InsufficientPositionError) as excinfo:
        sell.execute(account.guid, "BTC", "0.02", "60000")

    assert excinfo.value.shortfall == Decimal("0.01")
    assert balance_of(account.guid) == Decimal("500.00")
    assert _position(store, account.guid, "BTC").quantity == Decimal("0.01")


def test_sell_without_position_raises_not_found(seed, sell) -> None:
    _, account = _crypto_account(seed, 10)

    with pytest.raises(NotFoundError):
        sell.execute(account.guid, "DOGE", "1", "1")


@pytest.mark.parametrize(
    ("symbol", "quantity", "price"),
    [(" ", "1", "1"), ("BTC", "0", "1"), ("BTC", "1", "-3"), ("BTC", "x", "1")],
)
def test_invalid_trade_arguments(seed, buy, sell, symbol, quantity, price) -> None:
    _, account = _crypto_account(seed, 1000)

    with pytest.raises(InvalidArgumentError):
        buy.execute(account.guid, symbol, quantity, price)
    with pytest.raises(InvalidArgumentError):
        sell.execute(account.guid, symbol, quantity, price)


def test_buy_on_unknown_account_raises_not_found(buy) -> None:
    with pytest.raises(NotFoundError):
        buy.execute("missing", "BTC", "1", "1")


@pytest.mark.parametrize(
    "lookup",
    [
        StaticPriceLookup({}),
        StaticPriceLookup({"SOL": Decimal("0")}),
        MagicMock(fetch_prices=MagicMock(side_effect=RuntimeError("down"))),
    ],
)
def test_missing_price_aborts_without_writes(
    seed, store, logger, balance_of, lookup
) -> None:
    _, account = _crypto_account(seed, 1000)
    buy = BuyAssetUseCase(store, lookup, logger=logger)

    with pytest.raises(PriceUnavailableError):
        buy.execute(account.guid, "SOL", "1", "100")

    assert balance_of(account.guid) == Decimal("1000.00")
    assert _position(store, account.guid, "SOL") is None
    assert len(_journal(store, account.guid)) == 1


def test_concurrent_spend_before_commit_rejects_purchase(
    seed, store, logger, balance_of
) -> None:
    """Funds spent between the pre-check and the write must be re-checked."""
    _, account = _crypto_account(seed, 1000)
    recorder = RecordTransactionUseCase(store, logger=logger)

    class _SpendingLookup:
        def fetch_prices(self, symbols):
            recorder.execute(account.guid, "800", "expense", "Rent")
            return {"BTC": Decimal("50000")}

    buy = BuyAssetUseCase(store, _SpendingLookup(), logger=logger)

    with pytest.raises(InsufficientFundsError):
        buy.execute(account.guid, "BTC", "0.01", "50000")

    assert balance_of(account.guid) == Decimal("200.00")
    assert _position(store, account.guid, "BTC") is None
    kinds = [item.transaction_type for item in _journal(store, account.guid)]
    assert TransactionType.INVESTMENT not in kinds


def test_positions_are_scoped_per_account(seed, store, buy) -> None:
    user, first = _crypto_account(seed, 1000)
    second = seed.account(user.guid, "Second", AccountType.CRYPTO)
    seed.record(second.guid, 1000)

    buy.execute(first.guid, "ETH", "1", "100")
    buy.execute(second.guid, "ETH", "2", "200")

    assert _position(store, first.guid, "ETH").quantity == Decimal("1")
    assert _position(store, second.guid, "ETH").avg_buy_price == Decimal("200")


def test_dust_purchases_are_charged_at_least_a_cent(
    seed, store, buy, balance_of
) -> None:
    _, account = _crypto_account(seed, 10)

    for _ in range(3):
        result = buy.execute(account.guid, "BTC", "0.004", "1")

    assert result.transaction.amount == Decimal("0.01")
    assert balance_of(account.guid) == Decimal("9.97")
    assert _position(store, account.guid, "BTC").quantity == Decimal("0.012")


def test_sale_proceeds_round_down_and_zero_value_sale_is_rejected(
    seed, store, buy, sell, balance_of
) -> None:
    _, account = _crypto_account(seed, 10)

    bought = buy.execute(account.guid, "ETH", "3", "0.335")
    sold = sell.execute(account.guid, "ETH", "1", "0.335")

    assert bought.transaction.amount == Decimal("1.01")
    assert sold.transaction.amount == Decimal("0.33")
    assert balance_of(account.guid) == Decimal("9.32")

    with pytest.raises(InvalidArgumentError):
        sell.execute(account.guid, "ETH", "0.01", "0.335")

    assert balance_of(account.guid) == Decimal("9.32")
    assert _position(store, account.guid, "ETH").quantity == Decimal("2")
    assert len(_journal(store, account.guid)) == 3


@pytest.mark.parametrize(
    "lookup",
    [
        StaticPriceLookup({}),
        MagicMock(fetch_prices=MagicMock(side_effect=RuntimeError("down"))),
    ],
)
def test_sale_without_price_leaves_cash_and_position(
    seed, store, buy, logger, balance_of, lookup
) -> None:
    _, account = _crypto_account(seed, 1000)
    buy.execute(account.guid, "BTC", "0.01", "50000")
    sell = SellAssetUseCase(store, lookup, logger=logger)

    with pytest.raises(PriceUnavailableError):
        sell.execute(account.guid, "BTC", "0.01", "60000")

    assert balance_of(account.guid) == Decimal("500.00")
    assert _position(store, account.guid, "BTC").quantity == Decimal("0.01")
    assert len(_journal(store, account.guid)) == 2


def _failing_write(*args, **kwargs):
    raise OperationalError("UPDATE assets", {}, Exception("disk I/O error"))


def test_store_failure_during_buy_undoes_the_debit(
    seed, store, buy, balance_of, monkeypatch
) -> None:
    _, account = _crypto_account(seed, 1000)
    monkeypatch.setattr(SqlAlchemyLedgerSession, "add_position", _failing_write)

    with pytest.raises(AtomicityFailureError):
        buy.execute(account.guid, "BTC", "0.01", "50000")

    assert balance_of(account.guid) == Decimal("1000.00")
    assert _position(store, account.guid, "BTC") is None
    assert len(_journal(store, account.guid)) == 1


@pytest.mark.parametrize(
    ("failing_method", "quantity"),
    [("update_position", "1"), ("delete_position", "2")],
)
def test_store_failure_during_sell_undoes_the_credit(
    seed, store, buy, sell, balance_of, monkeypatch, failing_method, quantity
) -> None:
    _, account = _crypto_account(seed, 1000)
    buy.execute(account.guid, "ETH", "2", "100")
    monkeypatch.setattr(SqlAlchemyLedgerSession, failing_method, _failing_write)

    with pytest.raises(AtomicityFailureError):
        sell.execute(account.guid, "ETH", quantity, "150")

    assert balance_of(account.guid) == Decimal("800.00")
    assert _position(store, account.guid, "ETH").quantity == Decimal("2")
    assert len(_journal(store, account.guid)) == 2


def test_buy_over_unreachable_store_raises_atomicity_failure(
    tmp_path, prices, logger
) -> None:
    engine = db_module._create_engine(
        f"sqlite:///{tmp_path / 'absent' / 'ledger.db'}"
    )
    unreachable = SqlAlchemyLedgerStore(
        MagicMock(get_ledger_engine=MagicMock(return_value=engine)),
        logger=logger,
    )
    buy = BuyAssetUseCase(unreachable, prices, logger=logger)

    with pytest.raises(AtomicityFailureError):
        buy.execute("acct", "BTC", "1", "1")

    engine.dispose()
