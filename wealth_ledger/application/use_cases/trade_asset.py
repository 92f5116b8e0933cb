"""Use cases to buy and sell tradable assets against an account's cash.

Both trades follow the same order: validate the arguments, pre-check the
account and position in a read session, look the current price up, then
apply everything in one atomic unit that re-verifies the pre-checks.
"""

from decimal import Decimal

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.application.ports.price_lookup import PriceLookupPort
from wealth_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from wealth_ledger.domain.constants import (
    DEFAULT_POSITION_CURRENCY,
    TransactionType,
)
from wealth_ledger.domain.errors import (
    InsufficientFundsError,
    InsufficientPositionError,
    InvalidArgumentError,
    NotFoundError,
    PriceUnavailableError,
)
from wealth_ledger.domain.models import TradeResult
from wealth_ledger.domain.services.calendar_windows import utc_now
from wealth_ledger.domain.services.cost_basis import (
    purchase_cost,
    sale_proceeds,
    weighted_average,
)
from wealth_ledger.domain.services.normalization import normalize_symbol
from wealth_ledger.domain.services.validation import require_positive, to_decimal
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_price


class _TradeAssetUseCase:
    """Shared plumbing of the buy and sell use cases."""

    def __init__(
        self,
        store: LedgerStorePort,
        price_lookup: PriceLookupPort,
        logger=None,
        recorder: RecordTransactionUseCase | None = None,
        position_currency: str = DEFAULT_POSITION_CURRENCY,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing atomic units over the ledger.
            price_lookup: Port returning current market prices.
            logger: Optional logger compatible with logging.Logger-like API.
            recorder: Optional transaction recorder sharing the sign rule.
            position_currency: Pricing currency of newly opened positions.
        """
        self._store = store
        self._price_lookup = price_lookup
        self._logger = logger or get_app_logger()
        self._recorder = recorder or RecordTransactionUseCase(
            store,
            logger=self._logger,
        )
        self._position_currency = position_currency

    @staticmethod
    def _validate(symbol, quantity, price) -> tuple[str, Decimal, Decimal]:
        canonical = normalize_symbol(symbol)
        if canonical is None:
            raise InvalidArgumentError("symbol must not be empty")
        quantity = quantize_price(to_decimal("quantity", quantity))
        price = quantize_price(to_decimal("price", price))
        return (
            canonical,
            require_positive("quantity", quantity),
            require_positive("price", price),
        )

    def _current_price(self, symbol: str) -> Decimal:
        """Return the looked-up price of ``symbol``.

        Raises:
            PriceUnavailableError: If the lookup fails or has no price.
        """
        try:
            prices = self._price_lookup.fetch_prices([symbol])
        except Exception as exc:
            self._logger.warning(f"Price lookup failed for {symbol}: {exc}")
            raise PriceUnavailableError(symbol) from exc
        price = prices.get(symbol)
        if price is None or price <= 0:
            self._logger.warning(f"No current price for {symbol}")
            raise PriceUnavailableError(symbol)
        return quantize_price(price)

    @staticmethod
    def _format(value: Decimal) -> str:
        normalized = value.normalize()
        if normalized == normalized.to_integral_value():
            return f"{normalized.quantize(Decimal('1')):f}"
        return f"{normalized:f}"


class BuyAssetUseCase(_TradeAssetUseCase):
    """Buy units of an asset, paying from the account's cash balance."""

    def execute(self, account_guid: str, symbol, quantity, price) -> TradeResult:
        """Buy ``quantity`` units of ``symbol`` at ``price`` each.

        The cash cost is rounded up to the next cent.

        Args:
            account_guid: Account paying for the purchase.
            symbol: Asset ticker in any case.
            quantity: Positive number of units.
            price: Positive unit price in the account currency.

        Returns:
            TradeResult: Journal entry, updated position and new balance.

        Raises:
            InvalidArgumentError: On an empty symbol or non-positive numbers.
            NotFoundError: If the account does not exist.
            InsufficientFundsError: If the cost exceeds the cash balance.
            PriceUnavailableError: If no current price can be obtained.
        """
        symbol, quantity, price = self._validate(symbol, quantity, price)
        cost = require_positive("trade value", purchase_cost(quantity, price))

        with self._store.reader() as session:
            account = session.get_account(account_guid)
            if account is None:
                raise NotFoundError("Account", account_guid)
            if account.balance < cost:
                self._logger.warning(
                    f"Rejected purchase of {quantity} {symbol}: cost {cost} "
                    f"exceeds balance {account.balance}"
                )
                raise InsufficientFundsError(account_guid, cost, account.balance)

        current_price = self._current_price(symbol)
        now = utc_now()
        try:
            with self._store.atomic() as session:
                transaction = self._recorder.post(
                    session,
                    account_guid=account_guid,
                    amount=cost,
                    transaction_type=TransactionType.INVESTMENT,
                    description=(
                        f"Purchase of {self._format(quantity)} {symbol} "
                        f"at {self._format(price)}"
                    ),
                    occurred_at=now,
                    require_funds=True,
                )
                held = session.get_position(account_guid, symbol, for_update=True)
                if held is None:
                    position = session.add_position(
                        account_guid=account_guid,
                        symbol=symbol,
                        quantity=quantity,
                        avg_buy_price=price,
                        current_price=current_price,
                        currency_code=self._position_currency,
                        at=now,
                    )
                else:
                    new_quantity, new_avg = weighted_average(
                        held.quantity,
                        held.avg_buy_price,
                        quantity,
                        price,
                    )
                    position = session.update_position(
                        held.guid,
                        quantity=new_quantity,
                        avg_buy_price=new_avg,
                        current_price=current_price,
                        at=now,
                    )
                balance = session.get_account(account_guid).balance
        except InsufficientFundsError as exc:
            self._logger.warning(
                f"Rejected purchase of {quantity} {symbol}: {exc}"
            )
            raise

        self._logger.info(
            f"Bought {quantity} {symbol} at {price} on {account_guid}; "
            f"position={position.quantity} avg={position.avg_buy_price}"
        )
        return TradeResult(transaction=transaction, position=position, balance=balance)


class SellAssetUseCase(_TradeAssetUseCase):
    """Sell units of a held asset, crediting the proceeds to the account."""

    def execute(self, account_guid: str, symbol, quantity, price) -> TradeResult:
        """Sell ``quantity`` units of ``symbol`` at ``price`` each.

        The average buy price of the remaining units never changes; the
        position is removed once its quantity reaches zero. Proceeds are
        rounded down to the cent.

        Args:
            account_guid: Account holding the position.
            symbol: Asset ticker in any case.
            quantity: Positive number of units.
            price: Positive unit price in the account currency.

        Returns:
            TradeResult: Journal entry, remaining position (or None) and
            new balance.

        Raises:
            InvalidArgumentError: On an empty symbol or non-positive numbers,
                or when the proceeds round down to zero cents.
            NotFoundError: If the account or position does not exist.
            InsufficientPositionError: If the position holds fewer units.
            PriceUnavailableError: If no current price can be obtained.
        """
        symbol, quantity, price = self._validate(symbol, quantity, price)
        proceeds = require_positive(
            "trade value",
            sale_proceeds(quantity, price),
        )

        with self._store.reader() as session:
            if session.get_account(account_guid) is None:
                raise NotFoundError("Account", account_guid)
            held = session.get_position(account_guid, symbol)
            self._check_position(account_guid, symbol, quantity, held)

        current_price = self._current_price(symbol)
        now = utc_now()
        with self._store.atomic() as session:
            held = session.get_position(account_guid, symbol, for_update=True)
            self._check_position(account_guid, symbol, quantity, held)
            transaction = self._recorder.post(
                session,
                account_guid=account_guid,
                amount=proceeds,
                transaction_type=TransactionType.INVESTMENT_SALE,
                description=(
                    f"Sale of {self._format(quantity)} {symbol} "
                    f"at {self._format(price)}"
                ),
                occurred_at=now,
            )
            remaining = held.quantity - quantity
            if remaining == 0:
                session.delete_position(held.guid)
                position = None
            else:
                position = session.update_position(
                    held.guid,
                    quantity=remaining,
                    avg_buy_price=held.avg_buy_price,
                    current_price=current_price,
                    at=now,
                )
            balance = session.get_account(account_guid).balance

        self._logger.info(
            f"Sold {quantity} {symbol} at {price} on {account_guid}; "
            f"remaining={remaining}"
        )
        return TradeResult(transaction=transaction, position=position, balance=balance)

    def _check_position(self, account_guid, symbol, quantity, held) -> None:
        if held is None:
            raise NotFoundError("Position", f"{account_guid}/{symbol}")
        if held.quantity < quantity:
            self._logger.warning(
                f"Rejected sale of {quantity} {symbol}: holding {held.quantity}"
            )
            raise InsufficientPositionError(symbol, quantity, held.quantity)


__all__ = ["BuyAssetUseCase", "SellAssetUseCase"]
