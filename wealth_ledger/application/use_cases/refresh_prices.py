"""Use case to refresh market prices of every held position."""

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.application.ports.price_lookup import PriceLookupPort
from wealth_ledger.domain.errors import PriceUnavailableError
from wealth_ledger.domain.models import PriceRefreshResult
from wealth_ledger.domain.services.calendar_windows import utc_now
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_price


class RefreshPricesUseCase:
    """Pull current prices and record them on positions and price history."""

    def __init__(
        self,
        store: LedgerStorePort,
        price_lookup: PriceLookupPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing atomic units over the ledger.
            price_lookup: Port returning current market prices.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._price_lookup = price_lookup
        self._logger = logger or get_app_logger()

    def execute(self) -> PriceRefreshResult:
        """Refresh every distinct held symbol.

        Returns:
            PriceRefreshResult: Updated and missing symbols plus the number
            of positions touched.

        Raises:
            PriceUnavailableError: If the lookup itself fails.
        """
        with self._store.reader() as session:
            symbols = sorted({position.symbol for position in session.list_positions()})
        if not symbols:
            self._logger.info("No positions to refresh.")
            return PriceRefreshResult(
                updated_symbols=[],
                missing_symbols=[],
                updated_positions=0,
            )

        try:
            prices = self._price_lookup.fetch_prices(symbols)
        except Exception as exc:
            self._logger.error(f"Price refresh failed: {exc}")
            raise PriceUnavailableError(",".join(symbols)) from exc

        updated = [s for s in symbols if s in prices and prices[s] > 0]
        missing = [s for s in symbols if s not in updated]
        now = utc_now()
        touched = 0
        with self._store.atomic() as session:
            for symbol in updated:
                touched += session.record_market_price(
                    symbol,
                    quantize_price(prices[symbol]),
                    now,
                )

        if missing:
            self._logger.warning(f"No price returned for {missing}")
        self._logger.info(
            f"Refreshed {len(updated)} symbols across {touched} positions"
        )
        return PriceRefreshResult(
            updated_symbols=updated,
            missing_symbols=missing,
            updated_positions=touched,
        )


__all__ = ["RefreshPricesUseCase"]
