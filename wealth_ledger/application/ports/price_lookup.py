"""Port for current market price lookups."""

from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol


class PriceLookupPort(Protocol):
    """Port returning current prices keyed by canonical symbol."""

    def fetch_prices(self, symbols: Iterable[str]) -> dict[str, Decimal]:
        """Return prices for the symbols that have one.

        Symbols without a price are simply absent from the result.
        """


__all__ = ["PriceLookupPort"]
