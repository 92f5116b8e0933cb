"""Price lookup adapters: CoinGecko over HTTP and a static table."""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation

import httpx

from wealth_ledger.application.ports.price_lookup import PriceLookupPort
from wealth_ledger.domain.services.normalization import normalize_symbol
from wealth_ledger.infrastructure.logging.logger import get_app_logger

DEFAULT_COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"

SYMBOL_TO_COINGECKO_ID: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "USDT": "tether",
    "USDC": "usd-coin",
    "BNB": "binancecoin",
    "SOL": "solana",
    "XRP": "ripple",
    "ADA": "cardano",
    "DOGE": "dogecoin",
    "AVAX": "avalanche-2",
    "DOT": "polkadot",
    "MATIC": "polygon-ecosystem-token",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "ATOM": "cosmos",
    "LTC": "litecoin",
    "BUSD": "binance-usd",
    "DAI": "dai",
    "WBTC": "wrapped-bitcoin",
    "WETH": "weth",
    "SHIB": "shiba-inu",
    "TRX": "tron",
    "FTM": "fantom",
    "NEAR": "near",
    "ALGO": "algorand",
    "VET": "vechain",
    "THETA": "theta-token",
    "FIL": "filecoin",
    "AAVE": "aave",
    "MKR": "maker",
    "COMP": "compound-governance-token",
    "SUSHI": "sushi",
    "CRV": "curve-dao-token",
    "YFI": "yearn-finance",
    "1INCH": "1inch",
    "ENJ": "enjincoin",
    "MANA": "decentraland",
    "SAND": "the-sandbox",
    "AXS": "axie-infinity",
    "GALA": "gala",
}


def coingecko_id(symbol: str) -> str:
    """Return the CoinGecko coin id for a ticker symbol.

    Unknown symbols fall back to their lower-case form, which matches
    CoinGecko ids for many smaller coins.
    """
    upper = symbol.strip().upper()
    return SYMBOL_TO_COINGECKO_ID.get(upper, upper.lower())


def _canonical_symbols(symbols: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for symbol in symbols:
        canonical = normalize_symbol(symbol)
        if canonical:
            seen.setdefault(canonical, None)
    return list(seen)


class CoinGeckoPriceLookup(PriceLookupPort):
    """PriceLookupPort backed by the CoinGecko ``/coins/markets`` endpoint.

    HTTP failures propagate as ``httpx.HTTPError`` so callers can decide
    whether a missing price is fatal.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_COINGECKO_BASE_URL,
        vs_currency: str = "usd",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
        logger=None,
    ) -> None:
        """Initialize the lookup.

        Args:
            api_key: Optional CoinGecko demo API key.
            base_url: API root, without a trailing slash.
            vs_currency: Quote currency requested from CoinGecko.
            timeout: Request timeout in seconds.
            client: Optional preconfigured HTTP client (used by tests).
            logger: Optional logger; defaults to the app logger.
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._vs_currency = vs_currency.lower()
        self._timeout = timeout
        self._client = client
        self._logger = logger or get_app_logger()

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
        self._client = None

    def fetch_prices(self, symbols: Iterable[str]) -> dict[str, Decimal]:
        """Return current prices for the requested symbols.

        Args:
            symbols: Ticker symbols in any case.

        Returns:
            dict[str, Decimal]: Prices keyed by upper-case symbol. Symbols
            CoinGecko does not know are absent.
        """
        wanted = _canonical_symbols(symbols)
        if not wanted:
            return {}
        ids_by_symbol = {symbol: coingecko_id(symbol) for symbol in wanted}
        headers = {"accept": "application/json"}
        if self._api_key:
            headers["x-cg-demo-api-key"] = self._api_key
        params = {
            "vs_currency": self._vs_currency,
            "ids": ",".join(ids_by_symbol.values()),
            "order": "market_cap_desc",
            "per_page": str(max(len(wanted), 1)),
            "page": "1",
            "sparkline": "false",
        }
        response = self._get_client().get(
            f"{self._base_url}/coins/markets",
            params=params,
            headers=headers,
        )
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, list):
            self._logger.warning(
                f"Unexpected CoinGecko response body: {str(payload)[:200]}"
            )
            return {}

        prices: dict[str, Decimal] = {}
        for coin in payload:
            if not isinstance(coin, dict):
                continue
            symbol = normalize_symbol(coin.get("symbol"))
            raw_price = coin.get("current_price")
            if symbol not in ids_by_symbol or raw_price is None:
                continue
            try:
                prices[symbol] = Decimal(str(raw_price))
            except InvalidOperation:
                self._logger.warning(
                    f"Ignoring malformed CoinGecko price for {symbol}: {raw_price!r}"
                )
        missing = [symbol for symbol in wanted if symbol not in prices]
        if missing:
            self._logger.warning(f"CoinGecko returned no price for {missing}")
        return prices


class StaticPriceLookup(PriceLookupPort):
    """PriceLookupPort serving prices from a fixed table."""

    def __init__(self, prices: Mapping[str, Decimal] | None = None) -> None:
        self._prices = {
            normalize_symbol(symbol): Decimal(str(price))
            for symbol, price in (prices or {}).items()
            if normalize_symbol(symbol)
        }

    @classmethod
    def from_string(cls, raw: str | None, logger) -> "StaticPriceLookup":
        """Build a lookup from ``SYMBOL=PRICE`` pairs.

        Args:
            raw: Comma separated pairs such as ``"BTC=50000,ETH=2000"``.
            logger: Logger used for warnings about malformed pairs.

        Returns:
            StaticPriceLookup: Lookup serving the parsed prices.
        """
        prices: dict[str, Decimal] = {}
        for pair in (raw or "").split(","):
            if not pair.strip():
                continue
            symbol, _, value = pair.partition("=")
            canonical = normalize_symbol(symbol)
            try:
                price = Decimal(value.strip())
            except InvalidOperation:
                logger.warning(f"Skipping malformed static price entry: {pair!r}")
                continue
            if not canonical or price <= 0:
                logger.warning(f"Skipping malformed static price entry: {pair!r}")
                continue
            prices[canonical] = price
        return cls(prices)

    def fetch_prices(self, symbols: Iterable[str]) -> dict[str, Decimal]:
        """Return the known prices for ``symbols``."""
        return {
            symbol: self._prices[symbol]
            for symbol in _canonical_symbols(symbols)
            if symbol in self._prices
        }


__all__ = [
    "DEFAULT_COINGECKO_BASE_URL",
    "SYMBOL_TO_COINGECKO_ID",
    "coingecko_id",
    "CoinGeckoPriceLookup",
    "StaticPriceLookup",
]
