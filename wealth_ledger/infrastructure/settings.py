"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from decimal import Decimal
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from wealth_ledger.domain.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_POSITION_CURRENCY,
    DEFAULT_SERIES_MONTHS,
    DEFAULT_TIMEZONE_NAME,
)
from wealth_ledger.domain.services.fx import DEFAULT_RATES, build_rate_map
from wealth_ledger.domain.services.normalization import normalize_currency
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.infrastructure.price_lookup import DEFAULT_COINGECKO_BASE_URL

PRICE_BACKENDS = ("coingecko", "static")


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings of the ledger core.

    Attributes:
        reporting_currency: Currency used by user-level rollups.
        timezone_name: IANA zone defining calendar days and months.
        fx_rates: Static multipliers into the base currency.
        price_backend: Price lookup backend (coingecko or static).
        coingecko_api_key: Optional CoinGecko demo API key.
        coingecko_base_url: CoinGecko API root.
        static_prices: Raw ``SYMBOL=PRICE`` pairs for the static backend.
        position_currency: Pricing currency of new positions.
        series_months: Default length of monthly series.
    """

    reporting_currency: str = DEFAULT_CURRENCY
    timezone_name: str = DEFAULT_TIMEZONE_NAME
    fx_rates: dict[str, Decimal] = field(
        default_factory=lambda: dict(DEFAULT_RATES)
    )
    price_backend: str = "coingecko"
    coingecko_api_key: str | None = None
    coingecko_base_url: str = DEFAULT_COINGECKO_BASE_URL
    static_prices: str | None = None
    position_currency: str = DEFAULT_POSITION_CURRENCY
    series_months: int = DEFAULT_SERIES_MONTHS

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("LEDGER_PRICE_BACKEND", "coingecko").strip().lower()
        if backend not in PRICE_BACKENDS:
            logger.warning(
                f"Unknown LEDGER_PRICE_BACKEND '{backend}', using coingecko."
            )
            backend = "coingecko"
        return cls(
            reporting_currency=normalize_currency(
                os.getenv("LEDGER_REPORTING_CURRENCY"),
                DEFAULT_CURRENCY,
            ),
            timezone_name=cls._parse_timezone(
                os.getenv("LEDGER_TIMEZONE"),
                logger=logger,
            ),
            fx_rates=build_rate_map(os.getenv("LEDGER_FX_RATES"), logger),
            price_backend=backend,
            coingecko_api_key=os.getenv("COINGECKO_API_KEY") or None,
            coingecko_base_url=(
                os.getenv("COINGECKO_BASE_URL") or DEFAULT_COINGECKO_BASE_URL
            ),
            static_prices=os.getenv("LEDGER_STATIC_PRICES") or None,
            position_currency=normalize_currency(
                os.getenv("LEDGER_POSITION_CURRENCY"),
                DEFAULT_POSITION_CURRENCY,
            ),
            series_months=cls._parse_months(
                os.getenv("LEDGER_SERIES_MONTHS"),
                logger=logger,
            ),
        )

    @staticmethod
    def _parse_timezone(raw: str | None, logger) -> str:
        """Validate an IANA time zone name.

        Args:
            raw: Raw zone name.
            logger: Logger used for warnings.

        Returns:
            str: The zone name, or the default when invalid.
        """
        if not raw or not raw.strip():
            return DEFAULT_TIMEZONE_NAME
        name = raw.strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                f"Unknown time zone '{name}', using {DEFAULT_TIMEZONE_NAME}."
            )
            return DEFAULT_TIMEZONE_NAME
        return name

    @staticmethod
    def _parse_months(raw: str | None, logger) -> int:
        if not raw:
            return DEFAULT_SERIES_MONTHS
        try:
            months = int(raw)
        except ValueError:
            months = 0
        if months < 1:
            logger.warning(
                f"Invalid LEDGER_SERIES_MONTHS '{raw}', "
                f"using {DEFAULT_SERIES_MONTHS}."
            )
            return DEFAULT_SERIES_MONTHS
        return months


__all__ = ["LedgerSettings"]
