"""Use case to build trailing monthly series for dashboards."""

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from wealth_ledger.application.ports.ledger_store import (
    LedgerStorePort,
    TransactionFilter,
)
from wealth_ledger.application.use_cases.get_balance_as_of import (
    GetBalanceAsOfUseCase,
)
from wealth_ledger.domain.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_SERIES_MONTHS,
    SeriesMetric,
    TransactionType,
)
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import MonthlyPoint, MonthlySeries, MonthWindow
from wealth_ledger.domain.services.calendar_windows import (
    DEFAULT_TIMEZONE,
    end_of_day_cutoff,
    start_of_day_utc,
    trailing_month_windows,
    utc_now,
)
from wealth_ledger.domain.services.fx import DEFAULT_RATES, convert_balance
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money


class GetMonthlySeriesUseCase:
    """Compute net worth or dividend totals for trailing calendar months."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        balance_reader: GetBalanceAsOfUseCase | None = None,
        rates: Mapping[str, Decimal] | None = None,
        reporting_currency: str = DEFAULT_CURRENCY,
        tz: ZoneInfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing read sessions over the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            balance_reader: Optional reconstructor for net worth points.
            rates: Static FX multipliers; defaults to the built-in table.
            reporting_currency: Currency of every point.
            tz: Local time zone defining calendar months.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._rates = dict(rates or DEFAULT_RATES)
        self._reporting_currency = reporting_currency
        self._tz = tz or DEFAULT_TIMEZONE
        self._balance_reader = balance_reader or GetBalanceAsOfUseCase(
            store,
            logger=self._logger,
            rates=self._rates,
            reporting_currency=reporting_currency,
            tz=self._tz,
        )

    def execute(
        self,
        user_guid: str,
        metric,
        month_count: int = DEFAULT_SERIES_MONTHS,
        now: datetime | None = None,
    ) -> MonthlySeries:
        """Return one point per trailing month, oldest first.

        Args:
            user_guid: User whose accounts are aggregated.
            metric: SeriesMetric or its string value.
            month_count: Number of months including the current one.
            now: Reference instant; defaults to the current time.

        Returns:
            MonthlySeries: Points labelled with the short month name.

        Raises:
            InvalidArgumentError: On an unknown metric or a month count
                below one.
            NotFoundError: If the user does not exist.
        """
        try:
            metric = SeriesMetric(metric)
        except ValueError:
            raise InvalidArgumentError(f"Unknown series metric: {metric!r}") from None
        if month_count < 1:
            raise InvalidArgumentError(
                f"month_count must be at least 1: {month_count}"
            )
        windows = trailing_month_windows(now or utc_now(), month_count, self._tz)

        if metric is SeriesMetric.NET_WORTH:
            points = [self._net_worth_point(user_guid, window) for window in windows]
        else:
            points = self._dividend_points(user_guid, windows)

        self._logger.info(
            f"Built {metric.value} series of {len(points)} months "
            f"for user {user_guid}"
        )
        return MonthlySeries(
            metric=metric,
            currency_code=self._reporting_currency,
            points=points,
        )

    def _net_worth_point(self, user_guid: str, window: MonthWindow) -> MonthlyPoint:
        value = self._balance_reader.for_user(user_guid, window.last_day)
        return MonthlyPoint(
            label=window.label,
            year=window.year,
            month=window.month,
            value=value,
        )

    def _dividend_points(
        self,
        user_guid: str,
        windows: list[MonthWindow],
    ) -> list[MonthlyPoint]:
        points = []
        with self._store.reader() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            currencies = {
                account.guid: account.currency_code
                for account in session.list_accounts(user_guid)
            }
            for window in windows:
                totals = session.sum_transactions(
                    TransactionFilter(
                        user_guid=user_guid,
                        types=(TransactionType.DIVIDEND,),
                        occurred_from=start_of_day_utc(window.first_day, self._tz),
                        occurred_before=end_of_day_cutoff(window.last_day, self._tz),
                    )
                )
                value = Decimal("0")
                for account_guid, amount in totals.items():
                    value += convert_balance(
                        amount,
                        currencies.get(account_guid, self._reporting_currency),
                        self._reporting_currency,
                        self._rates,
                        self._logger,
                    )
                points.append(
                    MonthlyPoint(
                        label=window.label,
                        year=window.year,
                        month=window.month,
                        value=quantize_money(value),
                    )
                )
        return points


__all__ = ["GetMonthlySeriesUseCase"]
