"""CLI adapter printing trailing monthly series of one user."""

import os

from wealth_ledger.domain.constants import SeriesMetric
from wealth_ledger.domain.errors import LedgerError
from wealth_ledger.infrastructure.container import build_monthly_series
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.infrastructure.settings import LedgerSettings


def main() -> None:
    """Print net worth and dividend series for ``LEDGER_USER_GUID``."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    user_guid = os.getenv("LEDGER_USER_GUID")
    if not user_guid:
        logger.warning("LEDGER_USER_GUID is required to build monthly series.")
        return

    use_case = build_monthly_series(settings=settings)
    for metric in SeriesMetric:
        try:
            series = use_case.execute(
                user_guid,
                metric,
                month_count=settings.series_months,
            )
        except LedgerError as exc:
            logger.error(str(exc))
            return
        values = ", ".join(
            f"{point.label} {point.year}={point.value}"
            for point in series.points
        )
        print(f"{metric.value} ({series.currency_code}): {values}")


if __name__ == "__main__":  # pragma: no cover
    main()
