"""CLI adapter to refresh current prices of every held asset."""

from wealth_ledger.domain.errors import PriceUnavailableError
from wealth_ledger.infrastructure.container import build_refresh_prices
from wealth_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the price refresh use case and print a summary."""
    logger = get_app_logger()
    use_case = build_refresh_prices()
    try:
        result = use_case.execute()
    except PriceUnavailableError as exc:
        logger.error(str(exc))
        return
    print(
        "Refreshed prices. "
        f"symbols={len(result.updated_symbols)}, "
        f"positions={result.updated_positions}, "
        f"missing={','.join(result.missing_symbols) or '-'}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
