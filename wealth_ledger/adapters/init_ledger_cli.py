"""CLI adapter to create the ledger tables."""

from wealth_ledger.infrastructure.container import build_database_adapter
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.infrastructure.orm import create_schema


def main() -> None:
    """Create missing ledger tables in the configured database."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()
    create_schema(engine)
    logger.info(f"Ledger schema ready on {engine.url}")
    print("Ledger schema is up to date.")


if __name__ == "__main__":  # pragma: no cover
    main()
