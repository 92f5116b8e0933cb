"""Use case to list a user's journal entries with filters."""

from collections.abc import Iterable
from datetime import date
from zoneinfo import ZoneInfo

from wealth_ledger.application.ports.ledger_store import (
    LedgerStorePort,
    TransactionFilter,
)
from wealth_ledger.application.use_cases.record_transaction import (
    parse_transaction_type,
)
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import Transaction
from wealth_ledger.domain.services.calendar_windows import (
    DEFAULT_TIMEZONE,
    end_of_day_cutoff,
    start_of_day_utc,
)
from wealth_ledger.domain.services.normalization import normalize_tags
from wealth_ledger.infrastructure.logging.logger import get_app_logger

DEFAULT_PAGE_SIZE = 50


class ListTransactionsUseCase:
    """Return filtered journal entries of one user, newest first."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        tz: ZoneInfo | None = None,
    ) -> None:
        self._store = store
        self._logger = logger or get_app_logger()
        self._tz = tz or DEFAULT_TIMEZONE

    def execute(
        self,
        user_guid: str,
        account_guid: str | None = None,
        category_guid: str | None = None,
        transaction_type=None,
        start_date: date | None = None,
        end_date: date | None = None,
        tags: Iterable[str] | None = None,
        search: str | None = None,
        limit: int | None = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[Transaction]:
        """List transactions.

        Args:
            user_guid: Owner of the accounts searched.
            account_guid: Optional single account.
            category_guid: Optional category.
            transaction_type: Optional TransactionType or its value.
            start_date: Optional first local day included.
            end_date: Optional last local day included.
            tags: Entries must carry every listed tag.
            search: Case-insensitive description substring.
            limit: Page size, or None for everything.
            offset: Number of entries skipped.

        Returns:
            list[Transaction]: Matching entries, newest first.

        Raises:
            InvalidArgumentError: On a negative page or an unknown type.
            NotFoundError: If the user does not exist.
        """
        if offset < 0 or (limit is not None and limit < 0):
            raise InvalidArgumentError("limit and offset must not be negative")
        filters = TransactionFilter(
            user_guid=user_guid,
            account_guids=(account_guid,) if account_guid else None,
            types=(
                (parse_transaction_type(transaction_type),)
                if transaction_type
                else None
            ),
            category_guid=category_guid,
            occurred_from=(
                start_of_day_utc(start_date, self._tz) if start_date else None
            ),
            occurred_before=(
                end_of_day_cutoff(end_date, self._tz) if end_date else None
            ),
            tags=normalize_tags(tags),
            description_contains=search,
            limit=limit,
            offset=offset,
        )
        with self._store.reader() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            transactions = session.list_transactions(filters)
        self._logger.debug(
            f"Listed {len(transactions)} transactions for user {user_guid}"
        )
        return transactions


__all__ = ["ListTransactionsUseCase"]
