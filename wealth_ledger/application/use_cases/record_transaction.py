"""Use case to append a journal entry and move the account balance with it."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from wealth_ledger.application.ports.ledger_store import (
    LedgerSession,
    LedgerStorePort,
    NewTransaction,
)
from wealth_ledger.domain.constants import TransactionType
from wealth_ledger.domain.errors import (
    InsufficientFundsError,
    InvalidArgumentError,
    NotFoundError,
)
from wealth_ledger.domain.models import Transaction
from wealth_ledger.domain.services.calendar_windows import ensure_utc, utc_now
from wealth_ledger.domain.services.normalization import normalize_tags
from wealth_ledger.domain.services.signs import signed_effect
from wealth_ledger.domain.services.validation import (
    require_non_negative,
    to_decimal,
)
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money


def parse_transaction_type(value) -> TransactionType:
    """Return ``value`` as a TransactionType.

    Raises:
        InvalidArgumentError: If the value is not a known type.
    """
    try:
        return TransactionType(value)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown transaction type: {value!r}"
        ) from None


class RecordTransactionUseCase:
    """Record a transaction and apply its signed effect to the balance."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Port providing atomic units over the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_guid: str,
        amount,
        transaction_type,
        description: str,
        occurred_at: datetime | None = None,
        category_guid: str | None = None,
        tags: Iterable[str] | None = None,
        is_recurring: bool = False,
        transfer_guid: str | None = None,
    ) -> Transaction:
        """Record one transaction in its own atomic unit.

        Args:
            account_guid: Account the entry belongs to.
            amount: Non-negative magnitude; zero is accepted.
            transaction_type: TransactionType or its string value.
            description: Free-text description.
            occurred_at: When the transaction happened; defaults to now.
            category_guid: Optional category of the same user.
            tags: Optional labels; blanks and duplicates are dropped.
            is_recurring: Whether the entry is part of a recurring series.
            transfer_guid: Optional guid linking two legs of a transfer.

        Returns:
            Transaction: The stored journal entry.

        Raises:
            InvalidArgumentError: If the amount is negative or the type is
                unknown.
            NotFoundError: If the account or category does not exist.
        """
        with self._store.atomic() as session:
            transaction = self.post(
                session,
                account_guid=account_guid,
                amount=amount,
                transaction_type=transaction_type,
                description=description,
                occurred_at=occurred_at,
                category_guid=category_guid,
                tags=tags,
                is_recurring=is_recurring,
                transfer_guid=transfer_guid,
            )
        self._logger.info(
            f"Recorded {transaction.transaction_type.value} "
            f"{transaction.amount} on account {account_guid}"
        )
        return transaction

    def post(
        self,
        session: LedgerSession,
        account_guid: str,
        amount,
        transaction_type,
        description: str,
        occurred_at: datetime | None = None,
        category_guid: str | None = None,
        tags: Iterable[str] | None = None,
        is_recurring: bool = False,
        transfer_guid: str | None = None,
        require_funds: bool = False,
    ) -> Transaction:
        """Record a transaction inside a unit opened by the caller.

        Args:
            session: Session of the caller's atomic unit.
            account_guid: Account the entry belongs to.
            amount: Non-negative magnitude.
            transaction_type: TransactionType or its string value.
            description: Free-text description.
            occurred_at: When the transaction happened; defaults to now.
            category_guid: Optional category of the same user.
            tags: Optional labels.
            is_recurring: Whether the entry is recurring.
            transfer_guid: Optional guid linking transfer legs.
            require_funds: Debit only when the balance covers the amount.

        Returns:
            Transaction: The stored journal entry.

        Raises:
            InsufficientFundsError: If ``require_funds`` is set and the
                balance is too low at write time.
        """
        magnitude = quantize_money(
            require_non_negative("amount", to_decimal("amount", amount))
        )
        kind = parse_transaction_type(transaction_type)

        account = session.get_account(account_guid)
        if account is None:
            raise NotFoundError("Account", account_guid)
        if category_guid is not None:
            category = session.get_category(category_guid)
            if category is None:
                raise NotFoundError("Category", category_guid)
            if category.user_guid != account.user_guid:
                raise InvalidArgumentError(
                    f"Category {category_guid} belongs to another user"
                )

        delta = signed_effect(kind, magnitude)
        if require_funds and delta < 0:
            if not session.debit_if_sufficient(account_guid, -delta):
                current = session.get_account(account_guid)
                available = current.balance if current else Decimal("0")
                raise InsufficientFundsError(account_guid, magnitude, available)
        elif not session.apply_balance_delta(account_guid, delta):
            raise NotFoundError("Account", account_guid)

        return session.insert_transaction(
            NewTransaction(
                account_guid=account_guid,
                amount=magnitude,
                transaction_type=kind,
                description=(description or "").strip(),
                occurred_at=(
                    ensure_utc(occurred_at) if occurred_at else utc_now()
                ),
                category_guid=category_guid,
                is_recurring=bool(is_recurring),
                tags=normalize_tags(tags),
                transfer_guid=transfer_guid,
            )
        )


__all__ = ["RecordTransactionUseCase", "parse_transaction_type"]
