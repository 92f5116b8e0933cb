"""Use case to move money between two accounts of one user."""

from datetime import datetime
from uuid import uuid4

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from wealth_ledger.domain.constants import TransactionType
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import TransferResult
from wealth_ledger.domain.services.calendar_windows import ensure_utc, utc_now
from wealth_ledger.domain.services.validation import require_positive, to_decimal
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money


class TransferFundsUseCase:
    """Write both legs of a transfer in a single atomic unit."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        recorder: RecordTransactionUseCase | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing atomic units over the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            recorder: Optional transaction recorder sharing the sign rule.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._recorder = recorder or RecordTransactionUseCase(
            store,
            logger=self._logger,
        )

    def execute(
        self,
        source_guid: str,
        destination_guid: str,
        amount,
        description: str,
        occurred_at: datetime | None = None,
    ) -> TransferResult:
        """Move ``amount`` from ``source_guid`` to ``destination_guid``.

        Args:
            source_guid: Account debited by the transfer_out leg.
            destination_guid: Account credited by the transfer_in leg.
            amount: Positive amount in the shared account currency.
            description: Description stored on both legs.
            occurred_at: When the transfer happened; defaults to now.

        Returns:
            TransferResult: Both stored legs.

        Raises:
            InvalidArgumentError: If the accounts are the same, belong to
                different users or use different currencies.
            NotFoundError: If either account does not exist.
        """
        magnitude = quantize_money(
            require_positive("amount", to_decimal("amount", amount))
        )
        if source_guid == destination_guid:
            raise InvalidArgumentError("Cannot transfer to the same account")
        when = ensure_utc(occurred_at) if occurred_at else utc_now()
        transfer_guid = uuid4().hex

        with self._store.atomic() as session:
            source = session.get_account(source_guid)
            if source is None:
                raise NotFoundError("Account", source_guid)
            destination = session.get_account(destination_guid)
            if destination is None:
                raise NotFoundError("Account", destination_guid)
            if source.user_guid != destination.user_guid:
                raise InvalidArgumentError(
                    "Transfers are limited to accounts of one user"
                )
            if source.currency_code != destination.currency_code:
                raise InvalidArgumentError(
                    f"Currency mismatch: {source.currency_code} "
                    f"-> {destination.currency_code}"
                )
            outgoing = self._recorder.post(
                session,
                account_guid=source_guid,
                amount=magnitude,
                transaction_type=TransactionType.TRANSFER_OUT,
                description=description,
                occurred_at=when,
                transfer_guid=transfer_guid,
            )
            incoming = self._recorder.post(
                session,
                account_guid=destination_guid,
                amount=magnitude,
                transaction_type=TransactionType.TRANSFER_IN,
                description=description,
                occurred_at=when,
                transfer_guid=transfer_guid,
            )

        self._logger.info(
            f"Transferred {magnitude} {source.currency_code} "
            f"from {source_guid} to {destination_guid}"
        )
        return TransferResult(outgoing=outgoing, incoming=incoming)


__all__ = ["TransferFundsUseCase"]
