"""Use case to reconstruct balances at a past instant.

Balances are never snapshotted. The balance at a cutoff is the current
balance with every later transaction undone, which keeps the result exact
as long as the balance invariant holds.
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from wealth_ledger.application.ports.ledger_store import (
    LedgerSession,
    LedgerStorePort,
    TransactionFilter,
)
from wealth_ledger.domain.constants import (
    DEFAULT_ASSET_TYPES,
    DEFAULT_CURRENCY,
    DEFAULT_LIABILITY_TYPES,
    AccountType,
)
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import (
    Account,
    AccountBalanceRow,
    NetWorthSummary,
)
from wealth_ledger.domain.services.calendar_windows import (
    DEFAULT_TIMEZONE,
    end_of_day_cutoff,
    ensure_utc,
    utc_now,
)
from wealth_ledger.domain.services.finance import (
    compute_net_worth_summary,
    compute_total_balance,
    compute_type_breakdown,
)
from wealth_ledger.domain.services.fx import DEFAULT_RATES
from wealth_ledger.domain.services.signs import CREDIT_TYPES, DEBIT_TYPES
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money


class GetBalanceAsOfUseCase:
    """Reconstruct account and user balances at a cutoff."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        rates: Mapping[str, Decimal] | None = None,
        reporting_currency: str = DEFAULT_CURRENCY,
        tz: ZoneInfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing read sessions over the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            rates: Static FX multipliers; defaults to the built-in table.
            reporting_currency: Currency of user-level totals.
            tz: Time zone defining calendar days for ``date`` cutoffs.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._rates = dict(rates or DEFAULT_RATES)
        self._reporting_currency = reporting_currency
        self._tz = tz or DEFAULT_TIMEZONE

    @property
    def reporting_currency(self) -> str:
        return self._reporting_currency

    def for_account(self, account_guid: str, as_of: date | datetime) -> Decimal:
        """Return the balance of one account at ``as_of``.

        Args:
            account_guid: Account to reconstruct.
            as_of: A calendar date (end of that day in the configured zone)
                or an aware instant.

        Returns:
            Decimal: Balance in the account's own currency.

        Raises:
            NotFoundError: If the account does not exist.
        """
        bound, inclusive = self._replay_bound(as_of)
        with self._store.reader() as session:
            account = session.get_account(account_guid)
            if account is None:
                raise NotFoundError("Account", account_guid)
            balances = self._reconstruct(
                session,
                [account],
                TransactionFilter(account_guids=(account_guid,)),
                bound,
                inclusive,
            )
        return balances[0].balance

    def for_user(self, user_guid: str, as_of: date | datetime) -> Decimal:
        """Return the total of every account of a user at ``as_of``.

        Inactive accounts are included. Accounts whose currency has no rate
        are skipped with a warning.

        Returns:
            Decimal: Total in the reporting currency.

        Raises:
            NotFoundError: If the user does not exist.
        """
        balances = self.account_balances(user_guid, as_of)
        total = compute_total_balance(
            balances,
            self._rates,
            target_currency=self._reporting_currency,
            logger=self._logger,
        )
        self._logger.debug(
            f"Balance of user {user_guid} as of {as_of}: {total}"
        )
        return total

    def net_worth_summary(
        self,
        user_guid: str,
        as_of: date | datetime | None = None,
    ) -> NetWorthSummary:
        """Split a user's balances into assets and liabilities."""
        balances = self.account_balances(user_guid, as_of or utc_now())
        return compute_net_worth_summary(
            balances,
            self._rates,
            asset_types=DEFAULT_ASSET_TYPES,
            liability_types=DEFAULT_LIABILITY_TYPES,
            target_currency=self._reporting_currency,
            logger=self._logger,
        )

    def breakdown_by_type(
        self,
        user_guid: str,
        as_of: date | datetime | None = None,
    ) -> dict[AccountType, Decimal]:
        """Return converted totals per account type."""
        balances = self.account_balances(user_guid, as_of or utc_now())
        return compute_type_breakdown(
            balances,
            self._rates,
            target_currency=self._reporting_currency,
            logger=self._logger,
        )

    def account_balances(
        self,
        user_guid: str,
        as_of: date | datetime,
    ) -> list[AccountBalanceRow]:
        """Return every account of a user with its balance at ``as_of``.

        Raises:
            NotFoundError: If the user does not exist.
        """
        bound, inclusive = self._replay_bound(as_of)
        with self._store.reader() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            accounts = session.list_accounts(user_guid)
            return self._reconstruct(
                session,
                accounts,
                TransactionFilter(user_guid=user_guid),
                bound,
                inclusive,
            )

    def _replay_bound(self, as_of) -> tuple[datetime, bool]:
        """Return the first instant to undo and whether it is inclusive.

        A date covers its whole local day, so replay starts at the next
        local midnight inclusive. An instant covers itself, so replay
        starts strictly after it.
        """
        if isinstance(as_of, datetime):
            return ensure_utc(as_of), False
        if isinstance(as_of, date):
            return end_of_day_cutoff(as_of, self._tz), True
        raise InvalidArgumentError(f"as_of must be a date or datetime: {as_of!r}")

    @staticmethod
    def _reconstruct(
        session: LedgerSession,
        accounts: list[Account],
        scope: TransactionFilter,
        bound: datetime,
        inclusive: bool,
    ) -> list[AccountBalanceRow]:
        window = {"occurred_from": bound} if inclusive else {"occurred_after": bound}
        credits = session.sum_transactions(
            TransactionFilter(
                account_guids=scope.account_guids,
                user_guid=scope.user_guid,
                types=tuple(CREDIT_TYPES),
                **window,
            )
        )
        debits = session.sum_transactions(
            TransactionFilter(
                account_guids=scope.account_guids,
                user_guid=scope.user_guid,
                types=tuple(DEBIT_TYPES),
                **window,
            )
        )
        # An account opened after the cutoff replays down to 0 on its own.
        rows = []
        for account in accounts:
            later_effect = credits.get(account.guid, Decimal("0")) - debits.get(
                account.guid, Decimal("0")
            )
            rows.append(
                AccountBalanceRow(
                    account_guid=account.guid,
                    account_type=account.account_type,
                    currency_code=account.currency_code,
                    balance=quantize_money(account.balance - later_effect),
                )
            )
        return rows


__all__ = ["GetBalanceAsOfUseCase"]
