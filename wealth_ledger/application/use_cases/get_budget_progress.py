"""Use case to measure expense spend against budget limits."""

from datetime import date
from decimal import Decimal
from zoneinfo import ZoneInfo

from wealth_ledger.application.ports.ledger_store import (
    LedgerSession,
    LedgerStorePort,
    TransactionFilter,
)
from wealth_ledger.domain.constants import TransactionType
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import Budget, BudgetProgress, BudgetScope
from wealth_ledger.domain.services.calendar_windows import (
    DEFAULT_TIMEZONE,
    end_of_day_cutoff,
    start_of_day_utc,
)
from wealth_ledger.domain.services.progress import capped_percentage
from wealth_ledger.domain.services.validation import (
    require_non_negative,
    to_decimal,
)
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money


class GetBudgetProgressUseCase:
    """Compute spent, percentage and remaining amount for budgets."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        tz: ZoneInfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing read sessions over the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Time zone defining the calendar days of a budget.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._tz = tz or DEFAULT_TIMEZONE

    def execute(
        self,
        scope: BudgetScope,
        start_date: date,
        end_date: date,
        limit,
    ) -> BudgetProgress:
        """Return spend against ``limit`` for an inclusive date range.

        Args:
            scope: User plus optional account and category narrowing.
            start_date: First day counted.
            end_date: Last day counted.
            limit: Non-negative budget amount.

        Returns:
            BudgetProgress: Spent, limit and capped percentage.

        Raises:
            InvalidArgumentError: If the limit is negative or the range is
                reversed.
        """
        limit = quantize_money(require_non_negative("limit", to_decimal("limit", limit)))
        with self._store.reader() as session:
            spent = self._spent(session, scope, start_date, end_date)
        return BudgetProgress(
            spent=spent,
            limit=limit,
            percentage=capped_percentage(spent, limit),
        )

    def for_budget(self, budget_guid: str) -> BudgetProgress:
        """Return progress of a stored budget.

        Raises:
            NotFoundError: If the budget does not exist.
        """
        with self._store.reader() as session:
            budget = session.get_budget(budget_guid)
            if budget is None:
                raise NotFoundError("Budget", budget_guid)
            return self._progress(session, budget)

    def for_user(self, user_guid: str) -> list[BudgetProgress]:
        """Return progress of every budget of a user, newest first."""
        with self._store.reader() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            budgets = session.list_budgets(user_guid)
            results = [self._progress(session, budget) for budget in budgets]
        self._logger.info(
            f"Computed progress for {len(results)} budgets of user {user_guid}"
        )
        return results

    def _progress(self, session: LedgerSession, budget: Budget) -> BudgetProgress:
        scope = BudgetScope(
            user_guid=budget.user_guid,
            account_guid=budget.account_guid,
            category_guid=budget.category_guid,
        )
        spent = self._spent(session, scope, budget.start_date, budget.end_date)
        return BudgetProgress(
            spent=spent,
            limit=budget.amount,
            percentage=capped_percentage(spent, budget.amount),
            budget=budget,
        )

    def _spent(
        self,
        session: LedgerSession,
        scope: BudgetScope,
        start_date: date,
        end_date: date,
    ) -> Decimal:
        if end_date < start_date:
            raise InvalidArgumentError(
                f"Budget range is reversed: {start_date} > {end_date}"
            )
        totals = session.sum_transactions(
            TransactionFilter(
                user_guid=scope.user_guid,
                account_guids=(
                    (scope.account_guid,) if scope.account_guid else None
                ),
                types=(TransactionType.EXPENSE,),
                category_guid=scope.category_guid,
                occurred_from=start_of_day_utc(start_date, self._tz),
                occurred_before=end_of_day_cutoff(end_date, self._tz),
            )
        )
        return quantize_money(sum(totals.values(), Decimal("0")))


__all__ = ["GetBudgetProgressUseCase"]
