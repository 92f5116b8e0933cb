"""Use case to compute progress of savings goals."""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.domain.errors import NotFoundError
from wealth_ledger.domain.models import GoalProgress
from wealth_ledger.domain.services.calendar_windows import (
    DEFAULT_TIMEZONE,
    local_date,
    utc_now,
)
from wealth_ledger.domain.services.progress import (
    capped_percentage,
    days_left,
    remaining_amount,
)
from wealth_ledger.infrastructure.logging.logger import get_app_logger


class GetGoalProgressUseCase:
    """Measure goals against the current balance of their linked account."""

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
        now: datetime | None = None,
    ) -> list[GoalProgress]:
        """Return progress of every goal of a user, newest first.

        Goals without a linked account have a current amount of 0.

        Raises:
            NotFoundError: If the user does not exist.
        """
        today = local_date(now or utc_now(), self._tz)
        results = []
        with self._store.reader() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            for goal in session.list_goals(user_guid):
                current = Decimal("0")
                if goal.account_guid is not None:
                    account = session.get_account(goal.account_guid)
                    if account is not None:
                        current = account.balance
                results.append(
                    GoalProgress(
                        goal=goal,
                        current_amount=current,
                        percentage=capped_percentage(current, goal.target_amount),
                        remaining=remaining_amount(goal.target_amount, current),
                        days_left=days_left(goal.target_date, today),
                    )
                )
        self._logger.debug(f"Computed progress for {len(results)} goals")
        return results


__all__ = ["GetGoalProgressUseCase"]
