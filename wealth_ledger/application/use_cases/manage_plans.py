"""Use cases to create budgets and savings goals."""

from datetime import date

from wealth_ledger.application.ports.ledger_store import (
    LedgerSession,
    LedgerStorePort,
)
from wealth_ledger.domain.constants import BudgetPeriod
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import Budget, Goal
from wealth_ledger.domain.services.validation import (
    require_non_negative,
    require_positive,
    to_decimal,
)
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money

MAX_PLAN_NAME_LENGTH = 100


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned or len(cleaned) > MAX_PLAN_NAME_LENGTH:
        raise InvalidArgumentError(f"Invalid name: {name!r}")
    return cleaned


def _require_own_account(
    session: LedgerSession,
    user_guid: str,
    account_guid: str | None,
) -> None:
    if account_guid is None:
        return
    account = session.get_account(account_guid)
    if account is None:
        raise NotFoundError("Account", account_guid)
    if account.user_guid != user_guid:
        raise InvalidArgumentError(f"Account {account_guid} belongs to another user")


class CreateBudgetUseCase:
    """Create a spend limit over an inclusive date range."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_guid: str,
        name: str,
        amount,
        period,
        start_date: date,
        end_date: date,
        category_guid: str | None = None,
        account_guid: str | None = None,
    ) -> Budget:
        """Create a budget.

        Args:
            user_guid: Owner of the budget.
            name: Display name.
            amount: Non-negative limit.
            period: BudgetPeriod or its string value.
            start_date: First day of the budget.
            end_date: Last day of the budget.
            category_guid: Optional category narrowing the spend.
            account_guid: Optional account narrowing the spend.

        Returns:
            Budget: The stored budget.

        Raises:
            InvalidArgumentError: On invalid values or foreign references.
            NotFoundError: If the user, account or category does not exist.
        """
        cleaned = _clean_name(name)
        limit = quantize_money(
            require_non_negative("amount", to_decimal("amount", amount))
        )
        try:
            period = BudgetPeriod(period)
        except ValueError:
            raise InvalidArgumentError(f"Unknown budget period: {period!r}") from None
        if end_date < start_date:
            raise InvalidArgumentError(
                f"Budget range is reversed: {start_date} > {end_date}"
            )

        with self._store.atomic() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            _require_own_account(session, user_guid, account_guid)
            if category_guid is not None:
                category = session.get_category(category_guid)
                if category is None:
                    raise NotFoundError("Category", category_guid)
                if category.user_guid != user_guid:
                    raise InvalidArgumentError(
                        f"Category {category_guid} belongs to another user"
                    )
            budget = session.add_budget(
                user_guid,
                cleaned,
                limit,
                period,
                start_date,
                end_date,
                category_guid,
                account_guid,
            )
        self._logger.info(f"Created budget {budget.guid} for user {user_guid}")
        return budget


class CreateGoalUseCase:
    """Create a savings goal, optionally tracking an account."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_guid: str,
        name: str,
        target_amount,
        target_date: date | None = None,
        account_guid: str | None = None,
        category: str | None = None,
    ) -> Goal:
        """Create a goal.

        Raises:
            InvalidArgumentError: On a blank name, non-positive target or an
                account of another user.
            NotFoundError: If the user or account does not exist.
        """
        cleaned = _clean_name(name)
        target = quantize_money(
            require_positive("target_amount", to_decimal("target_amount", target_amount))
        )
        with self._store.atomic() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            _require_own_account(session, user_guid, account_guid)
            goal = session.add_goal(
                user_guid,
                cleaned,
                target,
                target_date,
                account_guid,
                (category or "").strip().lower() or None,
            )
        self._logger.info(f"Created goal {goal.guid} for user {user_guid}")
        return goal


__all__ = ["CreateBudgetUseCase", "CreateGoalUseCase"]
