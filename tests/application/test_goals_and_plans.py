"""Tests for budget and goal creation and goal progress."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from wealth_ledger.application.use_cases.create_category import (
    CreateCategoryUseCase,
)
from wealth_ledger.application.use_cases.get_goal_progress import (
    GetGoalProgressUseCase,
)
from wealth_ledger.application.use_cases.manage_plans import (
    CreateBudgetUseCase,
    CreateGoalUseCase,
)
from wealth_ledger.domain.constants import BudgetPeriod
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError

NOW = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def goals(store, logger):
    return CreateGoalUseCase(store, logger=logger)


@pytest.fixture
def budgets(store, logger):
    return CreateBudgetUseCase(store, logger=logger)


def test_goal_progress_tracks_linked_account(seed, store, logger, goals) -> None:
    user, account = seed.funded_account(250)
    linked = goals.execute(
        user.guid, "Holiday", "1000", date(2024, 6, 11), account.guid, " Travel "
    )
    done = goals.execute(user.guid, "Laptop", "200", date(2024, 5, 1), account.guid)
    loose = goals.execute(user.guid, "Someday", "50")

    results = {
        item.goal.guid: item
        for item in GetGoalProgressUseCase(store, logger=logger).execute(
            user.guid, now=NOW
        )
    }

    assert linked.category == "travel"
    assert results[linked.guid].current_amount == Decimal("250.00")
    assert results[linked.guid].percentage == Decimal("25.00")
    assert results[linked.guid].remaining == Decimal("750.00")
    assert results[linked.guid].days_left == 10
    assert results[done.guid].percentage == Decimal("100.00")
    assert results[done.guid].remaining == Decimal("0")
    assert results[done.guid].days_left == 0
    assert results[loose.guid].current_amount == Decimal("0")
    assert results[loose.guid].days_left is None


def test_goal_validation(seed, goals) -> None:
    user, _ = seed.funded_account(0)
    _, foreign = seed.funded_account(0)

    with pytest.raises(InvalidArgumentError):
        goals.execute(user.guid, "Zero", "0")
    with pytest.raises(InvalidArgumentError):
        goals.execute(user.guid, "  ", "10")
    with pytest.raises(InvalidArgumentError):
        goals.execute(user.guid, "Theirs", "10", account_guid=foreign.guid)
    with pytest.raises(NotFoundError):
        goals.execute("missing", "Car", "10")


def test_goal_progress_for_unknown_user(store, logger) -> None:
    with pytest.raises(NotFoundError):
        GetGoalProgressUseCase(store, logger=logger).execute("missing", now=NOW)


def test_budget_creation_and_validation(seed, store, logger, budgets) -> None:
    user, account = seed.funded_account(0)
    stranger, _ = seed.funded_account(0)
    food = CreateCategoryUseCase(store, logger=logger).execute(stranger.guid, "Food")
    may = (date(2024, 5, 1), date(2024, 5, 31))

    budget = budgets.execute(
        user.guid, " Fun ", "99.999", "monthly", *may, account_guid=account.guid
    )

    assert budget.name == "Fun"
    assert budget.amount == Decimal("100.00")
    assert budget.period is BudgetPeriod.MONTHLY
    with pytest.raises(InvalidArgumentError):
        budgets.execute(user.guid, "Fun", "10", "daily", *may)
    with pytest.raises(InvalidArgumentError):
        budgets.execute(user.guid, "Fun", "-1", "weekly", *may)
    with pytest.raises(InvalidArgumentError):
        budgets.execute(user.guid, "Fun", "10", "weekly", may[1], may[0])
    with pytest.raises(InvalidArgumentError):
        budgets.execute(user.guid, "Fun", "10", "weekly", *may, category_guid=food.guid)
    with pytest.raises(NotFoundError):
        budgets.execute(user.guid, "Fun", "10", "weekly", *may, account_guid="missing")
