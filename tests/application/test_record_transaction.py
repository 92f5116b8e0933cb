"""Tests for the RecordTransactionUseCase."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from wealth_ledger.application.ports.ledger_store import TransactionFilter
from wealth_ledger.application.use_cases.create_category import (
    CreateCategoryUseCase,
)
from wealth_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from wealth_ledger.domain.constants import TransactionType
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError


@pytest.fixture
def recorder(store, logger):
    return RecordTransactionUseCase(store, logger=logger)


def test_income_and_expense_move_balance(seed, recorder, balance_of) -> None:
    _, account = seed.funded_account(0)

    recorder.execute(account.guid, "1000", "income", "Salary")
    stored = recorder.execute(
        account.guid,
        Decimal("250.40"),
        TransactionType.EXPENSE,
        "  Rent  ",
        tags=["home", " home", ""],
    )

    assert balance_of(account.guid) == Decimal("749.60")
    assert stored.amount == Decimal("250.40")
    assert stored.description == "Rent"
    assert stored.tags == ("home",)
    assert stored.occurred_at.tzinfo is not None


def test_expense_may_overdraw_account(seed, recorder, balance_of) -> None:
    """Only purchases check funds; plain expenses may go negative."""
    _, account = seed.funded_account(10)

    recorder.execute(account.guid, "25", TransactionType.EXPENSE, "Dinner")

    assert balance_of(account.guid) == Decimal("-15.00")


def test_zero_amount_is_recorded_without_effect(seed, recorder, balance_of) -> None:
    _, account = seed.funded_account(10)

    stored = recorder.execute(account.guid, 0, TransactionType.EXPENSE, "Free")

    assert stored.amount == Decimal("0.00")
    assert balance_of(account.guid) == Decimal("10.00")


@pytest.mark.parametrize(
    ("amount", "kind"),
    [("-1", "income"), ("abc", "income"), ("5", "refund")],
)
def test_invalid_arguments_leave_ledger_untouched(
    seed, store, recorder, balance_of, amount, kind
) -> None:
    _, account = seed.funded_account(10)

    with pytest.raises(InvalidArgumentError):
        recorder.execute(account.guid, amount, kind, "bad")

    assert balance_of(account.guid) == Decimal("10.00")
    with store.reader() as session:
        entries = session.list_transactions(
            TransactionFilter(account_guids=(account.guid,))
        )
    assert len(entries) == 1


def test_unknown_account_raises_not_found(recorder) -> None:
    with pytest.raises(NotFoundError):
        recorder.execute("missing", "1", "income", "x")


def test_category_must_belong_to_account_owner(seed, store, logger, recorder) -> None:
    owner, account = seed.funded_account(0)
    stranger = seed.user()
    categories = CreateCategoryUseCase(store, logger=logger)
    own = categories.execute(owner.guid, "Food")
    foreign = categories.execute(stranger.guid, "Food")

    stored = recorder.execute(
        account.guid, "3", "expense", "Bread", category_guid=own.guid
    )
    assert stored.category_guid == own.guid

    with pytest.raises(InvalidArgumentError):
        recorder.execute(
            account.guid, "3", "expense", "Bread", category_guid=foreign.guid
        )
    with pytest.raises(NotFoundError):
        recorder.execute(account.guid, "3", "expense", "Bread", category_guid="nope")


def test_backdated_entry_keeps_given_instant(seed, recorder) -> None:
    _, account = seed.funded_account(0)
    when = datetime(2023, 6, 1, 8, 30, tzinfo=timezone.utc)

    stored = recorder.execute(account.guid, "5", "interest", "Q2", occurred_at=when)

    assert stored.occurred_at == when
