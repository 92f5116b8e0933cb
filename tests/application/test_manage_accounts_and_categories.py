"""Tests for user, account and category management."""

from decimal import Decimal

import pytest

from wealth_ledger.application.use_cases.create_category import (
    CreateCategoryUseCase,
)
from wealth_ledger.application.use_cases.manage_accounts import (
    DeactivateAccountUseCase,
    OpenAccountUseCase,
    RegisterUserUseCase,
)
from wealth_ledger.domain.constants import AccountType
from wealth_ledger.domain.errors import (
    AtomicityFailureError,
    InvalidArgumentError,
    NotFoundError,
)


def test_register_user_normalizes_email(store, logger) -> None:
    users = RegisterUserUseCase(store, logger=logger)

    user = users.execute("  Anna@Example.COM ", " Anna ")

    assert user.email == "anna@example.com"
    assert user.name == "Anna"
    with pytest.raises(AtomicityFailureError):
        users.execute("anna@example.com")
    with pytest.raises(InvalidArgumentError):
        users.execute("not-an-email")


def test_open_account_defaults_and_validation(seed, store, logger) -> None:
    user = seed.user()
    accounts = OpenAccountUseCase(store, logger=logger, default_currency="EUR")

    account = accounts.execute(user.guid, " Broker ", "investment")

    assert account.name == "Broker"
    assert account.account_type is AccountType.INVESTMENT
    assert account.currency_code == "EUR"
    assert account.is_active is True
    assert account.balance == 0
    with pytest.raises(InvalidArgumentError):
        accounts.execute(user.guid, "", "checking")
    with pytest.raises(InvalidArgumentError):
        accounts.execute(user.guid, "Main", "brokerage")
    with pytest.raises(InvalidArgumentError):
        accounts.execute(user.guid, "Main", "checking", "EURO")
    with pytest.raises(NotFoundError):
        accounts.execute("missing", "Main", "checking")


def test_deactivate_keeps_balance(seed, store, logger) -> None:
    _, account = seed.funded_account(40)
    deactivate = DeactivateAccountUseCase(store, logger=logger)

    inactive = deactivate.execute(account.guid)
    reactivated = deactivate.execute(account.guid, is_active=True)

    assert inactive.is_active is False
    assert inactive.balance == Decimal("40.00")
    assert reactivated.is_active is True
    with pytest.raises(NotFoundError):
        deactivate.execute("missing")


def test_categories_nest_one_level(seed, store, logger) -> None:
    user = seed.user()
    stranger = seed.user()
    categories = CreateCategoryUseCase(store, logger=logger)

    parent = categories.execute(user.guid, "Home", color="#A0b1C2", icon=" house ")
    child = categories.execute(user.guid, "Rent", parent_guid=parent.guid)

    assert parent.icon == "house"
    assert child.parent_guid == parent.guid
    with pytest.raises(InvalidArgumentError):
        categories.execute(user.guid, "Deep", parent_guid=child.guid)
    with pytest.raises(InvalidArgumentError):
        categories.execute(stranger.guid, "Theirs", parent_guid=parent.guid)
    with pytest.raises(InvalidArgumentError):
        categories.execute(user.guid, "Bad colour", color="red")
    with pytest.raises(InvalidArgumentError):
        categories.execute(user.guid, "x" * 51)
    with pytest.raises(NotFoundError):
        categories.execute(user.guid, "Orphan", parent_guid="missing")
    with store.reader() as session:
        names = [item.name for item in session.list_categories(user.guid)]
    assert names == ["Home", "Rent"]
