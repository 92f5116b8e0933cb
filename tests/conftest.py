"""Shared fixtures: a file-backed SQLite ledger per test."""

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from wealth_ledger.application.use_cases.manage_accounts import (
    OpenAccountUseCase,
    RegisterUserUseCase,
)
from wealth_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from wealth_ledger.domain.constants import AccountType, TransactionType
from wealth_ledger.infrastructure import db as db_module
from wealth_ledger.infrastructure.ledger_store import SqlAlchemyLedgerStore
from wealth_ledger.infrastructure.orm import create_schema


class _EnginePort:
    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


class LedgerSeeder:
    """Small helper creating users, accounts and journal entries."""

    def __init__(self, store, logger) -> None:
        self._store = store
        self._users = RegisterUserUseCase(store, logger=logger)
        self._accounts = OpenAccountUseCase(store, logger=logger)
        self._recorder = RecordTransactionUseCase(store, logger=logger)
        self._counter = 0

    def user(self, email: str | None = None):
        self._counter += 1
        return self._users.execute(email or f"user{self._counter}@example.com")

    def account(
        self,
        user_guid: str,
        name: str = "Main",
        account_type=AccountType.CHECKING,
        currency_code: str = "PLN",
    ):
        return self._accounts.execute(user_guid, name, account_type, currency_code)

    def record(
        self,
        account_guid: str,
        amount,
        transaction_type=TransactionType.INCOME,
        occurred_at: datetime | None = None,
        **kwargs,
    ):
        return self._recorder.execute(
            account_guid,
            Decimal(str(amount)),
            transaction_type,
            kwargs.pop("description", "seed"),
            occurred_at=occurred_at,
            **kwargs,
        )

    def funded_account(self, amount, **kwargs):
        user = self.user()
        account = self.account(user.guid, **kwargs)
        if Decimal(str(amount)) > 0:
            self.record(
                account.guid,
                amount,
                occurred_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
            )
        return user, account


@pytest.fixture
def engine(tmp_path: Path):
    ledger_engine = db_module._create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    create_schema(ledger_engine)
    yield ledger_engine
    ledger_engine.dispose()


@pytest.fixture
def db_port(engine):
    return _EnginePort(engine)


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def store(db_port, logger):
    return SqlAlchemyLedgerStore(db_port, logger=logger)


@pytest.fixture
def seed(store, logger):
    return LedgerSeeder(store, logger)


@pytest.fixture
def balance_of(store):
    def _balance(account_guid: str) -> Decimal:
        with store.reader() as session:
            return session.get_account(account_guid).balance

    return _balance
