"""Port for the durable ledger store.

The store hands out sessions through two context managers. ``atomic()``
commits everything done through the yielded session as one unit, or nothing
at all; ``reader()`` never commits. Sessions enforce referential integrity
only; balance and position rules live in the use cases.
"""

from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from wealth_ledger.domain.constants import (
    AccountType,
    BudgetPeriod,
    TransactionType,
)
from wealth_ledger.domain.models import (
    Account,
    Budget,
    Category,
    Goal,
    Position,
    Transaction,
    User,
)


@dataclass(frozen=True)
class NewTransaction:
    """Journal entry about to be inserted."""

    account_guid: str
    amount: Decimal
    transaction_type: TransactionType
    description: str
    occurred_at: datetime
    category_guid: str | None = None
    is_recurring: bool = False
    tags: tuple[str, ...] = ()
    transfer_guid: str | None = None


@dataclass(frozen=True)
class TransactionFilter:
    """Filter over the journal.

    Date bounds are UTC instants: ``occurred_from`` is inclusive,
    ``occurred_after`` and ``occurred_before`` are exclusive. ``tags``
    matches transactions carrying every listed tag.
    """

    account_guids: tuple[str, ...] | None = None
    user_guid: str | None = None
    types: tuple[TransactionType, ...] | None = None
    category_guid: str | None = None
    occurred_from: datetime | None = None
    occurred_after: datetime | None = None
    occurred_before: datetime | None = None
    tags: tuple[str, ...] = ()
    description_contains: str | None = None
    limit: int | None = None
    offset: int = 0


class LedgerSession(Protocol):
    """Primitives available inside a store session."""

    def get_user(self, user_guid: str) -> User | None:
        """Return a user by guid."""

    def add_user(self, email: str, name: str | None) -> User:
        """Create a user."""

    def get_account(self, account_guid: str) -> Account | None:
        """Return an account by guid."""

    def list_accounts(
        self,
        user_guid: str,
        active_only: bool = False,
    ) -> list[Account]:
        """Return a user's accounts ordered by name."""

    def add_account(
        self,
        user_guid: str,
        name: str,
        account_type: AccountType,
        currency_code: str,
    ) -> Account:
        """Create an account with a zero balance."""

    def set_account_active(
        self,
        account_guid: str,
        is_active: bool,
    ) -> Account | None:
        """Flip the active flag of an account."""

    def apply_balance_delta(self, account_guid: str, delta: Decimal) -> bool:
        """Atomically add ``delta`` to a balance; False if no such account."""

    def debit_if_sufficient(self, account_guid: str, amount: Decimal) -> bool:
        """Subtract ``amount`` only if the balance covers it."""

    def insert_transaction(self, entry: NewTransaction) -> Transaction:
        """Append a journal entry."""

    def list_transactions(self, filters: TransactionFilter) -> list[Transaction]:
        """Return matching journal entries, newest first."""

    def sum_transactions(self, filters: TransactionFilter) -> dict[str, Decimal]:
        """Return the summed magnitude of matching entries per account."""

    def get_category(self, category_guid: str) -> Category | None:
        """Return a category by guid."""

    def add_category(
        self,
        user_guid: str,
        name: str,
        parent_guid: str | None,
        color: str | None,
        icon: str | None,
    ) -> Category:
        """Create a category."""

    def list_categories(self, user_guid: str) -> list[Category]:
        """Return a user's categories ordered by name."""

    def get_position(
        self,
        account_guid: str,
        symbol: str,
        for_update: bool = False,
    ) -> Position | None:
        """Return the open position for (account, symbol)."""

    def list_positions(
        self,
        account_guid: str | None = None,
        symbol: str | None = None,
    ) -> list[Position]:
        """Return open positions, optionally narrowed."""

    def add_position(
        self,
        account_guid: str,
        symbol: str,
        quantity: Decimal,
        avg_buy_price: Decimal,
        current_price: Decimal,
        currency_code: str,
        at: datetime,
    ) -> Position:
        """Open a position."""

    def update_position(
        self,
        position_guid: str,
        quantity: Decimal,
        avg_buy_price: Decimal,
        current_price: Decimal,
        at: datetime,
    ) -> Position:
        """Overwrite the mutable fields of a position."""

    def delete_position(self, position_guid: str) -> None:
        """Remove a closed position."""

    def record_market_price(
        self,
        symbol: str,
        price: Decimal,
        at: datetime,
    ) -> int:
        """Set the current price on every position of ``symbol``.

        Returns:
            int: Number of positions updated.
        """

    def add_budget(
        self,
        user_guid: str,
        name: str,
        amount: Decimal,
        period: BudgetPeriod,
        start_date: date,
        end_date: date,
        category_guid: str | None,
        account_guid: str | None,
    ) -> Budget:
        """Create a budget."""

    def get_budget(self, budget_guid: str) -> Budget | None:
        """Return a budget by guid."""

    def list_budgets(self, user_guid: str) -> list[Budget]:
        """Return a user's budgets, newest first."""

    def add_goal(
        self,
        user_guid: str,
        name: str,
        target_amount: Decimal,
        target_date: date | None,
        account_guid: str | None,
        category: str | None,
    ) -> Goal:
        """Create a goal."""

    def list_goals(self, user_guid: str) -> list[Goal]:
        """Return a user's goals, newest first."""


class LedgerStorePort(Protocol):
    """Port exposing the store's atomic unit and read sessions."""

    def atomic(self) -> AbstractContextManager[LedgerSession]:
        """Open a unit of work that commits on success."""

    def reader(self) -> AbstractContextManager[LedgerSession]:
        """Open a read-only session."""


__all__ = [
    "LedgerSession",
    "LedgerStorePort",
    "NewTransaction",
    "TransactionFilter",
]
