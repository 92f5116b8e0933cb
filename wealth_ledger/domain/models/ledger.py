"""Domain models for ledger entities.

These are immutable snapshots handed out by the ledger store; the store is
the only place that turns them back into database rows.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from wealth_ledger.domain.constants import (
    AccountType,
    AssetKind,
    BudgetPeriod,
    TransactionType,
)


@dataclass(frozen=True)
class User:
    """Owner of accounts, categories, budgets and goals."""

    guid: str
    email: str
    name: str | None
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Cash account whose balance is driven by its journal."""

    guid: str
    user_guid: str
    name: str
    account_type: AccountType
    currency_code: str
    balance: Decimal
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Immutable journal entry.

    Attributes:
        amount: Non-negative magnitude; the sign comes from the type.
        transfer_guid: Shared by the two legs of a transfer.
    """

    guid: str
    account_guid: str
    amount: Decimal
    transaction_type: TransactionType
    description: str
    occurred_at: datetime
    created_at: datetime
    category_guid: str | None = None
    is_recurring: bool = False
    tags: tuple[str, ...] = ()
    transfer_guid: str | None = None


@dataclass(frozen=True)
class Category:
    """User-scoped label, nested at most one level deep."""

    guid: str
    user_guid: str
    name: str
    parent_guid: str | None
    color: str | None
    icon: str | None
    created_at: datetime


@dataclass(frozen=True)
class Position:
    """Open holding of a tradable asset inside one account."""

    guid: str
    account_guid: str
    symbol: str
    name: str
    kind: AssetKind
    quantity: Decimal
    avg_buy_price: Decimal
    current_price: Decimal
    currency_code: str
    bought_at: datetime
    last_updated: datetime

    @property
    def market_value(self) -> Decimal:
        return self.current_price * self.quantity

    @property
    def cost_basis(self) -> Decimal:
        return self.avg_buy_price * self.quantity


@dataclass(frozen=True)
class Budget:
    """Spend limit over an inclusive date range."""

    guid: str
    user_guid: str
    name: str
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: date
    category_guid: str | None
    account_guid: str | None
    created_at: datetime


@dataclass(frozen=True)
class Goal:
    """Savings target optionally tracking an account balance."""

    guid: str
    user_guid: str
    name: str
    target_amount: Decimal
    target_date: date | None
    account_guid: str | None
    category: str | None
    created_at: datetime


__all__ = [
    "User",
    "Account",
    "Transaction",
    "Category",
    "Position",
    "Budget",
    "Goal",
]
