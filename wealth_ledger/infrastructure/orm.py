"""SQLAlchemy table mappings for the ledger database."""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

MONEY = Numeric(18, 2)
PRICE = Numeric(28, 10)
GUID = String(32)


class UtcDateTime(TypeDecorator):
    """Store naive UTC timestamps and load them back as aware UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Naive datetime cannot be stored: {value!r}")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class AccountRow(Base):
    __tablename__ = "accounts"

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    user_guid: Mapped[str] = mapped_column(
        GUID, ForeignKey("users.guid"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    account_type: Mapped[str] = mapped_column(String(20), nullable=False)
    currency_code: Mapped[str] = mapped_column(String(3), nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        MONEY, nullable=False, default=Decimal("0")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class CategoryRow(Base):
    __tablename__ = "categories"

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    user_guid: Mapped[str] = mapped_column(
        GUID, ForeignKey("users.guid"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # Parent must itself be top-level; depth is checked by the use case.
    parent_guid: Mapped[str | None] = mapped_column(
        GUID, ForeignKey("categories.guid"), nullable=True
    )
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class TransactionRow(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_amount_magnitude"),
        Index("ix_transactions_account_occurred", "account_guid", "occurred_at"),
    )

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    account_guid: Mapped[str] = mapped_column(
        GUID, ForeignKey("accounts.guid"), nullable=False
    )
    category_guid: Mapped[str | None] = mapped_column(
        GUID, ForeignKey("categories.guid"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    is_recurring: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    transfer_guid: Mapped[str | None] = mapped_column(
        GUID, nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class AssetRow(Base):
    __tablename__ = "assets"
    __table_args__ = (
        UniqueConstraint("account_guid", "symbol", name="uq_assets_account_symbol"),
        CheckConstraint("quantity >= 0", name="ck_assets_quantity"),
    )

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    account_guid: Mapped[str] = mapped_column(
        GUID, ForeignKey("accounts.guid"), nullable=False
    )
    symbol: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(PRICE, nullable=False)
    avg_buy_price: Mapped[Decimal] = mapped_column(PRICE, nullable=False)
    current_price: Mapped[Decimal] = mapped_column(PRICE, nullable=False)
    currency_code: Mapped[str] = mapped_column(String(3), nullable=False)
    bought_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class AssetPriceHistoryRow(Base):
    __tablename__ = "asset_price_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_guid: Mapped[str] = mapped_column(
        GUID,
        ForeignKey("assets.guid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    price: Mapped[Decimal] = mapped_column(PRICE, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class BudgetRow(Base):
    __tablename__ = "budgets"

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    user_guid: Mapped[str] = mapped_column(
        GUID, ForeignKey("users.guid"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    period: Mapped[str] = mapped_column(String(20), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    category_guid: Mapped[str | None] = mapped_column(
        GUID, ForeignKey("categories.guid"), nullable=True
    )
    account_guid: Mapped[str | None] = mapped_column(
        GUID, ForeignKey("accounts.guid"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


class GoalRow(Base):
    __tablename__ = "goals"

    guid: Mapped[str] = mapped_column(GUID, primary_key=True)
    user_guid: Mapped[str] = mapped_column(
        GUID, ForeignKey("users.guid"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    target_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    account_guid: Mapped[str | None] = mapped_column(
        GUID, ForeignKey("accounts.guid"), nullable=True
    )
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)


def create_schema(engine: Engine) -> None:
    """Create every ledger table that does not exist yet.

    Args:
        engine: Engine connected to the ledger database.
    """
    Base.metadata.create_all(engine)


__all__ = [
    "Base",
    "UtcDateTime",
    "UserRow",
    "AccountRow",
    "CategoryRow",
    "TransactionRow",
    "AssetRow",
    "AssetPriceHistoryRow",
    "BudgetRow",
    "GoalRow",
    "create_schema",
]
