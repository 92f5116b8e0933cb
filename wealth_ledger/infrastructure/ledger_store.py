"""SQLAlchemy-backed ledger store.

Each ``atomic()`` block maps to exactly one database transaction. Balance
changes are issued as single ``UPDATE`` statements so concurrent writers
never overwrite each other's deltas.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import delete, func, select, type_coerce, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from wealth_ledger.application.ports.database import DatabaseEnginePort
from wealth_ledger.application.ports.ledger_store import (
    LedgerSession,
    LedgerStorePort,
    NewTransaction,
    TransactionFilter,
)
from wealth_ledger.domain.constants import (
    AccountType,
    AssetKind,
    BudgetPeriod,
    TransactionType,
)
from wealth_ledger.domain.errors import AtomicityFailureError
from wealth_ledger.domain.models import (
    Account,
    Budget,
    Category,
    Goal,
    Position,
    Transaction,
    User,
)
from wealth_ledger.domain.services.calendar_windows import utc_now
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.infrastructure.orm import (
    MONEY,
    AccountRow,
    AssetPriceHistoryRow,
    AssetRow,
    BudgetRow,
    CategoryRow,
    GoalRow,
    TransactionRow,
    UserRow,
)
from wealth_ledger.utils.decimal_utils import coerce_decimal


def _new_guid() -> str:
    return uuid4().hex


def _to_user(row: UserRow) -> User:
    return User(
        guid=row.guid,
        email=row.email,
        name=row.name,
        created_at=row.created_at,
    )


def _to_account(row: AccountRow) -> Account:
    return Account(
        guid=row.guid,
        user_guid=row.user_guid,
        name=row.name,
        account_type=AccountType(row.account_type),
        currency_code=row.currency_code,
        balance=coerce_decimal(row.balance),
        is_active=bool(row.is_active),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_transaction(row: TransactionRow) -> Transaction:
    return Transaction(
        guid=row.guid,
        account_guid=row.account_guid,
        amount=coerce_decimal(row.amount),
        transaction_type=TransactionType(row.transaction_type),
        description=row.description,
        occurred_at=row.occurred_at,
        created_at=row.created_at,
        category_guid=row.category_guid,
        is_recurring=bool(row.is_recurring),
        tags=tuple(row.tags or ()),
        transfer_guid=row.transfer_guid,
    )


def _to_category(row: CategoryRow) -> Category:
    return Category(
        guid=row.guid,
        user_guid=row.user_guid,
        name=row.name,
        parent_guid=row.parent_guid,
        color=row.color,
        icon=row.icon,
        created_at=row.created_at,
    )


def _to_position(row: AssetRow) -> Position:
    return Position(
        guid=row.guid,
        account_guid=row.account_guid,
        symbol=row.symbol,
        name=row.name,
        kind=AssetKind(row.kind),
        quantity=coerce_decimal(row.quantity),
        avg_buy_price=coerce_decimal(row.avg_buy_price),
        current_price=coerce_decimal(row.current_price),
        currency_code=row.currency_code,
        bought_at=row.bought_at,
        last_updated=row.last_updated,
    )


def _to_budget(row: BudgetRow) -> Budget:
    return Budget(
        guid=row.guid,
        user_guid=row.user_guid,
        name=row.name,
        amount=coerce_decimal(row.amount),
        period=BudgetPeriod(row.period),
        start_date=row.start_date,
        end_date=row.end_date,
        category_guid=row.category_guid,
        account_guid=row.account_guid,
        created_at=row.created_at,
    )


def _to_goal(row: GoalRow) -> Goal:
    return Goal(
        guid=row.guid,
        user_guid=row.user_guid,
        name=row.name,
        target_amount=coerce_decimal(row.target_amount),
        target_date=row.target_date,
        account_guid=row.account_guid,
        category=row.category,
        created_at=row.created_at,
    )


def _filter_clauses(filters: TransactionFilter) -> list:
    clauses = []
    if filters.account_guids is not None:
        clauses.append(TransactionRow.account_guid.in_(filters.account_guids))
    if filters.user_guid is not None:
        owned = select(AccountRow.guid).where(
            AccountRow.user_guid == filters.user_guid
        )
        clauses.append(TransactionRow.account_guid.in_(owned))
    if filters.types is not None:
        clauses.append(
            TransactionRow.transaction_type.in_(
                [item.value for item in filters.types]
            )
        )
    if filters.category_guid is not None:
        clauses.append(TransactionRow.category_guid == filters.category_guid)
    if filters.occurred_from is not None:
        clauses.append(TransactionRow.occurred_at >= filters.occurred_from)
    if filters.occurred_after is not None:
        clauses.append(TransactionRow.occurred_at > filters.occurred_after)
    if filters.occurred_before is not None:
        clauses.append(TransactionRow.occurred_at < filters.occurred_before)
    if filters.description_contains:
        needle = filters.description_contains.strip().lower()
        if needle:
            clauses.append(
                func.lower(TransactionRow.description).contains(
                    needle, autoescape=True
                )
            )
    return clauses


def _has_tags(row: TransactionRow, tags: tuple[str, ...]) -> bool:
    held = set(row.tags or ())
    return all(tag in held for tag in tags)


class SqlAlchemyLedgerSession(LedgerSession):
    """LedgerSession backed by a SQLAlchemy ORM session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    # Users

    def get_user(self, user_guid: str) -> User | None:
        row = self._session.get(UserRow, user_guid)
        return _to_user(row) if row is not None else None

    def add_user(self, email: str, name: str | None) -> User:
        row = UserRow(
            guid=_new_guid(),
            email=email,
            name=name,
            created_at=utc_now(),
        )
        self._session.add(row)
        self._session.flush()
        return _to_user(row)

    # Accounts

    def get_account(self, account_guid: str) -> Account | None:
        stmt = (
            select(AccountRow)
            .where(AccountRow.guid == account_guid)
            .execution_options(populate_existing=True)
        )
        row = self._session.execute(stmt).scalar_one_or_none()
        return _to_account(row) if row is not None else None

    def list_accounts(
        self,
        user_guid: str,
        active_only: bool = False,
    ) -> list[Account]:
        stmt = (
            select(AccountRow)
            .where(AccountRow.user_guid == user_guid)
            .order_by(AccountRow.name, AccountRow.guid)
            .execution_options(populate_existing=True)
        )
        if active_only:
            stmt = stmt.where(AccountRow.is_active.is_(True))
        return [_to_account(row) for row in self._session.scalars(stmt)]

    def add_account(
        self,
        user_guid: str,
        name: str,
        account_type: AccountType,
        currency_code: str,
    ) -> Account:
        now = utc_now()
        row = AccountRow(
            guid=_new_guid(),
            user_guid=user_guid,
            name=name,
            account_type=account_type.value,
            currency_code=currency_code,
            balance=Decimal("0"),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self._session.add(row)
        self._session.flush()
        return _to_account(row)

    def set_account_active(
        self,
        account_guid: str,
        is_active: bool,
    ) -> Account | None:
        row = self._session.get(AccountRow, account_guid)
        if row is None:
            return None
        row.is_active = is_active
        row.updated_at = utc_now()
        self._session.flush()
        return self.get_account(account_guid)

    def apply_balance_delta(self, account_guid: str, delta: Decimal) -> bool:
        stmt = (
            update(AccountRow)
            .where(AccountRow.guid == account_guid)
            .values(balance=AccountRow.balance + delta, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount == 1

    def debit_if_sufficient(self, account_guid: str, amount: Decimal) -> bool:
        stmt = (
            update(AccountRow)
            .where(AccountRow.guid == account_guid)
            .where(AccountRow.balance >= amount)
            .values(balance=AccountRow.balance - amount, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount == 1

    # Transactions

    def insert_transaction(self, entry: NewTransaction) -> Transaction:
        row = TransactionRow(
            guid=_new_guid(),
            account_guid=entry.account_guid,
            category_guid=entry.category_guid,
            amount=entry.amount,
            transaction_type=entry.transaction_type.value,
            description=entry.description,
            occurred_at=entry.occurred_at,
            is_recurring=entry.is_recurring,
            tags=list(entry.tags),
            transfer_guid=entry.transfer_guid,
            created_at=utc_now(),
        )
        self._session.add(row)
        self._session.flush()
        return _to_transaction(row)

    def list_transactions(self, filters: TransactionFilter) -> list[Transaction]:
        stmt = (
            select(TransactionRow)
            .where(*_filter_clauses(filters))
            .order_by(
                TransactionRow.occurred_at.desc(),
                TransactionRow.created_at.desc(),
            )
        )
        if not filters.tags:
            if filters.offset:
                stmt = stmt.offset(filters.offset)
            if filters.limit is not None:
                stmt = stmt.limit(filters.limit)
            return [_to_transaction(row) for row in self._session.scalars(stmt)]

        # Tag membership is matched in Python to stay portable across JSON
        # implementations.
        rows = [
            row
            for row in self._session.scalars(stmt)
            if _has_tags(row, filters.tags)
        ]
        end = None if filters.limit is None else filters.offset + filters.limit
        return [_to_transaction(row) for row in rows[filters.offset:end]]

    def sum_transactions(self, filters: TransactionFilter) -> dict[str, Decimal]:
        if filters.tags:
            totals: dict[str, Decimal] = {}
            for item in self.list_transactions(filters):
                totals[item.account_guid] = (
                    totals.get(item.account_guid, Decimal("0")) + item.amount
                )
            return totals
        total = type_coerce(
            func.coalesce(func.sum(TransactionRow.amount), 0),
            MONEY,
        )
        stmt = (
            select(TransactionRow.account_guid, total.label("total"))
            .where(*_filter_clauses(filters))
            .group_by(TransactionRow.account_guid)
        )
        return {
            row.account_guid: coerce_decimal(row.total)
            for row in self._session.execute(stmt)
        }

    # Categories

    def get_category(self, category_guid: str) -> Category | None:
        row = self._session.get(CategoryRow, category_guid)
        return _to_category(row) if row is not None else None

    def add_category(
        self,
        user_guid: str,
        name: str,
        parent_guid: str | None,
        color: str | None,
        icon: str | None,
    ) -> Category:
        row = CategoryRow(
            guid=_new_guid(),
            user_guid=user_guid,
            name=name,
            parent_guid=parent_guid,
            color=color,
            icon=icon,
            created_at=utc_now(),
        )
        self._session.add(row)
        self._session.flush()
        return _to_category(row)

    def list_categories(self, user_guid: str) -> list[Category]:
        stmt = (
            select(CategoryRow)
            .where(CategoryRow.user_guid == user_guid)
            .order_by(CategoryRow.name, CategoryRow.guid)
        )
        return [_to_category(row) for row in self._session.scalars(stmt)]

    # Positions

    def get_position(
        self,
        account_guid: str,
        symbol: str,
        for_update: bool = False,
    ) -> Position | None:
        stmt = (
            select(AssetRow)
            .where(AssetRow.account_guid == account_guid)
            .where(AssetRow.symbol == symbol)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        row = self._session.execute(stmt).scalar_one_or_none()
        return _to_position(row) if row is not None else None

    def list_positions(
        self,
        account_guid: str | None = None,
        symbol: str | None = None,
    ) -> list[Position]:
        stmt = select(AssetRow).order_by(AssetRow.symbol, AssetRow.guid)
        if account_guid is not None:
            stmt = stmt.where(AssetRow.account_guid == account_guid)
        if symbol is not None:
            stmt = stmt.where(AssetRow.symbol == symbol)
        stmt = stmt.execution_options(populate_existing=True)
        return [_to_position(row) for row in self._session.scalars(stmt)]

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
        row = AssetRow(
            guid=_new_guid(),
            account_guid=account_guid,
            symbol=symbol,
            name=symbol,
            kind=AssetKind.CRYPTO.value,
            quantity=quantity,
            avg_buy_price=avg_buy_price,
            current_price=current_price,
            currency_code=currency_code,
            bought_at=at,
            last_updated=at,
        )
        self._session.add(row)
        self._session.flush()
        return _to_position(row)

    def update_position(
        self,
        position_guid: str,
        quantity: Decimal,
        avg_buy_price: Decimal,
        current_price: Decimal,
        at: datetime,
    ) -> Position:
        row = self._session.get(AssetRow, position_guid)
        if row is None:
            raise AtomicityFailureError(
                f"Position disappeared during update: {position_guid}"
            )
        row.quantity = quantity
        row.avg_buy_price = avg_buy_price
        row.current_price = current_price
        row.last_updated = at
        self._session.flush()
        return _to_position(row)

    def delete_position(self, position_guid: str) -> None:
        row = self._session.get(AssetRow, position_guid)
        if row is not None:
            self._session.expunge(row)
        self._session.execute(
            delete(AssetRow)
            .where(AssetRow.guid == position_guid)
            .execution_options(synchronize_session=False)
        )

    def record_market_price(
        self,
        symbol: str,
        price: Decimal,
        at: datetime,
    ) -> int:
        rows = list(
            self._session.scalars(select(AssetRow).where(AssetRow.symbol == symbol))
        )
        for row in rows:
            row.current_price = price
            row.last_updated = at
            self._session.add(
                AssetPriceHistoryRow(asset_guid=row.guid, price=price, recorded_at=at)
            )
        self._session.flush()
        return len(rows)

    # Budgets and goals

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
        row = BudgetRow(
            guid=_new_guid(),
            user_guid=user_guid,
            name=name,
            amount=amount,
            period=period.value,
            start_date=start_date,
            end_date=end_date,
            category_guid=category_guid,
            account_guid=account_guid,
            created_at=utc_now(),
        )
        self._session.add(row)
        self._session.flush()
        return _to_budget(row)

    def get_budget(self, budget_guid: str) -> Budget | None:
        row = self._session.get(BudgetRow, budget_guid)
        return _to_budget(row) if row is not None else None

    def list_budgets(self, user_guid: str) -> list[Budget]:
        stmt = (
            select(BudgetRow)
            .where(BudgetRow.user_guid == user_guid)
            .order_by(BudgetRow.created_at.desc(), BudgetRow.guid)
        )
        return [_to_budget(row) for row in self._session.scalars(stmt)]

    def add_goal(
        self,
        user_guid: str,
        name: str,
        target_amount: Decimal,
        target_date: date | None,
        account_guid: str | None,
        category: str | None,
    ) -> Goal:
        row = GoalRow(
            guid=_new_guid(),
            user_guid=user_guid,
            name=name,
            target_amount=target_amount,
            target_date=target_date,
            account_guid=account_guid,
            category=category,
            created_at=utc_now(),
        )
        self._session.add(row)
        self._session.flush()
        return _to_goal(row)

    def list_goals(self, user_guid: str) -> list[Goal]:
        stmt = (
            select(GoalRow)
            .where(GoalRow.user_guid == user_guid)
            .order_by(GoalRow.created_at.desc(), GoalRow.guid)
        )
        return [_to_goal(row) for row in self._session.scalars(stmt)]


class SqlAlchemyLedgerStore(LedgerStorePort):
    """LedgerStorePort implementation over the ledger engine."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger; defaults to the app logger.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._session_factory: sessionmaker[Session] | None = None

    def _sessions(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self._db_port.get_ledger_engine(),
                expire_on_commit=False,
                class_=Session,
            )
        return self._session_factory

    @contextmanager
    def atomic(self) -> Iterator[LedgerSession]:
        """Provide a transactional scope around a series of operations.

        Raises:
            AtomicityFailureError: If the database rejects any statement or
                the commit itself.
        """
        session = self._sessions()()
        try:
            yield SqlAlchemyLedgerSession(session)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            self._logger.error(f"Ledger unit rolled back: {exc}")
            raise AtomicityFailureError(str(exc)) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def reader(self) -> Iterator[LedgerSession]:
        """Provide a session that is always rolled back.

        Raises:
            AtomicityFailureError: If the database rejects a read.
        """
        session = self._sessions()()
        try:
            yield SqlAlchemyLedgerSession(session)
        except SQLAlchemyError as exc:
            self._logger.error(f"Ledger read failed: {exc}")
            raise AtomicityFailureError(str(exc)) from exc
        finally:
            session.rollback()
            session.close()


__all__ = ["SqlAlchemyLedgerSession", "SqlAlchemyLedgerStore"]
