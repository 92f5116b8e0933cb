"""Use case to value the positions held in an account."""

from decimal import Decimal

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.domain.errors import NotFoundError
from wealth_ledger.domain.models import PortfolioView, PositionValuation
from wealth_ledger.domain.services.cost_basis import pnl_percentage, unrealized_pnl
from wealth_ledger.infrastructure.logging.logger import get_app_logger
from wealth_ledger.utils.decimal_utils import quantize_money


class GetPortfolioUseCase:
    """Return cash and valued positions of one account."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, account_guid: str) -> PortfolioView:
        """Value every position of an account at its last-known price.

        Args:
            account_guid: Account holding the positions.

        Returns:
            PortfolioView: Cash balance, valuations and their total value.

        Raises:
            NotFoundError: If the account does not exist.
        """
        with self._store.reader() as session:
            account = session.get_account(account_guid)
            if account is None:
                raise NotFoundError("Account", account_guid)
            positions = session.list_positions(account_guid=account_guid)

        valuations = [
            PositionValuation(
                position=position,
                market_value=quantize_money(position.market_value),
                unrealized_pnl=quantize_money(
                    unrealized_pnl(
                        position.quantity,
                        position.avg_buy_price,
                        position.current_price,
                    )
                ),
                pnl_percentage=quantize_money(
                    pnl_percentage(position.avg_buy_price, position.current_price)
                ),
            )
            for position in positions
        ]
        total = sum((item.market_value for item in valuations), Decimal("0"))
        self._logger.debug(
            f"Valued {len(valuations)} positions on account {account_guid}"
        )
        return PortfolioView(
            account_guid=account_guid,
            cash_balance=account.balance,
            positions=valuations,
            total_value=total,
        )


__all__ = ["GetPortfolioUseCase"]
