"""Error taxonomy for ledger operations.

Validation errors (:class:`NotFoundError`, :class:`InvalidArgumentError`)
signal caller misuse. :class:`InsufficientFundsError` and
:class:`InsufficientPositionError` are business outcomes that callers are
expected to branch on. :class:`AtomicityFailureError` is the only error a
caller may reasonably retry.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every failure raised by the ledger core."""


class NotFoundError(LedgerError):
    """A referenced account, position, category, budget or user is missing."""

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class InvalidArgumentError(LedgerError):
    """An argument is outside the accepted domain (e.g. negative amount)."""


class InsufficientFundsError(LedgerError):
    """A purchase costs more than the account's cash balance."""

    def __init__(
        self,
        account_guid: str,
        required: Decimal,
        available: Decimal,
    ) -> None:
        super().__init__(
            f"Insufficient funds on {account_guid}: "
            f"required={required}, available={available}"
        )
        self.account_guid = account_guid
        self.required = required
        self.available = available

    @property
    def shortfall(self) -> Decimal:
        return self.required - self.available


class InsufficientPositionError(LedgerError):
    """A sale asks for more units than the position holds."""

    def __init__(self, symbol: str, requested: Decimal, held: Decimal) -> None:
        super().__init__(
            f"Insufficient {symbol} position: requested={requested}, held={held}"
        )
        self.symbol = symbol
        self.requested = requested
        self.held = held

    @property
    def shortfall(self) -> Decimal:
        return self.requested - self.held


class PriceUnavailableError(LedgerError):
    """The price lookup returned nothing (or failed) for a symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No current price available for {symbol}")
        self.symbol = symbol


class AtomicityFailureError(LedgerError):
    """The underlying atomic unit could not commit."""


__all__ = [
    "LedgerError",
    "NotFoundError",
    "InvalidArgumentError",
    "InsufficientFundsError",
    "InsufficientPositionError",
    "PriceUnavailableError",
    "AtomicityFailureError",
]
