"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_store import (
    LedgerSession,
    LedgerStorePort,
    NewTransaction,
    TransactionFilter,
)
from .price_lookup import PriceLookupPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerSession",
    "LedgerStorePort",
    "NewTransaction",
    "PriceLookupPort",
    "TransactionFilter",
]
