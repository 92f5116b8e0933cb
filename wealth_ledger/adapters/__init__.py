"""Command-line adapters of the ledger core."""
