"""Logging helpers for the ledger."""
