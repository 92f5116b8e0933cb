"""Ledger consistency core for a personal wealth-management application."""
