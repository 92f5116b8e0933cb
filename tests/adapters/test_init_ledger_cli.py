"""Tests for the init_ledger_cli adapter."""

from unittest.mock import MagicMock

from sqlalchemy import inspect

from wealth_ledger.adapters import init_ledger_cli
from wealth_ledger.infrastructure import db as db_module


def test_main_creates_schema(monkeypatch, capsys, tmp_path):
    """The CLI should create every ledger table on the configured engine."""
    engine = db_module._create_engine(f"sqlite:///{tmp_path / 'fresh.db'}")
    adapter = MagicMock()
    adapter.get_ledger_engine.return_value = engine
    monkeypatch.setattr(init_ledger_cli, "build_database_adapter", lambda: adapter)
    monkeypatch.setattr(init_ledger_cli, "get_app_logger", MagicMock)

    try:
        init_ledger_cli.main()
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert {
        "users",
        "accounts",
        "categories",
        "transactions",
        "assets",
        "asset_price_history",
        "budgets",
        "goals",
    } <= tables
    assert "up to date" in capsys.readouterr().out
