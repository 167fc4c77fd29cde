"""Smoke tests for module imports and basic functionality."""
from __future__ import annotations


def test_imports():
    """All main modules should be importable."""
    import cli.main
    import common.config_loader
    import accounts.account
    import portfolio.holding
    import market.instrument
    import market.catalog
    import market.hours
    import market.price_simulator
    import ledger.transaction
    import engine.results
    import engine.trading_ledger
    import reporting.summary


def test_config_loader():
    """Config loader should work from the repo root and fall back to defaults elsewhere."""
    from common.config_loader import load_all

    cfg = load_all()

    assert cfg.market is not None
    assert cfg.universe is not None


def test_ledger_construction():
    """Should be able to construct a ledger from config."""
    from common.config_loader import load_all
    from engine.trading_ledger import TradingLedger

    ledger = TradingLedger.from_config(load_all(), seed=0)

    assert ledger.cash > 0
    assert len(ledger.catalog) > 0
    assert ledger.portfolio_snapshot().is_empty
