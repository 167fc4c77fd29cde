"""Tests for the interactive menu."""
from __future__ import annotations

import io
from datetime import datetime

import pytest

from cli.main import format_history, format_market, format_portfolio, main, run_session
from engine.trading_ledger import TradingLedger
from market.price_simulator import make_rng


MONDAY_10AM = datetime(2024, 3, 4, 10, 0)


def scripted(*answers):
    """Prompt stand-in that replays answers, then signals end of input."""
    it = iter(answers)

    def prompt(_msg: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return prompt


def run(ledger: TradingLedger, *answers, when: datetime = MONDAY_10AM) -> str:
    out = io.StringIO()
    code = run_session(ledger, clock=lambda: when, prompt=scripted(*answers), out=out)
    assert code == 0
    return out.getvalue()


class TestRunSession:
    """Tests for the menu loop."""

    def test_buy_then_view_portfolio_and_history(self):
        """A buy is acknowledged and shows up in portfolio and history."""
        ledger = TradingLedger(rng=make_rng(1))

        text = run(ledger, "3", "aapl", "10", "2", "5", "7")

        assert "Successfully bought 10 shares of AAPL at $185.00 per share." in text
        assert "Cash Balance: $8,150.00" in text
        assert "Total Invested: $1,850.00" in text
        assert "03/04/2024 10:00" in text
        assert text.rstrip().endswith("Exiting...")
        assert ledger.cash == 8150.00

    def test_failure_message_printed(self):
        """Rejections are shown as text, not raised."""
        ledger = TradingLedger(rng=make_rng(1))

        text = run(ledger, "4", "TSLA", "1", "7")

        assert "You don't own any shares of TSLA" in text

    def test_closed_market_message(self):
        """Weekend trades print the market-closed message."""
        ledger = TradingLedger(rng=make_rng(1))

        text = run(ledger, "3", "AAPL", "1", "7", when=datetime(2024, 3, 9, 10, 0))

        assert "Market is closed. Trading available Mon-Fri 9:30AM-4:00PM." in text
        assert not ledger.holdings

    def test_bad_quantity_and_option(self):
        """Non-numeric quantity and unknown options are reported."""
        ledger = TradingLedger(rng=make_rng(1))

        text = run(ledger, "3", "AAPL", "ten", "9", "7")

        assert "Invalid quantity" in text
        assert "Invalid option. Please try again." in text
        assert ledger.transaction_log() == ()

    def test_simulate_update(self):
        """Option 6 ticks prices and acknowledges."""
        ledger = TradingLedger(rng=make_rng(1))

        text = run(ledger, "6", "1", "7")

        assert "Market data updated." in text
        assert any(q.change_pct != 0 for q in ledger.market_snapshot().quotes)

    def test_end_of_input_exits(self):
        """EOF at the prompt ends the session cleanly."""
        text = run(TradingLedger(rng=make_rng(1)))

        assert "Exiting..." in text


class TestFormatting:
    """Tests for table rendering."""

    def test_market_table(self):
        """Market table lists every symbol with a signed change."""
        text = format_market(TradingLedger(rng=make_rng(1)))

        assert "MARKET DATA" in text
        for symbol in ("AAPL", "GOOGL", "NVDA"):
            assert symbol in text
        assert "$950.00" in text
        assert "+0.00%" in text

    def test_empty_portfolio(self):
        """Empty portfolio prints an explicit message."""
        text = format_portfolio(TradingLedger(rng=make_rng(1)))

        assert "No stocks in portfolio." in text

    def test_history_amount_column(self):
        """History shows the computed amount."""
        ledger = TradingLedger(rng=make_rng(1))
        ledger.buy("AAPL", 10, MONDAY_10AM)
        ledger.sell("AAPL", 10, MONDAY_10AM)

        text = format_history(ledger)

        assert text.count("$1,850.00") == 2
        assert "BUY" in text and "SELL" in text


class TestMain:
    """Tests for the argparse entry point."""

    def test_help(self, capsys):
        """--help exits cleanly and describes the options."""
        with pytest.raises(SystemExit) as e:
            main(["--help"])

        assert e.value.code == 0
        assert "--seed" in capsys.readouterr().out

    def test_pinned_clock_session(self, monkeypatch, capsys):
        """--clock and --seed drive a full scripted session."""
        monkeypatch.setattr("builtins.input", scripted("3", "MSFT", "2", "7"))

        with pytest.raises(SystemExit) as e:
            main(["--seed", "5", "--clock", "2024-03-04T11:00"])

        assert e.value.code == 0
        assert "Successfully bought 2 shares of MSFT at $420.00 per share." in capsys.readouterr().out

    def test_bad_market_config_exits_with_error(self, tmp_path, capsys):
        """An invalid config is reported before the menu starts."""
        market = tmp_path / "market.yaml"
        market.write_text("market_hours:\n  trading_days: [funday]\n", encoding="utf-8")

        with pytest.raises(SystemExit) as e:
            main(["--config", str(market), "--universe", str(tmp_path / "none.yaml")])

        assert e.value.code == 1
        assert "Error: Unknown trading day: funday" in capsys.readouterr().out
