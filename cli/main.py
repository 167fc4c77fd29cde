"""Stock trading simulator CLI.

Interactive menu over a single in-memory trading session:
1. View market data
2. View portfolio
3. Buy stocks
4. Sell stocks
5. View transaction history
6. Simulate market update
7. Exit

Nothing is persisted; all state is lost when the session ends.
"""
from __future__ import annotations

import argparse
import logging
from datetime import datetime
from typing import Callable, Optional, TextIO

import pandas as pd

from common.config_loader import load_all
from engine.trading_ledger import TradingLedger
from reporting.summary import transactions_frame


MENU = """
=== STOCK TRADING PLATFORM ===
1. View Market Data
2. View Portfolio
3. Buy Stocks
4. Sell Stocks
5. View Transaction History
6. Simulate Market Update
7. Exit"""


def _money(v: float) -> str:
    return f"${v:,.2f}"


def format_market(ledger: TradingLedger) -> str:
    """Render the market table: symbol, name, price, change %."""
    df = ledger.market_snapshot().to_frame()
    df = df[["symbol", "name", "price", "change_pct"]].rename(columns={
        "symbol": "Symbol", "name": "Name", "price": "Price", "change_pct": "Change",
    })
    return "\n=== MARKET DATA ===\n" + df.to_string(
        index=False,
        formatters={"Price": _money, "Change": lambda v: f"{v * 100:+.2f}%"},
    )


def format_portfolio(ledger: TradingLedger) -> str:
    """Render cash, the holdings table and the P/L summary."""
    snap = ledger.portfolio_snapshot()
    lines = ["\n=== PORTFOLIO ===", f"Cash Balance: {_money(snap.cash)}"]
    if snap.is_empty:
        lines.append("No stocks in portfolio.")
        return "\n".join(lines)

    df = snap.to_frame()[["symbol", "name", "quantity", "average_cost", "current_price", "unrealized_pl"]]
    df = df.rename(columns={
        "symbol": "Symbol", "name": "Name", "quantity": "Quantity",
        "average_cost": "Avg Price", "current_price": "Curr Price", "unrealized_pl": "P/L",
    })
    lines.append("\nStock Holdings:")
    lines.append(df.to_string(
        index=False,
        formatters={"Avg Price": _money, "Curr Price": _money, "P/L": _money},
    ))
    lines.append("\nPortfolio Summary:")
    lines.append(f"Total Invested: {_money(snap.total_cost)}")
    lines.append(f"Current Value:  {_money(snap.total_value)}")
    lines.append(f"Total P/L:      {_money(snap.total_pl)}")
    return "\n".join(lines)


def format_history(ledger: TradingLedger) -> str:
    """Render the chronological transaction table."""
    log = ledger.transaction_log()
    if not log:
        return "\n=== TRANSACTION HISTORY ===\nNo transactions yet."
    df: pd.DataFrame = transactions_frame(log).rename(columns={
        "timestamp": "Date/Time", "action": "Action", "symbol": "Symbol",
        "quantity": "Quantity", "price": "Price", "amount": "Amount",
    })
    return "\n=== TRANSACTION HISTORY ===\n" + df.to_string(
        index=False,
        formatters={
            "Date/Time": lambda t: t.strftime("%m/%d/%Y %H:%M"),
            "Price": _money,
            "Amount": _money,
        },
    )


def _read_order(prompt: Callable[[str], str]) -> tuple[str, Optional[int]]:
    symbol = prompt("Enter stock symbol: ").strip().upper()
    raw_qty = prompt("Enter quantity: ").strip()
    try:
        return symbol, int(raw_qty)
    except ValueError:
        return symbol, None


def run_session(
    ledger: TradingLedger,
    clock: Callable[[], datetime] = datetime.now,
    prompt: Optional[Callable[[str], str]] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Run the menu loop until the user exits or input ends."""
    prompt = prompt or input

    def emit(text: str) -> None:
        print(text, file=out)

    while True:
        emit(MENU)
        try:
            choice = prompt("Select option: ").strip()
        except EOFError:
            emit("Exiting...")
            return 0

        try:
            if choice == "1":
                emit(format_market(ledger))
            elif choice == "2":
                emit(format_portfolio(ledger))
            elif choice in ("3", "4"):
                symbol, qty = _read_order(prompt)
                if qty is None:
                    emit("Invalid quantity. Please enter a whole number.")
                    continue
                op = ledger.buy if choice == "3" else ledger.sell
                emit(str(op(symbol, qty, clock())))
            elif choice == "5":
                emit(format_history(ledger))
            elif choice == "6":
                ledger.simulate_tick()
                emit("Market data updated.")
            elif choice == "7":
                emit("Exiting...")
                return 0
            else:
                emit("Invalid option. Please try again.")
        except EOFError:
            emit("Exiting...")
            return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Stock trading simulator: in-memory single-user trading session",
    )
    p.add_argument("--config", default="config/market.yaml", help="Market settings file")
    p.add_argument("--universe", default="config/asset_universe.yaml", help="Instrument catalog file")
    p.add_argument("--seed", type=int, default=None, help="Random seed for price ticks")
    p.add_argument(
        "--clock",
        type=datetime.fromisoformat,
        default=None,
        help="Pin the simulated clock (ISO 8601, e.g. 2024-03-04T10:00)",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity",
    )
    args = p.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_all(args.config, args.universe)
        ledger = TradingLedger.from_config(cfg, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    clock = (lambda: args.clock) if args.clock else datetime.now
    raise SystemExit(run_session(ledger, clock=clock))


if __name__ == "__main__":
    main()
