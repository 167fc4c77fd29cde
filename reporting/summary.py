"""Read-only views of ledger state.

Snapshots are plain frozen dataclasses so callers can inspect them directly;
``to_frame`` renders the rows as a pandas DataFrame for tabular display.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Tuple

import pandas as pd

from accounts.account import Account
from ledger.transaction import Transaction
from market.instrument import Instrument


@dataclass(frozen=True)
class HoldingView:
    symbol: str
    name: str
    quantity: int
    average_cost: float
    current_price: float
    cost_basis: float
    market_value: float
    unrealized_pl: float


@dataclass(frozen=True)
class PortfolioSnapshot:
    holdings: Tuple[HoldingView, ...]
    cash: float
    total_cost: float
    market_value: float
    total_value: float
    initial_cash: float
    total_pl: float

    @property
    def is_empty(self) -> bool:
        return not self.holdings

    def to_frame(self) -> pd.DataFrame:
        cols = [f for f in HoldingView.__dataclass_fields__]
        return pd.DataFrame([asdict(h) for h in self.holdings], columns=cols)


@dataclass(frozen=True)
class QuoteView:
    symbol: str
    name: str
    price: float
    previous_price: float
    change_pct: float


@dataclass(frozen=True)
class MarketSnapshot:
    quotes: Tuple[QuoteView, ...]

    def quote(self, symbol: str) -> QuoteView:
        for q in self.quotes:
            if q.symbol == symbol:
                return q
        raise KeyError(symbol)

    def to_frame(self) -> pd.DataFrame:
        cols = [f for f in QuoteView.__dataclass_fields__]
        return pd.DataFrame([asdict(q) for q in self.quotes], columns=cols)


def portfolio_snapshot(account: Account, initial_cash: float) -> PortfolioSnapshot:
    views = tuple(
        HoldingView(
            symbol=h.symbol,
            name=h.instrument.name,
            quantity=h.quantity,
            average_cost=h.average_cost,
            current_price=h.instrument.price,
            cost_basis=h.cost_basis(),
            market_value=h.market_value(),
            unrealized_pl=h.unrealized_pl(),
        )
        for h in account.holdings.values()
    )
    total_value = account.total_value()
    return PortfolioSnapshot(
        holdings=views,
        cash=account.cash,
        total_cost=account.total_cost(),
        market_value=account.market_value(),
        total_value=total_value,
        initial_cash=initial_cash,
        total_pl=total_value - initial_cash,
    )


def market_snapshot(instruments: Iterable[Instrument]) -> MarketSnapshot:
    return MarketSnapshot(tuple(
        QuoteView(i.symbol, i.name, i.price, i.previous_price, i.change_pct)
        for i in instruments
    ))


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "timestamp": t.timestamp,
            "action": t.action.value,
            "symbol": t.symbol,
            "quantity": t.quantity,
            "price": t.price,
            "amount": t.amount,
        }
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=["timestamp", "action", "symbol", "quantity", "price", "amount"])
