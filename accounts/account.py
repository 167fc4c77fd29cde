from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict
from market.instrument import Instrument
from portfolio.holding import Holding

@dataclass
class Account:
    cash: float = 0.0
    holdings: Dict[str, Holding] = field(default_factory=dict)  # symbol -> holding

    def total_cost(self) -> float:
        return sum(h.cost_basis() for h in self.holdings.values())

    def market_value(self) -> float:
        return sum(h.market_value() for h in self.holdings.values())

    def total_value(self) -> float:
        return self.cash + self.market_value()

    def apply_buy(self, instrument: Instrument, quantity: int, cost: float) -> None:
        if cost > self.cash:
            raise ValueError(f"Cost {cost:.2f} exceeds cash {self.cash:.2f}")
        self.cash = round(self.cash - cost, 2)
        h = self.holdings.get(instrument.symbol)
        if h is None:
            self.holdings[instrument.symbol] = Holding(instrument, quantity, instrument.price)
        else:
            h.add_shares(quantity, cost)

    def apply_sell(self, symbol: str, quantity: int, proceeds: float) -> None:
        h = self.holdings[symbol]
        if quantity > h.quantity:
            raise ValueError(f"Cannot sell {quantity} {symbol}, only {h.quantity} held")
        self.cash = round(self.cash + proceeds, 2)
        if quantity == h.quantity:
            del self.holdings[symbol]
        else:
            h.quantity -= quantity
