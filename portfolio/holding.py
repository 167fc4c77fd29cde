from __future__ import annotations
from dataclasses import dataclass
from market.instrument import Instrument

@dataclass
class Holding:
    instrument: Instrument
    quantity: int
    average_cost: float

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    def cost_basis(self) -> float:
        return self.average_cost * self.quantity

    def market_value(self) -> float:
        return self.instrument.price * self.quantity

    def unrealized_pl(self) -> float:
        return (self.instrument.price - self.average_cost) * self.quantity

    def add_shares(self, quantity: int, cost: float) -> None:
        """Merge a buy of ``quantity`` shares costing ``cost`` in total."""
        old_qty = self.quantity
        self.average_cost = (self.average_cost * old_qty + cost) / (old_qty + quantity)
        self.quantity = old_qty + quantity
