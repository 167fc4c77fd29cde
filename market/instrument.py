from __future__ import annotations
from dataclasses import dataclass

@dataclass
class Instrument:
    symbol: str
    name: str
    price: float
    volatility: float  # max fractional move per tick
    previous_price: float = 0.0

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(f"{self.symbol}: price must be positive, got {self.price}")
        if not 0 <= self.volatility < 1:
            raise ValueError(f"{self.symbol}: volatility must be in [0, 1), got {self.volatility}")
        if self.previous_price <= 0:
            self.previous_price = self.price

    @property
    def change_pct(self) -> float:
        return (self.price - self.previous_price) / self.previous_price

    def set_price(self, price: float) -> None:
        self.previous_price = self.price
        self.price = price
