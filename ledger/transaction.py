from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

class Action(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

@dataclass(frozen=True)
class Transaction:
    action: Action
    symbol: str
    quantity: int
    price: float
    timestamp: datetime

    @property
    def amount(self) -> float:
        return round(self.price * self.quantity, 2)

    def __str__(self) -> str:
        return f"{self.timestamp:%m/%d/%Y %H:%M} {self.action.value} {self.quantity} {self.symbol} @ ${self.price:,.2f}"
