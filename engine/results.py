"""Trade outcomes returned by the trading ledger.

``buy`` and ``sell`` never raise for business-rule failures. They return
either a ``TradeFill`` or a ``TradeFailure``; callers branch on ``.ok``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

from ledger.transaction import Action


class TradeErrorKind(str, Enum):
    MARKET_CLOSED = "MARKET_CLOSED"
    UNKNOWN_SYMBOL = "UNKNOWN_SYMBOL"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    NO_HOLDING = "NO_HOLDING"
    INSUFFICIENT_SHARES = "INSUFFICIENT_SHARES"


@dataclass(frozen=True)
class TradeFill:
    """An executed market order."""

    action: Action
    symbol: str
    quantity: int
    price: float
    total: float

    ok = True

    def __str__(self) -> str:
        verb = "bought" if self.action is Action.BUY else "sold"
        return f"Successfully {verb} {self.quantity} shares of {self.symbol} at ${self.price:,.2f} per share."


@dataclass(frozen=True)
class TradeFailure:
    """A rejected order. ``details`` carries the amounts behind the rejection."""

    kind: TradeErrorKind
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    ok = False

    def __str__(self) -> str:
        return self.message


TradeResult = Union[TradeFill, TradeFailure]


class TradeError(Exception):
    """Raised by precondition checks; converted to a TradeFailure at the boundary."""

    def __init__(self, kind: TradeErrorKind, message: str, **details: Any) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def to_failure(self) -> TradeFailure:
        return TradeFailure(self.kind, self.message, dict(self.details))
