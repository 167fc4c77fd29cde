"""Trading ledger.

Owns the instrument catalog, the cash account and the transaction log for a
single simulated session, and executes immediate market orders against them:
- buy/sell at the instrument's current price
- weighted-average cost tracking per holding
- market-hours gating
- random-walk price ticks

Every operation takes the ledger lock, so a trade never sees a half-applied
tick and concurrent buy/sell calls are serialized.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from accounts.account import Account
from common.config_loader import LoadedConfig
from engine.results import TradeError, TradeErrorKind, TradeFailure, TradeFill, TradeResult
from ledger.transaction import Action, Transaction
from market.catalog import build_catalog, seed_list
from market.hours import MarketPolicy, is_market_open
from market.instrument import Instrument
from market.price_simulator import make_rng, simulate_tick
from portfolio.holding import Holding
from reporting.summary import MarketSnapshot, PortfolioSnapshot, market_snapshot, portfolio_snapshot


logger = logging.getLogger(__name__)


class TradingLedger:
    """In-memory trading session."""

    def __init__(
        self,
        policy: Optional[MarketPolicy] = None,
        seeds: Optional[List[Tuple[str, str, float, float]]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.policy = policy or MarketPolicy({})
        self.seeds = list(seeds) if seeds is not None else seed_list()
        self.rng = rng if rng is not None else make_rng()
        self._lock = threading.RLock()
        self._catalog: Dict[str, Instrument] = {}
        self._account = Account()
        self._transactions: List[Transaction] = []
        self.initialize()

    @classmethod
    def from_config(cls, cfg: LoadedConfig, seed: Optional[int] = None) -> "TradingLedger":
        """Build a ledger from loaded YAML configuration."""
        return cls(
            policy=MarketPolicy(cfg.market),
            seeds=seed_list(cfg.universe),
            rng=make_rng(seed),
        )

    @property
    def initial_cash(self) -> float:
        return self.policy.initial_cash

    @property
    def cash(self) -> float:
        return self._account.cash

    # Read-only mappings over live state, for inspection. Mutate only
    # through the ledger's operations so every write takes the lock.

    @property
    def holdings(self) -> Mapping[str, Holding]:
        return MappingProxyType(self._account.holdings)

    @property
    def catalog(self) -> Mapping[str, Instrument]:
        return MappingProxyType(self._catalog)

    def set_price(self, symbol: str, price: float) -> None:
        """Move one instrument to a given price, as a tick would.

        Lets callers replay a known price path instead of random ticks.
        """
        if price <= 0:
            raise ValueError(f"{symbol}: price must be positive, got {price}")
        with self._lock:
            self._catalog[symbol].set_price(round(price, 2))
        logger.debug("Price of %s set to %.2f", symbol, price)

    def initialize(self) -> None:
        """Reset catalog prices, cash, holdings and history."""
        with self._lock:
            self._catalog = build_catalog(self.seeds)
            self._account = Account(cash=self.initial_cash)
            self._transactions = []
        logger.debug("Ledger initialized: %d instruments, cash %.2f", len(self._catalog), self.initial_cash)

    def is_market_open(self, now: datetime) -> bool:
        return is_market_open(now, self.policy)

    def simulate_tick(self) -> Dict[str, float]:
        """Move every instrument price one random step."""
        with self._lock:
            changes = simulate_tick(self._catalog.values(), self.rng)
        logger.debug("Market tick applied to %d instruments", len(changes))
        return changes

    # --- preconditions -------------------------------------------------

    def _check_market_open(self, now: datetime) -> None:
        if not self.is_market_open(now):
            raise TradeError(
                TradeErrorKind.MARKET_CLOSED,
                f"Market is closed. Trading available {self.policy.describe_hours()}.",
                at=now,
            )

    @staticmethod
    def _check_quantity(quantity: Any) -> None:
        # bool is an int subclass; True is not a share count
        if isinstance(quantity, bool) or not isinstance(quantity, (int, np.integer)) or quantity <= 0:
            raise TradeError(
                TradeErrorKind.INVALID_QUANTITY,
                f"Invalid quantity: {quantity!r}. Quantity must be a positive whole number.",
                requested=quantity,
            )

    def _instrument(self, symbol: str) -> Instrument:
        inst = self._catalog.get(symbol)
        if inst is None:
            raise TradeError(TradeErrorKind.UNKNOWN_SYMBOL, f"Stock {symbol} not found.", symbol=symbol)
        return inst

    # --- trading -------------------------------------------------------

    def buy(self, symbol: str, quantity: int, now: datetime) -> TradeResult:
        """Buy ``quantity`` shares of ``symbol`` at the current price.

        Args:
            symbol: Catalog symbol (already normalized by the caller).
            quantity: Positive whole number of shares.
            now: Execution time; gates market hours and stamps the transaction.

        Returns:
            TradeFill on success, TradeFailure otherwise. State is unchanged
            on failure.
        """
        with self._lock:
            try:
                self._check_market_open(now)
                inst = self._instrument(symbol)
                self._check_quantity(quantity)
                quantity = int(quantity)
                cost = round(inst.price * quantity, 2)
                if cost > self._account.cash:
                    raise TradeError(
                        TradeErrorKind.INSUFFICIENT_FUNDS,
                        f"Insufficient funds. Needed: ${cost:,.2f}, Available: ${self._account.cash:,.2f}",
                        needed=cost,
                        available=self._account.cash,
                        shortfall=round(cost - self._account.cash, 2),
                    )
            except TradeError as e:
                return self._reject(Action.BUY, symbol, e)

            self._account.apply_buy(inst, quantity, cost)
            self._transactions.append(Transaction(Action.BUY, symbol, quantity, inst.price, now))
            fill = TradeFill(Action.BUY, symbol, quantity, inst.price, cost)
        logger.info("BUY %d %s @ %.2f (total %.2f)", quantity, symbol, fill.price, cost)
        return fill

    def sell(self, symbol: str, quantity: int, now: datetime) -> TradeResult:
        """Sell ``quantity`` held shares of ``symbol`` at the current price."""
        with self._lock:
            try:
                self._check_market_open(now)
                holding = self._account.holdings.get(symbol)
                if holding is None:
                    raise TradeError(
                        TradeErrorKind.NO_HOLDING,
                        f"You don't own any shares of {symbol}",
                        symbol=symbol,
                    )
                self._check_quantity(quantity)
                quantity = int(quantity)
                if holding.quantity < quantity:
                    raise TradeError(
                        TradeErrorKind.INSUFFICIENT_SHARES,
                        f"Insufficient shares. You only own {holding.quantity} shares of {symbol}",
                        requested=quantity,
                        held=holding.quantity,
                        shortfall=quantity - holding.quantity,
                    )
            except TradeError as e:
                return self._reject(Action.SELL, symbol, e)

            price = holding.instrument.price
            proceeds = round(price * quantity, 2)
            self._account.apply_sell(symbol, quantity, proceeds)
            self._transactions.append(Transaction(Action.SELL, symbol, quantity, price, now))
            fill = TradeFill(Action.SELL, symbol, quantity, price, proceeds)
        logger.info("SELL %d %s @ %.2f (total %.2f)", quantity, symbol, price, proceeds)
        return fill

    @staticmethod
    def _reject(action: Action, symbol: str, err: TradeError) -> TradeFailure:
        logger.info("%s %s rejected: %s", action.value, symbol, err.kind.value)
        return err.to_failure()

    # --- views ---------------------------------------------------------

    def portfolio_snapshot(self) -> PortfolioSnapshot:
        with self._lock:
            return portfolio_snapshot(self._account, self.initial_cash)

    def market_snapshot(self) -> MarketSnapshot:
        with self._lock:
            return market_snapshot(self._catalog.values())

    def transaction_log(self) -> Tuple[Transaction, ...]:
        with self._lock:
            return tuple(self._transactions)
