"""Random-walk price simulation for the instrument catalog.

Each tick moves every instrument by a uniformly drawn fraction of its
volatility:

    new_price = max(MIN_PRICE, price * (1 + U(-volatility, +volatility)))

rounded to cents. The generator is always passed in so a seeded
``numpy.random.Generator`` replays the same price path.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

import numpy as np

from market.instrument import Instrument


MIN_PRICE = 0.01


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source used for ticks.

    Args:
        seed: Seed for reproducibility. ``None`` draws fresh OS entropy.

    Returns:
        A numpy Generator.
    """
    return np.random.default_rng(seed)


def next_price(price: float, change: float) -> float:
    """Apply a fractional change, floor at MIN_PRICE and round to cents."""
    return round(max(MIN_PRICE, price * (1.0 + change)), 2)


def simulate_tick(instruments: Iterable[Instrument], rng: np.random.Generator) -> Dict[str, float]:
    """Advance every instrument by one tick.

    Args:
        instruments: Instruments to update in place.
        rng: Random source.

    Returns:
        Mapping of symbol -> applied fractional change.
    """
    changes: Dict[str, float] = {}
    for inst in instruments:
        change = float(rng.uniform(-inst.volatility, inst.volatility))
        inst.set_price(next_price(inst.price, change))
        changes[inst.symbol] = change
    return changes
