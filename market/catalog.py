"""Instrument catalog construction.

The catalog is seeded once per session, either from the ``instruments``
section of the asset universe config or from the built-in list below.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from market.instrument import Instrument


# (symbol, name, price, volatility)
DEFAULT_INSTRUMENTS: List[Tuple[str, str, float, float]] = [
    ("AAPL", "Apple Inc.", 185.00, 0.02),
    ("GOOGL", "Alphabet Inc.", 145.50, 0.018),
    ("MSFT", "Microsoft Corp.", 420.00, 0.015),
    ("AMZN", "Amazon.com Inc.", 180.00, 0.022),
    ("TSLA", "Tesla Inc.", 175.00, 0.025),
    ("NFLX", "Netflix Inc.", 620.00, 0.02),
    ("META", "Meta Platforms", 485.00, 0.019),
    ("NVDA", "NVIDIA Corp.", 950.00, 0.023),
]


def seed_list(universe: Dict[str, Any] | None = None) -> List[Tuple[str, str, float, float]]:
    """Read the seed list from universe configuration.

    Args:
        universe: Parsed asset universe YAML. ``None`` or a config without an
            ``instruments`` section yields the default list.

    Returns:
        List of (symbol, name, price, volatility) tuples in config order.
    """
    instruments = (universe or {}).get("instruments")
    if not instruments:
        return list(DEFAULT_INSTRUMENTS)

    seeds = []
    for symbol, info in instruments.items():
        info = info or {}
        if not isinstance(info, dict):
            raise ValueError(f"Instrument {symbol} must be a mapping")
        if "price" not in info:
            raise ValueError(f"Instrument {symbol} has no price")
        seeds.append((
            str(symbol).upper(),
            str(info.get("name", symbol)),
            float(info["price"]),
            float(info.get("volatility", 0.02)),
        ))
    return seeds


def build_catalog(seeds: List[Tuple[str, str, float, float]]) -> Dict[str, Instrument]:
    """Build symbol -> Instrument mapping, preserving seed order."""
    if not seeds:
        raise ValueError("Instrument catalog cannot be empty")
    catalog: Dict[str, Instrument] = {}
    for symbol, name, price, volatility in seeds:
        if symbol in catalog:
            raise ValueError(f"Duplicate instrument symbol: {symbol}")
        catalog[symbol] = Instrument(symbol, name, round(price, 2), volatility)
    return catalog
