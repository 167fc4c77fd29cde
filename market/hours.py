from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, time
from functools import cached_property
from typing import Any, Dict, FrozenSet

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_INITIAL_CASH = 10000.00
DEFAULT_OPEN = "09:30"
DEFAULT_CLOSE = "16:00"


def _parse_time(value: Any) -> time:
    # YAML may hand back "09:30" or, unquoted, a sexagesimal int (570).
    if isinstance(value, time):
        return value
    if isinstance(value, int):
        return time(value // 60, value % 60)
    return time.fromisoformat(str(value))


def _fmt_time(t: time) -> str:
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d}{suffix}"


@dataclass(frozen=True)
class MarketPolicy:
    """Session settings wrapped around the raw market config.

    Values are parsed once, on construction, so a bad config fails here
    rather than on the first trade.
    """

    raw: Dict[str, Any]

    def __post_init__(self) -> None:
        if self.market_open > self.market_close:
            raise ValueError(f"market open {self.market_open} is after close {self.market_close}")
        for name in ("trading_days", "initial_cash"):
            getattr(self, name)

    @cached_property
    def initial_cash(self) -> float:
        try:
            cash = round(float(self.raw.get("initial_cash", DEFAULT_INITIAL_CASH)), 2)
        except TypeError:
            raise ValueError(f"initial_cash must be a number, got {self.raw.get('initial_cash')!r}")
        if cash < 0:
            raise ValueError(f"initial_cash must be non-negative, got {cash}")
        return cash

    @cached_property
    def market_open(self) -> time:
        return _parse_time((self.raw.get("market_hours") or {}).get("open", DEFAULT_OPEN))

    @cached_property
    def market_close(self) -> time:
        return _parse_time((self.raw.get("market_hours") or {}).get("close", DEFAULT_CLOSE))

    @cached_property
    def trading_days(self) -> FrozenSet[int]:
        """Weekday numbers (Monday=0) on which trading is allowed."""
        names = (self.raw.get("market_hours") or {}).get("trading_days", WEEKDAYS[:5])
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, (list, tuple)):
            raise ValueError(f"trading_days must be a list of weekday names, got {names!r}")
        days = set()
        for n in names:
            key = str(n).lower()
            if key not in WEEKDAYS:
                raise ValueError(f"Unknown trading day: {n}")
            days.add(WEEKDAYS.index(key))
        return frozenset(days)

    def describe_hours(self) -> str:
        days = sorted(self.trading_days)
        if not days:
            return "no trading days"
        if days == list(range(days[0], days[-1] + 1)):
            day_span = f"{WEEKDAYS[days[0]][:3].title()}-{WEEKDAYS[days[-1]][:3].title()}"
        else:
            day_span = ",".join(WEEKDAYS[d][:3].title() for d in days)
        return f"{day_span} {_fmt_time(self.market_open)}-{_fmt_time(self.market_close)}"


def is_market_open(now: datetime, policy: MarketPolicy) -> bool:
    t = now.time()
    return (
        policy.market_open <= t <= policy.market_close
        and now.weekday() in policy.trading_days
    )
