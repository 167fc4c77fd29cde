from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import yaml

def load_yaml(path: str | Path, missing_ok: bool = False) -> Dict[str, Any]:
    p = Path(path)
    if missing_ok and not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{p}: expected a mapping at top level, got {type(data).__name__}")
    return data

@dataclass(frozen=True)
class LoadedConfig:
    market: Dict[str, Any]
    universe: Dict[str, Any]

def load_all(
    market_path: str | Path = "config/market.yaml",
    universe_path: str | Path = "config/asset_universe.yaml",
) -> LoadedConfig:
    # Missing files fall back to the built-in defaults.
    return LoadedConfig(
        market=load_yaml(market_path, missing_ok=True),
        universe=load_yaml(universe_path, missing_ok=True),
    )
