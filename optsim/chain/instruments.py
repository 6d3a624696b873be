"""Static registry of the underlyings the simulator knows about."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Instrument:
    symbol: str
    spot_price: float
    change: float
    change_percent: float
    lot_size: int
    strike_interval: float
    expiries: Tuple[str, ...]


INSTRUMENTS: Dict[str, Instrument] = {
    "NIFTY": Instrument(
        symbol="NIFTY",
        spot_price=22045.0,
        change=185.5,
        change_percent=0.85,
        lot_size=50,
        strike_interval=50.0,
        expiries=("28-Oct-2025", "04-Nov-2025", "28-Nov-2025"),
    ),
    "BANKNIFTY": Instrument(
        symbol="BANKNIFTY",
        spot_price=47250.0,
        change=-125.3,
        change_percent=-0.26,
        lot_size=25,
        strike_interval=100.0,
        expiries=("28-Oct-2025", "04-Nov-2025", "28-Nov-2025"),
    ),
    "RELIANCE": Instrument(
        symbol="RELIANCE",
        spot_price=2850.0,
        change=42.5,
        change_percent=1.51,
        lot_size=250,
        strike_interval=50.0,
        expiries=("28-Oct-2025", "28-Nov-2025"),
    ),
    "TCS": Instrument(
        symbol="TCS",
        spot_price=3680.0,
        change=-18.75,
        change_percent=-0.51,
        lot_size=125,
        strike_interval=50.0,
        expiries=("28-Oct-2025", "28-Nov-2025"),
    ),
}


def get_instrument(symbol: str) -> Optional[Instrument]:
    """Return the registered instrument for ``symbol`` (case-insensitive)."""

    return INSTRUMENTS.get(str(symbol or "").strip().upper())


__all__ = ["INSTRUMENTS", "Instrument", "get_instrument"]
