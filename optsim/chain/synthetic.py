"""Synthetic option chain generator used as an offline quote source.

Premiums follow a simple time-value heuristic rather than a full pricing
model; volume, open interest and daily change are random draws from a
seedable :func:`numpy.random.default_rng` generator.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from optsim.chain.instruments import Instrument, get_instrument
from optsim.helpers.dateutils import days_to_expiry
from optsim.logutils import logger
from optsim.models import OptionQuote

MIN_PREMIUM = 0.05
DEFAULT_NUM_STRIKES = 15


@dataclass(frozen=True)
class ChainRow:
    """Call and put quotes for one strike/expiry."""

    strike: float
    expiry: str
    call_oi: int
    call_volume: int
    call_ltp: float
    call_change: float
    call_iv: float
    call_bid: float
    call_ask: float
    put_ltp: float
    put_change: float
    put_volume: int
    put_oi: int
    put_iv: float
    put_bid: float
    put_ask: float

    def to_quote(self) -> OptionQuote:
        return OptionQuote(
            strike=self.strike,
            expiry=self.expiry,
            call_premium=self.call_ltp,
            put_premium=self.put_ltp,
        )


@dataclass(frozen=True)
class MarketSummary:
    instrument: Instrument
    pcr: float
    total_call_oi: int
    total_put_oi: int
    sentiment: str


def synthetic_premium(
    spot: float, strike: float, is_call: bool, iv: float, days: int
) -> float:
    """Return an approximate option premium.

    Intrinsic value plus a time value that decays exponentially with the
    distance from spot.
    """
    intrinsic = max(0.0, spot - strike) if is_call else max(0.0, strike - spot)
    time_value = (iv / 100.0) * math.sqrt(max(days, 0) / 365.0) * spot * 0.4
    atmness = math.exp(-abs(spot - strike) / (spot * 0.05)) if spot > 0 else 0.0
    return max(MIN_PREMIUM, round(intrinsic + time_value * atmness, 2))


def _strikes(spot: float, interval: float, count: int) -> List[float]:
    center = math.floor(spot / interval + 0.5) * interval
    half = count // 2
    return [center + i * interval for i in range(-half, half + 1)]


def _change(rng: np.random.Generator, in_the_money: bool) -> float:
    if in_the_money:
        return round(5 + rng.random() * 15, 2)
    return round(-2 - rng.random() * 10, 2)


def _rows_for_expiry(
    instrument: Instrument,
    expiry: str,
    days: int,
    rng: np.random.Generator,
    num_strikes: int,
) -> List[ChainRow]:
    spot = instrument.spot_price
    interval = instrument.strike_interval
    rows: List[ChainRow] = []
    for strike in _strikes(spot, interval, num_strikes):
        distance = abs(strike - spot)
        call_itm = strike < spot
        put_itm = strike > spot

        base_iv = 16 + distance / spot * 20
        call_iv = round(base_iv + (-1 if call_itm else 2), 2)
        put_iv = round(base_iv + (-1 if put_itm else 2), 2)
        call_ltp = synthetic_premium(spot, strike, True, call_iv, days)
        put_ltp = synthetic_premium(spot, strike, False, put_iv, days)

        multiplier = 3 if distance <= interval else 1
        base_volume = 5000 + rng.random() * 10000
        base_oi = 20000 + rng.random() * 50000

        rows.append(
            ChainRow(
                strike=float(strike),
                expiry=expiry,
                call_oi=int(round(base_oi * multiplier)),
                call_volume=int(round(base_volume * multiplier)),
                call_ltp=call_ltp,
                call_change=_change(rng, call_itm),
                call_iv=call_iv,
                call_bid=round(call_ltp * 0.98, 2),
                call_ask=round(call_ltp * 1.02, 2),
                put_ltp=put_ltp,
                put_change=_change(rng, put_itm),
                put_volume=int(round(base_volume * multiplier * 0.9)),
                put_oi=int(round(base_oi * multiplier * 1.1)),
                put_iv=put_iv,
                put_bid=round(put_ltp * 0.98, 2),
                put_ask=round(put_ltp * 1.02, 2),
            )
        )
    return rows


def generate_option_chain(
    symbol: str,
    expiry: Optional[str] = None,
    *,
    today: Optional[date] = None,
    seed: Optional[int] = None,
    num_strikes: int = DEFAULT_NUM_STRIKES,
) -> List[ChainRow]:
    """Return a synthetic chain for ``symbol``.

    Only ``expiry`` is generated when given, otherwise every listed expiry of
    the instrument. Unknown symbols yield an empty list.
    """

    instrument = get_instrument(symbol)
    if instrument is None:
        logger.warning(f"Unknown instrument {symbol!r}, empty chain")
        return []

    rng = np.random.default_rng(seed)
    expiries = [expiry] if expiry else list(instrument.expiries)
    rows: List[ChainRow] = []
    for label in expiries:
        days = days_to_expiry(label, today)
        rows.extend(_rows_for_expiry(instrument, label, days, rng, num_strikes))
    logger.debug(
        f"Generated {len(rows)} chain rows for {instrument.symbol} "
        f"({len(expiries)} expiries)"
    )
    return rows


def chain_quotes(rows: Iterable[ChainRow]) -> List[OptionQuote]:
    return [row.to_quote() for row in rows]


def chain_frame(rows: Sequence[ChainRow]) -> pd.DataFrame:
    """Return ``rows`` as a DataFrame with one column per :class:`ChainRow` field."""

    records: List[Dict[str, object]] = [asdict(row) for row in rows]
    columns = list(ChainRow.__dataclass_fields__)
    return pd.DataFrame(records, columns=columns)


def put_call_ratio(rows: Sequence[ChainRow]) -> float:
    """Return total put OI divided by total call OI, rounded to 2 decimals.

    ``0.0`` is returned when there is no call open interest.
    """
    total_call = sum(row.call_oi for row in rows)
    total_put = sum(row.put_oi for row in rows)
    if total_call <= 0:
        return 0.0
    return round(total_put / total_call, 2)


def _sentiment(pcr: float) -> str:
    if pcr > 1.2:
        return "Bullish"
    if pcr < 0.8:
        return "Bearish"
    return "Neutral"


def market_summary(
    symbol: str, *, today: Optional[date] = None, seed: Optional[int] = None
) -> Optional[MarketSummary]:
    """Return PCR, open interest totals and sentiment for ``symbol``."""

    instrument = get_instrument(symbol)
    if instrument is None:
        return None
    rows = generate_option_chain(instrument.symbol, today=today, seed=seed)
    pcr = put_call_ratio(rows)
    return MarketSummary(
        instrument=instrument,
        pcr=pcr,
        total_call_oi=sum(row.call_oi for row in rows),
        total_put_oi=sum(row.put_oi for row in rows),
        sentiment=_sentiment(pcr),
    )


__all__ = [
    "ChainRow",
    "MarketSummary",
    "chain_frame",
    "chain_quotes",
    "generate_option_chain",
    "market_summary",
    "put_call_ratio",
    "synthetic_premium",
]
