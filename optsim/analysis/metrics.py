"""Summary metrics derived from a sampled payoff curve."""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

from optsim.core.config_models import EngineSettings
from optsim.models import (
    Action,
    Metric,
    OptionLeg,
    OptionType,
    PricePoint,
    StdDevBands,
    Unbounded,
)

_FLAT_EPSILON = 1e-9


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def find_breakevens(curve: Sequence[PricePoint]) -> Tuple[float, ...]:
    """Return the prices at which the curve crosses or touches zero.

    Crossings are linearly interpolated between neighbouring samples; a flat
    segment lying on zero yields its midpoint. Results are rounded to whole
    price units, deduplicated and sorted.
    """

    found = set()
    for prev, curr in zip(curve, curve[1:]):
        crosses = (prev.payoff <= 0 <= curr.payoff) or (prev.payoff >= 0 >= curr.payoff)
        if not crosses:
            continue
        dx = curr.price - prev.price
        dy = curr.payoff - prev.payoff
        if abs(dy) < _FLAT_EPSILON or dx == 0:
            x = (prev.price + curr.price) / 2
        else:
            slope = dy / dx
            x = prev.price - prev.payoff / slope
        found.add(_round_half_up(x))
    return tuple(sorted(found))


def probability_of_profit(curve: Sequence[PricePoint]) -> float:
    """Return the share of sampled prices with positive P&L, in percent.

    This counts grid points, it is not weighted by any price distribution.
    """

    if not curve:
        return 0.0
    profitable = sum(1 for point in curve if point.payoff > 0)
    return round(profitable / len(curve) * 100, 1)


def has_long_call(legs: Iterable[OptionLeg]) -> bool:
    return any(
        leg.option_type is OptionType.CALL and leg.action is Action.BUY for leg in legs
    )


def has_naked_short_call(legs: Iterable[OptionLeg]) -> bool:
    """Return ``True`` if a short call lacks a single covering long call.

    A short call is covered by one long call at a strictly higher strike with
    at least the same quantity.
    """

    legs = list(legs)
    long_calls = [
        leg for leg in legs if leg.option_type is OptionType.CALL and leg.action is Action.BUY
    ]
    for leg in legs:
        if leg.option_type is not OptionType.CALL or leg.action is not Action.SELL:
            continue
        covered = any(
            buy.strike > leg.strike and buy.quantity >= leg.quantity for buy in long_calls
        )
        if not covered:
            return True
    return False


def max_profit_loss(
    curve: Sequence[PricePoint], legs: Sequence[OptionLeg]
) -> Tuple[Metric, Metric]:
    """Return ``(max_profit, max_loss)`` for the sampled curve.

    Any long call makes profit unbounded and a naked short call makes loss
    unbounded. Put exposure is always bounded.
    """

    if curve:
        payoffs = [point.payoff for point in curve]
        sampled_max: float = max(payoffs)
        sampled_min: float = min(payoffs)
    else:
        sampled_max = sampled_min = 0.0

    max_profit: Metric = Unbounded.POSITIVE if has_long_call(legs) else sampled_max
    max_loss: Metric = Unbounded.NEGATIVE if has_naked_short_call(legs) else sampled_min
    return max_profit, max_loss


def current_pnl(curve: Sequence[PricePoint], spot_price: float) -> float:
    """Return the payoff of the sample nearest ``spot_price``."""

    if not curve:
        return 0.0
    nearest = min(curve, key=lambda point: abs(point.price - spot_price))
    return nearest.payoff


def std_dev_bands(spot_price: float, settings: EngineSettings | None = None) -> StdDevBands:
    # fixed volatility/time assumptions; display markers only
    settings = settings or EngineSettings.from_app_config()
    sigma = spot_price * settings.annual_vol * math.sqrt(settings.days_to_expiry / 365)
    return StdDevBands(spot=spot_price, sigma=sigma)


def net_premium(legs: Iterable[OptionLeg], lot_size: int) -> float:
    """Return premium received (positive) or paid (negative) for ``legs``."""

    return math.fsum(
        (leg.premium if leg.action is Action.SELL else -leg.premium) * leg.quantity * lot_size
        for leg in legs
    )


__all__ = [
    "current_pnl",
    "find_breakevens",
    "has_long_call",
    "has_naked_short_call",
    "max_profit_loss",
    "net_premium",
    "probability_of_profit",
    "std_dev_bands",
]
