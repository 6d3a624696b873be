"""Expiry payoff of individual legs and of a whole leg set."""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from optsim.core.config_models import EvaluationConfig
from optsim.models import Action, OptionLeg, OptionType, PricePoint


def intrinsic_value(option_type: OptionType, strike: float, price: float) -> float:
    """Return the exercise value of one unit at ``price``."""

    if option_type is OptionType.CALL:
        return max(0.0, price - strike)
    return max(0.0, strike - price)


def is_leg_active(leg: OptionLeg, config: EvaluationConfig) -> bool:
    """Return ``True`` when ``leg`` contributes at the configured snapshot.

    Only the expiry-only view with a specific snapshot excludes legs, and only
    those carrying a different expiry. Legs without an expiry apply to every
    snapshot.
    """

    if not config.filters_by_expiry or leg.expiry is None:
        return True
    return leg.expiry == config.snapshot_expiry


def active_legs(legs: Iterable[OptionLeg], config: EvaluationConfig) -> List[OptionLeg]:
    return [leg for leg in legs if is_leg_active(leg, config)]


def leg_payoff(leg: OptionLeg, price: float, config: EvaluationConfig) -> float:
    """Return the signed P&L of ``leg`` at ``price`` in currency units.

    Intrinsic value is used at every snapshot; time value is not modelled.
    """

    if not is_leg_active(leg, config):
        return 0.0
    intrinsic = intrinsic_value(leg.option_type, leg.strike, price)
    scale = leg.quantity * config.lot_size
    if leg.action is Action.BUY:
        return (intrinsic - leg.premium) * scale
    return (leg.premium - intrinsic) * scale


def total_payoff(legs: Iterable[OptionLeg], price: float, config: EvaluationConfig) -> float:
    # fsum is exactly rounded, so the result does not depend on leg order
    return math.fsum(leg_payoff(leg, price, config) for leg in legs)


def build_curve(
    legs: Sequence[OptionLeg],
    prices: Iterable[float],
    config: EvaluationConfig,
) -> Tuple[PricePoint, ...]:
    """Return the aggregate P&L sampled at ``prices``."""

    return tuple(
        PricePoint(price=float(price), payoff=total_payoff(legs, price, config))
        for price in prices
    )


def payoff_breakdown(
    legs: Iterable[OptionLeg], price: float, config: EvaluationConfig
) -> List[Dict[str, Any]]:
    """Return one row per leg with its contribution at ``price``."""

    rows: List[Dict[str, Any]] = []
    for leg in legs:
        rows.append(
            {
                "strike": leg.strike,
                "type": leg.option_type.value,
                "action": leg.action.value,
                "expiry": leg.expiry or "N/A",
                "premium": leg.premium,
                "qty": leg.quantity,
                "payoff": leg_payoff(leg, price, config),
            }
        )
    return rows


__all__ = [
    "active_legs",
    "build_curve",
    "intrinsic_value",
    "is_leg_active",
    "leg_payoff",
    "payoff_breakdown",
    "total_payoff",
]
