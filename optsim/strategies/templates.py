"""Predefined multi-leg strategies anchored on the at-the-money strike."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List

from optsim.models import Action, OptionType
from optsim.strategies import StrategyName


@dataclass(frozen=True)
class TemplateLeg:
    """Strike/type/action of a template leg, before a premium is attached."""

    option_type: OptionType
    action: Action
    strike: float


def atm_strike(spot_price: float, strike_interval: float) -> float:
    """Return the listed strike closest to ``spot_price`` (halves round up)."""

    if strike_interval <= 0:
        return float(spot_price)
    return math.floor(spot_price / strike_interval + 0.5) * strike_interval


def _long_straddle(atm: float, step: float) -> List[TemplateLeg]:
    return [
        TemplateLeg(OptionType.CALL, Action.BUY, atm),
        TemplateLeg(OptionType.PUT, Action.BUY, atm),
    ]


def _long_strangle(atm: float, step: float) -> List[TemplateLeg]:
    return [
        TemplateLeg(OptionType.CALL, Action.BUY, atm + step),
        TemplateLeg(OptionType.PUT, Action.BUY, atm - step),
    ]


def _iron_condor(atm: float, step: float) -> List[TemplateLeg]:
    return [
        TemplateLeg(OptionType.CALL, Action.BUY, atm + 2 * step),
        TemplateLeg(OptionType.CALL, Action.SELL, atm + step),
        TemplateLeg(OptionType.PUT, Action.SELL, atm - step),
        TemplateLeg(OptionType.PUT, Action.BUY, atm - 2 * step),
    ]


def _bull_call_spread(atm: float, step: float) -> List[TemplateLeg]:
    return [
        TemplateLeg(OptionType.CALL, Action.BUY, atm),
        TemplateLeg(OptionType.CALL, Action.SELL, atm + step),
    ]


def _bear_put_spread(atm: float, step: float) -> List[TemplateLeg]:
    return [
        TemplateLeg(OptionType.PUT, Action.BUY, atm),
        TemplateLeg(OptionType.PUT, Action.SELL, atm - step),
    ]


TEMPLATES: Dict[StrategyName, Callable[[float, float], List[TemplateLeg]]] = {
    StrategyName.LONG_STRADDLE: _long_straddle,
    StrategyName.LONG_STRANGLE: _long_strangle,
    StrategyName.IRON_CONDOR: _iron_condor,
    StrategyName.BULL_CALL_SPREAD: _bull_call_spread,
    StrategyName.BEAR_PUT_SPREAD: _bear_put_spread,
}


def build_template(
    name: StrategyName | str, spot_price: float, strike_interval: float
) -> List[TemplateLeg]:
    """Return the template legs for ``name`` around ``spot_price``.

    Raises :class:`ValueError` for unknown strategy names.
    """

    strategy = StrategyName(name)
    atm = atm_strike(spot_price, strike_interval)
    return TEMPLATES[strategy](atm, strike_interval)


__all__ = ["TEMPLATES", "TemplateLeg", "atm_strike", "build_template"]
