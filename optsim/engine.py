"""Payoff engine entry point.

:func:`evaluate` is a pure function of its inputs: the leg set, the spot
price, the :class:`~optsim.core.config_models.EvaluationConfig` and the engine
constants from :mod:`optsim.config`. Results are memoized on all of them.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable, Mapping, Tuple, Union

from tabulate import tabulate

from optsim.analysis.metrics import (
    current_pnl,
    find_breakevens,
    max_profit_loss,
    net_premium,
    probability_of_profit,
    std_dev_bands,
)
from optsim.config import get as cfg_get
from optsim.core.config_models import EngineSettings, EvaluationConfig
from optsim.helpers.dateutils import sort_expiries
from optsim.helpers.numeric import to_number
from optsim.logutils import logger
from optsim.models import OptionLeg, PayoffResult
from optsim.pricing.margin_engine import MarginEngine
from optsim.pricing.payoff import active_legs, build_curve, payoff_breakdown
from optsim.pricing.price_range import generate_price_range

LegInput = Union[OptionLeg, Mapping[str, Any]]


def _coerce_legs(legs: Iterable[LegInput] | None) -> Tuple[OptionLeg, ...]:
    if not legs:
        return ()
    return tuple(
        leg if isinstance(leg, OptionLeg) else OptionLeg.from_mapping(leg) for leg in legs
    )


@lru_cache(maxsize=int(cfg_get("EVALUATION_CACHE_SIZE", 128)))
def _evaluate_cached(
    legs: Tuple[OptionLeg, ...],
    spot_price: float,
    config: EvaluationConfig,
    settings: EngineSettings,
) -> PayoffResult:
    active = active_legs(legs, config)

    prices = generate_price_range(
        spot_price,
        [leg.strike for leg in active],
        available_strikes=config.available_strikes,
        zoom=config.zoom,
        settings=settings,
    )
    curve = build_curve(active, prices, config)

    breakevens = find_breakevens(curve) if active else ()
    max_profit, max_loss = max_profit_loss(curve, active)
    margin = MarginEngine.from_settings(settings).compute(legs, config).margin

    return PayoffResult(
        curve=curve,
        breakevens=breakevens,
        pop=probability_of_profit(curve),
        max_profit=max_profit,
        max_loss=max_loss,
        current_pnl=current_pnl(curve, spot_price),
        margin_required=margin,
        net_premium=net_premium(active, config.lot_size),
        std_dev=std_dev_bands(spot_price, settings),
        expiries=tuple(sort_expiries(leg.expiry for leg in legs if leg.expiry)),
    )


def evaluate(
    legs: Iterable[LegInput] | None,
    spot_price: Any,
    config: EvaluationConfig,
) -> PayoffResult:
    """Return the payoff curve and risk metrics for ``legs`` at ``spot_price``.

    ``legs`` may mix :class:`OptionLeg` instances and plain mappings. The
    inputs are never modified and identical inputs always produce the same
    result object.
    """

    leg_set = _coerce_legs(legs)
    spot = to_number(spot_price)
    settings = EngineSettings.from_app_config()

    if config.debug:
        breakdown = payoff_breakdown(leg_set, spot, config)
        table = tabulate(breakdown, headers="keys", tablefmt="github")
        logger.debug(f"[payoff] breakdown @ {spot}:\n{table}")
        logger.debug(f"[payoff] total @ {spot}: {sum(r['payoff'] for r in breakdown)}")

    result = _evaluate_cached(leg_set, spot, config, settings)
    logger.debug(
        f"[payoff] {len(leg_set)} legs spot={spot} pop={result.pop} "
        f"max_profit={result.max_profit} max_loss={result.max_loss} "
        f"margin={result.margin_required}"
    )
    return result


def clear_evaluation_cache() -> None:
    """Drop all memoized evaluation results."""

    _evaluate_cached.cache_clear()


__all__ = ["evaluate", "clear_evaluation_cache"]
