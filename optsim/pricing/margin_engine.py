"""Approximate margin for a set of option legs with hedge recognition."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from optsim.core.config_models import EngineSettings, EvaluationConfig
from optsim.logutils import log_result, logger
from optsim.models import Action, Metric, OptionLeg, OptionType, Unbounded
from optsim.pricing.payoff import active_legs


@dataclass(frozen=True)
class MarginComputation:
    """Breakdown of a margin estimate.

    When a naked short call is present ``margin`` and ``call_margin`` are
    :attr:`Unbounded.POSITIVE` and the remaining components are not
    evaluated (left at ``0``).
    """

    margin: Metric
    call_margin: Metric = 0.0
    put_margin: float = 0.0
    long_premium: float = 0.0
    short_premium: float = 0.0

    @property
    def unbounded(self) -> bool:
        return isinstance(self.margin, Unbounded)


@dataclass
class _Slot:
    """Mutable working copy of a leg's strike and remaining quantity."""

    strike: float
    qty: int


def _slots(legs: Iterable[OptionLeg], descending: bool) -> List[_Slot]:
    slots = [_Slot(leg.strike, leg.quantity) for leg in legs]
    slots.sort(key=lambda s: (s.strike, s.qty), reverse=descending)
    return slots


class MarginEngine:
    """Greedy hedge-pairing margin approximation.

    Short legs are paired with long legs of the same type that cap their
    risk: a long call at a strictly higher strike or a long put at a strictly
    lower strike. Each hedged unit is charged the spread width, naked puts a
    fixed fraction of notional, and any naked short call makes the margin
    unbounded.
    """

    def __init__(self, naked_put_fraction: float = 0.5) -> None:
        self.naked_put_fraction = naked_put_fraction

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> "MarginEngine":
        settings = settings or EngineSettings.from_app_config()
        return cls(naked_put_fraction=settings.naked_put_margin_fraction)

    @staticmethod
    def relevant_legs(
        legs: Iterable[OptionLeg], config: EvaluationConfig
    ) -> List[OptionLeg]:
        """Return legs that count for margin under ``config``.

        In the expiry-only view with a specific snapshot only legs expiring on
        that snapshot (or carrying no expiry) are used.
        """
        return active_legs(legs, config)

    def spread_margin(
        self,
        shorts: Sequence[OptionLeg],
        longs: Sequence[OptionLeg],
        option_type: OptionType,
        lot_size: int,
    ) -> Metric:
        """Return margin for one option type.

        Calls are walked upward from the lowest short strike and puts
        downward from the highest, so each short consumes the nearest
        qualifying hedge first.
        """

        is_call = option_type is OptionType.CALL
        short_slots = _slots(shorts, descending=not is_call)
        long_slots = _slots(longs, descending=not is_call)

        parts: List[float] = []
        for short in short_slots:
            remaining = short.qty
            for hedge in long_slots:
                if hedge.qty <= 0:
                    continue
                covers = hedge.strike > short.strike if is_call else hedge.strike < short.strike
                if not covers:
                    continue
                hedged = min(remaining, hedge.qty)
                parts.append(abs(hedge.strike - short.strike) * lot_size * hedged)
                hedge.qty -= hedged
                remaining -= hedged
                if remaining <= 0:
                    break

            if remaining > 0:
                if is_call:
                    logger.debug(
                        f"[margin] naked short call @ {short.strike} x{remaining}"
                    )
                    return Unbounded.POSITIVE
                parts.append(
                    short.strike * lot_size * remaining * self.naked_put_fraction
                )
        return math.fsum(parts)

    def compute(
        self, legs: Iterable[OptionLeg], config: EvaluationConfig
    ) -> MarginComputation:
        relevant = self.relevant_legs(legs, config)
        if not relevant:
            return MarginComputation(margin=0.0)

        lot_size = config.lot_size
        calls = [leg for leg in relevant if leg.option_type is OptionType.CALL]
        puts = [leg for leg in relevant if leg.option_type is OptionType.PUT]

        call_margin = self.spread_margin(
            [leg for leg in calls if leg.action is Action.SELL],
            [leg for leg in calls if leg.action is Action.BUY],
            OptionType.CALL,
            lot_size,
        )
        if isinstance(call_margin, Unbounded):
            return MarginComputation(margin=Unbounded.POSITIVE, call_margin=call_margin)

        put_margin = self.spread_margin(
            [leg for leg in puts if leg.action is Action.SELL],
            [leg for leg in puts if leg.action is Action.BUY],
            OptionType.PUT,
            lot_size,
        )
        if isinstance(put_margin, Unbounded):  # pragma: no cover - puts are bounded
            return MarginComputation(margin=Unbounded.POSITIVE)

        long_premium = math.fsum(
            leg.premium * leg.quantity * lot_size
            for leg in relevant
            if leg.action is Action.BUY
        )
        short_premium = math.fsum(
            leg.premium * leg.quantity * lot_size
            for leg in relevant
            if leg.action is Action.SELL
        )
        total = math.fsum([call_margin, put_margin, long_premium, -short_premium])
        return MarginComputation(
            margin=max(0.0, total),
            call_margin=call_margin,
            put_margin=put_margin,
            long_premium=long_premium,
            short_premium=short_premium,
        )


@log_result
def calculate_margin(
    legs: Iterable[OptionLeg],
    config: EvaluationConfig,
    settings: EngineSettings | None = None,
) -> Metric:
    """Return the approximate margin required to hold ``legs``."""

    return MarginEngine.from_settings(settings).compute(legs, config).margin


__all__ = [
    "MarginComputation",
    "MarginEngine",
    "calculate_margin",
]
