"""Immutable operations on a user's working set of legs."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from optsim.logutils import logger
from optsim.models import Action, OptionLeg, OptionQuote, OptionType
from optsim.strategies import StrategyName
from optsim.strategies.templates import build_template

LegSet = Tuple[OptionLeg, ...]


def leg_from_quote(
    quote: OptionQuote,
    option_type: OptionType | str,
    action: Action | str,
    quantity: int = 1,
) -> OptionLeg:
    """Return a new leg priced from ``quote``."""

    kind = OptionType.parse(option_type)
    return OptionLeg(
        strike=quote.strike,
        option_type=kind,
        action=action,
        premium=quote.premium_for(kind),
        quantity=quantity,
        expiry=quote.expiry,
    )


def add_leg(legs: Sequence[OptionLeg], leg: OptionLeg) -> LegSet:
    return (*legs, leg)


def remove_leg(legs: Sequence[OptionLeg], leg_id: str) -> LegSet:
    return tuple(leg for leg in legs if leg.id != leg_id)


def update_quantity(legs: Sequence[OptionLeg], leg_id: str, quantity: int) -> LegSet:
    """Return ``legs`` with the quantity of ``leg_id`` replaced.

    The leg keeps its id; unknown ids leave the set unchanged.
    """
    return tuple(
        replace(leg, quantity=quantity) if leg.id == leg_id else leg for leg in legs
    )


def clear_legs() -> LegSet:
    return ()


def _find_quote(
    quotes: Iterable[OptionQuote], strike: float, expiry: Optional[str]
) -> Optional[OptionQuote]:
    for quote in quotes:
        if quote.strike != strike:
            continue
        if expiry is not None and quote.expiry != expiry:
            continue
        return quote
    return None


def apply_template(
    name: StrategyName | str,
    quotes: Sequence[OptionQuote],
    spot_price: float,
    strike_interval: float,
    *,
    expiry: Optional[str] = None,
    quantity: int = 1,
) -> LegSet:
    """Return a fresh leg set for strategy ``name`` priced from ``quotes``.

    Template legs whose strike (and ``expiry`` when given) has no quote are
    skipped with a warning.
    """

    legs: List[OptionLeg] = []
    for template_leg in build_template(name, spot_price, strike_interval):
        quote = _find_quote(quotes, template_leg.strike, expiry)
        if quote is None:
            logger.warning(
                f"[template] {name}: no quote for {template_leg.option_type.value} "
                f"@ {template_leg.strike} (expiry={expiry or 'any'}), leg skipped"
            )
            continue
        legs.append(
            leg_from_quote(quote, template_leg.option_type, template_leg.action, quantity)
        )
    return tuple(legs)


__all__ = [
    "LegSet",
    "add_leg",
    "apply_template",
    "clear_legs",
    "leg_from_quote",
    "remove_leg",
    "update_quantity",
]
