"""Underlying price grid for payoff curves."""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np

from optsim.core.config_models import EngineSettings
from optsim.helpers.numeric import safe_float, to_number


def _finite_values(values: Iterable[object] | None) -> List[float]:
    if not values:
        return []
    result: List[float] = []
    for value in values:
        number = safe_float(value, accept_inf=False)
        if number is not None:
            result.append(number)
    return result


def generate_price_range(
    spot_price: float,
    strikes: Iterable[float] = (),
    *,
    available_strikes: Optional[Iterable[float]] = None,
    zoom: float = 1.0,
    settings: EngineSettings | None = None,
) -> List[float]:
    """Return evenly spaced ascending prices covering the payoff shape.

    The window is derived from ``available_strikes`` when given, otherwise from
    the leg ``strikes``. Without either, a fixed window of
    ``settings.default_window`` on both sides of spot is used. ``zoom`` above 1
    narrows the visible window around spot and below 1 widens it, but the
    strike span itself always stays in view. Prices never go below zero.
    """

    settings = settings or EngineSettings.from_app_config()
    points = settings.price_points
    spot = to_number(spot_price)

    universe = _finite_values(available_strikes)
    leg_strikes = _finite_values(strikes)

    if not universe and not leg_strikes:
        start = max(0.0, spot - settings.default_window)
        end = spot + settings.default_window
        return np.linspace(start, end, points).tolist()

    source = universe or leg_strikes
    min_strike = min(source)
    max_strike = max(source)

    base_range = max(
        max_strike - min_strike,
        max(settings.min_base_range, abs(spot) * settings.base_range_fraction),
    )
    padding = base_range * settings.range_padding
    start = max(0.0, min(min_strike - padding, spot - base_range))
    end = max(max_strike + padding, spot + base_range)

    zoom_factor = safe_float(zoom, accept_inf=False)
    if zoom_factor is None or zoom_factor <= 0:
        zoom_factor = 1.0
    visible_range = (end - start) / zoom_factor
    r_start = max(0.0, spot - visible_range / 2)
    r_end = spot + visible_range / 2

    actual_start = min(r_start, start)
    actual_end = max(r_end, end)
    return np.linspace(actual_start, actual_end, points).tolist()


__all__ = ["generate_price_range"]
