from __future__ import annotations

import math

from optsim.core.config_models import EngineSettings, EvaluationConfig
from optsim.models import Unbounded
from optsim.pricing.margin_engine import MarginEngine, calculate_margin
from tests.conftest import make_leg

CONFIG = EvaluationConfig(lot_size=50)


def test_margin_engine_hedged_short_call_charges_width():
    legs = [make_leg(100, "call", "sell"), make_leg(110, "call", "buy")]
    result = MarginEngine().compute(legs, CONFIG)

    assert math.isclose(result.call_margin, 500.0)
    assert math.isclose(result.margin, 500.0)
    assert result.unbounded is False


def test_margin_engine_nets_premiums():
    legs = [make_leg(100, "call", "sell", premium=5), make_leg(110, "call", "buy", premium=2)]
    result = MarginEngine().compute(legs, CONFIG)

    assert math.isclose(result.long_premium, 100.0)
    assert math.isclose(result.short_premium, 250.0)
    assert math.isclose(result.margin, 350.0)


def test_margin_engine_naked_short_call_is_unbounded():
    result = MarginEngine().compute([make_leg(100, "call", "sell", premium=5)], CONFIG)

    assert result.margin is Unbounded.POSITIVE
    assert result.unbounded is True


def test_margin_engine_long_call_below_short_does_not_hedge():
    legs = [make_leg(100, "call", "buy", premium=5), make_leg(110, "call", "sell", premium=2)]
    assert calculate_margin(legs, CONFIG) is Unbounded.POSITIVE


def test_margin_engine_partial_call_hedge_is_unbounded():
    legs = [make_leg(100, "call", "sell", quantity=2), make_leg(110, "call", "buy")]
    assert calculate_margin(legs, CONFIG) is Unbounded.POSITIVE


def test_margin_engine_splits_short_across_hedges():
    legs = [
        make_leg(100, "call", "sell", quantity=2),
        make_leg(110, "call", "buy"),
        make_leg(120, "call", "buy"),
    ]
    assert math.isclose(calculate_margin(legs, CONFIG), 1500.0)


def test_margin_engine_naked_put_uses_notional_fraction():
    assert math.isclose(calculate_margin([make_leg(100, "put", "sell")], CONFIG), 2500.0)
    engine = MarginEngine(naked_put_fraction=0.2)
    assert math.isclose(engine.compute([make_leg(100, "put", "sell")], CONFIG).margin, 1000.0)


def test_margin_engine_put_spread_and_wrong_side_hedge():
    spread = [make_leg(100, "put", "sell"), make_leg(90, "put", "buy")]
    assert math.isclose(calculate_margin(spread, CONFIG), 500.0)

    wrong_side = [make_leg(100, "put", "sell"), make_leg(110, "put", "buy")]
    assert math.isclose(calculate_margin(wrong_side, CONFIG), 2500.0)


def test_margin_engine_puts_use_nearest_lower_hedge_first():
    legs = [
        make_leg(100, "put", "sell", quantity=2),
        make_leg(80, "put", "buy"),
        make_leg(90, "put", "buy"),
    ]
    result = MarginEngine().compute(legs, CONFIG)
    assert math.isclose(result.put_margin, 10 * 50 + 20 * 50)


def test_margin_engine_floors_at_zero():
    legs = [make_leg(100, "put", "sell", premium=60)]
    assert calculate_margin(legs, CONFIG) == 0.0


def test_margin_engine_empty_legs():
    assert calculate_margin([], CONFIG) == 0.0


def test_margin_engine_snapshot_ignores_other_expiries():
    legs = [
        make_leg(100, "call", "sell", expiry="28-Oct-2025"),
        make_leg(100, "put", "sell", expiry="28-Nov-2025"),
    ]
    cfg = EvaluationConfig(lot_size=50, snapshot_expiry="28-Nov-2025")
    assert math.isclose(calculate_margin(legs, cfg), 2500.0)
    assert calculate_margin(legs, CONFIG) is Unbounded.POSITIVE


def test_margin_engine_order_independent(iron_condor_legs):
    forward = calculate_margin(iron_condor_legs, CONFIG)
    backward = calculate_margin(list(reversed(iron_condor_legs)), CONFIG)
    assert forward == backward


def test_margin_engine_from_settings():
    engine = MarginEngine.from_settings(EngineSettings(naked_put_margin_fraction=0.1))
    assert engine.naked_put_fraction == 0.1
