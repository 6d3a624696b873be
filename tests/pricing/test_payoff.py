import pytest

from optsim.core.config_models import EvaluationConfig, ViewMode
from optsim.models import OptionType
from optsim.pricing.payoff import (
    active_legs,
    build_curve,
    intrinsic_value,
    leg_payoff,
    payoff_breakdown,
    total_payoff,
)
from tests.conftest import make_leg


def test_intrinsic_value():
    assert intrinsic_value(OptionType.CALL, 100, 120) == 20
    assert intrinsic_value(OptionType.CALL, 100, 80) == 0
    assert intrinsic_value(OptionType.PUT, 100, 80) == 20
    assert intrinsic_value(OptionType.PUT, 100, 120) == 0


@pytest.mark.parametrize("price", [0, 50, 99, 100, 105, 150, 200])
def test_long_call_identity(config, price):
    leg = make_leg(100, "call", "buy", premium=5, quantity=2)
    expected = (max(0, price - 100) - 5) * 2 * 50
    assert leg_payoff(leg, price, config) == pytest.approx(expected)


@pytest.mark.parametrize("price", [0, 50, 95, 100, 150])
def test_short_put_identity(config, price):
    leg = make_leg(100, "put", "sell", premium=4)
    expected = (4 - max(0, 100 - price)) * 50
    assert leg_payoff(leg, price, config) == pytest.approx(expected)


def test_total_payoff_independent_of_order(config, iron_condor_legs):
    prices = [21800, 21960.5, 22050, 22125.25, 22300]
    for price in prices:
        forward = total_payoff(iron_condor_legs, price, config)
        backward = total_payoff(list(reversed(iron_condor_legs)), price, config)
        assert forward == backward


def test_snapshot_excludes_other_expiries():
    near = make_leg(100, "call", "buy", premium=5, expiry="28-Oct-2025")
    far = make_leg(100, "put", "buy", premium=5, expiry="28-Nov-2025")
    undated = make_leg(90, "put", "sell", premium=2)
    cfg = EvaluationConfig(lot_size=50, snapshot_expiry="28-Oct-2025")

    assert leg_payoff(far, 50, cfg) == 0.0
    assert active_legs([near, far, undated], cfg) == [near, undated]


def test_all_intrinsic_view_keeps_every_leg():
    far = make_leg(100, "put", "buy", premium=5, expiry="28-Nov-2025")
    cfg = EvaluationConfig(
        lot_size=50, snapshot_expiry="28-Oct-2025", view_mode=ViewMode.ALL_INTRINSIC
    )
    assert leg_payoff(far, 50, cfg) == (50 - 5) * 50


def test_build_curve(config):
    leg = make_leg(100, "call", "buy", premium=5)
    curve = build_curve([leg], [50, 100, 200], config)
    assert [p.price for p in curve] == [50.0, 100.0, 200.0]
    assert [p.payoff for p in curve] == [-250.0, -250.0, 4750.0]


def test_payoff_breakdown_rows(config):
    legs = [make_leg(100, "call", "buy", premium=5), make_leg(110, "call", "sell", premium=2)]
    rows = payoff_breakdown(legs, 120, config)
    assert rows[0]["payoff"] == 750.0
    assert rows[1]["payoff"] == -400.0
    assert rows[0]["expiry"] == "N/A"
    assert rows[1]["action"] == "sell"
