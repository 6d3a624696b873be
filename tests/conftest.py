import pytest

from optsim.core.config_models import EvaluationConfig
from optsim.engine import clear_evaluation_cache
from optsim.models import Action, OptionLeg, OptionType


@pytest.fixture(autouse=True)
def fresh_evaluation_cache():
    """Make every test start without memoized payoff results."""
    clear_evaluation_cache()
    yield
    clear_evaluation_cache()


@pytest.fixture
def config():
    return EvaluationConfig(lot_size=50)


def make_leg(strike, option_type="call", action="buy", premium=0.0, quantity=1, expiry=None):
    return OptionLeg(
        strike=strike,
        option_type=OptionType.parse(option_type),
        action=Action.parse(action),
        premium=premium,
        quantity=quantity,
        expiry=expiry,
    )


@pytest.fixture
def iron_condor_legs():
    return [
        make_leg(22150, "call", "buy", premium=12.0),
        make_leg(22100, "call", "sell", premium=25.0),
        make_leg(22000, "put", "sell", premium=30.0),
        make_leg(21950, "put", "buy", premium=14.0),
    ]
