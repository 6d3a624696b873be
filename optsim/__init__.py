"""Option strategy payoff simulator.

Importing :mod:`optsim` exposes the payoff engine entry point
:func:`evaluate` together with the value objects it consumes and returns.
"""

from .core.config_models import ALL_EXPIRIES, EvaluationConfig, ViewMode
from .engine import clear_evaluation_cache, evaluate
from .models import (
    Action,
    OptionLeg,
    OptionQuote,
    OptionType,
    PayoffResult,
    PricePoint,
    StdDevBands,
    Unbounded,
    is_unbounded,
)

__all__ = [
    "ALL_EXPIRIES",
    "Action",
    "EvaluationConfig",
    "OptionLeg",
    "OptionQuote",
    "OptionType",
    "PayoffResult",
    "PricePoint",
    "StdDevBands",
    "Unbounded",
    "ViewMode",
    "clear_evaluation_cache",
    "evaluate",
    "is_unbounded",
]
