"""Payoff, price grid and margin calculations."""

from .margin_engine import MarginComputation, MarginEngine, calculate_margin
from .payoff import (
    active_legs,
    build_curve,
    intrinsic_value,
    is_leg_active,
    leg_payoff,
    payoff_breakdown,
    total_payoff,
)
from .price_range import generate_price_range

__all__ = [
    "MarginComputation",
    "MarginEngine",
    "active_legs",
    "build_curve",
    "calculate_margin",
    "generate_price_range",
    "intrinsic_value",
    "is_leg_active",
    "leg_payoff",
    "payoff_breakdown",
    "total_payoff",
]
