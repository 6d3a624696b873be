from .metrics import (
    current_pnl,
    find_breakevens,
    has_long_call,
    has_naked_short_call,
    max_profit_loss,
    net_premium,
    probability_of_profit,
    std_dev_bands,
)

__all__ = [
    "current_pnl",
    "find_breakevens",
    "has_long_call",
    "has_naked_short_call",
    "max_profit_loss",
    "net_premium",
    "probability_of_profit",
    "std_dev_bands",
]
