from .instruments import INSTRUMENTS, Instrument, get_instrument
from .synthetic import (
    ChainRow,
    MarketSummary,
    chain_frame,
    chain_quotes,
    generate_option_chain,
    market_summary,
    put_call_ratio,
    synthetic_premium,
)

__all__ = [
    "INSTRUMENTS",
    "ChainRow",
    "Instrument",
    "MarketSummary",
    "chain_frame",
    "chain_quotes",
    "generate_option_chain",
    "get_instrument",
    "market_summary",
    "put_call_ratio",
    "synthetic_premium",
]
