"""Helper utilities."""

from .numeric import safe_float, to_number, to_quantity
from .dateutils import parse_expiry, days_to_expiry, sort_expiries

__all__ = [
    "safe_float",
    "to_number",
    "to_quantity",
    "parse_expiry",
    "days_to_expiry",
    "sort_expiries",
]
