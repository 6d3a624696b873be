"""Common strategy identifiers used across the project."""

from enum import Enum


class StrategyName(str, Enum):
    """Supported strategy templates.

    The value of each member is the canonical string representation. The
    enum derives from ``str`` so members can be used interchangeably where a
    string is expected.
    """

    LONG_STRADDLE = "long_straddle"
    LONG_STRANGLE = "long_strangle"
    IRON_CONDOR = "iron_condor"
    BULL_CALL_SPREAD = "bull_call_spread"
    BEAR_PUT_SPREAD = "bear_put_spread"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)

    def __format__(self, format_spec: str) -> str:  # pragma: no cover - trivial
        return format(str(self.value), format_spec)


__all__ = ["StrategyName"]
