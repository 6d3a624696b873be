"""Numeric parsing and normalization helpers."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_CLEAN_RE = re.compile(r"[^0-9\.\-+eE]")


def _coerce_decimal(value: Any) -> float | None:
    """Return ``value`` coerced to ``float`` when it is a :class:`Decimal`."""

    if isinstance(value, Decimal):
        if value.is_nan():
            return math.nan
        try:
            return float(value)
        except (OverflowError, ValueError):  # pragma: no cover - defensive
            return None
    return None


def safe_float(
    value: Any,
    *,
    allow_strings: bool = True,
    accept_nan: bool = False,
    accept_inf: bool = True,
    allow_bool: bool = True,
    fallback: float | None = None,
) -> float | None:
    """Return ``value`` coerced to ``float`` with consistent semantics.

    Parameters
    ----------
    value:
        Incoming object to coerce. ``None`` and empty strings yield
        ``fallback``.
    allow_strings:
        When ``True`` (default) string inputs are stripped of thousands
        separators, currency symbols and percentage signs before parsing.
    accept_nan:
        When ``True`` ``float('nan')`` values are propagated instead of being
        replaced by ``fallback``.
    accept_inf:
        When ``False`` infinite values are replaced by ``fallback``.
    allow_bool:
        When ``False`` boolean inputs are considered invalid and yield the
        ``fallback`` value.
    fallback:
        Value returned when the input cannot be coerced. Defaults to ``None``.
    """

    def _finish(number: float) -> float | None:
        if math.isnan(number) and not accept_nan:
            return fallback
        if math.isinf(number) and not accept_inf:
            return fallback
        return number

    if value is None:
        return fallback

    if isinstance(value, bool):
        if not allow_bool:
            return fallback
        return float(value)

    if isinstance(value, (int, float)):
        return _finish(float(value))

    decimal_value = _coerce_decimal(value)
    if decimal_value is not None:
        return _finish(decimal_value)

    if not allow_strings:
        return fallback

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="ignore")

    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return fallback
        cleaned = _CLEAN_RE.sub("", cleaned)
        try:
            candidate = float(cleaned)
        except ValueError:
            return fallback
        return _finish(candidate)

    if hasattr(value, "__float__"):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return fallback
        return _finish(number)

    return fallback


def to_number(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as a finite ``float`` or ``default``.

    This is the coercion applied to every user-editable numeric field that
    reaches the payoff engine: garbage becomes ``default`` rather than an
    error.
    """

    result = safe_float(value, accept_inf=False, fallback=default)
    return default if result is None else result


def to_quantity(value: Any) -> int:
    """Return ``value`` floored to an integer lot count of at least one."""

    return max(1, math.floor(to_number(value)))


__all__ = ["safe_float", "to_number", "to_quantity"]
