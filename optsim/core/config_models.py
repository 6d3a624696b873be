"""Configuration objects consumed by the payoff engine.

:class:`EvaluationConfig` holds the per-request view settings (lot size,
snapshot expiry, zoom) and :class:`EngineSettings` is an immutable snapshot
of the tunable constants in :mod:`optsim.config`. Both are hashable so they
can be part of a memoization key.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from optsim.config import get as cfg_get
from optsim.helpers.numeric import safe_float, to_number

ALL_EXPIRIES = "ALL"


class ViewMode(str, Enum):
    """How legs with other expiries are treated at a snapshot."""

    EXPIRY_ONLY = "expiry-only"
    ALL_INTRINSIC = "all-intrinsic"


class EvaluationConfig(BaseModel):
    """Per-evaluation settings.

    ``lot_size`` is required; every other field has a default and malformed
    values fall back to it instead of failing validation.
    """

    lot_size: int
    view_mode: ViewMode = ViewMode.EXPIRY_ONLY
    snapshot_expiry: str = ALL_EXPIRIES
    zoom: float = 1.0
    available_strikes: Tuple[float, ...] = ()
    debug: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("lot_size", mode="before")
    @classmethod
    def _coerce_lot_size(cls, value: Any) -> int:
        return max(0, math.floor(to_number(value)))

    @field_validator("view_mode", mode="before")
    @classmethod
    def _coerce_view_mode(cls, value: Any) -> ViewMode:
        if isinstance(value, ViewMode):
            return value
        text = str(value or "").strip().lower().replace("_", "-")
        try:
            return ViewMode(text)
        except ValueError:
            return ViewMode.EXPIRY_ONLY

    @field_validator("snapshot_expiry", mode="before")
    @classmethod
    def _coerce_snapshot(cls, value: Any) -> str:
        if value is None:
            return ALL_EXPIRIES
        text = str(value).strip()
        if not text or text.upper() == ALL_EXPIRIES:
            return ALL_EXPIRIES
        return text

    @field_validator("zoom", mode="before")
    @classmethod
    def _coerce_zoom(cls, value: Any) -> float:
        zoom = safe_float(value, accept_inf=False)
        if zoom is None or zoom <= 0:
            return 1.0
        return zoom

    @field_validator("available_strikes", mode="before")
    @classmethod
    def _coerce_strikes(cls, value: Any) -> Tuple[float, ...]:
        if value is None or isinstance(value, (str, bytes)):
            return ()
        try:
            items = list(value)
        except TypeError:
            return ()
        strikes = (safe_float(v, accept_inf=False) for v in items)
        return tuple(s for s in strikes if s is not None)

    @property
    def has_snapshot(self) -> bool:
        """``True`` when a specific expiry (not ``ALL``) is selected."""
        return self.snapshot_expiry != ALL_EXPIRIES

    @property
    def filters_by_expiry(self) -> bool:
        return self.view_mode is ViewMode.EXPIRY_ONLY and self.has_snapshot

    def zoomed_in(self) -> "EvaluationConfig":
        step = float(cfg_get("ZOOM_STEP", 1.5))
        upper = float(cfg_get("ZOOM_MAX", 5.0))
        return self.model_copy(update={"zoom": min(upper, self.zoom * step)})

    def zoomed_out(self) -> "EvaluationConfig":
        step = float(cfg_get("ZOOM_STEP", 1.5))
        lower = float(cfg_get("ZOOM_MIN", 0.5))
        return self.model_copy(update={"zoom": max(lower, self.zoom / step)})


@dataclass(frozen=True)
class EngineSettings:
    """Tunable engine constants."""

    price_points: int = 300
    default_window: float = 1000.0
    min_base_range: float = 100.0
    base_range_fraction: float = 0.2
    range_padding: float = 0.5
    annual_vol: float = 0.20
    days_to_expiry: int = 30
    naked_put_margin_fraction: float = 0.5

    @classmethod
    def from_app_config(cls) -> "EngineSettings":
        """Snapshot the current values from :mod:`optsim.config`."""
        defaults = cls()
        return cls(
            price_points=max(2, int(cfg_get("PRICE_POINTS", defaults.price_points))),
            default_window=float(cfg_get("DEFAULT_WINDOW", defaults.default_window)),
            min_base_range=float(cfg_get("MIN_BASE_RANGE", defaults.min_base_range)),
            base_range_fraction=float(
                cfg_get("BASE_RANGE_FRACTION", defaults.base_range_fraction)
            ),
            range_padding=float(cfg_get("RANGE_PADDING", defaults.range_padding)),
            annual_vol=float(cfg_get("ASSUMED_ANNUAL_VOL", defaults.annual_vol)),
            days_to_expiry=int(cfg_get("ASSUMED_DAYS_TO_EXPIRY", defaults.days_to_expiry)),
            naked_put_margin_fraction=float(
                cfg_get("NAKED_PUT_MARGIN_FRACTION", defaults.naked_put_margin_fraction)
            ),
        )


__all__ = ["ALL_EXPIRIES", "EngineSettings", "EvaluationConfig", "ViewMode"]
