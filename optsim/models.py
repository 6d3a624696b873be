"""Core value objects shared by the payoff engine and its callers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from uuid import uuid4

from optsim.helpers.numeric import to_number, to_quantity


class OptionType(str, Enum):
    """Option right."""

    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value: Any) -> "OptionType":
        """Return the option type for ``value``.

        Accepts enum members as well as ``"CE"``/``"C"``/``"call"`` and
        ``"PE"``/``"P"``/``"put"`` in any case.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in {"c", "ce", "call"}:
            return cls.CALL
        if text in {"p", "pe", "put"}:
            return cls.PUT
        raise ValueError(f"Unknown option type: {value!r}")

    @classmethod
    def coerce(cls, value: Any) -> "OptionType":
        """Like :meth:`parse` but anything that is not a call counts as a put."""
        try:
            return cls.parse(value)
        except ValueError:
            return cls.PUT

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)


class Action(str, Enum):
    """Direction of a leg."""

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def parse(cls, value: Any) -> "Action":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in {"buy", "long", "b"}:
            return cls.BUY
        if text in {"sell", "short", "s"}:
            return cls.SELL
        raise ValueError(f"Unknown action: {value!r}")

    @classmethod
    def coerce(cls, value: Any) -> "Action":
        """Like :meth:`parse` but anything that is not a buy counts as a sell."""
        try:
            return cls.parse(value)
        except ValueError:
            return cls.SELL

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)


class Unbounded(Enum):
    """Sentinel for theoretically unlimited profit, loss or margin."""

    POSITIVE = "+inf"
    NEGATIVE = "-inf"

    def __float__(self) -> float:
        return math.inf if self is Unbounded.POSITIVE else -math.inf

    def __str__(self) -> str:
        return "unlimited" if self is Unbounded.POSITIVE else "-unlimited"


Metric = Union[float, Unbounded]


def is_unbounded(value: Any) -> bool:
    """Return ``True`` when ``value`` is an :class:`Unbounded` sentinel."""

    return isinstance(value, Unbounded)


def _new_leg_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class OptionLeg:
    """A single user-selected option position.

    Numeric fields are coerced on construction: invalid strikes and premiums
    become ``0`` and quantities are floored to an integer of at least one.
    ``id`` only identifies the leg for removal/update and takes no part in
    equality or hashing.
    """

    strike: float
    option_type: OptionType
    action: Action
    premium: float = 0.0
    quantity: int = 1
    expiry: Optional[str] = None
    id: str = field(default_factory=_new_leg_id, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "strike", to_number(self.strike))
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))
        object.__setattr__(self, "action", Action.parse(self.action))
        object.__setattr__(self, "premium", max(0.0, to_number(self.premium)))
        object.__setattr__(self, "quantity", to_quantity(self.quantity))
        expiry = self.expiry
        if expiry is not None:
            expiry = str(expiry).strip() or None
        object.__setattr__(self, "expiry", expiry)

    @property
    def is_call(self) -> bool:
        return self.option_type is OptionType.CALL

    @property
    def is_long(self) -> bool:
        return self.action is Action.BUY

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OptionLeg":
        """Build a leg from a loosely structured mapping.

        Recognised keys mirror the quote/UI records fed to the engine:
        ``strike``, ``type``/``option_type``/``right``, ``action``,
        ``premium``, ``quantity``/``qty``, ``expiry`` and ``id``.
        Unrecognised types are read as puts and unrecognised actions as
        sells, so a record never fails to convert.
        """
        option_type = data.get("option_type") or data.get("type") or data.get("right")
        quantity = data.get("quantity")
        if quantity is None:
            quantity = data.get("qty")
        kwargs: Dict[str, Any] = {
            "strike": data.get("strike"),
            "option_type": OptionType.coerce(option_type),
            "action": Action.coerce(data.get("action")),
            "premium": data.get("premium"),
            "quantity": quantity,
            "expiry": data.get("expiry"),
        }
        leg_id = data.get("id")
        if leg_id not in (None, ""):
            kwargs["id"] = str(leg_id)
        return cls(**kwargs)

    def as_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation of the leg."""

        return {
            "id": self.id,
            "strike": self.strike,
            "option_type": self.option_type.value,
            "action": self.action.value,
            "premium": self.premium,
            "quantity": self.quantity,
            "expiry": self.expiry,
        }


@dataclass(frozen=True)
class OptionQuote:
    """Premiums quoted for one strike/expiry, as delivered by a quote source."""

    strike: float
    expiry: Optional[str]
    call_premium: float
    put_premium: float
    token: Optional[str] = None

    def premium_for(self, option_type: OptionType | str) -> float:
        if OptionType.parse(option_type) is OptionType.CALL:
            return to_number(self.call_premium)
        return to_number(self.put_premium)


@dataclass(frozen=True)
class PricePoint:
    """One sample of the P&L curve."""

    price: float
    payoff: float


@dataclass(frozen=True)
class StdDevBands:
    """One and two standard deviation markers around spot."""

    spot: float
    sigma: float

    @property
    def minus_two(self) -> float:
        return self.spot - 2 * self.sigma

    @property
    def minus_one(self) -> float:
        return self.spot - self.sigma

    @property
    def plus_one(self) -> float:
        return self.spot + self.sigma

    @property
    def plus_two(self) -> float:
        return self.spot + 2 * self.sigma


def _render_metric(value: Metric) -> Any:
    return str(value) if is_unbounded(value) else value


@dataclass(frozen=True)
class PayoffResult:
    """Full output of :func:`optsim.engine.evaluate`."""

    curve: Tuple[PricePoint, ...]
    breakevens: Tuple[float, ...]
    pop: float
    max_profit: Metric
    max_loss: Metric
    current_pnl: float
    margin_required: Metric
    net_premium: float
    std_dev: StdDevBands
    expiries: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        """Return a plain mapping suitable for a chart/table renderer.

        Unbounded metrics are rendered as ``"unlimited"``/``"-unlimited"``.
        """
        return {
            "curve": [{"price": p.price, "payoff": p.payoff} for p in self.curve],
            "breakevens": list(self.breakevens),
            "pop": self.pop,
            "max_profit": _render_metric(self.max_profit),
            "max_loss": _render_metric(self.max_loss),
            "current_pnl": self.current_pnl,
            "margin_required": _render_metric(self.margin_required),
            "net_premium": self.net_premium,
            "std_dev": {
                "sigma": self.std_dev.sigma,
                "minus_two": self.std_dev.minus_two,
                "minus_one": self.std_dev.minus_one,
                "plus_one": self.std_dev.plus_one,
                "plus_two": self.std_dev.plus_two,
            },
            "expiries": list(self.expiries),
        }


__all__ = [
    "Action",
    "Metric",
    "OptionLeg",
    "OptionQuote",
    "OptionType",
    "PayoffResult",
    "PricePoint",
    "StdDevBands",
    "Unbounded",
    "is_unbounded",
]
