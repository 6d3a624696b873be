from datetime import date, datetime
from typing import Iterable, List, Optional, Union

DateLike = Union[str, date]

_EXPIRY_FORMATS = ("%Y-%m-%d", "%Y%m%d", "%d-%b-%Y", "%d%b%Y")


def parse_expiry(value: DateLike | None) -> Optional[date]:
    """Return ``value`` parsed as :class:`datetime.date`.

    Accepts ``date`` objects and strings in ``YYYY-MM-DD``, ``YYYYMMDD`` or
    exchange style ``DD-Mon-YYYY`` (``28-Oct-2025``) format.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in _EXPIRY_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def days_to_expiry(expiry: DateLike, today: date | None = None) -> int:
    """Return calendar days from ``today`` until ``expiry`` (never negative).

    Unparseable expiries count as already expired.
    """
    expiry_date = parse_expiry(expiry)
    if expiry_date is None:
        return 0
    ref = today or date.today()
    return max(0, (expiry_date - ref).days)


def sort_expiries(values: Iterable[str]) -> List[str]:
    """Return unique expiry labels sorted chronologically.

    Labels that cannot be parsed as dates are placed after the dated ones in
    plain string order.
    """

    unique = {str(v) for v in values if v not in (None, "")}

    def _key(label: str):
        parsed = parse_expiry(label)
        return (parsed is None, parsed or date.min, label)

    return sorted(unique, key=_key)


__all__ = ["parse_expiry", "days_to_expiry", "sort_expiries"]
