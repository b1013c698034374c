"""Expiry evaluation for preference records."""

import re
from datetime import date, datetime, timedelta, timezone

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from .clock import Clock, utc_now

_UNITS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}

_UNIT = r"second|sec|minute|min|hour|day|week|month|year"
_TERM = rf"([+-]?\d+)\s*({_UNIT})s?"
_RELATIVE = re.compile(
    rf"(now|today|midnight|tomorrow|yesterday)?\s*((?:[+-]?\d+\s*(?:{_UNIT})s?\s*)*)"
)

_ANCHOR_DAYS = {"today": 0, "midnight": 0, "tomorrow": 1, "yesterday": -1}


def parse_relative(text: str, now: datetime) -> datetime | None:
    """Resolve expressions such as ``"+1 day"``, ``"tomorrow"`` or ``"now +2 hours"``.

    ``today``, ``midnight``, ``tomorrow`` and ``yesterday`` anchor at
    midnight; offsets are applied in order with relativedelta, so
    ``"+1 month"`` respects month lengths. Returns None when ``text`` is not
    a relative expression.
    """
    match = _RELATIVE.fullmatch(text.strip().lower())
    if match is None:
        return None
    anchor, offsets = match.groups()
    if anchor is None and not offsets:
        return None

    result = now
    if anchor in _ANCHOR_DAYS:
        midnight = datetime(now.year, now.month, now.day)
        result = midnight + timedelta(days=_ANCHOR_DAYS[anchor])

    for amount, unit in re.findall(_TERM, offsets):
        result += relativedelta(**{_UNITS[unit]: int(amount)})
    return result


def to_datetime(value, now: datetime | None = None) -> datetime | None:
    """Normalize an expiry or reference instant to a naive UTC datetime.

    Accepts a datetime, a date (taken as midnight), integer/float Unix
    timestamps, relative expressions (see parse_relative, resolved against
    ``now``), or any date/time string python-dateutil can parse. Aware
    values are converted to UTC before the timezone is dropped.

    Raises:
        TypeError: For unsupported types (including bool).
        ValueError: For strings that cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError("Expected a datetime, timestamp or date string, got bool")
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, timezone.utc).replace(tzinfo=None)
    elif isinstance(value, str):
        relative = parse_relative(value, now or utc_now())
        if relative is not None:
            return relative
        try:
            dt = date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Unparseable date/time string: {value!r}") from e
    else:
        raise TypeError(
            f"Expected a datetime, timestamp or date string, got {type(value).__name__}"
        )

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def resolve_as_of(as_of=None, clock: Clock | None = None) -> datetime:
    """Reference instant for expiry checks; defaults to the clock's now."""
    now = clock.now() if clock is not None else utc_now()
    if as_of is None:
        return now
    return to_datetime(as_of, now)


def is_live(pref, as_of=None, include_expired: bool = False, clock: Clock | None = None) -> bool:
    """True if the preference should be visible to reads as of ``as_of``."""
    if include_expired or pref.expires_at is None:
        return True
    return pref.expires_at > resolve_as_of(as_of, clock)


def is_expired(pref, as_of: datetime) -> bool:
    """True if the preference has an expiry strictly before ``as_of``.

    This is the predicate used when physically cleaning records.
    """
    return pref.expires_at is not None and pref.expires_at < as_of
