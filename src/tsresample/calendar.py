"""Calendar-aware instants.

Series code never does date math itself. It asks a Calendar to normalize
inputs to UTC and to step instants forward by calendar units, and relies on
datetime ordering (<, ==, >) for comparisons.

UNITS: singular or plural, long or short
    millisecond(s)/ms  second(s)/s  minute(s)/m  hour(s)/h  day(s)/d
    week(s)/w  month(s)/M  quarter(s)/Q  year(s)/y
"""

from datetime import date, datetime, timezone
from numbers import Real
from typing import Any, Protocol, runtime_checkable

import polars as pl

_UNIT_ALIASES = {
    "millisecond": "millisecond",
    "ms": "millisecond",
    "second": "second",
    "s": "second",
    "minute": "minute",
    "m": "minute",
    "hour": "hour",
    "h": "hour",
    "day": "day",
    "d": "day",
    "week": "week",
    "w": "week",
    "month": "month",
    "M": "month",
    "quarter": "quarter",
    "Q": "quarter",
    "year": "year",
    "y": "year",
}

# canonical unit -> polars offset suffix
_OFFSET_SUFFIX = {
    "millisecond": "ms",
    "second": "s",
    "minute": "m",
    "hour": "h",
    "day": "d",
    "week": "w",
    "month": "mo",
    "quarter": "q",
    "year": "y",
}

# sub-day units, in microseconds; days and longer only move in whole steps
_FIXED_US = {
    "millisecond": 1_000,
    "second": 1_000_000,
    "minute": 60_000_000,
    "hour": 3_600_000_000,
}


def normalize_units(units: str) -> str:
    """'Hours' -> 'hour', 'M' -> 'month'. Raises ValueError if unknown."""
    if not isinstance(units, str):
        raise ValueError(f"Unit name must be a string, got {units!r}")
    if units in _UNIT_ALIASES:
        return _UNIT_ALIASES[units]
    name = units.lower()
    if len(name) > 2 and name.endswith("s"):
        name = name[:-1]
    # short forms are case-sensitive ("m" vs "M"), only long forms fold case
    if len(name) > 2 and name in _UNIT_ALIASES:
        return _UNIT_ALIASES[name]
    raise ValueError(f"Unknown calendar unit: {units!r}")


def _round_half_away(amount: float) -> int:
    whole = int(abs(amount) + 0.5)
    return whole if amount >= 0 else -whole


@runtime_checkable
class Calendar(Protocol):
    def to_utc(self, value: Any) -> datetime:
        """Normalize value to a timezone-aware UTC instant."""
        raise NotImplementedError

    def add(self, instant: datetime, amount: float, units: str) -> datetime:
        """Return a new instant `amount` calendar `units` after `instant`."""
        raise NotImplementedError


class PolarsCalendar:
    """UTC calendar backed by polars `dt.offset_by`.

    Month, quarter and year steps clamp to the end of shorter months
    (Jan 31 + 1 month = Feb 28/29), matching polars semantics.
    """

    def to_utc(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        if isinstance(value, str):
            return self.to_utc(datetime.fromisoformat(value.strip()))
        if isinstance(value, Real) and not isinstance(value, bool):
            # epoch milliseconds
            return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
        raise TypeError(f"Cannot interpret {value!r} as a timestamp")

    def _offset(self, amount: float, units: str) -> str:
        if not isinstance(amount, Real) or isinstance(amount, bool):
            raise TypeError(f"Expected a numeric amount, got {amount!r}")
        unit = normalize_units(units)
        if float(amount).is_integer():
            return f"{int(amount)}{_OFFSET_SUFFIX[unit]}"
        if unit in _FIXED_US:
            return f"{round(amount * _FIXED_US[unit])}us"
        if unit == "week":
            return f"{_round_half_away(float(amount) * 7)}d"
        return f"{_round_half_away(float(amount))}{_OFFSET_SUFFIX[unit]}"

    def add(self, instant: datetime, amount: float, units: str) -> datetime:
        offset = self._offset(amount, units)
        shifted = (
            pl.Series([self.to_utc(instant)], dtype=pl.Datetime("us", "UTC"))
            .dt.offset_by(offset)
            .item()
        )
        return shifted.astimezone(timezone.utc)


DEFAULT_CALENDAR = PolarsCalendar()
