"""Univariate time series: parallel values and UTC timestamps.

Two ways to build one:
    i) explicit pairs:   TimeSeries([values, timestamps])
   ii) generated grid:   TimeSeries(values, start, interval, units)

Timestamps are always stored as UTC datetimes, whatever was passed in.
Timestamps are assumed non-decreasing; nothing sorts or checks them.
"""

from collections.abc import Callable, Iterator, Sequence
from datetime import datetime
from numbers import Real
from typing import Any

import polars as pl

from tsresample.calendar import DEFAULT_CALENDAR, Calendar
from tsresample.exceptions import ConfigurationError, LengthMismatchError
from tsresample.resampler import resample as resample_series
from tsresample.schemas import TIMESTAMP_COL, VALUE_COL, validate_series_frame


def _is_sequence(obj: Any) -> bool:
    if isinstance(obj, (str, bytes)):
        return False
    return isinstance(obj, (Sequence, pl.Series))


class TimeSeries:
    def __init__(
        self,
        series: Sequence,
        start: Any = None,
        interval: float | None = None,
        units: str | None = None,
        *,
        calendar: Calendar | None = None,
    ):
        if interval is not None:
            if not isinstance(interval, Real) or isinstance(interval, bool):
                raise ConfigurationError(
                    f'Expected "interval" to be a number, got {interval!r}'
                )

        self._calendar = calendar if calendar is not None else DEFAULT_CALENDAR

        if len(series) > 0 and _is_sequence(series[0]):
            if len(series) != 2:
                raise ConfigurationError(
                    "Expected [values, timestamps]; "
                    f"got a container of {len(series)} sequences"
                )
            values, times = series
            self._values = tuple(values)
            self._timestamps = tuple(self._calendar.to_utc(t) for t in times)
        else:
            self._values = tuple(series)
            self._timestamps = self._generate_grid(start, interval, units)

        if len(self._values) != len(self._timestamps):
            raise LengthMismatchError(
                "There is not a time for every data value; "
                f"got {len(self._values)} values and {len(self._timestamps)} timestamps"
            )

    def _generate_grid(
        self, start: Any, interval: float | None, units: str | None
    ) -> tuple[datetime, ...]:
        if not self._values:
            return ()
        if start is None or interval is None or units is None:
            raise ConfigurationError(
                '"start", "interval" and "units" are required for a flat series'
            )
        t = self._calendar.to_utc(start)
        grid = [t]
        for _ in range(len(self._values) - 1):
            t = self._calendar.add(t, interval, units)
            grid.append(t)
        return tuple(grid)

    @classmethod
    def from_frame(
        cls,
        df: pl.DataFrame | pl.LazyFrame,
        timestamp_col: str = TIMESTAMP_COL,
        value_col: str = VALUE_COL,
        calendar: Calendar | None = None,
    ) -> "TimeSeries":
        """Build from a [timestamp, value] frame. Rows are taken in frame order."""
        df = validate_series_frame(df, timestamp_col, value_col)
        return cls(
            [df[value_col].to_list(), df[timestamp_col].to_list()],
            calendar=calendar,
        )

    def to_frame(self) -> pl.DataFrame:
        df = pl.DataFrame(
            {
                TIMESTAMP_COL: pl.Series(
                    TIMESTAMP_COL,
                    list(self._timestamps),
                    dtype=pl.Datetime("us", "UTC"),
                ),
                VALUE_COL: pl.Series(VALUE_COL, list(self._values), strict=False),
            }
        )
        return validate_series_frame(df)

    @property
    def values(self) -> tuple:
        return self._values

    @property
    def timestamps(self) -> tuple[datetime, ...]:
        return self._timestamps

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def start(self) -> datetime | None:
        return self._timestamps[0] if self._timestamps else None

    @property
    def end(self) -> datetime | None:
        return self._timestamps[-1] if self._timestamps else None

    def resample(
        self,
        interval: float,
        units: str,
        aggregate: Callable[[list], Any],
        closed: str = "right",
    ) -> "TimeSeries":
        """Downsample into calendar windows. See tsresample.resampler.resample."""
        return resample_series(self, interval, units, aggregate, closed=closed)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[tuple[datetime, Any]]:
        return zip(self._timestamps, self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return (
            self._timestamps == other._timestamps and self._values == other._values
        )

    __hash__ = None

    def __repr__(self) -> str:
        if not self._values:
            return "TimeSeries(empty)"
        return (
            f"TimeSeries(n={len(self)}, start={self.start.isoformat()}, "
            f"end={self.end.isoformat()})"
        )
