"""Univariate time series with calendar-window downsampling."""

from tsresample.calendar import DEFAULT_CALENDAR, Calendar, PolarsCalendar
from tsresample.exceptions import (
    ConfigurationError,
    LengthMismatchError,
    TimeSeriesError,
    UnsupportedOperationError,
)
from tsresample.series import TimeSeries

__all__ = [
    "Calendar",
    "ConfigurationError",
    "DEFAULT_CALENDAR",
    "LengthMismatchError",
    "PolarsCalendar",
    "TimeSeries",
    "TimeSeriesError",
    "UnsupportedOperationError",
]
