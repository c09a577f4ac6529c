"""Typed errors raised by series construction and resampling.

Calendar failures (bad unit names, unparseable timestamps) are not wrapped;
they surface as whatever the calendar raised.
"""


class TimeSeriesError(Exception):
    pass


class ConfigurationError(TimeSeriesError, TypeError):
    """Bad or missing arguments, e.g. a non-numeric interval."""


class LengthMismatchError(TimeSeriesError, ValueError):
    """Values and timestamps differ in length."""


class UnsupportedOperationError(TimeSeriesError, NotImplementedError):
    """Requested operation is not supported, e.g. upsampling."""
