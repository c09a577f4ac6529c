"""Downsample a TimeSeries by aggregating over fixed calendar windows.

WINDOWS: anchored at the first timestamp, each `interval` `units` wide.
A window closes on the first sample at or past its boundary:
  - exact hit           -> values[i..j] inclusive
  - overshoot, "left"   -> values[i..j)  (j opens the next window only)
  - overshoot, "right"  -> values[i..j] inclusive, and j also opens the next
                           window, so it is counted twice
The emitted timestamp is the closing sample's own timestamp, not the nominal
boundary. Samples after the last closed boundary are dropped.

Only downsampling is supported: a window narrower than the source spacing
raises UnsupportedOperationError.
"""

import logging
from collections.abc import Callable
from numbers import Real
from typing import TYPE_CHECKING, Any

from tsresample.exceptions import ConfigurationError, UnsupportedOperationError

if TYPE_CHECKING:
    from tsresample.series import TimeSeries

logger = logging.getLogger(__name__)

CLOSED_OPTIONS = ("left", "right")


def resample(
    source: "TimeSeries",
    interval: float,
    units: str,
    aggregate: Callable[[list], Any],
    closed: str = "right",
) -> "TimeSeries":
    """Return a new, coarser TimeSeries. `source` is never modified.

    Args:
        source: Series with non-decreasing timestamps
        interval: Positive window width, in `units`
        units: Calendar unit name, e.g. "hour", "days", "M"
        aggregate: Reduces one window's values (a fresh list) to a single value
        closed: "right" (default) or "left", see module docstring

    Returns:
        One sample per closed window, built with the source's calendar.
    """
    if not isinstance(interval, Real) or isinstance(interval, bool):
        raise ConfigurationError(
            f'Expected "interval" to be a number, got {interval!r}'
        )
    if interval <= 0:
        raise UnsupportedOperationError(
            f"Upsampling is not supported; interval must be positive, got {interval!r}"
        )
    if closed not in CLOSED_OPTIONS:
        raise ConfigurationError(
            f'"closed" must be one of {CLOSED_OPTIONS}, got {closed!r}'
        )

    calendar = source.calendar
    values = source.values
    times = source.timestamps
    series_cls = type(source)

    if not values:
        return series_cls([[], []], calendar=calendar)

    boundary = calendar.add(times[0], interval, units)

    if len(times) > 1 and boundary < times[1]:
        raise UnsupportedOperationError(
            "Upsampling is not supported; the resample interval must be a lower "
            f"temporal resolution than the source ({interval} {units} is narrower "
            f"than {times[1] - times[0]})"
        )

    out_values = []
    out_times = []
    i = 0
    for j, t in enumerate(times):
        if t < boundary:
            continue

        if t != boundary and closed == "left":
            window = list(values[i:j])
        else:
            window = list(values[i : j + 1])

        out_values.append(aggregate(window))
        out_times.append(t)
        logger.debug("Closed window [%d, %d] at %s", i, j, t.isoformat())

        boundary = calendar.add(boundary, interval, units)
        i = j

    logger.debug(
        "Resampled %d samples into %d windows of %s %s (closed=%s)",
        len(values),
        len(out_values),
        interval,
        units,
        closed,
    )
    return series_cls([out_values, out_times], calendar=calendar)
