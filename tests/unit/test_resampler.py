"""
Tests for tsresample.resampler

WINDOWS: anchored at the first timestamp, `interval` `units` wide.
  - a window closes on the first sample at or past its boundary
  - exact hit: closing sample included, and it also opens the next window
  - overshoot + closed="left": closing sample excluded, opens the next window
  - overshoot + closed="right": closing sample included AND opens the next window
  - output timestamp = the closing sample's timestamp
  - trailing partial window is dropped

GUARDS:
  - window narrower than source spacing -> UnsupportedOperationError
  - zero or negative interval -> UnsupportedOperationError
  - non-numeric interval, unknown closed -> ConfigurationError
  - bad unit names come from the calendar, unchanged
"""

from datetime import datetime, timezone

import pytest

from tsresample import (
    ConfigurationError,
    TimeSeries,
    TimeSeriesError,
    UnsupportedOperationError,
)
from tsresample.resampler import resample


def h(hour, day=1, month=1):
    return datetime(2020, month, day, hour, tzinfo=timezone.utc)


def hourly(values):
    return TimeSeries(values, "2020-01-01T00:00Z", 1, "hours")


# =============================================================================
# AGGREGATION
# =============================================================================


def test_exact_boundary_closes_window_inclusively():
    result = hourly([1, 2, 3, 4]).resample(2, "hours", sum)

    # 00,01,02 close at 02:00; 03:00 never reaches 04:00 and is dropped
    assert result.values == (6,)
    assert result.timestamps == (h(2),)


def test_exact_boundary_sample_opens_next_window():
    result = hourly([1, 2, 3, 4, 5]).resample(2, "hours", sum)

    assert result.values == (6, 12)
    assert result.timestamps == (h(2), h(4))


def test_trailing_partial_window_dropped():
    result = hourly([1, 2, 3, 4, 5]).resample(3, "hours", sum)

    assert result.values == (10,)
    assert result.timestamps == (h(3),)


def test_output_timestamp_is_closing_sample_not_boundary():
    series = TimeSeries([[1, 2, 3], [h(0), h(1), h(5)]])
    result = series.resample(2, "hours", sum)

    assert result.timestamps == (h(5),)
    assert result.values == (6,)


def test_month_windows_follow_calendar():
    series = TimeSeries([1] * 70, "2020-01-01", 1, "day")
    result = series.resample(1, "month", sum)

    # Jan 1..Feb 1 inclusive, then Feb 1..Mar 1 inclusive (leap year)
    assert result.values == (32, 30)
    assert result.timestamps == (h(0, 1, 2), h(0, 1, 3))


# =============================================================================
# CLOSED: left vs right on overshoot
# =============================================================================


@pytest.fixture
def overshoot_series():
    # 03:00 overshoots the 02:00 boundary, 04:00 lands exactly on the next one
    return TimeSeries([[1, 2, 3, 4], [h(0), h(1), h(3), h(4)]])


def test_left_closed_excludes_overshoot_sample(overshoot_series):
    result = overshoot_series.resample(2, "hours", sum, closed="left")

    assert result.values == (3, 7)
    assert result.timestamps == (h(3), h(4))


def test_right_closed_shares_overshoot_sample(overshoot_series):
    result = overshoot_series.resample(2, "hours", sum)

    # 3 is counted in both windows
    assert result.values == (6, 7)
    assert result.timestamps == (h(3), h(4))


def test_left_and_right_agree_on_exact_hits():
    series = hourly([1, 2, 3, 4, 5])
    left = series.resample(2, "hours", sum, closed="left")
    right = series.resample(2, "hours", sum, closed="right")

    assert left == right


def test_window_slices_passed_to_aggregate(overshoot_series):
    seen = []
    overshoot_series.resample(2, "hours", lambda xs: seen.append(xs), closed="left")

    assert seen == [[1, 2], [3, 4]]


# =============================================================================
# GUARDS
# =============================================================================


def test_upsampling_rejected():
    with pytest.raises(UnsupportedOperationError, match="Upsampling"):
        hourly([1, 2, 3]).resample(30, "minutes", sum)


def test_upsampling_error_is_library_error():
    with pytest.raises(TimeSeriesError):
        hourly([1, 2, 3]).resample(59, "minutes", sum)


def test_same_resolution_allowed():
    result = hourly([1, 2, 3]).resample(1, "hour", sum)

    assert result.values == (3, 5)


@pytest.mark.parametrize("interval", [0, -1])
def test_non_positive_interval_is_upsampling(interval):
    with pytest.raises(UnsupportedOperationError, match="positive"):
        hourly([1, 2, 3]).resample(interval, "hours", sum)


@pytest.mark.parametrize("interval", ["2", None, True])
def test_non_numeric_interval_rejected(interval):
    with pytest.raises(ConfigurationError, match="number"):
        hourly([1, 2, 3]).resample(interval, "hours", sum)


def test_unknown_closed_rejected():
    with pytest.raises(ConfigurationError, match="closed"):
        hourly([1, 2, 3]).resample(2, "hours", sum, closed="both")


def test_unknown_unit_propagates_from_calendar():
    with pytest.raises(ValueError, match="Unknown calendar unit") as excinfo:
        hourly([1, 2, 3]).resample(2, "fortnights", sum)

    assert not isinstance(excinfo.value, TimeSeriesError)


# =============================================================================
# EDGES & PROPERTIES
# =============================================================================


def test_empty_series_resamples_to_empty():
    result = TimeSeries([]).resample(2, "hours", sum)

    assert len(result) == 0
    assert result.timestamps == ()


def test_single_sample_never_closes_a_window():
    result = hourly([5]).resample(2, "hours", sum)

    assert len(result) == 0


def test_source_not_mutated():
    source = hourly([1, 2, 3, 4, 5])
    before = (source.values, source.timestamps)

    def greedy(xs):
        xs.append(100)
        return sum(xs)

    source.resample(2, "hours", greedy)

    assert (source.values, source.timestamps) == before


def test_repeated_calls_independent():
    source = hourly([1, 2, 3, 4, 5])
    first = source.resample(2, "hours", sum)
    second = source.resample(2, "hours", sum)

    assert first == second
    assert first is not second


def test_output_monotonic_and_bounded():
    times = [h(0), h(1), h(2), h(5), h(6), h(9), h(10), h(11), h(12), h(20)]
    series = TimeSeries([list(range(len(times))), times])

    for closed in ("left", "right"):
        result = series.resample(3, "hours", len, closed=closed)
        ts = result.timestamps
        assert all(a < b for a, b in zip(ts, ts[1:]))
        assert len(result.values) == len(result.timestamps)
        assert len(result) <= len(series)


def test_uses_injected_calendar(hour_calendar):
    series = TimeSeries([[1, 2, 3, 4, 5], [0, 1, 2, 3, 4]], calendar=hour_calendar)
    result = resample(series, 2, "hours", sum)

    assert result.values == (6, 12)
    assert result.calendar is hour_calendar
    # first boundary, then one step per closed window
    assert hour_calendar.adds == 3


def test_subclass_preserved():
    class Readings(TimeSeries):
        pass

    result = Readings([1, 2, 3], "2020-01-01", 1, "hour").resample(1, "hour", sum)

    assert type(result) is Readings
