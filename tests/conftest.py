from datetime import datetime, timedelta, timezone

import pytest

EPOCH = datetime(2020, 1, 1, tzinfo=timezone.utc)


class HourCalendar:
    """Deterministic calendar: ints are hours after 2020-01-01, only hour/day units."""

    STEP = {"hour": 1, "hours": 1, "day": 24, "days": 24}

    def __init__(self):
        self.adds = 0

    def to_utc(self, value):
        if isinstance(value, datetime):
            return value
        return EPOCH + timedelta(hours=value)

    def add(self, instant, amount, units):
        if units not in self.STEP:
            raise ValueError(f"Unknown calendar unit: {units!r}")
        self.adds += 1
        return instant + timedelta(hours=amount * self.STEP[units])


@pytest.fixture
def hour_calendar():
    return HourCalendar()
