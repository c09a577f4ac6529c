"""Named window aggregates for config files and the CLI.

TimeSeries.resample takes any callable; these only exist so a job can
refer to its aggregate by name. Every aggregate accepts an empty list
(count -> 0, sum -> 0, the rest -> None).
"""

from collections.abc import Callable
from statistics import fmean
from typing import Any

from tsresample.exceptions import ConfigurationError

Aggregate = Callable[[list], Any]


def _mean(values: list) -> float | None:
    return fmean(values) if values else None


def _min(values: list) -> Any:
    return min(values) if values else None


def _max(values: list) -> Any:
    return max(values) if values else None


def _first(values: list) -> Any:
    return values[0] if values else None


def _last(values: list) -> Any:
    return values[-1] if values else None


AGGREGATIONS: dict[str, Aggregate] = {
    "sum": sum,
    "mean": _mean,
    "min": _min,
    "max": _max,
    "first": _first,
    "last": _last,
    "count": len,
}


def get_aggregation(name: str) -> Aggregate:
    try:
        return AGGREGATIONS[name]
    except KeyError:
        valid = ", ".join(sorted(AGGREGATIONS))
        raise ConfigurationError(
            f"Unknown aggregate {name!r}; expected one of: {valid}"
        ) from None
