from dataclasses import dataclass, fields
from numbers import Real
from pathlib import Path

import yaml

from tsresample.aggregations import get_aggregation
from tsresample.calendar import normalize_units
from tsresample.exceptions import ConfigurationError
from tsresample.resampler import CLOSED_OPTIONS
from tsresample.schemas import TIMESTAMP_COL, VALUE_COL


@dataclass(frozen=True)
class ResampleJob:
    key: str
    interval: float
    units: str
    aggregate: str
    closed: str = "right"
    timestamp_col: str = TIMESTAMP_COL
    value_col: str = VALUE_COL

    def __post_init__(self):
        if not isinstance(self.interval, Real) or isinstance(self.interval, bool):
            raise ConfigurationError(
                f"[{self.key}] interval must be a number, got {self.interval!r}"
            )
        if self.closed not in CLOSED_OPTIONS:
            raise ConfigurationError(
                f"[{self.key}] closed must be one of {CLOSED_OPTIONS}, "
                f"got {self.closed!r}"
            )
        try:
            normalize_units(self.units)
        except ValueError as exc:
            raise ConfigurationError(f"[{self.key}] {exc}") from exc
        get_aggregation(self.aggregate)


def load_config(path: str | Path) -> dict[str, ResampleJob]:
    """YAML mapping of job key -> {interval, units, aggregate, closed, ...}."""
    data = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a mapping of job keys")
    known = {f.name for f in fields(ResampleJob)}
    jobs: dict[str, ResampleJob] = {}
    for key, value in data.items():
        payload = dict(value or {})
        unknown = set(payload) - known
        if unknown:
            raise ConfigurationError(f"[{key}] unknown settings: {sorted(unknown)}")
        missing = {"interval", "units", "aggregate"} - set(payload)
        if missing:
            raise ConfigurationError(f"[{key}] missing settings: {sorted(missing)}")
        payload["key"] = key
        jobs[key] = ResampleJob(**payload)
    return jobs


def get_job(path: str | Path, key: str) -> ResampleJob:
    return load_config(path)[key]
