import argparse
import logging
from pathlib import Path

import polars as pl
from pandera.errors import SchemaError

from tsresample.aggregations import AGGREGATIONS, get_aggregation
from tsresample.config import ResampleJob, get_job
from tsresample.exceptions import TimeSeriesError
from tsresample.resampler import CLOSED_OPTIONS
from tsresample.schemas import TIMESTAMP_COL, VALUE_COL
from tsresample.series import TimeSeries

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tsresample")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resample = subparsers.add_parser(
        "resample", help="Downsample a [timestamp, value] file"
    )
    resample.add_argument("--input", required=True, help="CSV or parquet file.")
    resample.add_argument("--output", required=True, help="CSV or parquet file.")
    resample.add_argument("--config", help="Path to a jobs YAML file.")
    resample.add_argument("--job", help="Job key from --config.")
    resample.add_argument("--interval", type=float, help="Window width, in --units.")
    resample.add_argument("--units", help='Calendar unit, e.g. "hour", "days".')
    resample.add_argument(
        "--agg", choices=sorted(AGGREGATIONS), help="Aggregate per window."
    )
    resample.add_argument(
        "--closed",
        choices=CLOSED_OPTIONS,
        default=None,
        help="Which window an overshooting sample closes (default: right).",
    )
    resample.add_argument("--timestamp-col", help=f"Default: {TIMESTAMP_COL}.")
    resample.add_argument("--value-col", help=f"Default: {VALUE_COL}.")

    return parser.parse_args(argv)


def _job_from_args(args: argparse.Namespace) -> ResampleJob:
    """--config/--job, with any explicit flag taking priority."""
    if args.config:
        if not args.job:
            raise SystemExit("Error: --job required with --config")
        try:
            base = get_job(args.config, args.job)
        except KeyError:
            raise SystemExit(f"Error: no job {args.job!r} in {args.config}") from None
    else:
        missing = [
            flag
            for flag, value in (
                ("--interval", args.interval),
                ("--units", args.units),
                ("--agg", args.agg),
            )
            if value is None
        ]
        if missing:
            raise SystemExit(
                f"Error: {', '.join(missing)} required when not using --config"
            )
        base = None

    def pick(flag_value, field, default):
        if flag_value is not None:
            return flag_value
        return getattr(base, field) if base is not None else default

    interval = pick(args.interval, "interval", None)
    if isinstance(interval, float) and interval.is_integer():
        interval = int(interval)

    return ResampleJob(
        key=args.job or "cli",
        interval=interval,
        units=pick(args.units, "units", None),
        aggregate=pick(args.agg, "aggregate", None),
        closed=pick(args.closed, "closed", "right"),
        timestamp_col=pick(args.timestamp_col, "timestamp_col", TIMESTAMP_COL),
        value_col=pick(args.value_col, "value_col", VALUE_COL),
    )


def read_frame(path: str | Path) -> pl.DataFrame:
    path = Path(path)
    if path.suffix == ".parquet":
        return pl.read_parquet(path)
    if path.suffix == ".csv":
        return pl.read_csv(path, try_parse_dates=True)
    raise SystemExit(f"Error: unsupported input format: {path}")


def write_frame(df: pl.DataFrame, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == ".parquet":
        df.write_parquet(path)
    elif path.suffix == ".csv":
        df.write_csv(path)
    else:
        raise SystemExit(f"Error: unsupported output format: {path}")


def run_job(job: ResampleJob, df: pl.DataFrame) -> pl.DataFrame:
    series = TimeSeries.from_frame(df, job.timestamp_col, job.value_col)
    resampled = series.resample(
        job.interval, job.units, get_aggregation(job.aggregate), closed=job.closed
    )
    logger.info(
        "[%s] %d samples -> %d windows of %s %s (%s, closed=%s)",
        job.key,
        len(series),
        len(resampled),
        job.interval,
        job.units,
        job.aggregate,
        job.closed,
    )
    return resampled.to_frame().rename(
        {TIMESTAMP_COL: job.timestamp_col, VALUE_COL: job.value_col}
    )


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args(argv)

    if args.command == "resample":
        try:
            job = _job_from_args(args)
            df = read_frame(args.input)
            result = run_job(job, df)
        except TimeSeriesError as exc:
            logger.error("[%s] %s", args.job or "cli", exc)
            raise SystemExit(1) from exc
        except (SchemaError, ValueError) as exc:
            raise SystemExit(f"Error: invalid input {args.input}: {exc}") from exc

        write_frame(result, args.output)
        logger.info("Wrote %d rows to %s", result.height, args.output)


if __name__ == "__main__":
    main()
