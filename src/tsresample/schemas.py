"""Frame schemas for moving series in and out of polars."""

import pandera.polars as pa
import polars as pl
from pandera.engines import polars_engine

TIMESTAMP_COL = "timestamp"
VALUE_COL = "value"


def series_frame_schema(
    timestamp_col: str = TIMESTAMP_COL, value_col: str = VALUE_COL
) -> pa.DataFrameSchema:
    """[timestamp, value] frame. Any time zone, any value dtype, extras allowed."""
    return pa.DataFrameSchema(
        {
            timestamp_col: pa.Column(
                polars_engine.DateTime(time_zone_agnostic=True), nullable=False
            ),
            value_col: pa.Column(nullable=True),
        },
        strict=False,
    )


def validate_series_frame(
    df: pl.DataFrame | pl.LazyFrame,
    timestamp_col: str = TIMESTAMP_COL,
    value_col: str = VALUE_COL,
) -> pl.DataFrame:
    """Validate and return an eager frame with schema columns moved to the front.

    See https://github.com/unionai-oss/pandera/issues/1317
    """
    if isinstance(df, pl.LazyFrame):
        df = df.collect()
    schema_cols = [timestamp_col, value_col]
    extra_cols = [c for c in df.columns if c not in schema_cols]
    present = [c for c in schema_cols if c in df.columns]
    df = df.select(*present, *extra_cols)
    return series_frame_schema(timestamp_col, value_col).validate(df)
