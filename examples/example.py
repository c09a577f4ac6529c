from pathlib import Path

import polars as pl

from tsresample import TimeSeries
from tsresample.aggregations import get_aggregation

########
# Config
########

# 15-minute meter readings, already exported separately
INPUT_FILE = Path("data/meter_readings.parquet")

# what window should each output sample cover?
INTERVAL = 1
UNITS = "day"

# how to reduce each window, see tsresample.aggregations
AGGREGATE = "mean"

# "right" shares an overshooting sample with the next window, "left" does not
CLOSED = "left"

OUTPUT_DIR = Path("output/example/")
OUTPUT_FILE = OUTPUT_DIR / "daily_readings.parquet"

#############################
# Load, resample and write out
#############################
readings = TimeSeries.from_frame(
    pl.scan_parquet(INPUT_FILE), timestamp_col="timestamp", value_col="kwh"
)
print(readings)

daily = readings.resample(INTERVAL, UNITS, get_aggregation(AGGREGATE), closed=CLOSED)
print(daily)

OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
daily.to_frame().write_parquet(OUTPUT_FILE)

with pl.Config(tbl_rows=20):
    print(daily.to_frame())
