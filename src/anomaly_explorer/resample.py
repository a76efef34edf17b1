from __future__ import annotations

import logging
from typing import Literal

import pandas as pd

from anomaly_explorer.numeric import round_half_away
from anomaly_explorer.records import RECORD_COLUMNS, empty_records_frame, sort_chronologically

LOGGER = logging.getLogger(__name__)

Frequency = Literal["daily", "weekly", "monthly"]

FREQUENCIES: tuple[Frequency, ...] = ("daily", "weekly", "monthly")
DEFAULT_FREQUENCY: Frequency = "daily"


def normalize_frequency(
    frequency: str | None,
    *,
    default: Frequency = DEFAULT_FREQUENCY,
) -> Frequency:
    if isinstance(frequency, str):
        normalized = frequency.strip().lower()
        if normalized in FREQUENCIES:
            return normalized  # type: ignore[return-value]
    return default


def bucket_start(dates: pd.Series, frequency: Frequency) -> pd.Series:
    """Representative date of the bucket each date falls in."""
    if frequency == "weekly":
        # W-SAT periods end on Saturday, so each one starts on a Sunday.
        return dates.dt.to_period("W-SAT").dt.start_time
    if frequency == "monthly":
        return dates.dt.to_period("M").dt.start_time
    return dates


def resample_series(series: pd.DataFrame, frequency: str | None) -> pd.DataFrame:
    """Collapse a series into one record per occupied day, week or month.

    Weekly buckets start on Sunday and monthly buckets on the 1st; the bucket
    start becomes the record's date. ``distinct_count`` is the rounded mean of
    the bucket, ``is_anomaly`` is true when any member is flagged, and the
    remaining fields come from the bucket's earliest record.
    """
    if series.empty:
        return empty_records_frame()
    if isinstance(frequency, str) and frequency.strip().lower() not in FREQUENCIES:
        LOGGER.debug("Unknown frequency %r; returning the daily series", frequency)

    token = normalize_frequency(frequency)
    ordered = sort_chronologically(series)
    if token == "daily":
        return ordered[RECORD_COLUMNS]

    working = ordered.assign(bucket=bucket_start(ordered["date"], token))
    buckets = working.groupby("bucket", sort=True)
    mean_counts = buckets["distinct_count"].mean()

    # Rows are already chronological, so the first row per bucket is its earliest member.
    reduced = working.drop_duplicates(subset="bucket", keep="first").set_index("bucket")
    reduced = reduced.sort_index()
    reduced["distinct_count"] = pd.Series(
        round_half_away(mean_counts),
        index=mean_counts.index,
    ).astype("int64")
    reduced["is_anomaly"] = buckets["is_anomaly"].any().astype(bool)
    reduced["date"] = reduced.index
    return reduced.reset_index(drop=True)[RECORD_COLUMNS]
