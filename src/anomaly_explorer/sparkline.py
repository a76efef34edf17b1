from __future__ import annotations

import pandas as pd

from anomaly_explorer.numeric import as_python_scalar
from anomaly_explorer.records import feature_records, sort_chronologically

DEFAULT_STRIDE = 3
DEFAULT_MAX_POINTS = 10


def sparkline_values(
    series: pd.DataFrame,
    stride: int = DEFAULT_STRIDE,
    max_points: int = DEFAULT_MAX_POINTS,
) -> list[float]:
    """Every ``stride``-th count from the first record, capped at ``max_points`` values."""
    if series.empty:
        return []
    if stride < 1 or max_points < 1:
        raise ValueError("stride and max_points must be >= 1")
    ordered = sort_chronologically(series)
    sampled = ordered["distinct_count"].iloc[::stride].iloc[:max_points]
    return [as_python_scalar(value) for value in sampled]


def build_sparklines(
    records: pd.DataFrame,
    catalog: pd.DataFrame,
    stride: int = DEFAULT_STRIDE,
    max_points: int = DEFAULT_MAX_POINTS,
) -> pd.DataFrame:
    rows = [
        {
            "id": int(feature_id),
            "name": str(name),
            "values": sparkline_values(
                feature_records(records, str(name)),
                stride=stride,
                max_points=max_points,
            ),
        }
        for feature_id, name in zip(catalog["id"], catalog["name"])
    ]
    return pd.DataFrame(rows, columns=["id", "name", "values"])
