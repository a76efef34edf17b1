from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from anomaly_explorer.config import ColumnsConfig


@dataclass(frozen=True)
class CanonicalColumns:
    feature: str = "feature"
    date: str = "date"
    distinct_count: str = "distinct_count"
    z_score: str = "z_score"
    anomaly_score: str = "anomaly_score"
    is_anomaly: str = "is_anomaly"
    severity: str = "severity"


def normalize_columns(df: pd.DataFrame, columns: ColumnsConfig) -> pd.DataFrame:
    """Rename source columns to canonical names used by the explorer."""
    rename_map = {
        columns.feature: CanonicalColumns.feature,
        columns.date: CanonicalColumns.date,
        columns.distinct_count: CanonicalColumns.distinct_count,
        columns.z_score: CanonicalColumns.z_score,
        columns.anomaly_score: CanonicalColumns.anomaly_score,
        columns.is_anomaly: CanonicalColumns.is_anomaly,
        columns.severity: CanonicalColumns.severity,
    }
    missing = [source for source in rename_map if source not in df.columns]
    if missing:
        missing_str = ", ".join(missing)
        raise ValueError(f"Missing required columns in input: {missing_str}")
    return df.rename(columns=rename_map)
