from __future__ import annotations

import pandas as pd

from anomaly_explorer.classify import classify_series
from anomaly_explorer.records import feature_records
from anomaly_explorer.resample import resample_series
from anomaly_explorer.windows import select_window


def build_chart_series(
    records: pd.DataFrame,
    feature: str,
    window: str | None = None,
    frequency: str | None = None,
) -> pd.DataFrame:
    """Windowed, resampled series for one feature with a point category per row."""
    series = feature_records(records, feature)
    windowed = select_window(series, window)
    aggregated = resample_series(windowed, frequency)
    categories = classify_series(aggregated).map(lambda category: category.value)
    return aggregated.assign(category=categories.astype("object"))


def feature_slug(feature_id: int, feature: str) -> str:
    slug = "".join(char if char.isalnum() else "_" for char in feature.strip().lower())
    return f"{int(feature_id):03d}_{slug.strip('_') or 'feature'}"
