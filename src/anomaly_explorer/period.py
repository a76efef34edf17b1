from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

import pandas as pd

EMPTY_PERIOD_LABEL = "No data"


@dataclass(frozen=True)
class AnalyzedPeriod:
    start_date: date | None
    end_date: date | None
    duration_label: str
    total_points: int
    anomaly_points: int

    @classmethod
    def empty(cls) -> "AnalyzedPeriod":
        return cls(
            start_date=None,
            end_date=None,
            duration_label=EMPTY_PERIOD_LABEL,
            total_points=0,
            anomaly_points=0,
        )

    @property
    def is_empty(self) -> bool:
        return self.total_points == 0

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        for key in ("start_date", "end_date"):
            value = payload[key]
            payload[key] = value.isoformat() if value is not None else None
        return payload


def _pluralize(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def humanize_duration(days: int) -> str:
    """Describe a day span using 30-day months and 365-day years."""
    days = abs(int(days))
    if days == 0:
        return "Same day"
    if days == 1:
        return "1 day"
    if days < 30:
        return f"{days} days"
    if days < 365:
        return _pluralize(days // 30, "month")
    return _pluralize(days // 365, "year")


def day_span(start: pd.Timestamp, end: pd.Timestamp) -> int:
    seconds = abs((end - start).total_seconds())
    return int(math.ceil(seconds / 86400.0))


def summarize_period(series: pd.DataFrame) -> AnalyzedPeriod:
    """Date range, duration label and anomaly counts for a feature's full series."""
    if series.empty:
        return AnalyzedPeriod.empty()

    start = pd.Timestamp(series["date"].min())
    end = pd.Timestamp(series["date"].max())
    return AnalyzedPeriod(
        start_date=start.date(),
        end_date=end.date(),
        duration_label=humanize_duration(day_span(start, end)),
        total_points=int(len(series)),
        anomaly_points=int(series["is_anomaly"].astype(bool).sum()),
    )
