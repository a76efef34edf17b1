from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import pandas as pd

from anomaly_explorer.records import parse_flag


class PointCategory(str, Enum):
    NORMAL = "Normal"
    LOW = "Low"
    MEDIUM = "Medium"
    FALLBACK = "Fallback"
    SUPPRESSED = "Suppressed"


SEVERITY_CATEGORIES = {
    "Normal": PointCategory.NORMAL,
    "Low": PointCategory.LOW,
    "Medium": PointCategory.MEDIUM,
}

TRANSPARENT = "transparent"


@dataclass(frozen=True)
class PointStyle:
    fill_color: str
    border_color: str
    radius: int
    hover_radius: int

    @property
    def visible(self) -> bool:
        return self.radius > 0


SUPPRESSED_STYLE = PointStyle(
    fill_color=TRANSPARENT,
    border_color=TRANSPARENT,
    radius=0,
    hover_radius=0,
)

CATEGORY_COLORS = {
    PointCategory.NORMAL: "#10b981",
    PointCategory.LOW: "#f59e0b",
    PointCategory.MEDIUM: "#ef4444",
    PointCategory.FALLBACK: "#1976d2",
}

ANOMALY_RADIUS = 6
ANOMALY_HOVER_RADIUS = 8

# Legend entries shown next to the primary chart; the fallback colour is not listed.
LEGEND_CATEGORIES = (PointCategory.NORMAL, PointCategory.LOW, PointCategory.MEDIUM)


def classify_point(is_anomaly: Any, severity: Any) -> PointCategory:
    try:
        flagged = parse_flag(is_anomaly)
    except ValueError:
        flagged = False
    if not flagged:
        return PointCategory.SUPPRESSED
    if isinstance(severity, Enum):
        severity = severity.value
    if isinstance(severity, str):
        return SEVERITY_CATEGORIES.get(severity.strip(), PointCategory.FALLBACK)
    return PointCategory.FALLBACK


def classify_series(series: pd.DataFrame) -> pd.Series:
    categories = [
        classify_point(is_anomaly, severity)
        for is_anomaly, severity in zip(series["is_anomaly"], series["severity"])
    ]
    return pd.Series(categories, index=series.index, dtype="object", name="category")


def as_category(value: Any) -> PointCategory:
    if isinstance(value, PointCategory):
        return value
    try:
        return PointCategory(str(value))
    except ValueError:
        return PointCategory.FALLBACK


def point_style(category: PointCategory | str) -> PointStyle:
    category = as_category(category)
    if category == PointCategory.SUPPRESSED:
        return SUPPRESSED_STYLE
    color = CATEGORY_COLORS.get(category, CATEGORY_COLORS[PointCategory.FALLBACK])
    return PointStyle(
        fill_color=color,
        border_color=color,
        radius=ANOMALY_RADIUS,
        hover_radius=ANOMALY_HOVER_RADIUS,
    )


def is_clickable(category: PointCategory | str) -> bool:
    return as_category(category) != PointCategory.SUPPRESSED
