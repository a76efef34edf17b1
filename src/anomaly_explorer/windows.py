from __future__ import annotations

import logging
from typing import Literal

import pandas as pd

from anomaly_explorer.records import empty_records_frame, sort_chronologically

LOGGER = logging.getLogger(__name__)

WindowToken = Literal["30D", "3M", "6M", "MAX"]

WINDOW_DAYS: dict[str, int] = {
    "30D": 30,
    "3M": 90,
    "6M": 180,
}
WINDOW_TOKENS: tuple[WindowToken, ...] = ("30D", "3M", "6M", "MAX")
DEFAULT_WINDOW: WindowToken = "MAX"


def normalize_window(window: str | None, *, default: WindowToken = DEFAULT_WINDOW) -> WindowToken:
    if isinstance(window, str):
        normalized = window.strip().upper()
        if normalized in WINDOW_TOKENS:
            return normalized  # type: ignore[return-value]
    return default


def window_cutoff(series: pd.DataFrame, window: str | None) -> pd.Timestamp | None:
    """Earliest date kept by ``window``, or None when the window keeps everything."""
    token = normalize_window(window)
    if token not in WINDOW_DAYS or series.empty:
        return None
    latest = series["date"].max()
    cutoff = latest - pd.Timedelta(days=WINDOW_DAYS[token])
    if cutoff < series["date"].min():
        return None
    return cutoff


def select_window(series: pd.DataFrame, window: str | None) -> pd.DataFrame:
    """Keep the trailing ``window`` of a series, anchored at the series' own latest date."""
    if series.empty:
        return empty_records_frame()
    if isinstance(window, str) and window.strip().upper() not in WINDOW_TOKENS:
        LOGGER.debug("Unknown window token %r; using the full series", window)

    ordered = sort_chronologically(series)
    cutoff = window_cutoff(ordered, window)
    if cutoff is None:
        return ordered
    return ordered.loc[ordered["date"] >= cutoff].reset_index(drop=True)
