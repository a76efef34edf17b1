from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from anomaly_explorer.period import (
    AnalyzedPeriod,
    day_span,
    humanize_duration,
    summarize_period,
)
from anomaly_explorer.records import Record, empty_records_frame, records_to_frame


@pytest.mark.parametrize(
    ("days", "label"),
    [
        (0, "Same day"),
        (1, "1 day"),
        (2, "2 days"),
        (29, "29 days"),
        (30, "1 month"),
        (45, "1 month"),
        (60, "2 months"),
        (364, "12 months"),
        (365, "1 year"),
        (400, "1 year"),
        (800, "2 years"),
    ],
)
def test_humanize_duration_thresholds(days: int, label: str) -> None:
    assert humanize_duration(days) == label


def test_day_span_is_absolute_and_rounds_partial_days_up() -> None:
    start = pd.Timestamp("2025-01-01")
    assert day_span(start, pd.Timestamp("2025-01-03")) == 2
    assert day_span(pd.Timestamp("2025-01-03"), start) == 2
    assert day_span(start, pd.Timestamp("2025-01-01 06:00")) == 1


def _series(offsets: list[int], anomalies: set[int]) -> pd.DataFrame:
    start = date(2024, 1, 1)
    return records_to_frame(
        Record("latency", start + timedelta(days=offset), 1, is_anomaly=offset in anomalies)
        for offset in offsets
    )


def test_summarize_period_uses_full_unordered_series() -> None:
    summary = summarize_period(_series([45, 0, 10, 20], anomalies={10, 45}))

    assert summary == AnalyzedPeriod(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 2, 15),
        duration_label="1 month",
        total_points=4,
        anomaly_points=2,
    )
    assert not summary.is_empty


def test_summarize_period_single_day() -> None:
    summary = summarize_period(_series([0], anomalies=set()))
    assert summary.duration_label == "Same day"
    assert summary.start_date == summary.end_date
    assert summary.anomaly_points == 0


def test_summarize_period_long_span() -> None:
    assert summarize_period(_series([0, 400], anomalies=set())).duration_label == "1 year"


def test_summarize_period_of_empty_series_is_empty_result() -> None:
    summary = summarize_period(empty_records_frame())

    assert summary == AnalyzedPeriod.empty()
    assert summary.is_empty
    assert summary.to_dict()["start_date"] is None


def test_period_to_dict_is_json_friendly() -> None:
    payload = summarize_period(_series([0, 1], anomalies={1})).to_dict()
    assert payload == {
        "start_date": "2024-01-01",
        "end_date": "2024-01-02",
        "duration_label": "1 day",
        "total_points": 2,
        "anomaly_points": 1,
    }
