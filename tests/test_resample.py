from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from anomaly_explorer.records import Record, Severity, empty_records_frame, records_to_frame
from anomaly_explorer.resample import normalize_frequency, resample_series


def _daily_series(start: date, counts: list[int], anomalies: set[int] | None = None) -> pd.DataFrame:
    anomalies = anomalies or set()
    return records_to_frame(
        Record(
            "sessions",
            start + timedelta(days=offset),
            count,
            z_score=float(offset),
            anomaly_score=offset / 10.0,
            is_anomaly=offset in anomalies,
            severity=Severity.LOW if offset in anomalies else Severity.NORMAL,
        )
        for offset, count in enumerate(counts)
    )


def test_normalize_frequency_falls_back_to_daily() -> None:
    assert normalize_frequency(" Weekly ") == "weekly"
    assert normalize_frequency("hourly") == "daily"
    assert normalize_frequency(None) == "daily"


def test_daily_is_a_sorted_identity() -> None:
    series = _daily_series(date(2025, 1, 1), [5, 6, 7])
    reversed_series = series.iloc[::-1].reset_index(drop=True)

    pd.testing.assert_frame_equal(resample_series(reversed_series, "daily"), series)
    pd.testing.assert_frame_equal(resample_series(series, "fortnightly"), series)


def test_daily_is_idempotent() -> None:
    series = _daily_series(date(2025, 1, 1), [5, 6, 7, 8])
    once = resample_series(series, "daily")
    pd.testing.assert_frame_equal(resample_series(once, "daily"), once)


def test_weekly_buckets_start_on_sunday() -> None:
    # 2025-01-01 is a Wednesday: Wed-Sat, Sun-Sat, Sun-Tue.
    series = _daily_series(date(2025, 1, 1), list(range(14)))
    weekly = resample_series(series, "weekly")

    assert [value.date() for value in weekly["date"]] == [
        date(2024, 12, 29),
        date(2025, 1, 5),
        date(2025, 1, 12),
    ]
    assert (weekly["date"].dt.dayofweek == 6).all()
    # Means of [0..3], [4..10], [11..13]; 1.5 rounds away from zero.
    assert weekly["distinct_count"].tolist() == [2, 7, 12]


def test_weekly_bucket_reduction_rules() -> None:
    series = _daily_series(date(2025, 1, 5), [10, 20, 30, 31], anomalies={1})
    series = series.iloc[:2]
    weekly = resample_series(series, "weekly")

    assert len(weekly) == 1
    row = weekly.iloc[0]
    assert row["distinct_count"] == 15
    assert bool(row["is_anomaly"]) is True
    # Representative fields come from the earliest member.
    assert row["z_score"] == 0.0
    assert row["severity"] == "Normal"


def test_anomaly_flag_is_or_across_bucket_members() -> None:
    series = _daily_series(date(2025, 1, 5), [1] * 14, anomalies={9})
    weekly = resample_series(series, "weekly")

    assert weekly["is_anomaly"].tolist() == [False, True]


@pytest.mark.parametrize(
    ("counts", "expected"),
    [([1, 2], 2), ([2, 3], 3), ([1, 2, 2], 2)],
)
def test_bucket_mean_rounds_half_away_from_zero(counts: list[int], expected: int) -> None:
    series = _daily_series(date(2025, 1, 5), counts)
    assert resample_series(series, "weekly")["distinct_count"].tolist() == [expected]


def test_monthly_buckets_use_first_of_month_and_skip_empty_months() -> None:
    series = records_to_frame(
        [
            Record("sessions", date(2025, 1, 15), 10),
            Record("sessions", date(2025, 1, 31), 21, is_anomaly=True, severity=Severity.MEDIUM),
            Record("sessions", date(2025, 4, 1), 5),
        ]
    )
    monthly = resample_series(series, "monthly")

    assert [value.date() for value in monthly["date"]] == [date(2025, 1, 1), date(2025, 4, 1)]
    assert monthly["distinct_count"].tolist() == [16, 5]
    assert monthly["is_anomaly"].tolist() == [True, False]
    assert monthly["severity"].tolist() == ["Unknown", "Unknown"]


@pytest.mark.parametrize("frequency", ["daily", "weekly", "monthly"])
def test_resample_is_independent_of_input_order(frequency: str) -> None:
    series = _daily_series(date(2025, 1, 1), [day % 9 for day in range(75)], anomalies={3, 40})
    shuffled = series.sample(frac=1.0, random_state=11).reset_index(drop=True)

    pd.testing.assert_frame_equal(
        resample_series(shuffled, frequency),
        resample_series(series, frequency),
    )


@pytest.mark.parametrize("frequency", ["daily", "weekly", "monthly"])
def test_same_date_records_resample_the_same_in_any_order(frequency: str) -> None:
    calm = Record("sessions", date(2025, 1, 5), 4, z_score=1.0, severity=Severity.NORMAL)
    spike = Record(
        "sessions", date(2025, 1, 5), 4, z_score=9.0, is_anomaly=True, severity=Severity.MEDIUM
    )
    later = Record("sessions", date(2025, 1, 6), 6, z_score=0.5, severity=Severity.NORMAL)

    forward = resample_series(records_to_frame([calm, spike, later]), frequency)
    backward = resample_series(records_to_frame([later, spike, calm]), frequency)

    pd.testing.assert_frame_equal(forward, backward)
    assert forward["z_score"].iloc[0] == 1.0


def test_resample_empty_series_is_empty() -> None:
    assert resample_series(empty_records_frame(), "weekly").empty
