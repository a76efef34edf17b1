from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

from anomaly_explorer.pipeline.explore import build_chart_series
from anomaly_explorer.records import Record, Severity, empty_records_frame, records_to_frame
from anomaly_explorer.viz.charts import plot_feature_series, plot_sparkline


def test_plot_feature_series_with_anomalies(tmp_path: Path) -> None:
    start = date(2025, 1, 1)
    records = records_to_frame(
        Record(
            "errors",
            start + timedelta(days=offset),
            offset % 7,
            is_anomaly=offset == 5,
            severity=Severity.LOW,
        )
        for offset in range(20)
    )
    chart = build_chart_series(records, "errors")

    path = plot_feature_series(chart, "errors", tmp_path / "errors.png")

    assert path.exists()
    assert path.stat().st_size > 0


def test_plot_feature_series_without_category_column(tmp_path: Path) -> None:
    records = records_to_frame([Record("errors", date(2025, 1, 1), 3, is_anomaly=True)])

    path = plot_feature_series(records, "errors", tmp_path / "errors.png")

    assert path.exists()


def test_plot_empty_series_and_sparkline(tmp_path: Path) -> None:
    assert plot_feature_series(empty_records_frame(), "none", tmp_path / "empty.png").exists()
    assert plot_sparkline([1, 4, 2], tmp_path / "spark.png").exists()
    assert plot_sparkline([], tmp_path / "spark_empty.png").exists()
