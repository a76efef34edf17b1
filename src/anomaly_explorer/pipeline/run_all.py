from __future__ import annotations

import logging
from pathlib import Path

from anomaly_explorer.catalog import build_feature_catalog, filter_catalog
from anomaly_explorer.config import AppConfig
from anomaly_explorer.io.read import load_records
from anomaly_explorer.io.write import write_summary, write_table
from anomaly_explorer.paths import build_output_paths
from anomaly_explorer.period import summarize_period
from anomaly_explorer.pipeline.explore import build_chart_series, feature_slug
from anomaly_explorer.records import feature_records
from anomaly_explorer.resample import normalize_frequency
from anomaly_explorer.sparkline import build_sparklines
from anomaly_explorer.viz.charts import plot_feature_series, plot_sparkline
from anomaly_explorer.windows import normalize_window

LOGGER = logging.getLogger(__name__)


def run_all(
    input_path: Path,
    out_dir: Path,
    config: AppConfig,
    *,
    query: str | None = None,
    window: str | None = None,
    frequency: str | None = None,
    render_figures: bool = True,
) -> Path:
    records = load_records(input_path, config)
    paths = build_output_paths(out_dir)
    table_format = config.outputs.tables_format
    figure_suffix = str(config.outputs.figures_format or "png").strip().lstrip(".") or "png"
    window = normalize_window(window or config.view.window)
    frequency = normalize_frequency(frequency or config.view.frequency)

    catalog = filter_catalog(build_feature_catalog(records), query)
    write_table(catalog, paths.tables / f"feature_catalog.{table_format}", fmt=table_format)

    sparklines = build_sparklines(
        records,
        catalog,
        stride=config.sparkline.stride,
        max_points=config.sparkline.max_points,
    )
    write_table(sparklines, paths.tables / f"sparklines.{table_format}", fmt=table_format)

    periods: dict[str, dict[str, object]] = {}
    for feature_id, name, values in zip(sparklines["id"], sparklines["name"], sparklines["values"]):
        slug = feature_slug(feature_id, name)
        chart_series = build_chart_series(records, name, window=window, frequency=frequency)
        write_table(
            chart_series,
            paths.tables / "series" / f"{slug}.{table_format}",
            fmt=table_format,
        )
        periods[name] = summarize_period(feature_records(records, name)).to_dict()
        if render_figures:
            plot_feature_series(chart_series, name, paths.figures / f"{slug}.{figure_suffix}")
            plot_sparkline(list(values), paths.figures / "sparklines" / f"{slug}.{figure_suffix}")

    LOGGER.info(
        "Explored %s of %s features (window=%s, frequency=%s)",
        len(catalog),
        records["feature"].nunique(),
        window,
        frequency,
    )
    summary = {
        "input": str(input_path),
        "query": query or "",
        "window": window,
        "frequency": frequency,
        "n_records": int(len(records)),
        "n_features": int(len(catalog)),
        "analyzed_periods": periods,
    }
    return write_summary(summary, paths.summary / "analyzed_periods.json")
