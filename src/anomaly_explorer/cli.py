from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pandas as pd
import typer

from anomaly_explorer.catalog import build_feature_catalog, filter_catalog
from anomaly_explorer.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from anomaly_explorer.io.read import load_records
from anomaly_explorer.io.write import write_table
from anomaly_explorer.logging import configure_logging
from anomaly_explorer.news import fetch_news
from anomaly_explorer.period import summarize_period
from anomaly_explorer.pipeline.explore import build_chart_series
from anomaly_explorer.pipeline.run_all import run_all
from anomaly_explorer.records import feature_records
from anomaly_explorer.sparkline import build_sparklines
from anomaly_explorer.viz.charts import plot_feature_series

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _load_feature_records(input_path: Path, cfg: AppConfig, feature: str) -> pd.DataFrame:
    records = load_records(input_path, cfg)
    if not (records["feature"] == feature).any():
        raise typer.BadParameter(f"Unknown feature: {feature}", param_hint="--feature")
    return records


@app.command()
def catalog(
    input_path: Path = typer.Option(..., "--input", exists=True, readable=True, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    query: str = typer.Option("", help="Case-insensitive substring filter on feature names."),
) -> None:
    """List distinct features in first-seen order."""
    configure_logging()
    cfg = _load_app_config(config)
    records = load_records(input_path, cfg)
    features = filter_catalog(build_feature_catalog(records), query)
    if features.empty:
        typer.echo("No matching features.")
        return
    typer.echo(features.to_string(index=False))


@app.command()
def series(
    input_path: Path = typer.Option(..., "--input", exists=True, readable=True, resolve_path=True),
    feature: str = typer.Option(..., help="Feature name exactly as it appears in the input."),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    window: str | None = typer.Option(None, help="30D, 3M, 6M or MAX."),
    frequency: str | None = typer.Option(None, help="daily, weekly or monthly."),
    figure: bool = typer.Option(True, help="Also render the chart figure."),
) -> None:
    """Write the windowed, resampled series for one feature."""
    configure_logging()
    cfg = _load_app_config(config)
    records = _load_feature_records(input_path, cfg, feature)
    chart_series = build_chart_series(
        records,
        feature,
        window=window or cfg.view.window,
        frequency=frequency or cfg.view.frequency,
    )
    table_format = cfg.outputs.tables_format
    table_path = write_table(chart_series, out / f"series.{table_format}", fmt=table_format)
    typer.echo(f"Series written to: {table_path} ({len(chart_series)} points)")
    if figure:
        figure_path = plot_feature_series(
            chart_series,
            feature,
            out / f"series.{cfg.outputs.figures_format}",
        )
        typer.echo(f"Chart written to: {figure_path}")


@app.command()
def period(
    input_path: Path = typer.Option(..., "--input", exists=True, readable=True, resolve_path=True),
    feature: str = typer.Option(..., help="Feature name exactly as it appears in the input."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Print the analyzed period of a feature's full series as JSON."""
    configure_logging()
    cfg = _load_app_config(config)
    records = _load_feature_records(input_path, cfg, feature)
    summary = summarize_period(feature_records(records, feature))
    typer.echo(json.dumps(summary.to_dict(), indent=2))


@app.command()
def sparklines(
    input_path: Path = typer.Option(..., "--input", exists=True, readable=True, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    query: str = typer.Option("", help="Case-insensitive substring filter on feature names."),
) -> None:
    """Print downsampled sparkline values per feature."""
    configure_logging()
    cfg = _load_app_config(config)
    records = load_records(input_path, cfg)
    features = filter_catalog(build_feature_catalog(records), query)
    previews = build_sparklines(
        records,
        features,
        stride=cfg.sparkline.stride,
        max_points=cfg.sparkline.max_points,
    )
    for name, values in zip(previews["name"], previews["values"]):
        typer.echo(f"{name}: {', '.join(str(value) for value in values)}")


@app.command()
def news(
    date: str = typer.Option(..., help="Date to look up, as YYYY-MM-DD."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Fetch news sentiment for one date from the configured service."""
    configure_logging()
    cfg = _load_app_config(config)
    try:
        datetime.strptime(date, "%Y-%m-%d")
    except ValueError as exc:
        raise typer.BadParameter("Expected YYYY-MM-DD", param_hint="--date") from exc
    result = fetch_news(date, cfg.news)
    typer.echo(
        json.dumps(
            {
                "sentiment": result.sentiment,
                "summary": result.summary,
                "debug_metrics": result.debug_metrics,
                "error": result.error,
            },
            indent=2,
        )
    )


@app.command("run-all")
def run_all_command(
    input_path: Path = typer.Option(..., "--input", exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    query: str = typer.Option("", help="Only explore features whose name contains this text."),
    window: str | None = typer.Option(None, help="30D, 3M, 6M or MAX."),
    frequency: str | None = typer.Option(None, help="daily, weekly or monthly."),
    figures: bool = typer.Option(True, help="Render chart and sparkline figures."),
) -> None:
    """Write catalog, per-feature series, sparklines and analyzed periods to out/."""
    configure_logging()
    cfg = _load_app_config(config)
    summary_path = run_all(
        input_path=input_path,
        out_dir=out,
        config=cfg,
        query=query,
        window=window,
        frequency=frequency,
        render_figures=figures,
    )
    typer.echo(f"Run complete. Summary: {summary_path}")
