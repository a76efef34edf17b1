from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.lines import Line2D

from anomaly_explorer.classify import (
    CATEGORY_COLORS,
    LEGEND_CATEGORIES,
    classify_series,
    point_style,
)
from anomaly_explorer.viz.common import save_figure

LINE_COLOR = "#1976d2"
EMPTY_LINE_COLOR = "#cccccc"


def plot_feature_series(chart_series: pd.DataFrame, feature: str, output_path: Path) -> Path:
    """Line chart of counts with only anomalous points drawn, coloured by severity."""
    fig, ax = plt.subplots(figsize=(12, 4))
    if chart_series.empty:
        ax.plot([0], [0], color=EMPTY_LINE_COLOR, linewidth=2)
        ax.set_xticks([0], labels=["No Data"])
        ax.set_title("No Data Available for Selected Feature")
        return save_figure(output_path)

    categories = (
        chart_series["category"]
        if "category" in chart_series.columns
        else classify_series(chart_series)
    )
    dates = chart_series["date"]
    counts = chart_series["distinct_count"]
    ax.plot(dates, counts, color=LINE_COLOR, linewidth=2)
    ax.fill_between(dates, counts, color=LINE_COLOR, alpha=0.1)

    styles = [point_style(category) for category in categories]
    visible = pd.Series([style.visible for style in styles], index=chart_series.index)
    if visible.any():
        ax.scatter(
            dates.loc[visible],
            counts.loc[visible],
            c=[style.fill_color for style in styles if style.visible],
            edgecolors=[style.border_color for style in styles if style.visible],
            s=[(style.radius * 2) ** 2 for style in styles if style.visible],
            zorder=3,
        )

    ax.legend(
        handles=[
            Line2D(
                [0],
                [0],
                marker="o",
                linestyle="",
                color=CATEGORY_COLORS[category],
                label=category.value,
            )
            for category in LEGEND_CATEGORIES
        ],
        loc="upper left",
    )
    ax.set_title(f"Anomaly Trends - {feature}")
    ax.set_xlabel("Date")
    ax.set_ylabel("Distinct count")
    fig.autofmt_xdate()
    return save_figure(output_path)


def plot_sparkline(values: list[float], output_path: Path) -> Path:
    fig, ax = plt.subplots(figsize=(1.6, 0.5))
    if values:
        ax.plot(range(len(values)), values, color=LINE_COLOR, linewidth=1.5)
    ax.axis("off")
    return save_figure(output_path)
