from __future__ import annotations

import json
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

TABLE_FORMATS = ("parquet", "csv")


def list_columns(df: pd.DataFrame) -> list[str]:
    """Object columns holding lists, such as sparkline ``values``."""
    return [
        column
        for column in df.columns
        if df[column].dtype == object and df[column].map(lambda value: isinstance(value, list)).any()
    ]


def _encode_list_columns(df: pd.DataFrame) -> pd.DataFrame:
    columns = list_columns(df)
    if not columns:
        return df
    encoded = df.copy()
    for column in columns:
        encoded[column] = encoded[column].map(lambda value: json.dumps(value, default=_json_default))
    return encoded


def write_table(df: pd.DataFrame, path: Path, fmt: str = "parquet") -> Path:
    """Write a catalog, sparkline or chart-series table.

    Parquet keeps list columns natively; CSV stores them as JSON arrays so
    ``load_table`` can read them back as lists.
    """
    if fmt not in TABLE_FORMATS:
        raise ValueError(f"Unsupported table format: {fmt}")
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
    else:
        _encode_list_columns(df).to_csv(path, index=False, date_format="%Y-%m-%d")
    return path


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (pd.Timestamp, date)):
        return value.isoformat()[:10]
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_summary(data: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(data, indent=2, sort_keys=True, default=_json_default)
    path.write_text(text, encoding="utf-8")
    return path
