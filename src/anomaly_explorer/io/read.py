from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from anomaly_explorer.config import AppConfig
from anomaly_explorer.io.schema import normalize_columns
from anomaly_explorer.preprocess.flags import normalize_flags
from anomaly_explorer.records import RECORD_COLUMNS

LOGGER = logging.getLogger(__name__)


def _read_source(path: Path) -> pd.DataFrame:
    if path.suffix == ".csv":
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        return pd.read_csv(path, encoding="utf-8-sig")
    if path.suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict) and "data" in data:
            data = data["data"]
        if not isinstance(data, list):
            raise ValueError("JSON input must be an array of records or an object with 'data'")
        return pd.DataFrame.from_records(data)
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    raise ValueError(f"Unsupported input file type: {path.suffix}")


def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    working = df.copy()
    working["feature"] = working["feature"].astype(str).str.strip()
    if (working["feature"] == "").any():
        raise ValueError("Input contains records with an empty feature name")

    dates = pd.to_datetime(working["date"], errors="coerce")
    if dates.isna().any():
        raise ValueError("Input contains records with missing or invalid dates")
    working["date"] = dates.dt.tz_localize(None) if dates.dt.tz is not None else dates
    working["date"] = working["date"].dt.normalize()

    counts = pd.to_numeric(working["distinct_count"], errors="coerce")
    if counts.isna().any():
        raise ValueError("Input contains records with missing or non-numeric counts")
    working["distinct_count"] = counts
    for column in ("z_score", "anomaly_score"):
        working[column] = pd.to_numeric(working[column], errors="coerce").astype(float)
    return working


def normalize_records(df: pd.DataFrame, config: AppConfig) -> pd.DataFrame:
    """Map raw export columns onto the canonical records frame."""
    normalized = normalize_columns(df=df, columns=config.columns)
    normalized = normalize_flags(_coerce_types(normalized))
    return normalized[RECORD_COLUMNS].reset_index(drop=True)


def load_records(path: Path, config: AppConfig) -> pd.DataFrame:
    """Load measurements from CSV, JSON or parquet and return canonical columns."""
    df = _read_source(path)
    records = normalize_records(df, config)
    LOGGER.info(
        "Loaded %s records for %s features from %s",
        len(records),
        records["feature"].nunique(),
        path,
    )
    return records


def load_table(path: Path, list_columns: tuple[str, ...] = ("values",)) -> pd.DataFrame:
    """Read a table written by ``write_table``; JSON-encoded list columns come back as lists."""
    if path.suffix == ".parquet":
        table = pd.read_parquet(path)
        for column in list_columns:
            if column in table.columns:
                table[column] = table[column].map(
                    lambda value: value.tolist() if hasattr(value, "tolist") else list(value)
                )
        return table
    if path.suffix == ".csv":
        table = pd.read_csv(path)
        for column in list_columns:
            if column in table.columns:
                table[column] = table[column].map(json.loads)
        return table
    raise ValueError(f"Unsupported table file type: {path.suffix}")
