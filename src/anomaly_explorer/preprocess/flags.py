from __future__ import annotations

import pandas as pd

from anomaly_explorer.records import FLAG_MAP, Severity


def parse_anomaly_flags(values: pd.Series) -> pd.Series:
    """Turn exported ``"True"``/``"False"`` strings (or real booleans) into ``bool``."""
    if pd.api.types.is_bool_dtype(values):
        return values.astype(bool)
    text = values.map(lambda value: "" if pd.isna(value) else str(value)).str.strip().str.upper()
    parsed = text.map(FLAG_MAP)
    invalid = parsed.isna()
    if invalid.any():
        examples = ", ".join(sorted(set(values[invalid].astype(str)))[:5])
        raise ValueError(f"Unrecognized anomaly flag values: {examples}")
    return parsed.astype(bool)


def normalize_severity(values: pd.Series) -> pd.Series:
    return values.map(lambda value: Severity.parse(value).value).astype("object")


def normalize_flags(df: pd.DataFrame) -> pd.DataFrame:
    working = df.copy()
    working["is_anomaly"] = parse_anomaly_flags(working["is_anomaly"])
    working["severity"] = normalize_severity(working["severity"])
    return working
