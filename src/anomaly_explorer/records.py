from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable

import numpy as np
import pandas as pd

from anomaly_explorer.numeric import as_python_scalar

RECORD_COLUMNS = [
    "feature",
    "date",
    "distinct_count",
    "z_score",
    "anomaly_score",
    "is_anomaly",
    "severity",
]

FLAG_MAP = {
    "TRUE": True,
    "T": True,
    "YES": True,
    "Y": True,
    "1": True,
    "1.0": True,
    "FALSE": False,
    "F": False,
    "NO": False,
    "N": False,
    "0": False,
    "0.0": False,
    "": False,
}

# Date first; the other fields only break ties between rows on the same date.
SORT_KEYS = ["date", *[column for column in RECORD_COLUMNS if column != "date"]]


class Severity(str, Enum):
    NORMAL = "Normal"
    LOW = "Low"
    MEDIUM = "Medium"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class Record:
    feature: str
    date: date
    distinct_count: float
    z_score: float = 0.0
    anomaly_score: float = 0.0
    is_anomaly: bool = False
    severity: Severity = Severity.UNKNOWN


def parse_flag(value: Any) -> bool:
    """Read an anomaly flag; exported ``"False"`` strings are false, not truthy."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return False
    parsed = FLAG_MAP.get(str(value).strip().upper())
    if parsed is None:
        raise ValueError(f"Unrecognized anomaly flag value: {value!r}")
    return parsed


def empty_records_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "feature": pd.Series(dtype="object"),
            "date": pd.Series(dtype="datetime64[ns]"),
            "distinct_count": pd.Series(dtype="float64"),
            "z_score": pd.Series(dtype="float64"),
            "anomaly_score": pd.Series(dtype="float64"),
            "is_anomaly": pd.Series(dtype="bool"),
            "severity": pd.Series(dtype="object"),
        }
    )


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    rows = list(records)
    if not rows:
        return empty_records_frame()
    frame = pd.DataFrame(
        {
            "feature": [record.feature for record in rows],
            "date": pd.to_datetime([record.date for record in rows]).normalize(),
            "distinct_count": pd.to_numeric([record.distinct_count for record in rows]),
            "z_score": [float(record.z_score) for record in rows],
            "anomaly_score": [float(record.anomaly_score) for record in rows],
            "is_anomaly": [parse_flag(record.is_anomaly) for record in rows],
            "severity": [Severity.parse(record.severity).value for record in rows],
        }
    )
    return frame[RECORD_COLUMNS]


def frame_to_records(frame: pd.DataFrame) -> list[Record]:
    return [
        Record(
            feature=str(row.feature),
            date=pd.Timestamp(row.date).date(),
            distinct_count=as_python_scalar(row.distinct_count),
            z_score=float(row.z_score),
            anomaly_score=float(row.anomaly_score),
            is_anomaly=parse_flag(row.is_anomaly),
            severity=Severity.parse(row.severity),
        )
        for row in frame[RECORD_COLUMNS].itertuples(index=False)
    ]


def sort_chronologically(frame: pd.DataFrame) -> pd.DataFrame:
    """Return a copy ordered by date.

    Rows sharing a date are ordered by their remaining record fields, so the
    result does not depend on the order rows were supplied in.
    """
    keys = [column for column in SORT_KEYS if column in frame.columns]
    return frame.sort_values(keys, kind="mergesort").reset_index(drop=True)


def feature_records(records: pd.DataFrame, feature: str) -> pd.DataFrame:
    """Re-derive the authoritative series for one feature from the full record set."""
    if records.empty:
        return empty_records_frame()
    subset = records.loc[records["feature"] == feature]
    return sort_chronologically(subset)
