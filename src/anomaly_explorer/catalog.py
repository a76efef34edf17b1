from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from anomaly_explorer.numeric import as_python_scalar, round_half_away
from anomaly_explorer.records import Severity

CATALOG_COLUMNS = [
    "id",
    "name",
    "distinct_count",
    "z_score",
    "anomaly_score",
    "is_anomaly",
    "severity",
]


@dataclass(frozen=True)
class FeatureSummary:
    id: int
    name: str
    distinct_count: float
    z_score: float
    anomaly_score: float
    is_anomaly: bool
    severity: Severity


def _empty_catalog() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": pd.Series(dtype="int64"),
            "name": pd.Series(dtype="object"),
            "distinct_count": pd.Series(dtype="float64"),
            "z_score": pd.Series(dtype="float64"),
            "anomaly_score": pd.Series(dtype="float64"),
            "is_anomaly": pd.Series(dtype="bool"),
            "severity": pd.Series(dtype="object"),
        }
    )


def build_feature_catalog(records: pd.DataFrame) -> pd.DataFrame:
    """One row per feature, in the order features first appear in ``records``.

    The snapshot columns come from the first record seen for each feature and
    are display metadata only; series are always re-derived from ``records``.
    """
    if records.empty:
        return _empty_catalog()

    first_seen = records.drop_duplicates(subset="feature", keep="first").reset_index(drop=True)
    catalog = pd.DataFrame(
        {
            "id": pd.RangeIndex(start=1, stop=len(first_seen) + 1).to_numpy(dtype="int64"),
            "name": first_seen["feature"].astype(str),
            "distinct_count": first_seen["distinct_count"],
            "z_score": round_half_away(first_seen["z_score"], decimals=2),
            "anomaly_score": first_seen["anomaly_score"],
            "is_anomaly": first_seen["is_anomaly"].astype(bool),
            "severity": first_seen["severity"],
        }
    )
    return catalog[CATALOG_COLUMNS]


def filter_catalog(catalog: pd.DataFrame, query: str | None) -> pd.DataFrame:
    term = (query or "").strip().lower()
    if not term:
        return catalog.copy()
    matches = catalog["name"].astype(str).str.lower().str.contains(term, regex=False)
    return catalog.loc[matches].reset_index(drop=True)


def catalog_entries(catalog: pd.DataFrame) -> list[FeatureSummary]:
    return [
        FeatureSummary(
            id=int(row.id),
            name=str(row.name),
            distinct_count=as_python_scalar(row.distinct_count),
            z_score=float(row.z_score),
            anomaly_score=float(row.anomaly_score),
            is_anomaly=bool(row.is_anomaly),
            severity=Severity.parse(row.severity),
        )
        for row in catalog[CATALOG_COLUMNS].itertuples(index=False)
    ]
