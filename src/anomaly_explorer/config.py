from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

NEWS_URL_ENV_VAR = "ANOMALY_EXPLORER_NEWS_URL"


class ColumnsConfig(BaseModel):
    feature: str = "Feature"
    date: str = "date_of_use"
    distinct_count: str = "distinct_CID_count"
    z_score: str = "z_score"
    anomaly_score: str = "anomaly_score"
    is_anomaly: str = "is_anomaly"
    severity: str = "anomaly_severity"


class ViewConfig(BaseModel):
    window: Literal["30D", "3M", "6M", "MAX"] = "MAX"
    frequency: Literal["daily", "weekly", "monthly"] = "daily"


class SparklineConfig(BaseModel):
    stride: int = Field(default=3, ge=1)
    max_points: int = Field(default=10, ge=1)


class NewsConfig(BaseModel):
    enabled: bool = True
    base_url: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class OutputsConfig(BaseModel):
    tables_format: Literal["parquet", "csv"] = "parquet"
    figures_format: str = "png"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    sparkline: SparklineConfig = Field(default_factory=SparklineConfig)
    news: NewsConfig = Field(default_factory=NewsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    config.news.base_url = config.news.base_url or os.getenv(NEWS_URL_ENV_VAR)
    return config
