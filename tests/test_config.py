from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from anomaly_explorer.config import NEWS_URL_ENV_VAR, load_config


def test_load_config_defaults_match_export_columns(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("{}", encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg.columns.feature == "Feature"
    assert cfg.columns.is_anomaly == "is_anomaly"
    assert cfg.view.window == "MAX"
    assert cfg.view.frequency == "daily"
    assert (cfg.sparkline.stride, cfg.sparkline.max_points) == (3, 10)
    assert cfg.outputs.tables_format == "parquet"


def test_load_config_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "columns": {"feature": "field_name"},
                "view": {"window": "3M", "frequency": "weekly"},
                "sparkline": {"stride": 2, "max_points": 5},
                "outputs": {"tables_format": "csv"},
            }
        ),
        encoding="utf-8",
    )

    cfg = load_config(config_path)

    assert cfg.columns.feature == "field_name"
    assert cfg.columns.date == "date_of_use"
    assert cfg.view.window == "3M"
    assert cfg.view.frequency == "weekly"
    assert cfg.sparkline.max_points == 5
    assert cfg.outputs.tables_format == "csv"


def test_load_config_uses_env_news_url(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"news": {"timeout_seconds": 3}}), encoding="utf-8")
    monkeypatch.setenv(NEWS_URL_ENV_VAR, "https://news.example/GetNews")

    cfg = load_config(config_path)

    assert cfg.news.base_url == "https://news.example/GetNews"
    assert cfg.news.timeout_seconds == 3.0


def test_load_config_rejects_unknown_sections_and_bad_values(tmp_path: Path) -> None:
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text(yaml.safe_dump({"charts": {}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(unknown)

    bad_stride = tmp_path / "bad.yaml"
    bad_stride.write_text(yaml.safe_dump({"sparkline": {"stride": 0}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(bad_stride)


def test_repository_default_config_loads() -> None:
    default_path = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"
    cfg = load_config(default_path)
    assert cfg.news.enabled
