from __future__ import annotations

import http.client
import itertools
import json
import logging
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping

import pandas as pd

from anomaly_explorer.config import NewsConfig

LOGGER = logging.getLogger(__name__)

NEWS_ERROR_MESSAGE = "Failed to fetch news data"


@dataclass(frozen=True)
class NewsResult:
    sentiment: str
    summary: str
    debug_metrics: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


NEWS_ERROR_RESULT = NewsResult(
    sentiment="Error",
    summary="Error loading news data",
    debug_metrics={
        "newsSummary": NEWS_ERROR_MESSAGE,
        "overallAverageImpact": "0",
        "totalArticles": "0",
    },
    error=NEWS_ERROR_MESSAGE,
)


def news_date_key(value: date | datetime | pd.Timestamp | str) -> str:
    """Format a date as the ``YYYYMMDD`` key the news service expects."""
    if isinstance(value, str):
        key = value.strip().replace("-", "").replace("/", "")
        if len(key) != 8 or not key.isdigit():
            raise ValueError(f"Expected an ISO date (YYYY-MM-DD), got: {value!r}")
        return key
    return pd.Timestamp(value).strftime("%Y%m%d")


def news_request_params(value: date | datetime | pd.Timestamp | str) -> dict[str, str]:
    return {"date": news_date_key(value)}


def parse_news_response(payload: Mapping[str, Any]) -> NewsResult:
    if not isinstance(payload, Mapping):
        raise ValueError("News response must be a JSON object")
    output = payload.get("output")
    if not isinstance(output, Mapping):
        raise ValueError("News response is missing the 'output' object")
    debug = output.get("DebugData") or {}
    if not isinstance(debug, Mapping):
        raise ValueError("News response 'DebugData' must be an object")
    error = payload.get("error")
    return NewsResult(
        sentiment=str(output.get("MarketSentiment", "")),
        summary=str(output.get("NewsSummary", "")),
        debug_metrics={str(key): str(value) for key, value in debug.items()},
        error=str(error) if error else None,
    )


def build_news_url(base_url: str, value: date | datetime | pd.Timestamp | str) -> str:
    separator = "&" if urllib.parse.urlparse(base_url).query else "?"
    return f"{base_url}{separator}{urllib.parse.urlencode(news_request_params(value))}"


def fetch_news(value: date | datetime | pd.Timestamp | str, config: NewsConfig) -> NewsResult:
    """Look up news for one date; any failure yields ``NEWS_ERROR_RESULT``.

    There is no retry and no de-duplication of concurrent lookups. Callers that
    issue several lookups should route results through ``NewsRequestGuard``.
    """
    if not config.enabled or not config.base_url:
        LOGGER.info("News lookup disabled or no base_url configured")
        return NEWS_ERROR_RESULT
    try:
        url = build_news_url(config.base_url, value)
        with urllib.request.urlopen(url, timeout=config.timeout_seconds) as response:
            payload = json.loads(response.read().decode("utf-8"))
        return parse_news_response(payload)
    except (OSError, ValueError, http.client.HTTPException) as exc:
        LOGGER.warning("Error fetching news data for %s: %s", value, exc)
        return NEWS_ERROR_RESULT


@dataclass(frozen=True)
class NewsRequest:
    request_id: int
    params: dict[str, str]


class NewsRequestGuard:
    """Tracks the latest news request so a slower, older response cannot replace it."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest_id: int | None = None
        self.result: NewsResult | None = None

    @property
    def is_loading(self) -> bool:
        return self._latest_id is not None and self.result is None

    def begin(self, value: date | datetime | pd.Timestamp | str) -> NewsRequest:
        request = NewsRequest(request_id=next(self._counter), params=news_request_params(value))
        self._latest_id = request.request_id
        self.result = None
        return request

    def resolve(self, request_id: int, result: NewsResult) -> bool:
        if request_id != self._latest_id:
            LOGGER.debug("Dropping stale news response for request %s", request_id)
            return False
        self.result = result
        return True

    def reset(self) -> None:
        self._latest_id = None
        self.result = None
