"""
Shared pytest fixtures: synthetic CryptoCompare payloads and series.
"""

from typing import Any, Optional, Sequence
from unittest.mock import MagicMock

import numpy as np
import pytest

from cryptocast.core.config import Settings
from cryptocast.schemas.market import Granularity, MarketData, PriceSeries
from cryptocast.services.market_data.normalizer import normalize_history

START_TIME = 1_700_000_000
DAY = 86_400


def make_history_payload(
    closes: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    start: int = START_TIME,
    step: int = DAY,
) -> dict:
    """CryptoCompare v2 history payload with one bar per close."""
    volumes = volumes if volumes is not None else [1_000_000.0] * len(closes)
    bars = [
        {
            "time": start + i * step,
            "open": close,
            "high": close,
            "low": close,
            "close": close,
            "volumefrom": 10.0,
            "volumeto": volume,
            "conversionType": "direct",
        }
        for i, (close, volume) in enumerate(zip(closes, volumes))
    ]
    return {
        "Response": "Success",
        "Message": "",
        "HasWarning": False,
        "Data": {"Aggregated": False, "TimeFrom": start, "Data": bars},
    }


def make_series(
    closes: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    granularity: Granularity = Granularity.DAY,
) -> PriceSeries:
    return normalize_history(make_history_payload(closes, volumes), granularity)


def make_market_data(
    closes: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    symbol: str = "BTC",
    **extra,
) -> MarketData:
    daily = make_series(closes, volumes)
    return MarketData(
        symbol=symbol,
        current_price=float(closes[-1]),
        daily=daily,
        hourly=make_series(closes[-5:], granularity=Granularity.HOUR),
        minute=make_series(closes[-3:], granularity=Granularity.MINUTE),
        **extra,
    )


class FakeResponse:
    """Stand-in for an aiohttp response used as `async with session.get(...)`."""

    def __init__(self, status: int = 200, body: str = "", payload: Any = None, json_error=None):
        self.status = status
        self._body = body
        self._payload = payload
        self._json_error = json_error

    async def text(self):
        return self._body

    async def json(self, content_type=None):
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def make_session(response=None, error=None) -> MagicMock:
    """Session whose `get` returns `response` or raises `error`."""
    session = MagicMock()
    session.closed = False
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


@pytest.fixture
def rising_closes() -> list[float]:
    """30 daily closes rising linearly from 100 to 130."""
    return list(np.linspace(100.0, 130.0, 30))


@pytest.fixture
def flat_volumes() -> list[float]:
    return [1_000_000.0] * 30


@pytest.fixture
def constant_closes() -> list[float]:
    return [100.0] * 60


@pytest.fixture
def test_settings() -> Settings:
    """Settings with optional sources off and short timeouts."""
    return Settings(
        enable_order_book=False,
        enable_sentiment=False,
        upstream_timeout_seconds=0.2,
        request_deadline_seconds=1.0,
    )
