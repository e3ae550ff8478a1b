"""
CONTRACT 1: Market Data Layer

Input: raw CryptoCompare / order book payloads
Output: MarketData (normalized, chronological PriceSeries)

Upstream payloads are validated against these schemas at the boundary so
that missing fields surface as DataUnavailableError instead of flowing
through the arithmetic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class Granularity(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


# CryptoCompare endpoint per granularity
HISTORY_ENDPOINTS = {
    Granularity.MINUTE: "/data/v2/histominute",
    Granularity.HOUR: "/data/v2/histohour",
    Granularity.DAY: "/data/v2/histoday",
}


# =============================================================================
# INPUT: Raw upstream payloads
# =============================================================================


class HistoricalBar(BaseModel):
    """Single CryptoCompare OHLCV bar."""

    model_config = ConfigDict(extra="ignore")

    time: int = Field(..., ge=0, description="Unix timestamp (seconds)")
    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volumefrom: float = Field(default=0.0, ge=0, description="Base volume")
    volumeto: float = Field(default=0.0, ge=0, description="Quote volume")


class HistoryData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    Data: list[HistoricalBar]


class HistoryPayload(BaseModel):
    """CryptoCompare v2 history response (`Data.Data` holds the bars)."""

    model_config = ConfigDict(extra="ignore")

    Response: str = "Success"
    Message: str = ""
    Data: HistoryData


class OrderBookLevel(BaseModel):
    """Single price level of an order book side."""

    price: float = Field(..., gt=0)
    quantity: float = Field(..., ge=0)


class OrderBookSnapshot(BaseModel):
    """Bids and asks at one point in time."""

    bids: list[OrderBookLevel] = Field(default_factory=list)
    asks: list[OrderBookLevel] = Field(default_factory=list)

    @property
    def bid_value(self) -> float:
        return sum(level.price * level.quantity for level in self.bids)

    @property
    def ask_value(self) -> float:
        return sum(level.price * level.quantity for level in self.asks)

    @property
    def pressure_ratio(self) -> float:
        """Aggregate bid value over aggregate ask value (1.0 if a side is empty)."""
        bid_value = self.bid_value
        ask_value = self.ask_value
        if bid_value <= 0 or ask_value <= 0:
            return 1.0
        return bid_value / ask_value


# =============================================================================
# OUTPUT: Normalized series
# =============================================================================


@dataclass(frozen=True)
class PriceSeries:
    """Aligned OHLCV arrays, ordered oldest -> newest."""

    granularity: Granularity
    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    def __len__(self) -> int:
        return len(self.closes)

    @property
    def latest_close(self) -> Optional[float]:
        return float(self.closes[-1]) if len(self.closes) else None

    def history_points(self) -> list[dict]:
        """`{time, close}` points for charting."""
        return [
            {"time": int(ts), "close": float(close)}
            for ts, close in zip(self.timestamps, self.closes)
        ]


@dataclass
class MarketData:
    """Everything fetched for one forecast request."""

    symbol: str
    current_price: float
    daily: PriceSeries
    hourly: Optional[PriceSeries] = None
    minute: Optional[PriceSeries] = None
    order_book: Optional[OrderBookSnapshot] = None
    sentiment_corpus: Optional[list[str]] = None
    sources: list[str] = field(default_factory=list)
