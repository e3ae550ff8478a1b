"""
CONTRACT 2: Indicator & Forecast Engine

Input: ForecastRequest
Output: ForecastBundle

Responses are serialized with camelCase keys (currentPrice,
technicalAnalysis, ...) which is what the dashboard reads.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model emitting camelCase JSON while accepting either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# ENUMS
# =============================================================================


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class VolumeTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"


class MarketSentiment(str, Enum):
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"


# =============================================================================
# INPUT: ForecastRequest
# =============================================================================


class ForecastRequest(CamelModel):
    """
    Request for a forecast.
    Sent by: Dashboard
    Received by: Forecast Service
    """

    symbol: str = Field(default="BTC", description="Crypto symbol, e.g. BTC, ETH")
    horizons: Optional[list[str]] = Field(
        default=None,
        description="Horizon names to predict (default: all)",
    )


# =============================================================================
# OUTPUT: Components
# =============================================================================


class MACDData(CamelModel):
    value: float
    signal: float
    histogram: float


class BollingerBandsData(CamelModel):
    upper: float
    middle: float
    lower: float


class IndicatorSnapshot(CamelModel):
    """Indicator values derived from one PriceSeries at one point in time."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    ma7: float
    ma14: float
    ma30: float
    ma50: float
    ma200: float
    ema12: float
    ema26: float
    rsi: float = Field(..., ge=0, le=100)
    macd: MACDData
    bollinger_bands: BollingerBandsData
    volatility: float = Field(..., ge=0, description="Annualized, percent")
    volume_ratio: float = Field(..., ge=0)
    volume_trend: VolumeTrend
    price_change: float = Field(..., description="% change over the last bar")
    momentum: float
    market_sentiment: MarketSentiment
    trend: TrendDirection


class SentimentData(CamelModel):
    """Keyword sentiment over a text corpus."""

    score: float = Field(..., ge=-1, le=1)
    mentions: int = Field(..., ge=0)
    positive_count: int = Field(..., ge=0)
    negative_count: int = Field(..., ge=0)
    keywords: dict[str, int] = Field(default_factory=dict)


class OrderBookPressure(CamelModel):
    bid_value: float = Field(..., ge=0)
    ask_value: float = Field(..., ge=0)
    pressure_ratio: float = Field(..., ge=0)


class SignalComponents(CamelModel):
    """Signed contribution of each signal to technical strength."""

    moving_average: float = 0.0
    rsi: float = 0.0
    macd: float = 0.0
    bollinger: float = 0.0
    volume: float = 0.0
    order_book: float = 0.0
    sentiment: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.moving_average
            + self.rsi
            + self.macd
            + self.bollinger
            + self.volume
            + self.order_book
            + self.sentiment
        )


class CompositeSignal(CamelModel):
    """Output of the Signal Composer."""

    components: SignalComponents
    technical_strength: float
    trend_multiplier: float = Field(..., gt=0)
    composite_confidence: float = Field(..., ge=0, le=1)
    volatility_damping: float = Field(..., ge=0, le=1)


class Prediction(CamelModel):
    """Predicted price for one horizon."""

    horizon_seconds: int = Field(..., gt=0)
    time: int = Field(..., description="Target unix timestamp (seconds)")
    price: float = Field(..., ge=0)
    confidence: float = Field(..., ge=0, le=1)


class PredictionSummary(CamelModel):
    price: float
    trend: TrendDirection
    confidence: float = Field(..., ge=0, le=1)


class HistoryPoint(CamelModel):
    time: int
    close: float


# =============================================================================
# OUTPUT: ForecastBundle (Complete Response)
# =============================================================================


class ForecastBundle(CamelModel):
    """
    Complete forecast for a symbol.
    Returned by: Forecast Service
    Consumed by: Dashboard
    """

    symbol: str
    current_price: float = Field(..., gt=0)
    history: list[HistoryPoint]
    hourly_history: list[HistoryPoint] = Field(default_factory=list)
    minute_history: list[HistoryPoint] = Field(default_factory=list)
    predictions: dict[str, Prediction]
    prediction: Optional[PredictionSummary] = None
    technical_analysis: IndicatorSnapshot
    signals: CompositeSignal
    sentiment: Optional[SentimentData] = None
    order_book: Optional[OrderBookPressure] = None
    last_updated: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "symbol": "BTC",
                "currentPrice": 67250.5,
                "history": [{"time": 1717200000, "close": 67010.2}],
                "predictions": {
                    "day": {
                        "horizonSeconds": 86400,
                        "time": 1717286400,
                        "price": 67580.1,
                        "confidence": 0.71,
                    }
                },
                "technicalAnalysis": {"ma7": 66890.3, "rsi": 58.2, "trend": "up"},
                "lastUpdated": "2024-06-01T00:00:00Z",
            }
        },
    )


class IndicatorResponse(CamelModel):
    """Indicator snapshot without predictions."""

    symbol: str
    current_price: float
    technical_analysis: IndicatorSnapshot
    last_updated: datetime
