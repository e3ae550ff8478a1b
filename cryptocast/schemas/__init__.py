"""
CryptoCast Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from cryptocast.schemas.market import (
    Granularity,
    HistoricalBar,
    HistoryPayload,
    MarketData,
    OrderBookLevel,
    OrderBookSnapshot,
    PriceSeries,
)
from cryptocast.schemas.forecast import (
    BollingerBandsData,
    CompositeSignal,
    ForecastBundle,
    ForecastRequest,
    IndicatorResponse,
    IndicatorSnapshot,
    MACDData,
    MarketSentiment,
    OrderBookPressure,
    Prediction,
    PredictionSummary,
    SentimentData,
    SignalComponents,
    TrendDirection,
    VolumeTrend,
)

__all__ = [
    # Market
    "Granularity",
    "HistoricalBar",
    "HistoryPayload",
    "MarketData",
    "OrderBookLevel",
    "OrderBookSnapshot",
    "PriceSeries",
    # Forecast
    "BollingerBandsData",
    "CompositeSignal",
    "ForecastBundle",
    "ForecastRequest",
    "IndicatorResponse",
    "IndicatorSnapshot",
    "MACDData",
    "MarketSentiment",
    "OrderBookPressure",
    "Prediction",
    "PredictionSummary",
    "SentimentData",
    "SignalComponents",
    "TrendDirection",
    "VolumeTrend",
]
