"""
Indicator Engine Service Implementation

Calculates the indicator snapshot from a daily price series.
Pure Python/NumPy calculations.
"""

import logging
from typing import Optional

import numpy as np

from cryptocast.core.config import SignalWeights, settings
from cryptocast.schemas.market import PriceSeries
from cryptocast.schemas.forecast import (
    BollingerBandsData,
    IndicatorSnapshot,
    MACDData,
    MarketSentiment,
    TrendDirection,
    VolumeTrend,
)
from cryptocast.services.indicators.interface import IndicatorServiceInterface
from cryptocast.services.indicators.calculations import (
    bollinger_bands,
    ema,
    macd,
    moving_average,
    price_change,
    rsi,
    trend_score,
    volatility,
    volume_ratio,
)

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for market analysis.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, weights: Optional[SignalWeights] = None):
        self._weights = weights or settings.signal_weights

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: PriceSeries) -> IndicatorSnapshot:
        """Calculate the indicator snapshot for a daily series."""
        return self.calculate(input_data.closes, input_data.volumes)

    def calculate(self, closes: np.ndarray, volumes: np.ndarray) -> IndicatorSnapshot:
        """Calculate all indicators at the latest bar."""
        weights = self._weights

        ma7 = moving_average(closes, 7)
        ma14 = moving_average(closes, 14)
        ma30 = moving_average(closes, 30)
        ma50 = moving_average(closes, 50)
        ma200 = moving_average(closes, 200)

        rsi_val = rsi(closes, 14)
        macd_val, signal_val, hist_val = macd(closes)
        upper, middle, lower = bollinger_bands(closes, 20, 2.0)
        vol_ratio = volume_ratio(volumes)

        if rsi_val > weights.rsi_overbought:
            sentiment = MarketSentiment.OVERBOUGHT
        elif rsi_val < weights.rsi_oversold:
            sentiment = MarketSentiment.OVERSOLD
        else:
            sentiment = MarketSentiment.NEUTRAL

        score = trend_score(
            ma7,
            ma14,
            ma30,
            ma50,
            ma200,
            (weights.ma_short_signal, weights.ma_medium_signal, weights.ma_long_signal),
        )

        snapshot = IndicatorSnapshot(
            ma7=ma7,
            ma14=ma14,
            ma30=ma30,
            ma50=ma50,
            ma200=ma200,
            ema12=ema(closes, 12),
            ema26=ema(closes, 26),
            rsi=rsi_val,
            macd=MACDData(value=macd_val, signal=signal_val, histogram=hist_val),
            bollinger_bands=BollingerBandsData(upper=upper, middle=middle, lower=lower),
            volatility=volatility(closes, 30),
            volume_ratio=vol_ratio,
            volume_trend=VolumeTrend.INCREASING if vol_ratio > 1 else VolumeTrend.DECREASING,
            price_change=price_change(closes),
            momentum=1 + (rsi_val - 50) / 100,
            market_sentiment=sentiment,
            trend=TrendDirection.UP if score > 0 else TrendDirection.DOWN,
        )

        logger.debug(
            f"Indicators over {len(closes)} bars: rsi={rsi_val:.2f} "
            f"ma7={ma7:.4f} ma30={ma30:.4f} trend={snapshot.trend.value}"
        )
        return snapshot

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
