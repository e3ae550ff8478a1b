"""
Indicator Engine Service

CONTRACT:
    Input:  PriceSeries (daily closes and volumes)
    Output: IndicatorSnapshot

RESPONSIBILITIES:
    - Moving averages (SMA 7/14/30/50/200, EMA 12/26)
    - Momentum (RSI, MACD)
    - Volatility (Bollinger Bands, annualized log-return volatility)
    - Volume trend ratio

Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from cryptocast.services.indicators.interface import IndicatorServiceInterface
from cryptocast.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
