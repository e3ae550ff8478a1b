"""
Indicator API Endpoints

Technical indicator snapshot without predictions.
"""

from fastapi import APIRouter

from cryptocast.schemas.forecast import IndicatorResponse
from cryptocast.services.forecast import get_forecast_service

router = APIRouter()


@router.get("/{symbol}", response_model=IndicatorResponse)
async def get_indicators(symbol: str):
    """
    Get the indicator snapshot for a symbol.

    Returns:
        - Moving averages (7/14/30/50/200) and EMA 12/26
        - RSI, MACD, Bollinger Bands
        - Volatility, volume trend, price change
    """
    service = get_forecast_service()
    return await service.get_indicators(symbol)
