"""
Sentiment API Endpoints

Keyword sentiment over recent headlines.
"""

from fastapi import APIRouter

from cryptocast.schemas.forecast import SentimentData
from cryptocast.services.forecast import get_forecast_service
from cryptocast.services.sentiment import get_sentiment_service

router = APIRouter()


@router.get("/{symbol}", response_model=SentimentData)
async def get_sentiment(symbol: str):
    """
    Get keyword sentiment for a symbol.

    Example: `/sentiment/ETH`
    """
    symbol = get_forecast_service().normalize_symbol(symbol)
    return await get_sentiment_service().get_sentiment(symbol)
