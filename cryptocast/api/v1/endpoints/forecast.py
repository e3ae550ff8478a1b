"""
Forecast API Endpoints

Price predictions with indicator snapshot for a coin.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from cryptocast.schemas.forecast import ForecastBundle, ForecastRequest
from cryptocast.services.forecast import HORIZONS, get_forecast_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ForecastBundle)
async def create_forecast(request: ForecastRequest):
    """
    Generate a forecast for a symbol.

    Body: `{"symbol": "BTC", "horizons": ["day", "week"]}` (horizons optional)
    """
    service = get_forecast_service()
    return await service.execute(request)


@router.get("/horizons")
async def list_horizons():
    """Available horizon names with their length and baseline confidence."""
    return [
        {"name": h.name, "seconds": h.seconds, "baseConfidence": h.base_confidence}
        for h in HORIZONS
    ]


@router.get("/{symbol}", response_model=ForecastBundle)
async def get_forecast(
    symbol: str,
    horizons: Optional[list[str]] = Query(default=None, description="Horizon names"),
):
    """
    Generate a forecast for a symbol.

    Example: `/forecast/ETH?horizons=day&horizons=month`
    """
    service = get_forecast_service()
    return await service.execute(ForecastRequest(symbol=symbol, horizons=horizons))
