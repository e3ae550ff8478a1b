"""
Forecast Service

CONTRACT:
    Input:  ForecastRequest
    Output: ForecastBundle

RESPONSIBILITIES:
    - Fetch market data (concurrently, bounded by timeouts)
    - Build the indicator snapshot
    - Compose signals into a trend multiplier and confidence
    - Project prices over each requested horizon

Stateless - every request is computed fresh.
"""

from cryptocast.services.forecast.interface import ForecastServiceInterface
from cryptocast.services.forecast.generator import (
    HORIZONS,
    Horizon,
    generate_predictions,
    resolve_horizons,
    summarize,
)
from cryptocast.services.forecast.service import ForecastService, get_forecast_service

__all__ = [
    "ForecastServiceInterface",
    "ForecastService",
    "get_forecast_service",
    "HORIZONS",
    "Horizon",
    "generate_predictions",
    "resolve_horizons",
    "summarize",
]
