"""
API v1 Router

All API endpoints for the dashboard.
"""

from fastapi import APIRouter

from cryptocast.api.v1.endpoints import forecast, indicators, sentiment

router = APIRouter()

# Include all endpoint routers
router.include_router(forecast.router, prefix="/forecast", tags=["Forecast"])
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(sentiment.router, prefix="/sentiment", tags=["Sentiment"])
