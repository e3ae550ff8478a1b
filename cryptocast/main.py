"""
CryptoCast Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cryptocast.core.config import settings
from cryptocast.api.v1 import router as api_v1_router
from cryptocast.services.base import ServiceError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to fetch data"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Order book: {settings.enable_order_book}, sentiment: {settings.enable_sentiment}"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")
    from cryptocast.services.market_data import get_market_data_service
    from cryptocast.services.sentiment import get_sentiment_service

    await get_market_data_service().close()
    await get_sentiment_service().close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    CryptoCast Indicator & Forecast API

    ## Architecture
    - **Market Data**: Fetches price and history from CryptoCompare
    - **Indicator Engine**: SMA/EMA, RSI, MACD, Bollinger Bands, volatility (NumPy)
    - **Signal Composer**: Blends indicators, order book pressure and sentiment
    - **Forecast Generator**: Multi-horizon price and confidence estimates

    ## Core Principles
    - Heuristic forecasts, not financial advice
    - Confidence is a fraction in [0, 1] and decays with horizon
    - Stateless: every request is computed fresh
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow the dashboard dev servers
cors_origins = [
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:5173",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Report every service failure as one generic error."""
    logger.error(f"{request.method} {request.url.path} failed: {exc} {exc.details}")
    return JSONResponse(status_code=exc.status_code, content={"error": GENERIC_ERROR})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies/queries are reported like any other failure."""
    logger.error(f"{request.method} {request.url.path} invalid request: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": GENERIC_ERROR})


# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "CryptoCast Backend API",
        "docs": "/docs",
        "health": "/health",
    }
