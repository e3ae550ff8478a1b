"""
Application Configuration

All settings loaded from environment variables.
Nested groups use a double underscore, e.g. SIGNAL_WEIGHTS__RSI_SIGNAL=0.25
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SignalWeights(BaseModel):
    """
    Named weights for the Signal Composer.

    Every heuristic constant used to turn indicators into a trend
    multiplier and a confidence lives here.
    """

    # Moving-average trend vote (short, medium, long)
    ma_short_signal: float = 0.15
    ma_medium_signal: float = 0.10
    ma_long_signal: float = 0.05

    # RSI overbought / oversold
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    rsi_signal: float = 0.2

    # MACD histogram sign
    macd_signal: float = 0.1

    # Price outside the Bollinger envelope
    bollinger_signal: float = 0.15

    # Volume ratio (trailing 7 vs prior window)
    volume_dead_band: float = 0.05
    volume_signal: float = 0.1

    # Order book buy/sell pressure
    order_book_ratio: float = Field(default=1.2, gt=1)
    order_book_strong_ratio: float = Field(default=1.5, gt=1)
    order_book_signal: float = 0.1
    order_book_strong_signal: float = 0.3

    # Keyword sentiment score multiplier
    sentiment_multiplier: float = 0.2

    # Composite bounds
    max_strength: float = Field(default=0.5, gt=0)
    weekly_rate_scale: float = 0.2
    max_weekly_move: float = Field(default=0.1, ge=0, lt=1)

    # Confidence blend
    confidence_floor: float = Field(default=0.6, ge=0, le=1)
    technical_confidence_weight: float = 0.4
    volume_confidence_weight: float = 0.2
    sentiment_confidence_weight: float = 0.2
    depth_confidence_weight: float = 0.2
    min_volatility_damping: float = Field(default=0.7, ge=0, le=1)


class ForecastConfig(BaseModel):
    """Bounds applied by the Forecast Generator."""

    min_confidence: float = Field(default=0.05, ge=0, le=1)
    max_confidence: float = Field(default=0.98, ge=0, le=1)
    # Cumulative price factor is kept within [1/(1+x), 1+x]
    max_cumulative_move: float = Field(default=1.0, gt=0)
    summary_horizon: str = "month"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CryptoCast Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    frontend_url: str = "http://localhost:5173"
    allowed_origins: list[str] = ["http://localhost:5173"]

    # CryptoCompare price API
    cryptocompare_api_key: Optional[str] = None
    cryptocompare_base_url: str = "https://min-api.cryptocompare.com"
    quote_currency: str = "USD"
    default_symbol: str = "BTC"

    # History windows (number of bars requested)
    daily_history_limit: int = 365
    hourly_history_limit: int = 168
    minute_history_limit: int = 120

    # Order book depth (Binance-style REST depth endpoint)
    enable_order_book: bool = False
    order_book_url: str = "https://api.binance.com/api/v3/depth"
    order_book_quote_asset: str = "USDT"
    order_book_depth: int = 100

    # Sentiment corpus (Google News RSS search)
    enable_sentiment: bool = True
    news_rss_url: str = "https://news.google.com/rss/search"
    sentiment_max_articles: int = 30

    # Timeouts (seconds)
    upstream_timeout_seconds: float = 10.0
    request_deadline_seconds: float = 25.0

    # Heuristic tuning
    signal_weights: SignalWeights = SignalWeights()
    forecast: ForecastConfig = ForecastConfig()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
