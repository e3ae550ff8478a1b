"""
Forecast Service Implementation

Market Data -> Indicators -> Signal Composer -> Forecast Generator.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Optional

from cryptocast.core.config import Settings, settings as default_settings
from cryptocast.schemas.market import MarketData
from cryptocast.schemas.forecast import (
    ForecastBundle,
    ForecastRequest,
    HistoryPoint,
    IndicatorResponse,
    OrderBookPressure,
)
from cryptocast.services.base import UpstreamTimeoutError, ValidationError
from cryptocast.services.forecast.interface import ForecastServiceInterface
from cryptocast.services.forecast.generator import (
    generate_predictions,
    resolve_horizons,
    summarize,
)
from cryptocast.services.indicators import IndicatorService
from cryptocast.services.market_data import MarketDataService, get_market_data_service
from cryptocast.services.sentiment import analyze_sentiment
from cryptocast.services.signals import compose_signals

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{1,15}$")


def _points(series) -> list[HistoryPoint]:
    if series is None:
        return []
    return [HistoryPoint(**point) for point in series.history_points()]


class ForecastService(ForecastServiceInterface):
    """
    Forecast Service.

    Stateless per request; collaborators are injected for testing.
    """

    def __init__(
        self,
        market_data: Optional[MarketDataService] = None,
        indicators: Optional[IndicatorService] = None,
        config: Optional[Settings] = None,
    ):
        self._settings = config or default_settings
        self._market_data = market_data or get_market_data_service()
        self._indicators = indicators or IndicatorService(self._settings.signal_weights)

    @property
    def name(self) -> str:
        return "ForecastService"

    def normalize_symbol(self, symbol: Optional[str]) -> str:
        if symbol is None:
            symbol = self._settings.default_symbol
        symbol = symbol.strip().upper()
        if not SYMBOL_PATTERN.match(symbol):
            raise ValidationError(self.name, f"Invalid symbol: {symbol!r}")
        return symbol

    async def _fetch_market(self, symbol: str) -> MarketData:
        """Fetch market data within the request deadline."""
        deadline = self._settings.request_deadline_seconds
        try:
            return await asyncio.wait_for(
                self._market_data.execute(symbol), timeout=deadline
            )
        except asyncio.TimeoutError:
            raise UpstreamTimeoutError(self.name, f"Request for {symbol} exceeded {deadline}s")

    async def validate_input(self, input_data: ForecastRequest) -> ForecastRequest:
        """Normalize the symbol and reject unknown horizons."""
        symbol = self.normalize_symbol(input_data.symbol)
        resolve_horizons(input_data.horizons)
        return input_data.model_copy(update={"symbol": symbol})

    async def execute(self, input_data: ForecastRequest) -> ForecastBundle:
        """Fetch market data and build the forecast within the request deadline."""
        request = await self.validate_input(input_data)
        market = await self._fetch_market(request.symbol)

        bundle = self.build_bundle(market, request.horizons)
        logger.info(
            f"Forecast {request.symbol}: price={bundle.current_price} "
            f"strength={bundle.signals.technical_strength:+.3f} "
            f"multiplier={bundle.signals.trend_multiplier:.4f}"
        )
        return bundle

    def build_bundle(
        self,
        market: MarketData,
        horizons: Optional[Iterable[str]] = None,
        now: Optional[datetime] = None,
    ) -> ForecastBundle:
        """Build a forecast from already-fetched market data."""
        now = now or datetime.now(timezone.utc)
        weights = self._settings.signal_weights

        snapshot = self._indicators.calculate(market.daily.closes, market.daily.volumes)
        sentiment = (
            analyze_sentiment(market.sentiment_corpus)
            if market.sentiment_corpus is not None
            else None
        )

        signal = compose_signals(
            snapshot,
            market.current_price,
            order_book=market.order_book,
            sentiment=sentiment,
            weights=weights,
        )
        predictions = generate_predictions(
            market.current_price,
            signal,
            horizons=horizons,
            now=now,
            config=self._settings.forecast,
        )

        order_book = None
        if market.order_book is not None:
            order_book = OrderBookPressure(
                bid_value=market.order_book.bid_value,
                ask_value=market.order_book.ask_value,
                pressure_ratio=market.order_book.pressure_ratio,
            )

        return ForecastBundle(
            symbol=market.symbol,
            current_price=market.current_price,
            history=_points(market.daily),
            hourly_history=_points(market.hourly),
            minute_history=_points(market.minute),
            predictions=predictions,
            prediction=summarize(predictions, signal, self._settings.forecast),
            technical_analysis=snapshot,
            signals=signal,
            sentiment=sentiment,
            order_book=order_book,
            last_updated=now,
        )

    async def get_indicators(self, symbol: str) -> IndicatorResponse:
        """Indicator snapshot for a symbol without predictions."""
        symbol = self.normalize_symbol(symbol)
        market = await self._fetch_market(symbol)
        return IndicatorResponse(
            symbol=symbol,
            current_price=market.current_price,
            technical_analysis=self._indicators.calculate(
                market.daily.closes, market.daily.volumes
            ),
            last_updated=datetime.now(timezone.utc),
        )

    async def health_check(self) -> bool:
        return await self._market_data.health_check()


# Singleton instance
_service_instance: Optional[ForecastService] = None


def get_forecast_service() -> ForecastService:
    """Get or create forecast service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ForecastService()
    return _service_instance
