"""
Market Data Service Implementation

Issues every upstream fetch for a symbol concurrently and joins them before
any computation starts.

Required: spot price, daily, hourly and minute history (CryptoCompare).
Optional: order book depth, sentiment corpus (config flags).

A failed or timed-out required fetch fails the whole request and cancels
its siblings. Optional fetch failures are logged and left out.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

import aiohttp

from cryptocast.core.config import Settings, settings as default_settings
from cryptocast.schemas.market import Granularity, MarketData
from cryptocast.services.base import ServiceError, UpstreamTimeoutError
from cryptocast.services.market_data.interface import MarketDataServiceInterface
from cryptocast.services.market_data.http_client import build_session
from cryptocast.services.market_data.cryptocompare_adapter import fetch_history, fetch_price
from cryptocast.services.market_data.orderbook_adapter import fetch_order_book
from cryptocast.services.sentiment import SentimentService

logger = logging.getLogger(__name__)


class MarketDataService(MarketDataServiceInterface):
    """
    Market Data Service.

    One aiohttp session is shared by all adapters.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        sentiment_service: Optional[SentimentService] = None,
    ):
        self._settings = config or default_settings
        self._sentiment = sentiment_service or SentimentService(config=self._settings)
        self._owns_sentiment = sentiment_service is None
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = build_session(self._settings.upstream_timeout_seconds)
        return self._session

    async def close(self) -> None:
        """Close the HTTP sessions."""
        if self._session and not self._session.closed:
            await self._session.close()
        if self._owns_sentiment:
            await self._sentiment.close()

    async def _bounded(self, key: str, coro: Awaitable[Any]) -> Any:
        """Await one upstream call under the per-call timeout."""
        timeout = self._settings.upstream_timeout_seconds
        try:
            return await asyncio.wait_for(coro, timeout=timeout)
        except asyncio.TimeoutError:
            raise UpstreamTimeoutError(self.name, f"{key} exceeded {timeout}s")

    async def execute(self, input_data: str) -> MarketData:
        """Fetch and normalize all inputs for one symbol."""
        symbol = input_data.upper()
        cfg = self._settings
        session = await self._ensure_session()

        required = {
            "price": fetch_price(session, symbol, config=cfg),
            "daily": fetch_history(
                session, symbol, Granularity.DAY, cfg.daily_history_limit, config=cfg
            ),
            "hourly": fetch_history(
                session, symbol, Granularity.HOUR, cfg.hourly_history_limit, config=cfg
            ),
            "minute": fetch_history(
                session, symbol, Granularity.MINUTE, cfg.minute_history_limit, config=cfg
            ),
        }
        optional = {}
        if cfg.enable_order_book:
            optional["order_book"] = fetch_order_book(session, symbol, config=cfg)
        if cfg.enable_sentiment:
            optional["sentiment_corpus"] = self._sentiment.fetch_corpus(symbol)

        tasks = {
            key: asyncio.create_task(self._bounded(key, coro))
            for key, coro in {**required, **optional}.items()
        }

        try:
            values = await asyncio.gather(*(tasks[key] for key in required))
        except BaseException:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            raise

        results = dict(zip(required, values))

        extras = await asyncio.gather(
            *(tasks[key] for key in optional), return_exceptions=True
        )
        for key, value in zip(optional, extras):
            if isinstance(value, ServiceError):
                logger.warning(f"Optional source {key} unavailable for {symbol}: {value}")
                value = None
            elif isinstance(value, BaseException):
                raise value
            results[key] = value

        sources = ["CryptoCompare"] + [k for k in optional if results.get(k) is not None]
        logger.info(
            f"Market data for {symbol}: price={results['price']} "
            f"daily={len(results['daily'])} hourly={len(results['hourly'])} "
            f"minute={len(results['minute'])} sources={sources}"
        )

        return MarketData(
            symbol=symbol,
            current_price=results["price"],
            daily=results["daily"],
            hourly=results["hourly"],
            minute=results["minute"],
            order_book=results.get("order_book"),
            sentiment_corpus=results.get("sentiment_corpus"),
            sources=sources,
        )

    async def health_check(self) -> bool:
        """Check connectivity to CryptoCompare."""
        try:
            session = await self._ensure_session()
            await self._bounded("price", fetch_price(session, "BTC", config=self._settings))
            return True
        except ServiceError:
            return False


# Singleton instance
_service_instance: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get or create market data service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MarketDataService()
    return _service_instance
