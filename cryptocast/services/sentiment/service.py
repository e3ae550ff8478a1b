"""
Sentiment Service

Fetches a text corpus for a coin from Google News RSS and scores it with
the keyword analyzer.
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Optional

import aiohttp

from cryptocast.core.config import Settings, settings as default_settings
from cryptocast.schemas.forecast import SentimentData
from cryptocast.services.base import DataUnavailableError, UpstreamTimeoutError
from cryptocast.services.sentiment.analyzer import analyze_sentiment

logger = logging.getLogger(__name__)


def parse_rss_corpus(content: str, max_items: int) -> list[str]:
    """Extract title and description text from an RSS document."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise DataUnavailableError("SentimentService", f"Malformed RSS feed: {e}")

    texts = []
    for item in root.findall(".//item")[:max_items]:
        for tag in ("title", "description"):
            node = item.find(tag)
            if node is not None and node.text:
                texts.append(node.text)
    return texts


class SentimentService:
    """
    Service for fetching and scoring crypto chatter.

    Sources:
    - Google News RSS (free, no API key needed)
    """

    name = "SentimentService"

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        config: Optional[Settings] = None,
    ):
        self._settings = config or default_settings
        self._session = session
        self._owns_session = session is None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.upstream_timeout_seconds),
                headers={
                    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
                },
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def fetch_corpus(self, symbol: str) -> list[str]:
        """Fetch recent headlines mentioning the coin."""
        session = await self._ensure_session()
        params = {"q": f"{symbol} crypto", "hl": "en-US", "gl": "US", "ceid": "US:en"}

        try:
            async with session.get(self._settings.news_rss_url, params=params) as response:
                if response.status != 200:
                    raise DataUnavailableError(
                        self.name, f"News feed returned status {response.status}"
                    )
                content = await response.text()
        except asyncio.TimeoutError:
            raise UpstreamTimeoutError(self.name, f"News feed timed out for {symbol}")
        except aiohttp.ClientError as e:
            raise DataUnavailableError(self.name, f"News feed request failed: {e}")

        texts = parse_rss_corpus(content, self._settings.sentiment_max_articles)
        logger.info(f"Fetched {len(texts)} sentiment texts for {symbol}")
        return texts

    async def get_sentiment(self, symbol: str) -> SentimentData:
        """Fetch the corpus and score it."""
        texts = await self.fetch_corpus(symbol.upper())
        return analyze_sentiment(texts)

    async def health_check(self) -> bool:
        return True


# Singleton instance
_sentiment_service: Optional[SentimentService] = None


def get_sentiment_service() -> SentimentService:
    """Get the sentiment service singleton."""
    global _sentiment_service
    if _sentiment_service is None:
        _sentiment_service = SentimentService()
    return _sentiment_service
