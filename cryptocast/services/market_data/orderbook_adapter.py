"""
Order Book Adapter

One-shot depth snapshot from a Binance-style REST endpoint.
"""

import logging
from typing import Optional

import aiohttp

from cryptocast.core.config import Settings, settings as default_settings
from cryptocast.schemas.market import OrderBookSnapshot
from cryptocast.services.market_data.http_client import fetch_json
from cryptocast.services.market_data.normalizer import normalize_order_book

logger = logging.getLogger(__name__)

SOURCE = "OrderBook"


def get_pair_symbol(symbol: str, quote_asset: Optional[str] = None) -> str:
    """BTC -> BTCUSDT"""
    return f"{symbol.upper()}{quote_asset or default_settings.order_book_quote_asset}"


async def fetch_order_book(
    session: aiohttp.ClientSession,
    symbol: str,
    config: Optional[Settings] = None,
) -> OrderBookSnapshot:
    """Fetch bids and asks for the symbol's quote pair."""
    config = config or default_settings
    pair = get_pair_symbol(symbol, config.order_book_quote_asset)
    payload = await fetch_json(
        session,
        config.order_book_url,
        SOURCE,
        {"symbol": pair, "limit": config.order_book_depth},
    )
    book = normalize_order_book(payload)
    logger.info(
        f"Order book {pair}: {len(book.bids)} bids, {len(book.asks)} asks, "
        f"pressure {book.pressure_ratio:.2f}"
    )
    return book
