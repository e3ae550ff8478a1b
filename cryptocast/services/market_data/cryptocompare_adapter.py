"""
CryptoCompare Data Adapter

Fetches spot price and OHLCV history from the CryptoCompare min-api.
"""

import logging
from typing import Optional

import aiohttp

from cryptocast.core.config import Settings, settings as default_settings
from cryptocast.schemas.market import HISTORY_ENDPOINTS, Granularity, PriceSeries
from cryptocast.services.market_data.http_client import fetch_json
from cryptocast.services.market_data.normalizer import normalize_history, normalize_price

logger = logging.getLogger(__name__)

SOURCE = "CryptoCompare"


def _params(extra: dict, config: Settings) -> dict:
    params = dict(extra)
    if config.cryptocompare_api_key:
        params["api_key"] = config.cryptocompare_api_key
    return params


async def fetch_price(
    session: aiohttp.ClientSession,
    symbol: str,
    currency: Optional[str] = None,
    config: Optional[Settings] = None,
) -> float:
    """Fetch the latest spot price."""
    config = config or default_settings
    currency = currency or config.quote_currency
    url = f"{config.cryptocompare_base_url}/data/price"
    payload = await fetch_json(
        session, url, SOURCE, _params({"fsym": symbol, "tsyms": currency}, config)
    )
    price = normalize_price(payload, currency)
    logger.info(f"CryptoCompare: {symbol} @ {price} {currency}")
    return price


async def fetch_history(
    session: aiohttp.ClientSession,
    symbol: str,
    granularity: Granularity,
    limit: int,
    currency: Optional[str] = None,
    config: Optional[Settings] = None,
) -> PriceSeries:
    """Fetch `limit` bars of history at the given granularity."""
    config = config or default_settings
    currency = currency or config.quote_currency
    url = f"{config.cryptocompare_base_url}{HISTORY_ENDPOINTS[granularity]}"
    payload = await fetch_json(
        session,
        url,
        SOURCE,
        _params({"fsym": symbol, "tsym": currency, "limit": limit}, config),
    )
    series = normalize_history(payload, granularity)
    logger.debug(f"CryptoCompare: {len(series)} {granularity.value} bars for {symbol}")
    return series
