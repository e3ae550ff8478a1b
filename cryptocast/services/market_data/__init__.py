"""
Market Data Service

CONTRACT:
    Input:  symbol
    Output: MarketData

RESPONSIBILITIES:
    - Fetch spot price and daily/hourly/minute history from CryptoCompare
    - Fetch optional order book depth and sentiment corpus
    - Validate payloads and normalize to chronological PriceSeries
    - Bound every upstream call with a timeout
"""

from cryptocast.services.market_data.interface import MarketDataServiceInterface
from cryptocast.services.market_data.normalizer import (
    normalize_history,
    normalize_order_book,
    normalize_price,
)
from cryptocast.services.market_data.service import (
    MarketDataService,
    get_market_data_service,
)

__all__ = [
    "MarketDataServiceInterface",
    "MarketDataService",
    "get_market_data_service",
    "normalize_history",
    "normalize_order_book",
    "normalize_price",
]
