"""
Market Data Service Interface

Defines the contract for the market data layer.
"""

from abc import abstractmethod

from cryptocast.services.base import BaseService
from cryptocast.schemas.market import MarketData


class MarketDataServiceInterface(BaseService[str, MarketData]):
    """
    Market Data Service Contract.

    INPUT: symbol (e.g. "BTC")

    OUTPUT: MarketData
        - current_price: Latest spot price
        - daily / hourly / minute: Normalized PriceSeries
        - order_book: Optional depth snapshot
        - sentiment_corpus: Optional headline texts
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: str) -> MarketData:
        """Fetch and normalize all inputs for one symbol."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release HTTP resources."""
        pass
