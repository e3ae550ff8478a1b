"""
Forecast Service Interface

Defines the contract for the forecast layer.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from cryptocast.services.base import BaseService
from cryptocast.schemas.market import MarketData
from cryptocast.schemas.forecast import ForecastBundle, ForecastRequest, IndicatorResponse


class ForecastServiceInterface(BaseService[ForecastRequest, ForecastBundle]):
    """
    Forecast Service Contract.

    INPUT: ForecastRequest
        - symbol: Coin symbol (default BTC)
        - horizons: Optional subset of horizon names

    OUTPUT: ForecastBundle
        - current price, history, indicator snapshot, composite signal
        - one Prediction per horizon
        - optional sentiment and order book pressure
    """

    @property
    def name(self) -> str:
        return "ForecastService"

    @abstractmethod
    async def execute(self, input_data: ForecastRequest) -> ForecastBundle:
        """Fetch market data and build the forecast."""
        pass

    @abstractmethod
    def build_bundle(
        self,
        market: MarketData,
        horizons: Optional[Iterable[str]] = None,
        now: Optional[datetime] = None,
    ) -> ForecastBundle:
        """
        Build a forecast from already-fetched market data.

        Pure: the same MarketData and `now` give the same bundle.
        """
        pass

    @abstractmethod
    async def get_indicators(self, symbol: str) -> IndicatorResponse:
        """Indicator snapshot for a symbol without predictions."""
        pass
