"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

import numpy as np

from cryptocast.services.base import BaseService
from cryptocast.schemas.market import PriceSeries
from cryptocast.schemas.forecast import IndicatorSnapshot


class IndicatorServiceInterface(BaseService[PriceSeries, IndicatorSnapshot]):
    """
    Indicator Engine Service Contract.

    INPUT: PriceSeries
        - Daily closes and quote volumes, oldest first

    OUTPUT: IndicatorSnapshot
        - Immutable indicator values at the latest bar
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: PriceSeries) -> IndicatorSnapshot:
        """Calculate the indicator snapshot for a daily series."""
        pass

    @abstractmethod
    def calculate(self, closes: np.ndarray, volumes: np.ndarray) -> IndicatorSnapshot:
        """
        Calculate indicators from raw arrays.

        Args:
            closes: Close prices, oldest first
            volumes: Quote volumes aligned with closes

        Returns:
            Complete indicator snapshot
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
