"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from app.services.base import BaseService
from app.schemas.market import Candle, CandleSeriesRequest
from app.schemas.indicators import (
    IndicatorOutput,
    IndicatorSeries,
    IndicatorSnapshot,
    Levels,
)


class IndicatorServiceInterface(BaseService[CandleSeriesRequest, IndicatorOutput]):
    """
    Indicator Engine Service Contract.

    INPUT: CandleSeriesRequest
        - candles: OHLCV series, oldest first

    OUTPUT: IndicatorOutput
        - series: every indicator, aligned with the candles
        - levels: pivot points + Fibonacci levels
        - snapshot: latest values for the signal layer
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: CandleSeriesRequest) -> IndicatorOutput:
        """Calculate series, levels and snapshot for a candle series."""
        pass

    @abstractmethod
    def calculate_series(self, candles: list[Candle]) -> IndicatorSeries:
        """
        Calculate every indicator series.

        Args:
            candles: OHLCV candles, oldest first (may be empty)

        Returns:
            Series with exactly len(candles) entries each
        """
        pass

    @abstractmethod
    def calculate_levels(self, candles: list[Candle]) -> Levels:
        """Calculate pivot points and Fibonacci levels."""
        pass

    @abstractmethod
    def snapshot(self, series: IndicatorSeries) -> IndicatorSnapshot:
        """Extract the latest value of each indicator."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
