"""
Signal Analyzer Interface

Defines the contract shared by the remote AI analyst and the local
rule-based scorer. The caller picks an implementation; neither keeps any
global "is the backend up" state.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional

from app.services.base import BaseService
from app.schemas.indicators import IndicatorSnapshot, Levels
from app.schemas.market import FearGreedIndex
from app.schemas.signal import SignalResult, TradingStyle


@dataclass
class AnalysisContext:
    """Input for a signal analyzer."""

    snapshot: IndicatorSnapshot
    symbol: str = "UNKNOWN"
    price: Optional[float] = None
    price_change: Optional[float] = None
    timeframe: str = "1h"
    trading_style: TradingStyle = TradingStyle.DAY_TRADER
    fear_greed: Optional[FearGreedIndex] = None
    levels: Optional[Levels] = None


class SignalAnalyzerInterface(BaseService[AnalysisContext, Optional[SignalResult]]):
    """
    Signal Analyzer Contract.

    INPUT: AnalysisContext
        - snapshot: latest indicator values
        - symbol/price/timeframe/trading_style: context for the narrative

    OUTPUT: SignalResult, or None when the analyzer is unavailable
        - signal: LONG / SHORT / NEUTRAL
        - long_confidence / short_confidence: 0-100
    """

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether analyze() can currently produce a result."""
        pass

    @abstractmethod
    async def analyze(self, context: AnalysisContext) -> Optional[SignalResult]:
        """Produce a signal, or None when unavailable."""
        pass

    async def execute(self, input_data: AnalysisContext) -> Optional[SignalResult]:
        return await self.analyze(input_data)
