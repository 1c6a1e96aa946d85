"""
TraderPunk Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from app.schemas.market import (
    Candle,
    CandleSeriesRequest,
    FearGreedIndex,
    Timeframe,
)
from app.schemas.indicators import (
    ADXPoint,
    FibonacciLevels,
    IndicatorOutput,
    IndicatorSeries,
    IndicatorSnapshot,
    Levels,
    MACDPoint,
    OBVTrend,
    PivotPoints,
)
from app.schemas.signal import (
    AnalysisRequest,
    AnalysisSource,
    SignalResponse,
    SignalResult,
    SignalType,
    TimeframeRisk,
    TradingStyle,
    TradingStyleConfig,
)
from app.schemas.trade import TradeIdea

__all__ = [
    # Market
    "Candle",
    "CandleSeriesRequest",
    "FearGreedIndex",
    "Timeframe",
    # Indicators
    "ADXPoint",
    "FibonacciLevels",
    "IndicatorOutput",
    "IndicatorSeries",
    "IndicatorSnapshot",
    "Levels",
    "MACDPoint",
    "OBVTrend",
    "PivotPoints",
    # Signal
    "AnalysisRequest",
    "AnalysisSource",
    "SignalResponse",
    "SignalResult",
    "SignalType",
    "TimeframeRisk",
    "TradingStyle",
    "TradingStyleConfig",
    # Trade
    "TradeIdea",
]
