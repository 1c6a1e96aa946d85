"""
Indicator Engine Service

CONTRACT:
    Input:  CandleSeriesRequest (OHLCV candles)
    Output: IndicatorOutput

RESPONSIBILITIES:
    - Smoothing primitives (SMA, EMA, Wilder)
    - Indicator series (MACD, RSI, OBV, Balance of Power, ADX/DI)
    - Price levels (pivot points, Fibonacci retracement/extension)
    - Latest-value snapshot for the signal layer

PURE PYTHON - No LLM involvement.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
