"""
CONTRACT 2: Indicator Engine

Input: CandleSeriesRequest (OHLCV candles)
Output: IndicatorOutput

This module describes ALL mathematical outputs.
Pure Python/NumPy - NO LLM involvement.

Field names on the wire follow the mobile client (camelCase aliases);
Python code uses the snake_case attribute names.
"""

from enum import Enum

from pydantic import BaseModel, Field

from app.schemas.market import Timeframe


# =============================================================================
# ENUMS
# =============================================================================


class OBVTrend(str, Enum):
    RISING = "Rising"
    FALLING = "Falling"


# =============================================================================
# SERIES POINTS
# =============================================================================


class MACDPoint(BaseModel):
    """MACD values for one candle."""

    macd: float
    signal: float
    histogram: float


class ADXPoint(BaseModel):
    """ADX and directional indicators for one candle."""

    adx: float
    plus_di: float = Field(..., alias="plusDI")
    minus_di: float = Field(..., alias="minusDI")

    class Config:
        populate_by_name = True


class IndicatorSeries(BaseModel):
    """
    Full indicator series, aligned index-for-index with the input candles.
    Consumed by: charting client
    """

    macd: list[MACDPoint]
    rsi: list[float]
    obv: list[float]
    volume: list[float]
    bop: list[float]
    adx: list[ADXPoint]

    def __len__(self) -> int:
        return len(self.rsi)


# =============================================================================
# LEVELS
# =============================================================================


class PivotPoints(BaseModel):
    """Classic pivot levels from the most recent candles."""

    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float


class FibonacciLevels(BaseModel):
    """Fibonacci retracement/extension levels from the most recent candles."""

    high: float
    low: float
    level236: float
    level382: float
    level500: float
    level618: float
    level786: float
    extension1272: float
    extension1618: float


class Levels(BaseModel):
    """Price levels derived from a recent window of candles."""

    pivot_points: PivotPoints = Field(..., alias="pivotPoints")
    fibonacci: FibonacciLevels

    class Config:
        populate_by_name = True


# =============================================================================
# SNAPSHOT (latest values)
# =============================================================================


class IndicatorSnapshot(BaseModel):
    """
    Latest value of every indicator.
    Consumed by: Local Signal Scorer, AI analyst
    """

    rsi: float = Field(default=50.0)
    macd: MACDPoint = Field(default_factory=lambda: MACDPoint(macd=0.0, signal=0.0, histogram=0.0))
    adx: ADXPoint = Field(default_factory=lambda: ADXPoint(adx=0.0, plus_di=0.0, minus_di=0.0))
    bop: float = Field(default=0.0)
    obv_trend: OBVTrend = Field(default=OBVTrend.FALLING, alias="obvTrend")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "rsi": 62.4,
                "macd": {"macd": 12.5, "signal": 9.8, "histogram": 2.7},
                "adx": {"adx": 31.2, "plusDI": 28.1, "minusDI": 15.4},
                "bop": 0.42,
                "obvTrend": "Rising",
            }
        }


# =============================================================================
# OUTPUT: IndicatorOutput (Complete Response)
# =============================================================================


class IndicatorOutput(BaseModel):
    """
    Complete indicator analysis for a candle series.
    Returned by: Indicator Service
    Consumed by: charting client, Signal Service
    """

    symbol: str
    timeframe: Timeframe
    candle_count: int = Field(..., ge=0, alias="candleCount")
    series: IndicatorSeries
    levels: Levels
    snapshot: IndicatorSnapshot

    class Config:
        populate_by_name = True
