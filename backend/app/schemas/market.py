"""
CONTRACT 1: Candle Input

Input for every calculation in the system: an ordered OHLCV candle series
(oldest first) supplied by the exchange client. The backend never fetches
candles itself; a new fetch replaces the whole series.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1m"
    M3 = "3m"
    M5 = "5m"
    M15 = "15m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


# =============================================================================
# CANDLES
# =============================================================================


class Candle(BaseModel):
    """Single candlestick data point."""

    time: int = Field(..., description="Open time, epoch milliseconds")
    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volume: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_price_bounds(self) -> "Candle":
        if not (self.low <= min(self.open, self.close) <= max(self.open, self.close) <= self.high):
            raise ValueError(
                f"Inconsistent candle at {self.time}: "
                f"low={self.low} open={self.open} close={self.close} high={self.high}"
            )
        return self

    class Config:
        frozen = True


class FearGreedIndex(BaseModel):
    """Crypto Fear & Greed reading passed through to the AI analyst."""

    value: int = Field(..., ge=0, le=100)
    classification: str = Field(..., description="Extreme Fear / Fear / Neutral / Greed / Extreme Greed")


class CandleSeriesRequest(BaseModel):
    """
    A candle series for one symbol.
    Sent by: Mobile client
    Received by: Indicator Service, Signal Service
    """

    symbol: str = Field(default="UNKNOWN", description="Trading pair, e.g. BTCUSDT")
    timeframe: Timeframe = Timeframe.H1
    candles: list[Candle] = Field(..., max_length=1000)

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "BTCUSDT",
                "timeframe": "1h",
                "candles": [
                    {
                        "time": 1717200000000,
                        "open": 67250.5,
                        "high": 67480.0,
                        "low": 67110.2,
                        "close": 67402.1,
                        "volume": 812.4,
                    }
                ],
            }
        }
