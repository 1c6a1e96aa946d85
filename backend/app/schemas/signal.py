"""
CONTRACT 3: Signal Layer

Input: AnalysisRequest (candles + trading context)
Output: SignalResult

The signal is produced either by the remote AI analyst or, when it is
unavailable, by the local rule-based scorer. Both return the same shape.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.indicators import IndicatorSnapshot
from app.schemas.market import CandleSeriesRequest, FearGreedIndex


# =============================================================================
# ENUMS
# =============================================================================


class SignalType(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"
    NEUTRAL = "NEUTRAL"


class AnalysisSource(str, Enum):
    AI = "ai"  # Remote AI analyst
    LOCAL = "local"  # Rule-based fallback


class TradingStyle(str, Enum):
    SCALPER = "scalper"
    DAY_TRADER = "daytrader"
    SWING_TRADER = "swingtrader"
    INVESTOR = "investor"


class RiskTolerance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


class Sentiment(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


# =============================================================================
# TRADING STYLE
# =============================================================================


class TradingStyleConfig(BaseModel):
    """Thresholds and preferences for a trading style."""

    id: TradingStyle
    name: str
    description: str
    preferred_timeframes: list[str] = Field(..., alias="preferredTimeframes")
    rsi_overbought: float = Field(..., alias="rsiOverbought")
    rsi_oversold: float = Field(..., alias="rsiOversold")
    adx_strength_threshold: float = Field(..., alias="adxStrengthThreshold")
    risk_tolerance: RiskTolerance = Field(..., alias="riskTolerance")

    class Config:
        populate_by_name = True


class TimeframeRisk(BaseModel):
    """Noise/risk level of a timeframe for the chosen style."""

    level: RiskLevel
    warning: str


# =============================================================================
# INPUT: AnalysisRequest
# =============================================================================


class AnalysisRequest(CandleSeriesRequest):
    """
    Request for a trading signal.
    Sent by: Mobile client
    Received by: Signal Service
    """

    price: Optional[float] = Field(default=None, ge=0, description="Latest price; defaults to last close")
    price_change: Optional[float] = Field(default=None, alias="priceChange", description="24h change in %")
    trading_style: Optional[TradingStyle] = Field(default=None, alias="tradingStyle")
    fear_greed: Optional[FearGreedIndex] = Field(default=None, alias="fearGreedIndex")

    class Config:
        populate_by_name = True


# =============================================================================
# OUTPUT: SignalResult
# =============================================================================


class PlatformSentiment(BaseModel):
    """Social buzz score for one platform."""

    score: int = Field(..., ge=0, le=100)
    sentiment: Sentiment = Sentiment.NEUTRAL


class SignalResult(BaseModel):
    """
    Directional signal with separate long/short confidence.
    Returned by: Local Signal Scorer, Remote AI Analyst

    Ephemeral - recomputed whenever candles or trading style change.
    """

    signal: SignalType
    confidence: int = Field(..., ge=0, le=100)
    long_confidence: int = Field(..., ge=0, le=100, alias="longConfidence")
    short_confidence: int = Field(..., ge=0, le=100, alias="shortConfidence")
    summary: str = ""
    technical_analysis: str = Field(default="", alias="technicalAnalysis")
    sentiment_analysis: str = Field(default="", alias="sentimentAnalysis")
    key_considerations: list[str] = Field(default_factory=list, alias="keyConsiderations")
    risk_warning: str = Field(default="", alias="riskWarning")
    social_sentiment: Optional[dict[str, PlatformSentiment]] = Field(default=None, alias="socialSentiment")
    social_conclusion: Optional[str] = Field(default=None, alias="socialConclusion")
    source: AnalysisSource = AnalysisSource.LOCAL

    @field_validator("confidence", "long_confidence", "short_confidence", mode="before")
    @classmethod
    def round_to_percent(cls, v):
        if isinstance(v, (int, float)):
            return max(0, min(100, int(round(v))))
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "signal": "LONG",
                "confidence": 80,
                "longConfidence": 80,
                "shortConfidence": 25,
                "summary": "Local analysis for BTCUSDT: RSI at 28.4 (oversold) ...",
                "technicalAnalysis": "RSI(14) at 28.40 is in oversold territory. ...",
                "sentimentAnalysis": "AI backend offline - showing local indicator analysis only.",
                "keyConsiderations": ["RSI at 28.4 - potential bounce zone"],
                "riskWarning": "Local analysis only.",
                "source": "local",
            }
        }


class SignalResponse(BaseModel):
    """Signal plus the context it was computed from."""

    symbol: str
    timeframe: str
    trading_style: TradingStyle = Field(..., alias="tradingStyle")
    result: SignalResult
    snapshot: IndicatorSnapshot
    timeframe_risk: TimeframeRisk = Field(..., alias="timeframeRisk")

    class Config:
        populate_by_name = True
