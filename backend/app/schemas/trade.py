"""
CONTRACT 4: Trade Idea

Input: AnalysisRequest (+ indicator snapshot, pivot points, Fibonacci levels)
Output: TradeIdea

Produced by the AI analyst when available, otherwise by a local RSI-based
template.

IMPORTANT: This is a SUGGESTION, not a recommendation.
Human always makes final decision.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.signal import AnalysisSource, PlatformSentiment, SignalType


class TradeIdea(BaseModel):
    """
    Concrete trade setup with entry, stop and three targets.
    Returned by: Trade Idea Service
    """

    direction: SignalType
    entry_price: float = Field(..., ge=0, alias="entryPrice")
    stop_loss: float = Field(..., ge=0, alias="stopLoss")
    take_profit1: float = Field(..., ge=0, alias="takeProfit1")
    take_profit2: float = Field(..., ge=0, alias="takeProfit2")
    take_profit3: float = Field(..., ge=0, alias="takeProfit3")
    risk_reward_ratio: str = Field(default="1:2", alias="riskRewardRatio")
    confidence: float = Field(default=50, ge=0, le=100)
    quality_score: int = Field(default=3, ge=1, le=5, alias="qualityScore")
    quality_factors: list[str] = Field(default_factory=list, alias="qualityFactors")
    reasoning: str = ""
    key_levels: list[str] = Field(default_factory=list, alias="keyLevels")
    warnings: list[str] = Field(default_factory=lambda: ["Always use proper position sizing"])
    social_sentiment: Optional[dict[str, PlatformSentiment]] = Field(default=None, alias="socialSentiment")
    fear_greed_value: Optional[int] = Field(default=None, alias="fearGreedValue")
    fear_greed_label: Optional[str] = Field(default=None, alias="fearGreedLabel")
    final_verdict: Optional[str] = Field(default=None, alias="finalVerdict")
    source: AnalysisSource = AnalysisSource.LOCAL

    @field_validator("direction", mode="before")
    @classmethod
    def direction_must_be_actionable(cls, v):
        if v in (SignalType.NEUTRAL, SignalType.NEUTRAL.value):
            raise ValueError("trade idea direction must be LONG or SHORT")
        return v

    @field_validator("quality_score", mode="before")
    @classmethod
    def clamp_quality(cls, v):
        if isinstance(v, (int, float)):
            return max(1, min(5, int(round(v))))
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "direction": "LONG",
                "entryPrice": 67400.0,
                "stopLoss": 65378.0,
                "takeProfit1": 68748.0,
                "takeProfit2": 70096.0,
                "takeProfit3": 71444.0,
                "riskRewardRatio": "1:2",
                "confidence": 42,
                "qualityScore": 2,
                "source": "local",
            }
        }
