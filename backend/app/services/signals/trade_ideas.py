"""
Trade Idea Service Implementation

Turns the indicator snapshot plus pivot and Fibonacci levels into a
concrete setup (entry, stop, three targets).

Uses the LLM when available.
Falls back to a fixed-percentage template driven by RSI alone.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from app.core.config import get_settings
from app.schemas.indicators import IndicatorSnapshot
from app.schemas.signal import AnalysisRequest, AnalysisSource, SignalType
from app.schemas.trade import TradeIdea
from app.services.base import BaseService
from app.services.indicators import IndicatorService, get_indicator_service
from app.services.llm.client import LLMClient, ModelTier, get_llm_client
from app.services.llm.parsing import default_social_sentiment, extract_json
from app.services.llm.prompts import TRADE_IDEA_SYSTEM_PROMPT, format_trade_idea_prompt
from app.services.signals.interface import AnalysisContext
from app.services.signals.service import build_context

logger = logging.getLogger(__name__)

# Local template offsets, as fractions of price
STOP_LOSS_PCT = 0.03
TAKE_PROFIT_PCTS = (0.02, 0.04, 0.06)
LOCAL_QUALITY_SCORE = 2

DEFAULT_FINAL_VERDICT = (
    "Insufficient data for a full verdict. Check technicals and social feeds manually, punk."
)


def build_local_trade_idea(snapshot: IndicatorSnapshot, price: float) -> TradeIdea:
    """
    Template setup from RSI: LONG below 50, SHORT otherwise.

    Stop 3% against the trade, targets 2/4/6% in its favour.
    """
    rsi = snapshot.rsi
    is_long = rsi < 50
    sign = 1 if is_long else -1

    stop_loss = price * (1 - sign * STOP_LOSS_PCT)
    tp1, tp2, tp3 = (price * (1 + sign * pct) for pct in TAKE_PROFIT_PCTS)

    return TradeIdea(
        direction=SignalType.LONG if is_long else SignalType.SHORT,
        entry_price=price,
        stop_loss=stop_loss,
        take_profit1=tp1,
        take_profit2=tp2,
        take_profit3=tp3,
        risk_reward_ratio="1:2",
        confidence=abs(rsi - 50) + 30,
        quality_score=LOCAL_QUALITY_SCORE,
        quality_factors=[
            "Local analysis only",
            "Based on RSI and price action",
            "No AI validation available",
        ],
        reasoning=(
            f"Local trade idea based on RSI({rsi:.1f}). "
            "Connect to server for AI-powered trade ideas with social sentiment."
        ),
        key_levels=[f"Entry: ${price:.2f}", f"Stop: ${stop_loss:.2f}"],
        warnings=["Local analysis only - no AI validation", "Verify with your own research"],
        source=AnalysisSource.LOCAL,
    )


class TradeIdeaService(BaseService[AnalysisRequest, TradeIdea]):
    """
    Trade Idea Service.

    Tries the LLM first when AI analysis is enabled and a provider is
    configured; any failure yields the local template instead.
    """

    def __init__(
        self,
        indicator_service: Optional[IndicatorService] = None,
        llm_client: Optional[LLMClient] = None,
        enabled: Optional[bool] = None,
    ):
        self.indicator_service = indicator_service or get_indicator_service()
        self._llm_client = llm_client
        self._enabled = get_settings().enable_ai_analysis if enabled is None else enabled

    @property
    def llm_client(self) -> LLMClient:
        """Lazy initialization of LLM client."""
        if self._llm_client is None:
            self._llm_client = get_llm_client()
        return self._llm_client

    @property
    def name(self) -> str:
        return "TradeIdeaService"

    @property
    def is_available(self) -> bool:
        return self._enabled and self.llm_client.is_configured

    async def execute(self, input_data: AnalysisRequest) -> TradeIdea:
        output = await self.indicator_service.execute(input_data)
        context = build_context(input_data, output)
        price = context.price or 0.0

        if self.is_available:
            idea = await self._llm_trade_idea(context, price)
            if idea is not None:
                return idea
            logger.warning(f"AI trade idea unavailable for {context.symbol}, using local template")

        idea = build_local_trade_idea(context.snapshot, price)
        logger.debug(f"Local trade idea for {context.symbol}: {idea.direction.value} @ {price:.2f}")
        return idea

    async def _llm_trade_idea(self, context: AnalysisContext, price: float) -> Optional[TradeIdea]:
        """Generate a trade idea using the LLM, or None on failure."""
        user_prompt = format_trade_idea_prompt(
            symbol=context.symbol,
            snapshot=context.snapshot,
            price=price,
            timeframe=context.timeframe,
            trading_style=context.trading_style.value,
            pivots=context.levels.pivot_points,
            fibonacci=context.levels.fibonacci,
            fear_greed=context.fear_greed,
        )

        try:
            response = await self.llm_client.generate(
                system_prompt=TRADE_IDEA_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                model_tier=ModelTier.TRADE_IDEA,
                temperature=0.7,
            )
        except Exception as e:
            logger.warning(f"Trade idea generation failed for {context.symbol}: {e}")
            return None

        try:
            return self._build_trade_idea(extract_json(response.content), context, price)
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse trade idea for {context.symbol}: {e}")
            logger.error(f"Response content: {response.content[:500]}")
            return None

    def _build_trade_idea(self, llm_output: dict, context: AnalysisContext, price: float) -> TradeIdea:
        """Build TradeIdea from LLM output, filling omitted fields."""
        fear_greed = context.fear_greed

        data = dict(llm_output)
        data["entryPrice"] = llm_output.get("entryPrice") or price
        data["confidence"] = llm_output.get("confidence") or 50
        data["qualityScore"] = llm_output.get("qualityScore") or 3
        data["qualityFactors"] = llm_output.get("qualityFactors") or []
        data["keyLevels"] = llm_output.get("keyLevels") or []
        data["warnings"] = llm_output.get("warnings") or ["Always use proper position sizing"]
        data["socialSentiment"] = llm_output.get("socialSentiment") or default_social_sentiment()
        data["finalVerdict"] = llm_output.get("finalVerdict") or DEFAULT_FINAL_VERDICT
        if not llm_output.get("fearGreedValue") and fear_greed is not None:
            data["fearGreedValue"] = fear_greed.value
        if not llm_output.get("fearGreedLabel") and fear_greed is not None:
            data["fearGreedLabel"] = fear_greed.classification
        data["source"] = AnalysisSource.AI

        return TradeIdea.model_validate(data)

    async def health_check(self) -> bool:
        return await self.indicator_service.health_check()


# Singleton instance
_service_instance: Optional[TradeIdeaService] = None


def get_trade_idea_service() -> TradeIdeaService:
    """Get or create trade idea service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = TradeIdeaService()
    return _service_instance
