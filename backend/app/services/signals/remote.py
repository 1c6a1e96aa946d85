"""
Remote AI Signal Analyzer

Sends the latest indicator snapshot to an LLM and maps its JSON answer
onto SignalResult.

CRITICAL: LLM does NO indicator math. It only interprets the snapshot.
Returns None whenever it cannot produce a result, so the caller can fall
back to the local scorer.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from app.core.config import get_settings
from app.schemas.signal import AnalysisSource, SignalResult, SignalType
from app.services.llm.client import LLMClient, ModelTier, get_llm_client
from app.services.llm.parsing import default_social_sentiment, extract_json
from app.services.llm.prompts import ANALYSIS_SYSTEM_PROMPT, format_analysis_prompt
from app.services.signals.interface import AnalysisContext, SignalAnalyzerInterface
from app.services.signals.styles import get_timeframe_risk_level

logger = logging.getLogger(__name__)

DEFAULT_SOCIAL_CONCLUSION = "Social feeds are quiet. The crowd hasn't picked a side yet, punk."


class RemoteSignalAnalyzer(SignalAnalyzerInterface):
    """
    Signal analyzer backed by an LLM provider.

    Available only when AI analysis is enabled and at least one provider
    has credentials.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None, enabled: Optional[bool] = None):
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
        return "RemoteSignalAnalyzer"

    @property
    def is_available(self) -> bool:
        return self._enabled and self.llm_client.is_configured

    async def analyze(self, context: AnalysisContext) -> Optional[SignalResult]:
        if not self.is_available:
            logger.debug(f"{self.name} unavailable, skipping AI analysis for {context.symbol}")
            return None

        user_prompt = format_analysis_prompt(
            symbol=context.symbol,
            snapshot=context.snapshot,
            price=context.price,
            price_change=context.price_change,
            timeframe=context.timeframe,
            trading_style=context.trading_style.value,
            timeframe_risk=get_timeframe_risk_level(context.timeframe, context.trading_style),
            fear_greed=context.fear_greed,
        )

        try:
            response = await self.llm_client.generate(
                system_prompt=ANALYSIS_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                model_tier=ModelTier.ANALYSIS,
                temperature=0.8,
                max_tokens=1200,
            )
        except Exception as e:
            logger.warning(f"AI analysis failed for {context.symbol}: {e}")
            return None

        try:
            result = self._build_result(extract_json(response.content))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse AI analysis for {context.symbol}: {e}")
            logger.error(f"Response content: {response.content[:500]}")
            return None

        logger.info(
            f"AI signal for {context.symbol}: {result.signal.value} "
            f"(long {result.long_confidence}, short {result.short_confidence}) via {response.model}"
        )
        return result

    def _build_result(self, llm_output: dict) -> SignalResult:
        """Fill the fields the model tends to omit and validate."""
        signal = str(llm_output.get("signal", SignalType.NEUTRAL.value)).upper()
        if signal not in SignalType.__members__:
            signal = SignalType.NEUTRAL.value

        result = SignalResult.model_validate({
            "signal": signal,
            "confidence": llm_output.get("confidence") or 0,
            "longConfidence": llm_output.get("longConfidence") or 50,
            "shortConfidence": llm_output.get("shortConfidence") or 50,
            "summary": llm_output.get("summary") or "",
            "technicalAnalysis": llm_output.get("technicalAnalysis") or "",
            "sentimentAnalysis": llm_output.get("sentimentAnalysis") or "",
            "keyConsiderations": llm_output.get("keyConsiderations") or [],
            "riskWarning": llm_output.get("riskWarning") or "",
            "socialSentiment": llm_output.get("socialSentiment") or default_social_sentiment(),
            "socialConclusion": llm_output.get("socialConclusion") or DEFAULT_SOCIAL_CONCLUSION,
            "source": AnalysisSource.AI,
        })

        # Overall confidence defaults to the stronger side, compared after coercion
        if not llm_output.get("confidence"):
            result = result.model_copy(
                update={"confidence": max(result.long_confidence, result.short_confidence)}
            )
        return result

    async def health_check(self) -> bool:
        if not self.is_available:
            return False
        return await self.llm_client.health_check()
