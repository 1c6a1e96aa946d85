"""
Local Signal Scorer

Rule-based fallback used whenever the AI analyst is unreachable.
Reads only the latest indicator snapshot; no randomness, so the same
snapshot always yields the same signal.

Scoring starts at 50/50 and walks an ordered table of rule groups. Within a
group the first matching rule applies; groups are applied in order, then both
scores are clamped to [5, 95].
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from app.schemas.indicators import IndicatorSnapshot
from app.schemas.signal import AnalysisSource, SignalResult, SignalType
from app.services.signals.interface import AnalysisContext, SignalAnalyzerInterface

logger = logging.getLogger(__name__)

BASE_SCORE = 50
MIN_SCORE = 5
MAX_SCORE = 95
SIGNAL_MARGIN = 15


@dataclass(frozen=True)
class ScoreRule:
    """One threshold rule: when `condition` holds, shift both scores."""

    label: str
    condition: Callable[[IndicatorSnapshot], bool]
    long_delta: int
    short_delta: int


RSI_RULES = (
    ScoreRule("rsi_oversold", lambda s: s.rsi < 30, 20, -15),
    ScoreRule("rsi_weak", lambda s: s.rsi < 40, 10, -5),
    ScoreRule("rsi_overbought", lambda s: s.rsi > 70, -15, 20),
    ScoreRule("rsi_strong", lambda s: s.rsi > 60, -5, 10),
)

MACD_RULES = (
    ScoreRule("macd_positive", lambda s: s.macd.histogram > 0, 10, -5),
    ScoreRule("macd_negative", lambda s: s.macd.histogram < 0, -5, 10),
)

DI_RULES = (
    ScoreRule("di_bullish", lambda s: s.adx.plus_di > s.adx.minus_di, 10, -5),
    ScoreRule("di_bearish", lambda s: s.adx.minus_di > s.adx.plus_di, -5, 10),
)

BOP_RULES = (
    ScoreRule("bop_buyers", lambda s: s.bop > 0.3, 5, 0),
    ScoreRule("bop_sellers", lambda s: s.bop < -0.3, 0, 5),
)

SCORING_RULES: tuple[tuple[ScoreRule, ...], ...] = (
    RSI_RULES,
    MACD_RULES,
    DI_RULES,
    BOP_RULES,
)


@dataclass(frozen=True)
class Score:
    """Outcome of scoring one snapshot."""

    long_score: int
    short_score: int
    signal: SignalType
    matched: tuple[str, ...] = field(default_factory=tuple)

    @property
    def confidence(self) -> int:
        return max(self.long_score, self.short_score)


def _clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def score_snapshot(snapshot: IndicatorSnapshot) -> Score:
    """Apply the rule table to a snapshot."""
    long_score = BASE_SCORE
    short_score = BASE_SCORE
    matched = []

    for group in SCORING_RULES:
        for rule in group:
            if rule.condition(snapshot):
                long_score += rule.long_delta
                short_score += rule.short_delta
                matched.append(rule.label)
                break

    long_score = _clamp(long_score)
    short_score = _clamp(short_score)

    if long_score > short_score + SIGNAL_MARGIN:
        signal = SignalType.LONG
    elif short_score > long_score + SIGNAL_MARGIN:
        signal = SignalType.SHORT
    else:
        signal = SignalType.NEUTRAL

    return Score(long_score, short_score, signal, tuple(matched))


def _rsi_zone(rsi: float) -> str:
    if rsi > 70:
        return "overbought"
    if rsi < 30:
        return "oversold"
    return "neutral"


def build_local_result(snapshot: IndicatorSnapshot, symbol: str = "UNKNOWN") -> SignalResult:
    """Score a snapshot and wrap it with the local narrative fields."""
    score = score_snapshot(snapshot)

    rsi = snapshot.rsi
    hist = snapshot.macd.histogram
    adx_point = snapshot.adx
    bop = snapshot.bop

    zone = _rsi_zone(rsi)
    bullish = adx_point.plus_di > adx_point.minus_di
    pressure = "bullish" if bullish else "bearish"

    if score.signal == SignalType.LONG:
        closing = "Leaning bullish, punk."
    elif score.signal == SignalType.SHORT:
        closing = "Bears in control, stay sharp."
    else:
        closing = "Mixed signals, wait for clarity."

    summary = (
        f"Local analysis for {symbol}: RSI at {rsi:.1f} ({zone}), "
        f"MACD histogram {'positive' if hist > 0 else 'negative'}, "
        f"ADX shows {pressure} pressure. {closing}"
    )

    technical = (
        f"RSI(14) at {rsi:.2f} is in {zone} territory. "
        f"MACD histogram at {hist:.4f} is {'expanding bullish' if hist > 0 else 'bearish'}. "
        f"ADX at {adx_point.adx:.1f} with +DI({adx_point.plus_di:.1f}) "
        f"{'>' if bullish else '<'} -DI({adx_point.minus_di:.1f}) confirms {pressure} trend. "
        f"Balance of Power at {bop:.3f} shows {'buying' if bop > 0 else 'selling'} pressure."
    )

    if zone == "overbought":
        rsi_note = "watch for reversal"
    elif zone == "oversold":
        rsi_note = "potential bounce zone"
    else:
        rsi_note = "no extreme readings"

    considerations = [
        f"RSI at {rsi:.1f} - {rsi_note}",
        f"MACD {'above' if snapshot.macd.macd > snapshot.macd.signal else 'below'} signal line",
        f"ADX trend strength: {'strong' if adx_point.adx > 25 else 'weak'} ({adx_point.adx:.1f})",
        f"{pressure.capitalize()} directional pressure",
    ]

    return SignalResult(
        signal=score.signal,
        confidence=score.confidence,
        long_confidence=score.long_score,
        short_confidence=score.short_score,
        summary=summary,
        technical_analysis=technical,
        sentiment_analysis=(
            "AI backend offline - showing local indicator analysis only. "
            "Connect to server for full AI-powered sentiment analysis."
        ),
        key_considerations=considerations,
        risk_warning="Local analysis only - connect to server for full AI analysis with social sentiment.",
        source=AnalysisSource.LOCAL,
    )


class LocalSignalAnalyzer(SignalAnalyzerInterface):
    """Signal analyzer backed by the rule table. Always available."""

    @property
    def name(self) -> str:
        return "LocalSignalAnalyzer"

    @property
    def is_available(self) -> bool:
        return True

    async def analyze(self, context: AnalysisContext) -> Optional[SignalResult]:
        result = build_local_result(context.snapshot, context.symbol)
        logger.debug(
            f"Local signal for {context.symbol}: {result.signal.value} "
            f"(long {result.long_confidence}, short {result.short_confidence})"
        )
        return result

    async def health_check(self) -> bool:
        return True
