"""
LLM Prompt Templates

Structured prompts for the signal analyst and the trade idea generator.

CRITICAL RULES (enforced in all prompts):
- LLM does NO indicator math - all numbers come from the indicator engine
- Separate confidence for LONG and SHORT
- Always include a risk warning
- Respond with JSON only
"""

from typing import Optional

from app.schemas.indicators import FibonacciLevels, IndicatorSnapshot, PivotPoints
from app.schemas.market import FearGreedIndex
from app.schemas.signal import TimeframeRisk

PERSONA = (
    'You are "PunkBot" - a witty, street-smart crypto analyst with a cyberpunk '
    "attitude. You give solid trading analysis but with personality. Keep humor "
    "subtle and professional."
)


# =============================================================================
# SIGNAL ANALYSIS PROMPTS
# =============================================================================

ANALYSIS_SYSTEM_PROMPT = f"""{PERSONA}

CRITICAL RULES:
1. NEVER recompute indicators - all numbers are provided to you.
2. Calculate separate confidence percentages for LONG and SHORT positions.
3. Shorter timeframes mean higher noise and risk.
4. Mention the actual indicator values, not just "RSI suggests...".
5. Respond with ONLY valid JSON."""

ANALYSIS_USER_PROMPT_TEMPLATE = """Analyze this crypto data for {symbol}:

Current Price: ${price}
24h Change: {price_change}%
Timeframe: {timeframe} (risk: {risk_level} - {risk_warning})
Trading Style: {trading_style}

Technical Indicators:
- RSI (14): {rsi} {rsi_zone}
- MACD: {macd}
- MACD Signal: {macd_signal}
- MACD Histogram: {macd_histogram}
- ADX: {adx} {adx_strength}
- +DI: {plus_di}
- -DI: {minus_di}
- Balance of Power: {bop}
- OBV Trend: {obv_trend}

Crypto Fear & Greed Index: {fear_greed_value} ({fear_greed_label})

BE SPECIFIC in your analysis:
- Mention actual RSI value and what zone it's in
- State if MACD histogram is expanding or contracting, and the crossover status
- Note the exact ADX value and whether +DI leads -DI or vice versa
- Reference the price change percentage when discussing momentum
- If Fear & Greed is extreme, mention how that affects entry timing

ADX Analysis Guide:
- ADX < 20: No trend, avoid trending strategies
- ADX 20-25: Possible trend forming
- ADX 25-50: Strong trend present
- ADX > 50: Extremely strong trend
- +DI > -DI: Bullish pressure
- -DI > +DI: Bearish pressure

Also estimate social media buzz and sentiment for {symbol} on reddit, twitter,
telegram, discord and youtube, based on the indicator readings and price action.

Provide analysis as JSON:
{{
    "signal": "LONG" | "SHORT" | "NEUTRAL",
    "longConfidence": 0-100,
    "shortConfidence": 0-100,
    "summary": "2-3 sentence recommendation with specific indicator values",
    "technicalAnalysis": "4-5 sentences with SPECIFIC numbers",
    "sentimentAnalysis": "2-3 sentences on market mood, reference Fear & Greed",
    "keyConsiderations": ["4-5 specific actionable items"],
    "riskWarning": "One sentence about the main risk for this timeframe",
    "socialSentiment": {{
        "reddit": {{"score": 0-100, "sentiment": "bullish" | "bearish" | "neutral"}},
        "twitter": {{"score": 0-100, "sentiment": "bullish" | "bearish" | "neutral"}},
        "telegram": {{"score": 0-100, "sentiment": "bullish" | "bearish" | "neutral"}},
        "discord": {{"score": 0-100, "sentiment": "bullish" | "bearish" | "neutral"}},
        "youtube": {{"score": 0-100, "sentiment": "bullish" | "bearish" | "neutral"}}
    }},
    "socialConclusion": "2-3 sentences on whether social buzz aligns with the technicals"
}}"""


# =============================================================================
# TRADE IDEA PROMPTS
# =============================================================================

TRADE_IDEA_SYSTEM_PROMPT = f"""{PERSONA}

You generate SPECIFIC, ACTIONABLE trade setups.

RULES:
- Entry must be within 2% of current price
- Stop loss below support for LONG, above resistance for SHORT
- Take profits should align with Fibonacci/pivot levels
- Risk/reward must be at least 1:1.5
- Direction is LONG or SHORT, never NEUTRAL
- Respond with ONLY valid JSON."""

TRADE_IDEA_USER_PROMPT_TEMPLATE = """Generate a trade setup for {symbol}.

Current Price: ${price}
Timeframe: {timeframe}
Trading Style: {trading_style}

TECHNICAL INDICATORS:
- RSI (14): {rsi}
- MACD: {macd} (Signal: {macd_signal})
- MACD Histogram: {macd_histogram}
- ADX: {adx} (+DI: {plus_di}, -DI: {minus_di})
- Balance of Power: {bop}
- OBV Trend: {obv_trend}

PIVOT POINTS:
- Pivot: ${pivot}
- R1: ${r1}, R2: ${r2}, R3: ${r3}
- S1: ${s1}, S2: ${s2}, S3: ${s3}

FIBONACCI LEVELS:
- Range High: ${fib_high}, Low: ${fib_low}
- 23.6%: ${level236}
- 38.2%: ${level382}
- 50.0%: ${level500}
- 61.8%: ${level618}
- 78.6%: ${level786}
- Extension 127.2%: ${extension1272}
- Extension 161.8%: ${extension1618}

Fear & Greed Index: {fear_greed_value} ({fear_greed_label})

Choose entry near support/Fib levels for LONG, or near resistance/Fib levels for
SHORT. Use Fibonacci extensions and pivot levels for take profit targets. Let
estimated social sentiment raise or lower your confidence and quality score.

Provide response as JSON:
{{
    "direction": "LONG" | "SHORT",
    "entryPrice": number,
    "stopLoss": number,
    "takeProfit1": number,
    "takeProfit2": number,
    "takeProfit3": number,
    "riskRewardRatio": "1:X",
    "confidence": 0-100,
    "qualityScore": 1-5,
    "qualityFactors": ["3-4 factors behind the quality score"],
    "reasoning": "2-3 sentences with specific indicator values",
    "keyLevels": ["4-5 price levels to monitor with context"],
    "warnings": ["2-3 specific risks"],
    "socialSentiment": {{"reddit": {{"score": 0-100, "sentiment": "bullish" | "bearish" | "neutral"}}, "...": "same for twitter, telegram, discord, youtube"}},
    "fearGreedValue": number,
    "fearGreedLabel": "Extreme Fear" | "Fear" | "Neutral" | "Greed" | "Extreme Greed",
    "finalVerdict": "2-3 short sentences. State GO or CAUTION clearly."
}}"""


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _fmt(value: Optional[float], digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{digits}f}"


def _fear_greed_fields(fear_greed: Optional[FearGreedIndex]) -> dict:
    if fear_greed is None:
        return {"fear_greed_value": "N/A", "fear_greed_label": "N/A"}
    return {
        "fear_greed_value": str(fear_greed.value),
        "fear_greed_label": fear_greed.classification,
    }


def _snapshot_fields(snapshot: IndicatorSnapshot) -> dict:
    return {
        "rsi": _fmt(snapshot.rsi),
        "macd": _fmt(snapshot.macd.macd, 4),
        "macd_signal": _fmt(snapshot.macd.signal, 4),
        "macd_histogram": _fmt(snapshot.macd.histogram, 4),
        "adx": _fmt(snapshot.adx.adx),
        "plus_di": _fmt(snapshot.adx.plus_di),
        "minus_di": _fmt(snapshot.adx.minus_di),
        "bop": _fmt(snapshot.bop, 4),
        "obv_trend": snapshot.obv_trend.value,
    }


def format_analysis_prompt(
    symbol: str,
    snapshot: IndicatorSnapshot,
    price: Optional[float],
    price_change: Optional[float],
    timeframe: str,
    trading_style: str,
    timeframe_risk: TimeframeRisk,
    fear_greed: Optional[FearGreedIndex] = None,
) -> str:
    """Format the signal analysis prompt from the latest indicator values."""
    if snapshot.rsi > 70:
        rsi_zone = "(Overbought!)"
    elif snapshot.rsi < 30:
        rsi_zone = "(Oversold!)"
    else:
        rsi_zone = ""

    return ANALYSIS_USER_PROMPT_TEMPLATE.format(
        symbol=symbol,
        price=_fmt(price),
        price_change=_fmt(price_change),
        timeframe=timeframe,
        risk_level=timeframe_risk.level.value,
        risk_warning=timeframe_risk.warning,
        trading_style=trading_style,
        rsi_zone=rsi_zone,
        adx_strength="(Strong trend)" if snapshot.adx.adx > 25 else "(Weak trend)",
        **_snapshot_fields(snapshot),
        **_fear_greed_fields(fear_greed),
    )


def format_trade_idea_prompt(
    symbol: str,
    snapshot: IndicatorSnapshot,
    price: Optional[float],
    timeframe: str,
    trading_style: str,
    pivots: PivotPoints,
    fibonacci: FibonacciLevels,
    fear_greed: Optional[FearGreedIndex] = None,
) -> str:
    """Format the trade idea prompt with indicator values and price levels."""
    return TRADE_IDEA_USER_PROMPT_TEMPLATE.format(
        symbol=symbol,
        price=_fmt(price),
        timeframe=timeframe,
        trading_style=trading_style,
        pivot=_fmt(pivots.pivot),
        r1=_fmt(pivots.r1),
        r2=_fmt(pivots.r2),
        r3=_fmt(pivots.r3),
        s1=_fmt(pivots.s1),
        s2=_fmt(pivots.s2),
        s3=_fmt(pivots.s3),
        fib_high=_fmt(fibonacci.high),
        fib_low=_fmt(fibonacci.low),
        level236=_fmt(fibonacci.level236),
        level382=_fmt(fibonacci.level382),
        level500=_fmt(fibonacci.level500),
        level618=_fmt(fibonacci.level618),
        level786=_fmt(fibonacci.level786),
        extension1272=_fmt(fibonacci.extension1272),
        extension1618=_fmt(fibonacci.extension1618),
        **_snapshot_fields(snapshot),
        **_fear_greed_fields(fear_greed),
    )
