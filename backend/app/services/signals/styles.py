"""
Trading Styles

Per-style thresholds and timeframe preferences, plus the timeframe risk
table shown next to every signal.
"""

from typing import Optional, Union

from app.schemas.signal import (
    RiskLevel,
    RiskTolerance,
    TimeframeRisk,
    TradingStyle,
    TradingStyleConfig,
)

TRADING_STYLES: dict[TradingStyle, TradingStyleConfig] = {
    TradingStyle.SCALPER: TradingStyleConfig(
        id=TradingStyle.SCALPER,
        name="Scalper",
        description="Quick in-and-out trades, small profits",
        preferred_timeframes=["1m", "3m", "5m"],
        rsi_overbought=75,
        rsi_oversold=25,
        adx_strength_threshold=20,
        risk_tolerance=RiskTolerance.HIGH,
    ),
    TradingStyle.DAY_TRADER: TradingStyleConfig(
        id=TradingStyle.DAY_TRADER,
        name="Day Trader",
        description="Intraday positions, close by market end",
        preferred_timeframes=["5m", "15m", "1h"],
        rsi_overbought=70,
        rsi_oversold=30,
        adx_strength_threshold=25,
        risk_tolerance=RiskTolerance.MEDIUM,
    ),
    TradingStyle.SWING_TRADER: TradingStyleConfig(
        id=TradingStyle.SWING_TRADER,
        name="Swing Trader",
        description="Hold for days to weeks",
        preferred_timeframes=["1h", "4h"],
        rsi_overbought=70,
        rsi_oversold=30,
        adx_strength_threshold=25,
        risk_tolerance=RiskTolerance.MEDIUM,
    ),
    TradingStyle.INVESTOR: TradingStyleConfig(
        id=TradingStyle.INVESTOR,
        name="Investor",
        description="Long-term holds, fundamental focus",
        preferred_timeframes=["4h"],
        rsi_overbought=80,
        rsi_oversold=20,
        adx_strength_threshold=30,
        risk_tolerance=RiskTolerance.LOW,
    ),
}

DEFAULT_TRADING_STYLE = TradingStyle.DAY_TRADER
DEFAULT_TIMEFRAME = "1h"

# Shorter timeframes carry more noise
TIMEFRAME_RISK: dict[str, TimeframeRisk] = {
    "1m": TimeframeRisk(
        level=RiskLevel.EXTREME,
        warning="Extreme volatility. Noise dominates signal. Only for experienced scalpers with strict stops.",
    ),
    "3m": TimeframeRisk(
        level=RiskLevel.HIGH,
        warning="High noise ratio. False signals common. Use tight stop-losses and quick exits.",
    ),
    "5m": TimeframeRisk(
        level=RiskLevel.HIGH,
        warning="Fast-paced action. Whipsaws frequent. Requires constant monitoring.",
    ),
    "15m": TimeframeRisk(
        level=RiskLevel.MEDIUM,
        warning="Moderate volatility. Better signal clarity but still requires active management.",
    ),
    "1h": TimeframeRisk(
        level=RiskLevel.MEDIUM,
        warning="Balanced timeframe. Good for trend confirmation but watch for sudden reversals.",
    ),
    "4h": TimeframeRisk(
        level=RiskLevel.LOW,
        warning="Clearer trends visible. Better for patience-based strategies. Less noise.",
    ),
}

DEFAULT_TIMEFRAME_RISK = TimeframeRisk(
    level=RiskLevel.MEDIUM,
    warning="Standard market conditions apply.",
)


def resolve_trading_style(style: Optional[Union[TradingStyle, str]]) -> TradingStyle:
    """Map a client value to a known style, falling back to day trading."""
    if isinstance(style, TradingStyle):
        return style
    try:
        return TradingStyle(style)
    except ValueError:
        return DEFAULT_TRADING_STYLE


def get_trading_style_config(style: Optional[Union[TradingStyle, str]]) -> TradingStyleConfig:
    """Get the configuration for a trading style."""
    return TRADING_STYLES[resolve_trading_style(style)]


def get_timeframe_risk_level(
    timeframe: Optional[str], style: Optional[Union[TradingStyle, str]]
) -> TimeframeRisk:
    """
    Risk level and warning for trading `timeframe` in the given style.

    Timeframes outside the style's preferred set get a prefixed warning.
    """
    timeframe = timeframe or DEFAULT_TIMEFRAME
    config = get_trading_style_config(style)

    base = TIMEFRAME_RISK.get(timeframe, DEFAULT_TIMEFRAME_RISK)

    if timeframe not in config.preferred_timeframes:
        return TimeframeRisk(
            level=base.level,
            warning=f"Not your typical timeframe. {base.warning}",
        )

    return base
