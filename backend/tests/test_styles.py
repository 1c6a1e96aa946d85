"""Trading styles and timeframe risk."""

import pytest

from app.schemas.signal import RiskLevel, RiskTolerance, TradingStyle
from app.services.signals.styles import (
    TRADING_STYLES,
    get_timeframe_risk_level,
    get_trading_style_config,
    resolve_trading_style,
)


def test_every_style_has_a_config():
    assert set(TRADING_STYLES) == set(TradingStyle)


def test_style_thresholds():
    scalper = get_trading_style_config("scalper")
    investor = get_trading_style_config(TradingStyle.INVESTOR)

    assert scalper.preferred_timeframes == ["1m", "3m", "5m"]
    assert (scalper.rsi_overbought, scalper.rsi_oversold) == (75, 25)
    assert scalper.risk_tolerance == RiskTolerance.HIGH
    assert investor.adx_strength_threshold == 30


@pytest.mark.parametrize("value", [None, "", "hodler"])
def test_unknown_style_falls_back_to_day_trader(value):
    assert resolve_trading_style(value) == TradingStyle.DAY_TRADER


@pytest.mark.parametrize(
    "timeframe,level",
    [
        ("1m", RiskLevel.EXTREME),
        ("3m", RiskLevel.HIGH),
        ("5m", RiskLevel.HIGH),
        ("15m", RiskLevel.MEDIUM),
        ("1h", RiskLevel.MEDIUM),
        ("4h", RiskLevel.LOW),
        ("1d", RiskLevel.MEDIUM),
    ],
)
def test_timeframe_risk_levels(timeframe, level):
    assert get_timeframe_risk_level(timeframe, TradingStyle.DAY_TRADER).level == level


def test_preferred_timeframe_has_plain_warning():
    risk = get_timeframe_risk_level("5m", TradingStyle.SCALPER)

    assert risk.warning == "Fast-paced action. Whipsaws frequent. Requires constant monitoring."


def test_unusual_timeframe_is_flagged():
    risk = get_timeframe_risk_level("1m", TradingStyle.INVESTOR)

    assert risk.level == RiskLevel.EXTREME
    assert risk.warning.startswith("Not your typical timeframe. Extreme volatility.")


def test_unknown_timeframe_uses_standard_warning():
    risk = get_timeframe_risk_level("1w", TradingStyle.INVESTOR)

    assert risk.level == RiskLevel.MEDIUM
    assert risk.warning == "Not your typical timeframe. Standard market conditions apply."


def test_missing_timeframe_defaults_to_one_hour():
    assert get_timeframe_risk_level(None, None) == get_timeframe_risk_level("1h", "daytrader")
