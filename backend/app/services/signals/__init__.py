"""
Signal Service

CONTRACT:
    Input:  AnalysisRequest (candles + trading context)
    Output: SignalResponse (SignalResult + snapshot + timeframe risk)
            TradeIdea (entry, stop, targets)

RESPONSIBILITIES:
    - Local rule-based scoring of the latest indicator snapshot
    - Remote AI analysis with local fallback
    - Trading style thresholds and timeframe risk
    - Trade idea generation

FALLBACK BEHAVIOR:
    - The remote analyzer returns None when unavailable or on failure
    - The local scorer always produces a result
"""

from app.services.signals.interface import AnalysisContext, SignalAnalyzerInterface
from app.services.signals.scorer import LocalSignalAnalyzer, Score, score_snapshot
from app.services.signals.remote import RemoteSignalAnalyzer
from app.services.signals.styles import (
    TRADING_STYLES,
    get_timeframe_risk_level,
    get_trading_style_config,
)
from app.services.signals.service import SignalService, get_signal_service
from app.services.signals.trade_ideas import TradeIdeaService, get_trade_idea_service

__all__ = [
    # Interfaces
    "AnalysisContext",
    "SignalAnalyzerInterface",
    # Analyzers
    "LocalSignalAnalyzer",
    "RemoteSignalAnalyzer",
    "Score",
    "score_snapshot",
    # Styles
    "TRADING_STYLES",
    "get_trading_style_config",
    "get_timeframe_risk_level",
    # Services
    "SignalService",
    "get_signal_service",
    "TradeIdeaService",
    "get_trade_idea_service",
]
