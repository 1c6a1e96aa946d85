"""
Analysis API Endpoints

Trading signals and trade ideas for client-supplied candles.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.schemas.signal import (
    AnalysisRequest,
    SignalResponse,
    TimeframeRisk,
    TradingStyle,
    TradingStyleConfig,
)
from app.schemas.trade import TradeIdea
from app.services.base import InsufficientDataError
from app.services.signals import (
    TRADING_STYLES,
    get_signal_service,
    get_timeframe_risk_level,
    get_trade_idea_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signal", response_model=SignalResponse)
async def analyze_signal(request: AnalysisRequest):
    """
    Generate a trading signal.

    Uses the AI analyst when configured, otherwise the local scorer.
    The `source` field of the result tells which one answered.
    """
    service = get_signal_service()

    try:
        return await service.analyze(request)
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Signal analysis failed for {request.symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Signal analysis failed: {e}")


@router.post("/local", response_model=SignalResponse)
async def analyze_local(request: AnalysisRequest):
    """Generate a trading signal with the local scorer only."""
    service = get_signal_service()

    try:
        return await service.analyze_local(request)
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Local analysis failed for {request.symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Local analysis failed: {e}")


@router.post("/trade-idea", response_model=TradeIdea)
async def generate_trade_idea(request: AnalysisRequest):
    """
    Generate a concrete trade setup (entry, stop loss, three targets).

    IMPORTANT: This is a suggestion only. Human decides.
    """
    service = get_trade_idea_service()

    try:
        return await service.execute(request)
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Trade idea failed for {request.symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Trade idea generation failed: {e}")


@router.get("/styles", response_model=list[TradingStyleConfig])
async def list_trading_styles():
    """All trading styles with their thresholds and preferred timeframes."""
    return list(TRADING_STYLES.values())


@router.get("/risk", response_model=TimeframeRisk)
async def get_timeframe_risk(
    timeframe: str = Query(default="1h", description="Chart timeframe, e.g. 5m"),
    style: Optional[TradingStyle] = Query(default=None, description="Trading style"),
):
    """Risk level and warning for trading a timeframe in a given style."""
    return get_timeframe_risk_level(timeframe, style)
