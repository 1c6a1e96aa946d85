"""
Indicator API Endpoints

Endpoints for technical indicator calculations over client-supplied candles.
"""

import logging

from fastapi import APIRouter, HTTPException

from app.schemas.market import CandleSeriesRequest
from app.schemas.indicators import IndicatorOutput, IndicatorSnapshot, Levels
from app.services.base import InsufficientDataError
from app.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=IndicatorOutput)
async def calculate_indicators(request: CandleSeriesRequest):
    """
    Calculate all indicators for a candle series.

    Returns:
    - Series: MACD, RSI, OBV, volume, Balance of Power, ADX/DI
    - Levels: pivot points and Fibonacci retracements/extensions
    - Snapshot: latest value of each indicator
    """
    service = get_indicator_service()

    try:
        return await service.execute(request)
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Indicator calculation failed for {request.symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Indicator calculation failed: {e}")


@router.post("/levels", response_model=Levels)
async def calculate_levels(request: CandleSeriesRequest):
    """Pivot points and Fibonacci levels from the most recent candles."""
    service = get_indicator_service()

    try:
        await service.validate_input(request)
        return service.calculate_levels(request.candles)
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Level calculation failed for {request.symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Level calculation failed: {e}")


@router.post("/snapshot", response_model=IndicatorSnapshot)
async def get_snapshot(request: CandleSeriesRequest):
    """Latest RSI, MACD, ADX/DI, Balance of Power and OBV trend."""
    service = get_indicator_service()

    try:
        await service.validate_input(request)
        return service.snapshot(service.calculate_series(request.candles))
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Snapshot failed for {request.symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Snapshot failed: {e}")
