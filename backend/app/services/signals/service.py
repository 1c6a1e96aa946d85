"""
Signal Service Implementation

Computes indicators for a candle series, asks the remote analyzer for a
signal and falls back to the local scorer when it has nothing to offer.
"""

import logging
from typing import Optional

from app.core.config import get_settings
from app.schemas.indicators import IndicatorOutput
from app.schemas.signal import AnalysisRequest, SignalResponse, SignalResult
from app.services.base import BaseService
from app.services.indicators import IndicatorService, get_indicator_service
from app.services.signals.interface import AnalysisContext, SignalAnalyzerInterface
from app.services.signals.remote import RemoteSignalAnalyzer
from app.services.signals.scorer import LocalSignalAnalyzer
from app.services.signals.styles import get_timeframe_risk_level, resolve_trading_style

logger = logging.getLogger(__name__)


def build_context(request: AnalysisRequest, output: IndicatorOutput) -> AnalysisContext:
    """Assemble analyzer input from a request and its computed indicators."""
    style = resolve_trading_style(request.trading_style or get_settings().default_trading_style)
    price = request.price
    if price is None and request.candles:
        price = request.candles[-1].close

    return AnalysisContext(
        snapshot=output.snapshot,
        symbol=request.symbol,
        price=price,
        price_change=request.price_change,
        timeframe=request.timeframe.value,
        trading_style=style,
        fear_greed=request.fear_greed,
        levels=output.levels,
    )


class SignalService(BaseService[AnalysisRequest, SignalResponse]):
    """
    Signal Service.

    The remote analyzer is tried first when it reports itself available;
    any None result is replaced by the local scorer's result.
    """

    def __init__(
        self,
        indicator_service: Optional[IndicatorService] = None,
        remote_analyzer: Optional[SignalAnalyzerInterface] = None,
        local_analyzer: Optional[SignalAnalyzerInterface] = None,
    ):
        self.indicator_service = indicator_service or get_indicator_service()
        self.remote_analyzer = remote_analyzer or RemoteSignalAnalyzer()
        self.local_analyzer = local_analyzer or LocalSignalAnalyzer()

    @property
    def name(self) -> str:
        return "SignalService"

    async def execute(self, input_data: AnalysisRequest) -> SignalResponse:
        return await self.analyze(input_data)

    async def analyze(self, request: AnalysisRequest, use_remote: bool = True) -> SignalResponse:
        """Produce a signal for the request's candles."""
        output = await self.indicator_service.execute(request)
        context = build_context(request, output)

        result: Optional[SignalResult] = None
        if use_remote and self.remote_analyzer.is_available:
            result = await self.remote_analyzer.analyze(context)
            if result is None:
                logger.warning(f"Remote analysis unavailable for {request.symbol}, using local scorer")

        if result is None:
            result = await self.local_analyzer.analyze(context)

        return SignalResponse(
            symbol=request.symbol,
            timeframe=context.timeframe,
            trading_style=context.trading_style,
            result=result,
            snapshot=output.snapshot,
            timeframe_risk=get_timeframe_risk_level(context.timeframe, context.trading_style),
        )

    async def analyze_local(self, request: AnalysisRequest) -> SignalResponse:
        """Produce a signal with the local scorer only."""
        return await self.analyze(request, use_remote=False)

    async def health_check(self) -> bool:
        return await self.indicator_service.health_check()


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
