"""
Indicator Engine Service Implementation

Calculates all technical indicators from OHLCV data.
NO LLM INVOLVEMENT - Pure Python/NumPy calculations.
"""

import logging
from typing import Optional

from app.core.config import Settings, get_settings
from app.schemas.market import Candle, CandleSeriesRequest
from app.schemas.indicators import (
    ADXPoint,
    FibonacciLevels,
    IndicatorOutput,
    IndicatorSeries,
    IndicatorSnapshot,
    Levels,
    MACDPoint,
    OBVTrend,
    PivotPoints,
)
from app.services.base import InsufficientDataError
from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.calculations import (
    OHLCVData,
    adx,
    balance_of_power,
    fibonacci_levels,
    macd,
    obv,
    obv_trend,
    pivot_points,
    rsi,
)

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Recomputes the full series on every call; nothing is cached.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def validate_input(self, input_data: CandleSeriesRequest) -> CandleSeriesRequest:
        if not input_data.candles:
            raise InsufficientDataError(
                self.name,
                f"No candles supplied for {input_data.symbol}",
                details={"symbol": input_data.symbol},
            )
        return input_data

    async def execute(self, input_data: CandleSeriesRequest) -> IndicatorOutput:
        """Calculate series, levels and snapshot for a candle series."""
        request = await self.validate_input(input_data)
        candles = request.candles

        series = self.calculate_series(candles)
        levels = self.calculate_levels(candles)
        snapshot = self.snapshot(series)

        logger.debug(
            f"Indicators for {request.symbol} ({request.timeframe.value}): "
            f"{len(candles)} candles, RSI {snapshot.rsi:.2f}"
        )

        return IndicatorOutput(
            symbol=request.symbol,
            timeframe=request.timeframe,
            candle_count=len(candles),
            series=series,
            levels=levels,
            snapshot=snapshot,
        )

    def calculate_series(self, candles: list[Candle]) -> IndicatorSeries:
        """Calculate every indicator series, aligned with the candles."""
        data = OHLCVData.from_candles(candles)
        cfg = self.settings

        macd_line, signal_line, histogram = macd(
            data.closes, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal
        )
        adx_arr, plus_di, minus_di = adx(data.highs, data.lows, data.closes, cfg.adx_period)

        return IndicatorSeries(
            macd=[
                MACDPoint(macd=m, signal=s, histogram=h)
                for m, s, h in zip(macd_line.tolist(), signal_line.tolist(), histogram.tolist())
            ],
            rsi=rsi(data.closes, cfg.rsi_period).tolist(),
            obv=obv(data.closes, data.volumes).tolist(),
            volume=data.volumes.tolist(),
            bop=balance_of_power(data.opens, data.highs, data.lows, data.closes).tolist(),
            adx=[
                ADXPoint(adx=a, plus_di=p, minus_di=m)
                for a, p, m in zip(adx_arr.tolist(), plus_di.tolist(), minus_di.tolist())
            ],
        )

    def calculate_levels(self, candles: list[Candle]) -> Levels:
        """Calculate pivot points and Fibonacci levels from recent candles."""
        data = OHLCVData.from_candles(candles)

        pivots = pivot_points(data.highs, data.lows, data.closes, self.settings.pivot_window)
        fib = fibonacci_levels(data.highs, data.lows, data.closes, self.settings.fibonacci_window)

        return Levels(pivot_points=PivotPoints(**pivots), fibonacci=FibonacciLevels(**fib))

    def snapshot(self, series: IndicatorSeries) -> IndicatorSnapshot:
        """Extract the latest value of each indicator."""
        if len(series) == 0:
            return IndicatorSnapshot()

        return IndicatorSnapshot(
            rsi=series.rsi[-1],
            macd=series.macd[-1],
            adx=series.adx[-1],
            bop=series.bop[-1],
            obv_trend=OBVTrend(obv_trend(series.obv, self.settings.obv_trend_lookback)),
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
