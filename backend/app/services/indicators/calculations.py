"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
NO LLM INVOLVEMENT - All math is deterministic.

Every series function returns an array with the same length as its input,
aligned index-for-index with the candles. Lookback positions are filled
(growing-prefix means, sentinels) rather than left as NaN, so callers can
always index by candle position.
"""

from dataclasses import dataclass

import numpy as np

from app.schemas.market import Candle


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_candles(cls, candles: list[Candle]) -> "OHLCVData":
        """Convert a candle list to numpy arrays."""
        return cls(
            timestamps=np.array([c.time for c in candles], dtype=np.int64),
            opens=np.array([c.open for c in candles], dtype=float),
            highs=np.array([c.high for c in candles], dtype=float),
            lows=np.array([c.low for c in candles], dtype=float),
            closes=np.array([c.close for c in candles], dtype=float),
            volumes=np.array([c.volume for c in candles], dtype=float),
        )

    def __len__(self) -> int:
        return len(self.closes)


# =============================================================================
# SMOOTHING PRIMITIVES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """
    Simple Moving Average.

    Before the first full window the mean of the available prefix is used.
    """
    data = np.asarray(data, dtype=float)
    result = np.zeros(len(data))

    for i in range(len(data)):
        if i < period - 1:
            result[i] = np.mean(data[: i + 1])
        else:
            result[i] = np.mean(data[i - period + 1 : i + 1])

    return result


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Prefix means until the seed index, seeded with the SMA of the first
    `period` points, then the standard 2/(period+1) recurrence.
    """
    data = np.asarray(data, dtype=float)
    result = np.zeros(len(data))
    multiplier = 2 / (period + 1)

    for i in range(len(data)):
        if i < period - 1:
            result[i] = np.mean(data[: i + 1])
        elif i == period - 1:
            result[i] = np.mean(data[:period])
        else:
            result[i] = data[i] * multiplier + result[i - 1] * (1 - multiplier)

    return result


def wilder_smooth(data: np.ndarray, period: int) -> np.ndarray:
    """
    Wilder's recursive smoothing.

    Running average for the first `period` points, then
    prev - prev / period + value.
    """
    data = np.asarray(data, dtype=float)
    result = np.zeros(len(data))
    running_sum = 0.0

    for i in range(len(data)):
        if i < period:
            running_sum += data[i]
            result[i] = running_sum / (i + 1)
        else:
            prev = result[i - 1]
            result[i] = prev - (prev / period) + data[i]

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    fast_ema = ema(closes, fast_period)
    slow_ema = ema(closes, slow_period)

    macd_line = fast_ema - slow_ema

    # Signal line is EMA of MACD line
    signal_line = ema(macd_line, signal_period)

    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index.

    Average gains and losses use the growing-window SMA. Index 0 has no
    previous close and carries a neutral 50.
    """
    closes = np.asarray(closes, dtype=float)
    if len(closes) == 0:
        return np.zeros(0)

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gains = sma(gains, period)
    avg_losses = sma(losses, period)

    result = np.full(len(closes), 50.0)

    for i in range(len(deltas)):
        if avg_losses[i] == 0:
            result[i + 1] = 100.0
        else:
            rs = avg_gains[i] / avg_losses[i]
            result[i + 1] = 100 - (100 / (1 + rs))

    return result


# =============================================================================
# VOLUME / PRESSURE INDICATORS
# =============================================================================


def obv(closes: np.ndarray, volumes: np.ndarray) -> np.ndarray:
    """On-Balance Volume, starting from zero."""
    closes = np.asarray(closes, dtype=float)
    volumes = np.asarray(volumes, dtype=float)
    result = np.zeros(len(closes))

    for i in range(1, len(closes)):
        if closes[i] > closes[i - 1]:
            result[i] = result[i - 1] + volumes[i]
        elif closes[i] < closes[i - 1]:
            result[i] = result[i - 1] - volumes[i]
        else:
            result[i] = result[i - 1]

    return result


def balance_of_power(
    opens: np.ndarray, highs: np.ndarray, lows: np.ndarray, closes: np.ndarray
) -> np.ndarray:
    """Balance of Power per candle; zero-range candles score 0."""
    opens = np.asarray(opens, dtype=float)
    closes = np.asarray(closes, dtype=float)
    ranges = np.asarray(highs, dtype=float) - np.asarray(lows, dtype=float)

    return np.divide(
        closes - opens,
        ranges,
        out=np.zeros(len(closes)),
        where=ranges != 0,
    )


def obv_trend(obv_values: np.ndarray, lookback: int = 10) -> str:
    """
    Compare the latest OBV with the value `lookback` candles earlier.

    Returns: 'Rising' or 'Falling'. Too short a series reads as 'Falling'.
    """
    if len(obv_values) <= lookback:
        return "Falling"
    return "Rising" if obv_values[-1] > obv_values[-1 - lookback] else "Falling"


# =============================================================================
# TREND INDICATORS
# =============================================================================


def adx(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Average Directional Index.

    True range and directional movement are computed from the second candle
    on and smoothed with wilder_smooth; index 0 is a zero sentinel.

    Returns: (adx, plus_di, minus_di)
    """
    highs = np.asarray(highs, dtype=float)
    lows = np.asarray(lows, dtype=float)
    closes = np.asarray(closes, dtype=float)
    n = len(closes)

    if n < 2:
        return np.zeros(n), np.zeros(n), np.zeros(n)

    tr = np.zeros(n - 1)
    plus_dm = np.zeros(n - 1)
    minus_dm = np.zeros(n - 1)

    for i in range(1, n):
        tr[i - 1] = max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )

        up_move = highs[i] - highs[i - 1]
        down_move = lows[i - 1] - lows[i]

        if up_move > down_move and up_move > 0:
            plus_dm[i - 1] = up_move
        if down_move > up_move and down_move > 0:
            minus_dm[i - 1] = down_move

    smoothed_tr = wilder_smooth(tr, period)
    smoothed_plus_dm = wilder_smooth(plus_dm, period)
    smoothed_minus_dm = wilder_smooth(minus_dm, period)

    plus_di = np.zeros(n - 1)
    minus_di = np.zeros(n - 1)
    dx = np.zeros(n - 1)

    for i in range(n - 1):
        if smoothed_tr[i] > 0:
            plus_di[i] = (smoothed_plus_dm[i] / smoothed_tr[i]) * 100
            minus_di[i] = (smoothed_minus_dm[i] / smoothed_tr[i]) * 100

        di_sum = plus_di[i] + minus_di[i]
        if di_sum > 0:
            dx[i] = (abs(plus_di[i] - minus_di[i]) / di_sum) * 100

    adx_result = wilder_smooth(dx, period)

    # Restore alignment with the candle series
    return (
        np.concatenate(([0.0], adx_result)),
        np.concatenate(([0.0], plus_di)),
        np.concatenate(([0.0], minus_di)),
    )


# =============================================================================
# SUPPORT/RESISTANCE LEVELS
# =============================================================================


def pivot_points(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, window: int = 20
) -> dict:
    """
    Classic floor pivot points.

    High and low come from the last `window` candles, the close from the
    last candle.
    """
    if len(closes) == 0:
        return {key: 0.0 for key in ("pivot", "r1", "r2", "r3", "s1", "s2", "s3")}

    high = float(np.max(highs[-window:]))
    low = float(np.min(lows[-window:]))
    close = float(closes[-1])

    pivot = (high + low + close) / 3
    price_range = high - low

    return {
        "pivot": pivot,
        "r1": (2 * pivot) - low,
        "r2": pivot + price_range,
        "r3": pivot + (2 * price_range),
        "s1": (2 * pivot) - high,
        "s2": pivot - price_range,
        "s3": pivot - (2 * price_range),
    }


FIBONACCI_RATIOS = {
    "level236": 0.236,
    "level382": 0.382,
    "level500": 0.5,
    "level618": 0.618,
    "level786": 0.786,
}

FIBONACCI_EXTENSIONS = {
    "extension1272": 0.272,
    "extension1618": 0.618,
}


def fibonacci_levels(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, window: int = 50
) -> dict:
    """
    Fibonacci retracement and extension levels over the last `window` candles.

    In an uptrend (last close above the range midpoint) retracements are
    measured down from the high and extensions project above it; in a
    downtrend both are mirrored around the low.
    """
    if len(closes) == 0:
        keys = ["high", "low", *FIBONACCI_RATIOS, *FIBONACCI_EXTENSIONS]
        return {key: 0.0 for key in keys}

    high = float(np.max(highs[-window:]))
    low = float(np.min(lows[-window:]))
    price_range = high - low
    is_uptrend = float(closes[-1]) > (high + low) / 2

    levels = {"high": high, "low": low}

    if is_uptrend:
        for key, ratio in FIBONACCI_RATIOS.items():
            levels[key] = high - (price_range * ratio)
        for key, ratio in FIBONACCI_EXTENSIONS.items():
            levels[key] = high + (price_range * ratio)
    else:
        for key, ratio in FIBONACCI_RATIOS.items():
            levels[key] = low + (price_range * ratio)
        for key, ratio in FIBONACCI_EXTENSIONS.items():
            levels[key] = low - (price_range * ratio)

    return levels
