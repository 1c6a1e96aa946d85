"""Smoothing primitives and indicator calculators."""

import numpy as np
import pytest

from app.services.indicators.calculations import (
    OHLCVData,
    adx,
    balance_of_power,
    ema,
    macd,
    obv,
    obv_trend,
    rsi,
    sma,
    wilder_smooth,
)


# =============================================================================
# SMOOTHING PRIMITIVES
# =============================================================================


@pytest.mark.parametrize("period", [1, 3, 14])
def test_sma_and_ema_of_constant_series_stay_constant(period):
    data = np.full(30, 42.0)

    assert np.allclose(sma(data, period), 42.0)
    assert np.allclose(ema(data, period), 42.0)


def test_sma_uses_prefix_mean_before_first_full_window():
    result = sma(np.array([1.0, 2.0, 3.0, 4.0, 5.0]), 3)

    assert result.tolist() == pytest.approx([1.0, 1.5, 2.0, 3.0, 4.0])


def test_ema_seeds_with_sma_then_recurses():
    data = np.array([1.0, 2.0, 3.0, 4.0])
    result = ema(data, 3)
    k = 2 / 4

    assert result[0] == pytest.approx(1.0)
    assert result[1] == pytest.approx(1.5)
    assert result[2] == pytest.approx(2.0)
    assert result[3] == pytest.approx(4.0 * k + 2.0 * (1 - k))


def test_wilder_smooth_running_average_then_running_total():
    data = np.full(20, 5.0)
    period = 4
    result = wilder_smooth(data, period)

    # Running average up to the seed
    assert np.allclose(result[:period], 5.0)

    for i in range(period, len(data)):
        expected = result[i - 1] - result[i - 1] / period + data[i]
        assert result[i] == pytest.approx(expected)

    # Recursive tail approaches period * c
    assert result[-1] == pytest.approx(period * 5.0, rel=0.05)


@pytest.mark.parametrize("fn", [sma, ema, wilder_smooth])
def test_smoothing_of_empty_input_is_empty(fn):
    result = fn(np.array([]), 14)

    assert isinstance(result, np.ndarray)
    assert len(result) == 0


# =============================================================================
# MACD
# =============================================================================


def test_macd_histogram_is_line_minus_signal(zigzag_candles):
    closes = OHLCVData.from_candles(zigzag_candles).closes
    line, signal, histogram = macd(closes)

    assert len(line) == len(signal) == len(histogram) == len(closes)
    assert np.array_equal(histogram, line - signal)


def test_macd_of_short_series_has_input_length():
    line, signal, histogram = macd(np.array([100.0]))

    assert line.tolist() == [0.0]
    assert signal.tolist() == [0.0]
    assert histogram.tolist() == [0.0]


# =============================================================================
# RSI
# =============================================================================


def test_rsi_of_increasing_series_is_100():
    closes = np.arange(1.0, 31.0)
    result = rsi(closes, 14)

    assert result[0] == 50.0
    assert np.all(result[14:] == 100.0)
    assert np.all(np.isfinite(result))


def test_rsi_of_decreasing_series_is_0():
    closes = np.arange(30.0, 0.0, -1.0)
    result = rsi(closes, 14)

    assert np.all(result[14:] == 0.0)


def test_rsi_length_matches_input_with_sentinel():
    assert rsi(np.array([100.0]), 14).tolist() == [50.0]
    assert len(rsi(np.arange(10.0), 14)) == 10


def test_rsi_of_empty_input_is_empty():
    assert len(rsi(np.array([]), 14)) == 0


def test_rsi_stays_in_range(zigzag_candles):
    closes = OHLCVData.from_candles(zigzag_candles).closes
    result = rsi(closes, 14)

    assert np.all((result >= 0) & (result <= 100))


# =============================================================================
# OBV / BALANCE OF POWER
# =============================================================================


def test_obv_accumulates_signed_volume():
    closes = np.array([10.0, 11.0, 11.0, 9.0, 12.0])
    volumes = np.array([5.0, 7.0, 3.0, 4.0, 6.0])

    assert obv(closes, volumes).tolist() == [0.0, 7.0, 7.0, 3.0, 9.0]


def test_obv_is_monotonic_for_monotonic_closes(rising_candles, falling_candles):
    up = OHLCVData.from_candles(rising_candles)
    down = OHLCVData.from_candles(falling_candles)

    assert np.all(np.diff(obv(up.closes, up.volumes)) >= 0)
    assert np.all(np.diff(obv(down.closes, down.volumes)) <= 0)


def test_obv_of_empty_input_is_empty():
    assert len(obv(np.array([]), np.array([]))) == 0


def test_balance_of_power_is_zero_on_zero_range():
    result = balance_of_power(
        np.array([100.0, 100.0]),
        np.array([100.0, 104.0]),
        np.array([100.0, 100.0]),
        np.array([100.0, 103.0]),
    )

    assert result.tolist() == pytest.approx([0.0, 0.75])


def test_balance_of_power_is_bounded(zigzag_candles):
    data = OHLCVData.from_candles(zigzag_candles)
    result = balance_of_power(data.opens, data.highs, data.lows, data.closes)

    assert np.all((result >= -1) & (result <= 1))


@pytest.mark.parametrize(
    "values,expected",
    [
        ([0.0] * 5, "Falling"),
        (list(range(11)), "Rising"),
        (list(range(11, 0, -1)), "Falling"),
        ([5.0] * 11, "Falling"),
    ],
)
def test_obv_trend(values, expected):
    assert obv_trend(np.array(values, dtype=float), 10) == expected


# =============================================================================
# ADX
# =============================================================================


def test_adx_of_flat_candles_is_zero(flat_candles):
    data = OHLCVData.from_candles(flat_candles)
    adx_line, plus_di, minus_di = adx(data.highs, data.lows, data.closes)

    assert np.all(adx_line == 0)
    assert np.all(plus_di == 0)
    assert np.all(minus_di == 0)


def test_adx_plus_di_leads_in_uptrend(rising_candles):
    data = OHLCVData.from_candles(rising_candles)
    _, plus_di, minus_di = adx(data.highs, data.lows, data.closes)

    assert plus_di[0] == 0 and minus_di[0] == 0
    assert np.all(plus_di[1:] > minus_di[1:])


def test_adx_minus_di_leads_in_downtrend(falling_candles):
    data = OHLCVData.from_candles(falling_candles)
    _, plus_di, minus_di = adx(data.highs, data.lows, data.closes)

    assert np.all(minus_di[1:] > plus_di[1:])


def test_directional_indicators_stay_in_range(zigzag_candles):
    data = OHLCVData.from_candles(zigzag_candles)
    adx_line, plus_di, minus_di = adx(data.highs, data.lows, data.closes)

    assert len(adx_line) == len(data)
    assert np.all((plus_di >= 0) & (plus_di <= 100))
    assert np.all((minus_di >= 0) & (minus_di <= 100))
    assert np.all(adx_line >= 0)
    assert np.all(np.isfinite(adx_line))


@pytest.mark.parametrize("n", [0, 1])
def test_adx_of_short_input_is_zeros(n):
    values = np.full(n, 100.0)
    adx_line, plus_di, minus_di = adx(values, values, values)

    assert adx_line.tolist() == [0.0] * n
    assert plus_di.tolist() == [0.0] * n
    assert minus_di.tolist() == [0.0] * n
