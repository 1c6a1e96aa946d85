"""Local rule-based signal scorer."""

import logging

import pytest

from app.schemas.indicators import ADXPoint, IndicatorSnapshot, MACDPoint
from app.schemas.signal import AnalysisSource, SignalType
from app.services.signals.interface import AnalysisContext
from app.services.signals.scorer import (
    LocalSignalAnalyzer,
    build_local_result,
    score_snapshot,
)


def make_snapshot(rsi=50.0, histogram=0.0, plus_di=0.0, minus_di=0.0, bop=0.0, adx=20.0):
    return IndicatorSnapshot(
        rsi=rsi,
        macd=MACDPoint(macd=histogram, signal=0.0, histogram=histogram),
        adx=ADXPoint(adx=adx, plus_di=plus_di, minus_di=minus_di),
        bop=bop,
    )


def test_neutral_snapshot_scores_fifty_fifty():
    score = score_snapshot(make_snapshot())

    assert score.long_score == 50
    assert score.short_score == 50
    assert score.signal == SignalType.NEUTRAL
    assert score.matched == ()


def test_full_bullish_alignment_is_long_and_clamped():
    score = score_snapshot(make_snapshot(rsi=25, histogram=0.01, plus_di=30, minus_di=10, bop=0.4))

    assert score.signal == SignalType.LONG
    assert score.long_score == 95
    assert score.short_score == 25
    assert score.confidence == 95


def test_full_bearish_alignment_is_short():
    score = score_snapshot(make_snapshot(rsi=80, histogram=-0.5, plus_di=10, minus_di=30, bop=-0.5))

    assert score.signal == SignalType.SHORT
    assert score.long_score == 25
    assert score.short_score == 95


@pytest.mark.parametrize(
    "rsi,long_score,short_score",
    [
        (29.9, 70, 35),
        (30.0, 60, 45),
        (39.9, 60, 45),
        (40.0, 50, 50),
        (60.0, 50, 50),
        (60.1, 45, 60),
        (70.0, 45, 60),
        (70.1, 35, 70),
    ],
)
def test_rsi_rule_boundaries(rsi, long_score, short_score):
    score = score_snapshot(make_snapshot(rsi=rsi))

    assert (score.long_score, score.short_score) == (long_score, short_score)


def test_only_first_rsi_rule_applies():
    score = score_snapshot(make_snapshot(rsi=20))

    assert score.matched == ("rsi_oversold",)


def test_bop_threshold_is_strict():
    assert score_snapshot(make_snapshot(bop=0.3)).long_score == 50
    assert score_snapshot(make_snapshot(bop=0.31)).long_score == 55
    assert score_snapshot(make_snapshot(bop=-0.31)).short_score == 55


def test_signal_needs_more_than_fifteen_point_margin():
    # RSI < 40 and positive histogram: long 70, short 40
    score = score_snapshot(make_snapshot(rsi=35, histogram=1.0))
    assert score.signal == SignalType.LONG

    # Long 60, short 45: exactly fifteen apart
    score = score_snapshot(make_snapshot(rsi=35))
    assert score.long_score - score.short_score == 15
    assert score.signal == SignalType.NEUTRAL


def test_scoring_is_deterministic():
    snapshot = make_snapshot(rsi=33, histogram=-0.2, plus_di=18, minus_di=22, bop=0.1)

    assert score_snapshot(snapshot) == score_snapshot(snapshot)
    assert build_local_result(snapshot, "ETHUSDT") == build_local_result(snapshot, "ETHUSDT")


def test_local_result_narrative():
    result = build_local_result(make_snapshot(rsi=25, histogram=0.01, plus_di=30, minus_di=10, bop=0.4), "BTCUSDT")

    assert result.source == AnalysisSource.LOCAL
    assert result.signal == SignalType.LONG
    assert result.confidence == 95
    assert result.summary.startswith("Local analysis for BTCUSDT: RSI at 25.0 (oversold)")
    assert "Leaning bullish, punk." in result.summary
    assert "+DI(30.0) > -DI(10.0)" in result.technical_analysis
    assert result.key_considerations[0] == "RSI at 25.0 - potential bounce zone"
    assert len(result.key_considerations) == 4
    assert result.social_sentiment is None


async def test_local_analyzer_is_always_available():
    analyzer = LocalSignalAnalyzer()
    context = AnalysisContext(snapshot=make_snapshot(rsi=80), symbol="SOLUSDT")

    assert analyzer.is_available
    assert await analyzer.health_check()

    result = await analyzer.execute(context)
    assert result.short_confidence == 70
    assert "Local analysis for SOLUSDT" in result.summary


async def test_local_analyzer_logs_results_at_debug(caplog):
    context = AnalysisContext(snapshot=make_snapshot(rsi=25), symbol="ETHUSDT")

    with caplog.at_level(logging.DEBUG, logger="app.services.signals.scorer"):
        await LocalSignalAnalyzer().analyze(context)

    records = [r for r in caplog.records if r.name == "app.services.signals.scorer"]
    assert records
    assert all(r.levelno == logging.DEBUG for r in records)
