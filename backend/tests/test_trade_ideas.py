"""Trade idea service: AI setup with local template fallback."""

import json

import pytest

from app.core.config import Settings
from app.schemas.indicators import IndicatorSnapshot
from app.schemas.market import FearGreedIndex
from app.schemas.signal import AnalysisRequest, AnalysisSource, SignalType
from app.schemas.trade import TradeIdea
from app.services.indicators import IndicatorService
from app.services.llm.client import ModelTier
from app.services.signals.trade_ideas import (
    DEFAULT_FINAL_VERDICT,
    TradeIdeaService,
    build_local_trade_idea,
)


def make_service(llm_client, enabled=True):
    return TradeIdeaService(
        indicator_service=IndicatorService(settings=Settings()),
        llm_client=llm_client,
        enabled=enabled,
    )


def test_local_long_below_rsi_fifty():
    idea = build_local_trade_idea(IndicatorSnapshot(rsi=30), 100.0)

    assert idea.direction == SignalType.LONG
    assert idea.stop_loss == pytest.approx(97.0)
    assert idea.take_profit1 == pytest.approx(102.0)
    assert idea.take_profit2 == pytest.approx(104.0)
    assert idea.take_profit3 == pytest.approx(106.0)
    assert idea.confidence == pytest.approx(50.0)
    assert idea.quality_score == 2
    assert idea.risk_reward_ratio == "1:2"
    assert idea.key_levels == ["Entry: $100.00", "Stop: $97.00"]
    assert idea.source == AnalysisSource.LOCAL


def test_local_short_at_or_above_rsi_fifty():
    idea = build_local_trade_idea(IndicatorSnapshot(rsi=50), 200.0)

    assert idea.direction == SignalType.SHORT
    assert idea.stop_loss == pytest.approx(206.0)
    assert idea.take_profit3 == pytest.approx(188.0)
    assert idea.confidence == pytest.approx(30.0)


def test_neutral_direction_is_rejected():
    with pytest.raises(ValueError):
        TradeIdea(
            direction="NEUTRAL",
            entry_price=1,
            stop_loss=1,
            take_profit1=1,
            take_profit2=1,
            take_profit3=1,
        )


async def test_ai_trade_idea_with_defaults(fake_llm, rising_candles):
    content = json.dumps({
        "direction": "LONG",
        "stopLoss": 107.5,
        "takeProfit1": 111.0,
        "takeProfit2": 112.0,
        "takeProfit3": 114.0,
        "qualityScore": 7,
        "reasoning": "Trend intact above pivot.",
    })
    client = fake_llm(content=content)
    service = make_service(client)

    idea = await service.execute(
        AnalysisRequest(
            symbol="BTCUSDT",
            price=110.0,
            candles=rising_candles,
            fear_greed=FearGreedIndex(value=64, classification="Greed"),
        )
    )

    assert idea.source == AnalysisSource.AI
    assert idea.entry_price == 110.0
    assert idea.confidence == 50
    assert idea.quality_score == 5
    assert idea.warnings == ["Always use proper position sizing"]
    assert idea.social_sentiment["youtube"].score == 30
    assert idea.fear_greed_value == 64
    assert idea.fear_greed_label == "Greed"
    assert idea.final_verdict == DEFAULT_FINAL_VERDICT
    assert client.calls[0]["model_tier"] == ModelTier.TRADE_IDEA
    assert "PIVOT POINTS" in client.calls[0]["user_prompt"]


async def test_neutral_ai_answer_falls_back_to_template(fake_llm, rising_candles):
    client = fake_llm(content='{"direction": "NEUTRAL", "stopLoss": 1, "takeProfit1": 1, "takeProfit2": 1, "takeProfit3": 1}')
    service = make_service(client)

    idea = await service.execute(AnalysisRequest(candles=rising_candles))

    assert idea.source == AnalysisSource.LOCAL


async def test_unavailable_ai_uses_template_at_last_close(fake_llm, rising_candles):
    client = fake_llm(configured=False)
    service = make_service(client)

    idea = await service.execute(AnalysisRequest(candles=rising_candles))

    # RSI 100 on a rising series
    assert idea.direction == SignalType.SHORT
    assert idea.entry_price == pytest.approx(rising_candles[-1].close)
    assert idea.confidence == pytest.approx(80.0)
    assert client.calls == []


async def test_provider_error_uses_template(fake_llm, rising_candles):
    client = fake_llm(error=RuntimeError("boom"))
    service = make_service(client)

    idea = await service.execute(AnalysisRequest(candles=rising_candles, price=105.0))

    assert idea.source == AnalysisSource.LOCAL
    assert idea.entry_price == 105.0
