"""Shared candle factories and test doubles."""

from typing import Optional

import pytest

from app.schemas.market import Candle
from app.services.llm.client import LLMProvider, LLMResponse
from app.services.signals.interface import AnalysisContext, SignalAnalyzerInterface

BASE_TIME = 1_717_200_000_000
HOUR_MS = 3_600_000


def make_candles(closes, spread=1.0, volume=10.0):
    """Candles whose open is the previous close and whose range is close +/- spread."""
    candles = []
    prev_close = closes[0]
    for i, close in enumerate(closes):
        candles.append(
            Candle(
                time=BASE_TIME + i * HOUR_MS,
                open=prev_close,
                high=max(prev_close, close) + spread,
                low=min(prev_close, close) - spread,
                close=close,
                volume=volume,
            )
        )
        prev_close = close
    return candles


def candles_payload(candles):
    return [c.model_dump() for c in candles]


@pytest.fixture
def flat_candles():
    return [
        Candle(time=BASE_TIME + i * HOUR_MS, open=100, high=100, low=100, close=100, volume=10)
        for i in range(30)
    ]


@pytest.fixture
def rising_candles():
    # 20 bars, close 100 -> 110 linearly, high/low one dollar either side
    closes = [100 + 10 * i / 19 for i in range(20)]
    return [
        Candle(
            time=BASE_TIME + i * HOUR_MS,
            open=closes[i - 1] if i else close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=10,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def falling_candles():
    closes = [110 - 10 * i / 19 for i in range(20)]
    return make_candles(closes)


@pytest.fixture
def zigzag_candles():
    closes = [100 + (3 if i % 2 else -3) + i * 0.2 for i in range(60)]
    return make_candles(closes, spread=1.5, volume=25.0)


class FakeLLMClient:
    """Stands in for LLMClient; returns canned content or raises."""

    def __init__(self, content: str = "{}", error: Optional[Exception] = None, configured: bool = True):
        self.content = content
        self.error = error
        self.configured = configured
        self.calls = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, user_prompt, model_tier, system_prompt=None, temperature=None, max_tokens=None):
        self.calls.append({"user_prompt": user_prompt, "model_tier": model_tier, "system_prompt": system_prompt})
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="fake-model", provider=LLMProvider.OPENAI, usage={})

    async def health_check(self) -> bool:
        return self.configured


class StubAnalyzer(SignalAnalyzerInterface):
    """Remote analyzer double with a fixed availability and result."""

    def __init__(self, available: bool = True, result=None):
        self.available = available
        self.result = result
        self.contexts: list[AnalysisContext] = []

    @property
    def name(self) -> str:
        return "StubAnalyzer"

    @property
    def is_available(self) -> bool:
        return self.available

    async def analyze(self, context):
        self.contexts.append(context)
        return self.result

    async def health_check(self) -> bool:
        return self.available


@pytest.fixture
def fake_llm():
    return FakeLLMClient


@pytest.fixture
def stub_analyzer():
    return StubAnalyzer


@pytest.fixture
def candle_factory():
    return make_candles
