"""
LLM Provider Layer

CONTRACT:
    Input:  system prompt + user prompt + model tier
    Output: LLMResponse (raw text)

RESPONSIBILITIES:
    - OpenAI / Anthropic clients with primary/fallback switching
    - Prompt templates for signal analysis and trade ideas
    - JSON extraction from model output

CRITICAL RULES:
    - LLM does NO indicator math - all numbers come from the Indicator Engine
    - Callers own the fallback: a failed call never blocks a local result

FALLBACK BEHAVIOR:
    - System remains functional without LLM API keys
"""

from app.services.llm.client import (
    LLMClient,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    ModelTier,
    get_llm_client,
)
from app.services.llm.parsing import default_social_sentiment, extract_json

__all__ = [
    # Client
    "LLMClient",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "ModelTier",
    "get_llm_client",
    # Parsing
    "extract_json",
    "default_social_sentiment",
]
