"""
LLM Client Abstraction

Provides unified interface for OpenAI and Anthropic Claude.
Handles provider switching and fallback.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from app.services.base import ExternalAPIError

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ModelTier(str, Enum):
    ANALYSIS = "analysis"  # Signal narrative
    TRADE_IDEA = "trade_idea"  # Concrete setup with levels


@dataclass
class LLMConfig:
    """Configuration for LLM client."""

    provider: LLMProvider
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    analysis_model: str = "gpt-4o"
    trade_idea_model: str = "gpt-4o"
    anthropic_model: str = "claude-3-5-sonnet-latest"
    max_tokens: int = 1500
    temperature: float = 0.7


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    provider: LLMProvider
    usage: dict


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    async def generate(
        self,
        user_prompt: str,
        model_tier: ModelTier,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate a response from the LLM."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the LLM service is accessible."""
        pass


class OpenAIClient(BaseLLMClient):
    """OpenAI GPT client implementation."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            try:
                import openai

                self._client = openai.AsyncOpenAI(api_key=self.config.openai_api_key)
            except ImportError:
                raise RuntimeError(
                    "openai package not installed. Run: pip install openai"
                )
        return self._client

    def _get_model(self, tier: ModelTier) -> str:
        """Get model name for tier."""
        if tier == ModelTier.TRADE_IDEA:
            return self.config.trade_idea_model
        return self.config.analysis_model

    async def generate(
        self,
        user_prompt: str,
        model_tier: ModelTier,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate response using GPT."""
        client = self._get_client()
        model = self._get_model(model_tier)

        temp = temperature if temperature is not None else self.config.temperature
        tokens = max_tokens if max_tokens is not None else self.config.max_tokens

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        try:
            response = await client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temp,
                max_tokens=tokens,
            )

            return LLMResponse(
                content=response.choices[0].message.content or "",
                model=model,
                provider=LLMProvider.OPENAI,
                usage={
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens,
                },
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise ExternalAPIError("OpenAIClient", str(e)) from e

    async def health_check(self) -> bool:
        """Check OpenAI API connectivity."""
        try:
            client = self._get_client()
            await client.models.list()
            return True
        except Exception as e:
            logger.error(f"OpenAI health check failed: {e}")
            return False


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude client implementation."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            try:
                import anthropic

                self._client = anthropic.AsyncAnthropic(
                    api_key=self.config.anthropic_api_key
                )
            except ImportError:
                raise RuntimeError(
                    "anthropic package not installed. Run: pip install anthropic"
                )
        return self._client

    async def generate(
        self,
        user_prompt: str,
        model_tier: ModelTier,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate response using Claude."""
        client = self._get_client()
        model = self.config.anthropic_model

        temp = temperature if temperature is not None else self.config.temperature
        tokens = max_tokens if max_tokens is not None else self.config.max_tokens

        kwargs = {
            "model": model,
            "max_tokens": tokens,
            "temperature": temp,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = await client.messages.create(**kwargs)

            return LLMResponse(
                content=response.content[0].text,
                model=model,
                provider=LLMProvider.ANTHROPIC,
                usage={
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            raise ExternalAPIError("AnthropicClient", str(e)) from e

    async def health_check(self) -> bool:
        """Check Anthropic API connectivity."""
        try:
            client = self._get_client()
            await client.models.list()
            return True
        except Exception as e:
            logger.error(f"Anthropic health check failed: {e}")
            return False


class LLMClient:
    """
    Unified LLM client with provider switching and fallback.

    Primary provider is tried first.
    Falls back to secondary provider on failure.
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._primary: Optional[BaseLLMClient] = None
        self._fallback: Optional[BaseLLMClient] = None
        self._setup_clients()

    def _setup_clients(self):
        """Setup primary and fallback clients based on config."""
        openai_client = OpenAIClient(self.config) if self.config.openai_api_key else None
        anthropic_client = AnthropicClient(self.config) if self.config.anthropic_api_key else None

        if self.config.provider == LLMProvider.ANTHROPIC:
            self._primary, self._fallback = anthropic_client, openai_client
        else:
            self._primary, self._fallback = openai_client, anthropic_client

        if self._primary is None and self._fallback is None:
            logger.warning("No LLM API keys configured. AI analysis disabled.")

    @property
    def is_configured(self) -> bool:
        """Whether at least one provider has credentials."""
        return self._primary is not None or self._fallback is not None

    async def generate(
        self,
        user_prompt: str,
        model_tier: ModelTier,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Generate LLM response with automatic fallback.

        Tries primary provider first, falls back to secondary on failure.
        """
        if not self.is_configured:
            raise ExternalAPIError("LLMClient", "No LLM providers configured")

        kwargs = {
            "user_prompt": user_prompt,
            "model_tier": model_tier,
            "system_prompt": system_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        if self._primary:
            try:
                return await self._primary.generate(**kwargs)
            except Exception as e:
                logger.warning(f"Primary LLM failed: {e}, trying fallback...")
                if self._fallback is None:
                    raise

        return await self._fallback.generate(**kwargs)

    async def health_check(self) -> bool:
        """Check if any LLM provider is accessible."""
        if self._primary and await self._primary.health_check():
            return True
        if self._fallback and await self._fallback.health_check():
            return True
        return False


# Singleton instance management
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client singleton."""
    global _llm_client
    if _llm_client is None:
        from app.core.config import settings

        config = LLMConfig(
            provider=LLMProvider(settings.llm_primary_provider),
            openai_api_key=settings.openai_api_key,
            anthropic_api_key=settings.anthropic_api_key,
            analysis_model=settings.llm_analysis_model,
            trade_idea_model=settings.llm_trade_idea_model,
            max_tokens=settings.llm_max_tokens,
        )
        _llm_client = LLMClient(config)
    return _llm_client
