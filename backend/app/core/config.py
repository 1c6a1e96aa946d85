"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "TraderPunk Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Expo dev client / web preview)
    allowed_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    # LLM Providers
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    llm_primary_provider: str = "openai"  # Options: openai, anthropic
    llm_analysis_model: str = "gpt-4o"
    llm_trade_idea_model: str = "gpt-4o"
    llm_max_tokens: int = 1500

    # Feature Flags
    enable_ai_analysis: bool = True

    # Indicator defaults
    rsi_period: int = 14
    adx_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    pivot_window: int = 20
    fibonacci_window: int = 50
    obv_trend_lookback: int = 10

    # Trading style used when the client sends none
    default_trading_style: str = "daytrader"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
