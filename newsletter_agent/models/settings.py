"""Settings and configuration management."""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # AI Processing
    openrouter_api_key: Optional[str] = Field(None, description="OpenRouter")
    openrouter_model: Optional[str] = Field(
        None, description="Preferred OpenRouter model (falls back to built-in list)"
    )

    # Application Settings
    debug: bool = Field(False, description="Debug mode")
    log_level: str = Field("INFO", description="Log level")

    # API Timeout Settings (in seconds)
    openrouter_timeout: float = Field(
        30.0, ge=5.0, le=120.0, description="OpenRouter API request timeout in seconds"
    )
    completion_timeout: float = Field(
        90.0,
        ge=5.0,
        le=600.0,
        description="Upper bound for a single completion call, including fallbacks",
    )
    url_fetch_timeout: float = Field(
        15.0, ge=3.0, le=60.0, description="Article fetch timeout in seconds"
    )

    # OpenRouter Rate Limiting Settings
    openrouter_min_request_interval: float = Field(
        3.2,
        ge=0.0,
        le=10.0,
        description="Minimum seconds between OpenRouter requests (free tier: 20 req/min)",
    )
    openrouter_max_backoff_multiplier: float = Field(
        8.0,
        ge=2.0,
        le=32.0,
        description="Maximum backoff multiplier for consecutive failures",
    )
    openrouter_max_consecutive_failures: int = Field(
        5,
        ge=1,
        le=20,
        description="Maximum consecutive failures before circuit breaking",
    )

    # Generation Settings
    max_concurrent_requests: int = Field(
        3, ge=1, le=16, description="Maximum completion calls in flight at once"
    )
    summary_input_limit: int = Field(
        3000,
        ge=200,
        le=20000,
        description="Characters of snippet text sent for summarisation",
    )
    quality_gate_enabled: bool = Field(
        False, description="Run the quality gate after every generation by default"
    )

    # General API Settings
    default_user_agent: str = Field(
        "Newsletter-Agent/1.0",
        min_length=5,
        max_length=100,
        description="Default User-Agent for HTTP requests",
    )
