"""Tests for settings and configuration."""

import pytest
from pydantic import ValidationError

from newsletter_agent.models.settings import Settings


def test_settings_defaults(monkeypatch):
    """Test that settings have proper default values."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings(_env_file=None)
    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert settings.openrouter_api_key is None
    assert settings.max_concurrent_requests == 3
    assert settings.summary_input_limit == 3000
    assert settings.quality_gate_enabled is False


def test_settings_from_env(monkeypatch):
    """Test that settings are loaded from environment variables."""
    monkeypatch.setenv("OPENROUTER_API_KEY", "test_openrouter_key")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("COMPLETION_TIMEOUT", "45")

    settings = Settings(_env_file=None)
    assert settings.openrouter_api_key == "test_openrouter_key"
    assert settings.debug is True
    assert settings.completion_timeout == 45.0


def test_settings_case_insensitive(monkeypatch):
    """Test that environment variable names are case insensitive."""
    monkeypatch.setenv("openrouter_model", "openai/gpt-4o-mini")

    settings = Settings(_env_file=None)
    assert settings.openrouter_model == "openai/gpt-4o-mini"


@pytest.mark.parametrize(
    "field,value",
    [
        ("openrouter_timeout", 1.0),
        ("completion_timeout", 1000.0),
        ("max_concurrent_requests", 0),
        ("summary_input_limit", 50),
    ],
)
def test_settings_bounds(field, value):
    """Out-of-range values are rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})
