"""Tests for the completion gateway and the OpenRouter client."""

import asyncio
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from newsletter_agent.clients.gateway import CompletionGateway
from newsletter_agent.clients.openrouter import OpenRouterClient
from newsletter_agent.core.errors import CompletionError, ProviderError
from newsletter_agent.core.prompts import get_prompt, list_prompts, render_prompt


class TestPromptRegistry:
    def test_every_prompt_has_limits(self):
        for template_id in list_prompts():
            config = get_prompt(template_id)["config"]
            assert config["max_tokens"] > 0
            assert 0 <= config["temperature"] <= 1

    def test_unknown_prompt(self):
        with pytest.raises(ValueError):
            get_prompt("nope")

    def test_render_fills_variables(self):
        prompt = render_prompt("newsletter_title", {"topic": "AI", "newsletter": "Body"})
        assert '"AI"' in prompt
        assert "Body" in prompt


class TestCompletionGateway:
    """Test rendering, limits and error wrapping."""

    @pytest.mark.asyncio
    async def test_invoke_passes_template_config(self):
        provider = AsyncMock()
        provider.generate_text.return_value = "A title"
        gateway = CompletionGateway(provider)

        result = await gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})

        assert result == "A title"
        _, kwargs = provider.generate_text.call_args
        assert kwargs["max_tokens"] == get_prompt("newsletter_title")["config"]["max_tokens"]
        assert kwargs["temperature"] == get_prompt("newsletter_title")["config"]["temperature"]

    @pytest.mark.asyncio
    async def test_missing_variable_raises_completion_error(self):
        gateway = CompletionGateway(AsyncMock())
        with pytest.raises(CompletionError, match="missing prompt variable"):
            await gateway.invoke("newsletter_title", {"topic": "AI"})

    @pytest.mark.asyncio
    async def test_unknown_template_raises_completion_error(self):
        gateway = CompletionGateway(AsyncMock())
        with pytest.raises(CompletionError):
            await gateway.invoke("unknown", {})

    @pytest.mark.asyncio
    async def test_provider_error_is_wrapped(self):
        provider = AsyncMock()
        provider.generate_text.side_effect = ValueError("Invalid response format")
        gateway = CompletionGateway(provider)

        with pytest.raises(CompletionError) as exc_info:
            await gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})
        assert exc_info.value.template_id == "newsletter_title"

    @pytest.mark.asyncio
    async def test_client_error_carries_template_id(self):
        provider = AsyncMock()
        provider.generate_text.side_effect = ProviderError("Empty response from OpenRouter API")
        gateway = CompletionGateway(provider)

        with pytest.raises(CompletionError, match="newsletter_title: Empty response") as exc_info:
            await gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})
        assert exc_info.value.template_id == "newsletter_title"

    @pytest.mark.asyncio
    async def test_network_error_is_wrapped(self):
        provider = AsyncMock()
        provider.generate_text.side_effect = aiohttp.ClientError("boom")
        gateway = CompletionGateway(provider)

        with pytest.raises(CompletionError, match="network error"):
            await gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})

    @pytest.mark.asyncio
    async def test_empty_response_is_an_error(self):
        provider = AsyncMock()
        provider.generate_text.return_value = "   "
        gateway = CompletionGateway(provider)

        with pytest.raises(CompletionError, match="empty response"):
            await gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})

    @pytest.mark.asyncio
    async def test_slow_provider_times_out(self):
        class SlowProvider:
            async def generate_text(self, prompt, max_tokens, temperature):
                await asyncio.sleep(1)
                return "late"

        gateway = CompletionGateway(SlowProvider(), timeout=0.01)
        with pytest.raises(CompletionError, match="timed out"):
            await gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        in_flight = 0
        peak = 0

        class CountingProvider:
            async def generate_text(self, prompt, max_tokens, temperature):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return "ok"

        gateway = CompletionGateway(CountingProvider(), max_concurrent=2)
        await asyncio.gather(
            *(
                gateway.invoke("newsletter_title", {"topic": "AI", "newsletter": "x"})
                for _ in range(6)
            )
        )
        assert peak == 2

    def test_provider_is_required(self):
        with pytest.raises(ValueError):
            CompletionGateway(None)


class TestOpenRouterClient:
    @pytest.mark.asyncio
    async def test_generate_text_returns_content(self, mock_settings):
        client = OpenRouterClient("key", settings=mock_settings)
        response = {"choices": [{"message": {"content": "  Hello  "}}]}
        with patch.object(client, "_complete", AsyncMock(return_value=response)):
            assert await client.generate_text("prompt", max_tokens=10) == "Hello"

    @pytest.mark.asyncio
    async def test_generate_text_raises_without_choices(self, mock_settings):
        client = OpenRouterClient("key", settings=mock_settings)
        with patch.object(client, "_complete", AsyncMock(return_value=None)):
            with pytest.raises(ProviderError, match="No completion"):
                await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_generate_text_requires_key(self):
        client = OpenRouterClient("")
        with pytest.raises(ProviderError, match="not configured"):
            await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_model_fallback(self, mock_settings):
        client = OpenRouterClient("key", settings=mock_settings)
        ok = {"choices": [{"message": {"content": "fine"}}]}
        single = AsyncMock(side_effect=[None, ok])
        with patch.object(client, "_post", single):
            result = await client._complete("prompt")

        assert result == ok
        first_model = single.call_args_list[0].args[0]["model"]
        second_model = single.call_args_list[1].args[0]["model"]
        assert first_model == client.default_model
        assert second_model != first_model

    def test_settings_model_is_default(self, mock_settings):
        settings = mock_settings.model_copy(update={"openrouter_model": "custom/model"})
        assert OpenRouterClient("key", settings=settings).default_model == "custom/model"

    @pytest.mark.asyncio
    async def test_blank_content_is_a_provider_error(self, mock_settings):
        client = OpenRouterClient("key", settings=mock_settings)
        response = {"choices": [{"message": {"content": "   "}}]}
        with patch.object(client, "_complete", AsyncMock(return_value=response)):
            with pytest.raises(ProviderError, match="Empty response"):
                await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_connection_check(self, mock_settings):
        client = OpenRouterClient("key", settings=mock_settings)
        ok = {"choices": [{"message": {"content": "hi"}}]}
        with patch.object(client, "_complete", AsyncMock(return_value=ok)):
            assert await client.test_connection() is True
        with patch.object(client, "_complete", AsyncMock(return_value=None)):
            assert await client.test_connection() is False
