"""Completion gateway: template id + variables in, text out."""

import asyncio
import logging
import time
from typing import Mapping, Optional

import aiohttp

from newsletter_agent.core.errors import CompletionError, ProviderError
from newsletter_agent.core.prompts import prompt_config, render_prompt

logger = logging.getLogger(__name__)


class CompletionGateway:
    """Renders registered prompts and sends them to a completion provider.

    The provider is any object with an async
    ``generate_text(prompt, max_tokens, temperature) -> str`` that raises on
    failure, such as :class:`OpenRouterClient`. Every call is bounded by
    ``timeout`` seconds and at most ``max_concurrent`` calls run at once.
    The gateway never retries; callers decide what a failure means.
    """

    def __init__(self, provider, timeout: float = 90.0, max_concurrent: int = 3):
        if provider is None:
            raise ValueError("A completion provider is required")
        self.provider = provider
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._semaphore_loop = None

    @classmethod
    def from_settings(cls, settings) -> "CompletionGateway":
        from newsletter_agent.clients.openrouter import OpenRouterClient

        client = OpenRouterClient(settings.openrouter_api_key, settings=settings)
        return cls(
            client,
            timeout=settings.completion_timeout,
            max_concurrent=settings.max_concurrent_requests,
        )

    def _get_semaphore(self) -> asyncio.Semaphore:
        # A semaphore belongs to one event loop; sync callers may run several.
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
            self._semaphore_loop = loop
        return self._semaphore

    async def invoke(self, template_id: str, variables: Mapping[str, str]) -> str:
        """Complete one registered prompt.

        Args:
            template_id: Registered prompt id
            variables: Values for every placeholder of the template

        Returns:
            Non-empty completion text

        Raises:
            CompletionError: On unknown template, missing variable, provider
                failure, timeout or empty response
        """
        try:
            prompt = render_prompt(template_id, variables)
        except ValueError as e:
            raise CompletionError(template_id, str(e)) from e
        except KeyError as e:
            raise CompletionError(template_id, f"missing prompt variable {e}") from e

        config = prompt_config(template_id)
        started = time.monotonic()

        async with self._get_semaphore():
            try:
                text = await asyncio.wait_for(
                    self.provider.generate_text(
                        prompt,
                        max_tokens=int(config["max_tokens"]),
                        temperature=config["temperature"],
                    ),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError as e:
                raise CompletionError(
                    template_id, f"timed out after {self.timeout:.0f}s"
                ) from e
            except aiohttp.ClientError as e:
                raise CompletionError(template_id, f"network error: {e}") from e
            except ProviderError as e:
                raise CompletionError(template_id, str(e)) from e
            except CompletionError:
                raise
            except Exception as e:
                raise CompletionError(template_id, str(e) or type(e).__name__) from e

        if not text or not text.strip():
            raise CompletionError(template_id, "empty response")

        logger.debug(
            f"Completion {template_id} finished in {time.monotonic() - started:.1f}s"
        )
        return text
