"""OpenRouter API client used as the default completion provider."""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp

from newsletter_agent.core.errors import ProviderError

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"

# Tried in order when the preferred model fails
FALLBACK_MODELS = [
    "openai/gpt-4o-mini",
    "google/gemini-flash-1.5-8b",
    "meta-llama/llama-3.2-90b-vision-instruct:free",
    "meta-llama/llama-3.2-11b-vision-instruct:free",
]


class OpenRouterClient:
    """Chat completions over OpenRouter with model fallback and 429 backoff."""

    def __init__(self, api_key: str, model: Optional[str] = None, settings=None):
        """Initialize OpenRouter client.

        Args:
            api_key: OpenRouter API key
            model: Preferred model; settings, then the fallback list, otherwise
            settings: Settings instance for timeouts and rate limits
        """
        self.api_key = api_key
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "X-Title": "Newsletter Agent",
        }
        self.model_fallbacks = list(FALLBACK_MODELS)
        configured_model = settings.openrouter_model if settings else None
        self.default_model = model or configured_model or self.model_fallbacks[0]

        if settings:
            self.min_request_interval = settings.openrouter_min_request_interval
            self.max_backoff_multiplier = settings.openrouter_max_backoff_multiplier
            self.max_consecutive_failures = settings.openrouter_max_consecutive_failures
            self.timeout = settings.openrouter_timeout
        else:
            self.min_request_interval = 3.2
            self.max_backoff_multiplier = 8.0
            self.max_consecutive_failures = 5
            self.timeout = 30.0

        self.last_request_time = 0.0
        self.consecutive_failures = 0
        self.backoff_multiplier = 1.0

    def _candidate_models(self, model: Optional[str] = None) -> List[str]:
        if model:
            return [model]
        return [self.default_model] + [
            m for m in self.model_fallbacks if m != self.default_model
        ]

    async def _wait_for_slot(self) -> None:
        """Space requests out by the minimum interval, stretched by backoff."""
        interval = self.min_request_interval * self.backoff_multiplier
        elapsed = time.monotonic() - self.last_request_time
        if elapsed < interval:
            logger.debug(f"Rate limiting: waiting {interval - elapsed:.1f}s")
            await asyncio.sleep(interval - elapsed)
        self.last_request_time = time.monotonic()

    def _record_rate_limit(self) -> None:
        self.consecutive_failures += 1
        self.backoff_multiplier = min(
            self.max_backoff_multiplier, 2.0**self.consecutive_failures
        )
        logger.warning(
            f"⚠️  Rate limit hit, backing off to {self.backoff_multiplier:.1f}x delay"
        )

    def _record_success(self) -> None:
        self.consecutive_failures = 0
        self.backoff_multiplier = 1.0

    async def _post(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """POST one payload; None on any failure so the next model can be tried."""
        await self._wait_for_slot()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    OPENROUTER_URL,
                    headers=self.headers,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status == 429:
                        self._record_rate_limit()
                        return None
                    if response.status != 200:
                        logger.error(
                            f"OpenRouter API error {response.status}: "
                            f"{await response.text()}"
                        )
                        return None
                    self._record_success()
                    return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Network error in OpenRouter API request: {e}")
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Data parsing error in OpenRouter API response: {e}")
        return None

    async def _complete(
        self,
        prompt: str,
        max_tokens: int = 100,
        temperature: float = 0.3,
        model: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Try each candidate model until one answers."""
        for candidate in self._candidate_models(model):
            if self.consecutive_failures >= self.max_consecutive_failures:
                logger.error(
                    f"Giving up after {self.consecutive_failures} consecutive "
                    "rate-limit failures"
                )
                break

            result = await self._post(
                {
                    "model": candidate,
                    "messages": [{"role": "user", "content": prompt}],
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                    "stream": False,
                }
            )
            if result:
                if candidate != self.default_model:
                    logger.info(f"Using fallback model: {candidate}")
                return result
            logger.warning(f"Model {candidate} failed, trying next")

        logger.error("All OpenRouter models failed")
        return None

    async def test_connection(self) -> bool:
        """Send a tiny prompt; True when a completion comes back."""
        try:
            await self.generate_text("Hello, world!", max_tokens=5)
        except ProviderError as e:
            logger.error(f"OpenRouter API connection failed: {e}")
            return False
        logger.info("OpenRouter API connection successful")
        return True

    async def generate_text(
        self, prompt: str, max_tokens: int = 2000, temperature: float = 0.3
    ) -> str:
        """Generate text for a rendered prompt.

        Raises:
            ProviderError: If no key is configured or no usable text came back
        """
        if not self.api_key:
            raise ProviderError("OpenRouter API key not configured")

        response = await self._complete(
            prompt, max_tokens=max_tokens, temperature=temperature
        )
        if not response or not response.get("choices"):
            raise ProviderError("No completion returned by any OpenRouter model")

        content = response["choices"][0].get("message", {}).get("content") or ""
        if not content.strip():
            raise ProviderError("Empty response from OpenRouter API")
        return content.strip()
