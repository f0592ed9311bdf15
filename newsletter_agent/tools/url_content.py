"""Fetches the readable text of the first source URL."""

import asyncio
import logging
import re

import aiohttp
from bs4 import BeautifulSoup

from newsletter_agent.tools.base import EnrichmentOperation

logger = logging.getLogger(__name__)

ARTICLE_CHAR_LIMIT = 8000


def extract_article_text(html: str, limit: int = ARTICLE_CHAR_LIMIT) -> str:
    """Pull readable article text out of a page's markup."""
    soup = BeautifulSoup(html, "html.parser")

    # Remove script, style, nav, footer, ads
    for tag in soup(["script", "style", "nav", "footer", "aside", "iframe"]):
        tag.decompose()

    article_content = None
    for selector in [
        "article",
        ".article-content",
        ".post-content",
        ".entry-content",
        "main",
    ]:
        content = soup.select_one(selector)
        if content:
            article_content = content.get_text(" ", strip=True)
            break

    if not article_content:
        article_content = soup.get_text(" ", strip=True)

    article_content = re.sub(r"\s+", " ", article_content).strip()

    if len(article_content) > limit:
        article_content = article_content[:limit] + "..."

    return article_content


class UrlContentOperation(EnrichmentOperation):
    """Downloads a page and extracts its article text."""

    def __init__(self, timeout: float = 15.0, user_agent: str = "Newsletter-Agent/1.0"):
        self.timeout = timeout
        self.user_agent = user_agent

    @property
    def operation_name(self) -> str:
        return "extract_url_content"

    async def fetch_html(self, url: str) -> str:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise ValueError(f"HTTP {response.status} fetching {url}")
                try:
                    return await response.text()
                except UnicodeDecodeError:
                    raw_content = await response.read()
                    return raw_content.decode("latin-1", errors="ignore")

    async def run(self, value: str) -> str:
        try:
            html = await self.fetch_html(value)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Network error fetching article content: {e}")
            raise

        text = extract_article_text(html)
        if not text:
            raise ValueError(f"No readable text at {value}")
        return text
