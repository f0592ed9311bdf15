"""Turns source snippets and user comments into one prompt-ready text block."""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup

from newsletter_agent.models.content import SnippetWithComment, SourceSnippet
from newsletter_agent.core.errors import CompletionError
from newsletter_agent.core.extraction import extract_list
from newsletter_agent.core.utils import (
    extract_source_from_url,
    heuristic_summary,
    split_sentences,
    truncate_text,
)

logger = logging.getLogger(__name__)

SHORT_CONTENT_CHARS = 100
MAX_KEY_POINTS = 5
MAX_SENTENCES_PER_SNIPPET = 2

IMPORTANCE_KEYWORDS = (
    "important",
    "key",
    "critical",
    "significant",
    "essential",
    "breakthrough",
    "announced",
    "launch",
    "must",
    "중요",
    "핵심",
)


@dataclass
class ProcessedSnippet:
    """A snippet after summarisation, ready to be rendered."""

    index: int
    title: str
    url: Optional[str]
    summary: str
    comment: Optional[str] = None
    structure: Optional[str] = None


def is_important_sentence(sentence: str) -> bool:
    if not 20 <= len(sentence) <= 150:
        return False
    lowered = sentence.lower()
    return any(keyword in lowered for keyword in IMPORTANCE_KEYWORDS)


def heuristic_key_points(
    items: Sequence[SnippetWithComment], limit: int = MAX_KEY_POINTS
) -> List[str]:
    """Key points without a model: comments first, then keyword-matched sentences."""
    points: List[str] = []
    for item in items:
        if item.user_comment and item.user_comment.strip():
            points.append(item.user_comment.strip())

    for item in items:
        important = [
            s for s in split_sentences(item.snippet.content) if is_important_sentence(s)
        ]
        points.extend(important[:MAX_SENTENCES_PER_SNIPPET])

    return points[:limit]


def local_structure_digest(html: str) -> str:
    """Describe headings and key metadata of a page without a model."""
    soup = BeautifulSoup(html, "html.parser")
    lines = []

    headings = [
        f"{tag.name}: {tag.get_text(' ', strip=True)}"
        for tag in soup.find_all(["h1", "h2", "h3"])
        if tag.get_text(strip=True)
    ]
    if headings:
        lines.append("TITLE_STRUCTURE: " + " > ".join(headings[:8]))

    meta = []
    if soup.title and soup.title.get_text(strip=True):
        meta.append(f"title={soup.title.get_text(strip=True)}")
    for name in ("author", "date", "article:published_time", "keywords"):
        tag = soup.find("meta", attrs={"name": name}) or soup.find(
            "meta", attrs={"property": name}
        )
        if tag and tag.get("content"):
            meta.append(f"{name}={tag['content'].strip()}")
    if meta:
        lines.append("META_INFO: " + ", ".join(meta))

    return "\n".join(lines)


class SourceContentAssembler:
    """Summarises snippets and collects cross-snippet key points.

    Each snippet is processed independently; a failed completion for one
    snippet falls back to a local heuristic and never affects the others.
    """

    def __init__(self, gateway, summary_input_limit: int = 3000):
        self.gateway = gateway
        self.summary_input_limit = summary_input_limit

    async def assemble(self, items: Sequence[SnippetWithComment]) -> str:
        """Build the source text block for a list of snippets."""
        if not items:
            return ""

        logger.info(f"📚 Assembling {len(items)} source snippets")
        results = await asyncio.gather(
            *(self._process_snippet(i, item) for i, item in enumerate(items)),
            return_exceptions=True,
        )

        processed: List[ProcessedSnippet] = []
        for index, result in enumerate(results):
            if isinstance(result, Exception):
                logger.error(f"Snippet {index + 1} processing failed: {result}")
                processed.append(self._fallback_snippet(index, items[index]))
            else:
                processed.append(result)

        key_points = await self.extract_key_points(processed, items)
        return self._render(processed, key_points)

    async def _process_snippet(
        self, index: int, item: SnippetWithComment
    ) -> ProcessedSnippet:
        snippet = item.snippet
        summary = await self.summarize(snippet)
        structure = None
        if snippet.raw_html:
            structure = await self.describe_structure(snippet.raw_html)

        return ProcessedSnippet(
            index=index,
            title=snippet.title,
            url=snippet.url,
            summary=summary,
            comment=item.effective_comment,
            structure=structure or None,
        )

    def _fallback_snippet(
        self, index: int, item: SnippetWithComment
    ) -> ProcessedSnippet:
        return ProcessedSnippet(
            index=index,
            title=item.snippet.title,
            url=item.snippet.url,
            summary=heuristic_summary(item.snippet.content),
            comment=item.effective_comment,
        )

    async def summarize(self, snippet: SourceSnippet) -> str:
        """Summarise one snippet, falling back to its first sentences."""
        content = snippet.content.strip()
        if len(content) < SHORT_CONTENT_CHARS:
            return content

        try:
            return (
                await self.gateway.invoke(
                    "snippet_summary",
                    {
                        "title": snippet.title,
                        "content": truncate_text(content, self.summary_input_limit),
                    },
                )
            ).strip()
        except CompletionError as e:
            logger.warning(f"Summary failed for '{snippet.title}', using heuristic: {e}")
            return heuristic_summary(content)

    async def describe_structure(self, raw_html: str) -> str:
        """Digest of a page's headings and metadata."""
        try:
            return (
                await self.gateway.invoke(
                    "html_structure",
                    {"html": truncate_text(raw_html, self.summary_input_limit)},
                )
            ).strip()
        except CompletionError as e:
            logger.warning(f"Structure analysis failed, parsing markup locally: {e}")
            return local_structure_digest(raw_html)

    async def extract_key_points(
        self,
        processed: Sequence[ProcessedSnippet],
        items: Sequence[SnippetWithComment],
    ) -> List[str]:
        """Up to five cross-snippet key points, user comments first."""
        comments = [
            f"- {p.comment} (on: {p.title})" for p in processed if p.comment
        ]
        summaries = "\n".join(
            f"{p.index + 1}. {p.title}: {p.summary}" for p in processed
        )

        try:
            response = await self.gateway.invoke(
                "key_points",
                {
                    "user_comments": "\n".join(comments) or "None",
                    "summaries": summaries,
                },
            )
            points = extract_list(response, "KEY_POINTS")[:MAX_KEY_POINTS]
            if points:
                return points
            logger.warning("Key point response had no KEY_POINTS, using heuristic")
        except CompletionError as e:
            logger.warning(f"Key point extraction failed, using heuristic: {e}")

        return heuristic_key_points(items)

    def _render(
        self, processed: Sequence[ProcessedSnippet], key_points: Sequence[str]
    ) -> str:
        blocks = ["Source material:"]
        for p in processed:
            lines = [f"{p.index + 1}. {p.title}"]
            if p.url:
                lines.append(f"   URL: {p.url}")
                source = extract_source_from_url(p.url)
                if source:
                    lines.append(f"   Source: {source}")
            lines.append(f"   Summary: {p.summary}")
            if p.structure:
                structure = p.structure.replace("\n", "\n      ")
                lines.append(f"   Structure:\n      {structure}")
            if p.comment:
                lines.append(f"   User comment: {p.comment}")
            blocks.append("\n".join(lines))

        if key_points:
            blocks.append("Key points:\n" + "\n".join(f"- {k}" for k in key_points))

        return "\n\n".join(blocks)
