"""Utility functions for URL and text processing."""

from __future__ import annotations

import math
import re
from typing import List
from urllib.parse import urlparse

MAX_TITLE_LENGTH = 100

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (6.5 -> 7)."""
    return int(math.floor(value + 0.5))


def extract_source_from_url(url: str) -> str:
    """Extract a human friendly source name from a URL.

    Removes common subdomains and TLDs, applies known mappings and
    returns a title-cased domain name. Returns an empty string if the
    URL cannot be parsed.
    """
    if not url:
        return ""

    try:
        parsed = urlparse(url)
        domain = parsed.netloc.lower()
        if not domain:
            return ""

        domain = re.sub(r"^(www\.|m\.|mobile\.)", "", domain)
        original_domain = domain
        domain = re.sub(r"\.(com|org|net|edu|gov|io|co\.uk|ai)$", "", domain)

        source_mapping = {
            "techcrunch": "TechCrunch",
            "arstechnica": "Ars Technica",
            "theverge": "The Verge",
            "github": "GitHub",
            "youtube": "YouTube",
            "linkedin": "LinkedIn",
            "openai": "OpenAI",
        }

        if domain in source_mapping:
            return source_mapping[domain]

        if ".substack" in original_domain:
            subdomain = original_domain.split(".")[0]
            return f"{subdomain.title()} (Substack)"

        main_domain = domain.split(".")[0]
        return main_domain.replace("-", " ").replace("_", " ").title()
    except ValueError:
        return ""


def truncate_text(text: str, limit: int, suffix: str = "...") -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with ``suffix``."""
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text.strip()) if s.strip()]


def heuristic_summary(text: str, max_chars: int = 200) -> str:
    """Summarise without a model: the first two sentences, else a prefix."""
    text = " ".join(text.split())
    if not text:
        return ""
    sentences = split_sentences(text)
    if len(sentences) > 1:
        return " ".join(sentences[:2])
    return truncate_text(text, max_chars)


def clean_generated_title(raw: str) -> str:
    """Reduce a model's title answer to a single clean line.

    Returns an empty string when nothing usable is left.
    """
    for line in raw.splitlines():
        line = re.sub(r"^\s*(TITLE|제목)\s*:\s*", "", line, flags=re.IGNORECASE)
        line = line.replace("#", "").replace("*", "").strip()
        line = line.strip("\"'“”‘’`").strip()
        if line:
            return line[:MAX_TITLE_LENGTH].strip()
    return ""
