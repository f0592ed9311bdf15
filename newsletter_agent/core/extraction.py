"""Typed field extraction from free-form model output.

Titles are recovered by an ordered cascade of strategies (the first one that
succeeds wins); scores, lists and key/value pairs are read from ALL-CAPS
labels. Every function here is pure and never raises on unexpected text.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from newsletter_agent.core.utils import MAX_TITLE_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Generated Newsletter"
FINAL_ANSWER_LABEL = "INTEGRATED_SOLUTION"
CONFIDENCE_LABELS = ("SYNTHESIS_CONFIDENCE", "CONFIDENCE", "신뢰도")
NONE_SENTINELS = frozenset({"none", "n/a", "없음"})

TitleAndBody = Tuple[str, str]

_NEXT_LABEL = r"\n[ \t]*[A-Z][A-Z_]*:"


def clean_title(raw: str) -> str:
    """Strip heading/emphasis markers and surrounding whitespace."""
    return re.sub(r"[#*]", "", raw).strip()


def _valid_title(title: str) -> bool:
    return 1 <= len(title) <= MAX_TITLE_LENGTH


class TitleStrategy(ABC):
    """Abstract base class for title/body extraction strategies."""

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Name of this strategy for logging and debugging."""
        pass

    @abstractmethod
    def extract(self, text: str) -> Optional[TitleAndBody]:
        """
        Split text into a title and a body.

        Args:
            text: Trimmed, non-empty working text

        Returns:
            (title, body) if this strategy recognises a title, None otherwise
        """
        pass


class EmphasisTitleStrategy(TitleStrategy):
    """Use the first ``**bold**`` span as the title."""

    @property
    def strategy_name(self) -> str:
        return "emphasis"

    def extract(self, text: str) -> Optional[TitleAndBody]:
        match = re.search(r"\*\*([^*]+)\*\*", text)
        if not match:
            return None
        title = clean_title(match.group(1))
        if not _valid_title(title):
            return None
        body = (text[: match.start()] + text[match.end() :]).strip()
        return title, body or text


class HeadingTitleStrategy(TitleStrategy):
    """Use a ``#``-marked first line as the title."""

    @property
    def strategy_name(self) -> str:
        return "heading"

    def extract(self, text: str) -> Optional[TitleAndBody]:
        first_line, _, rest = text.partition("\n")
        match = re.match(r"^\s*#+\s*(.+)$", first_line)
        if not match:
            return None
        title = clean_title(match.group(1))
        if not _valid_title(title):
            return None
        return title, rest.strip() or text


class FirstLineTitleStrategy(TitleStrategy):
    """Use a short enough first line as the title."""

    @property
    def strategy_name(self) -> str:
        return "first_line"

    def extract(self, text: str) -> Optional[TitleAndBody]:
        first_line, _, rest = text.partition("\n")
        first_line = first_line.strip()
        if not _valid_title(first_line):
            return None
        title = clean_title(first_line)
        if not title:
            return None
        return title, rest.strip() or text


DEFAULT_TITLE_STRATEGIES: Sequence[TitleStrategy] = (
    EmphasisTitleStrategy(),
    HeadingTitleStrategy(),
    FirstLineTitleStrategy(),
)


def working_text(text: str) -> str:
    """Return the text after the final-answer marker, or the text itself."""
    match = re.search(rf"{FINAL_ANSWER_LABEL}:\s*([\s\S]+)", text)
    if match:
        return match.group(1).strip()
    return text


def extract_title_and_body(
    text: str, strategies: Sequence[TitleStrategy] = DEFAULT_TITLE_STRATEGIES
) -> TitleAndBody:
    """Recover a title and body from model output.

    The returned title is never empty and never longer than 100 characters.
    When no strategy applies, the default title is returned together with
    the working text unchanged.
    """
    if not text or not text.strip():
        return DEFAULT_TITLE, ""

    working = working_text(text)
    trimmed = working.strip()
    if trimmed:
        for strategy in strategies:
            result = strategy.extract(trimmed)
            if result is not None:
                logger.debug(f"Title extracted with {strategy.strategy_name} strategy")
                return result

    return DEFAULT_TITLE, working


def _label_pattern(labels: Iterable[str]) -> str:
    return "|".join(re.escape(label) for label in labels)


def extract_score(
    text: str, default: int, labels: Sequence[str] = CONFIDENCE_LABELS
) -> int:
    """Read the first ``LABEL: <int>`` for any label synonym, clamped to 0..100."""
    if not text:
        return default
    match = re.search(
        rf"(?:{_label_pattern(labels)})\s*:\s*(-?)(\d+)", text, re.IGNORECASE
    )
    if not match:
        return default
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    # Anything past three digits is out of range; skip int() on huge strings
    if len(digits) > 3:
        return 0 if sign else 100
    return max(0, min(100, int(sign + digits)))


def _is_sentinel(item: str) -> bool:
    return item.strip("[]() ").lower() in NONE_SENTINELS


def extract_list(text: str, label: str) -> List[str]:
    """Read a ``LABEL: a | b, c`` list up to the next ALL-CAPS label.

    Empty items and "none" sentinels are dropped; an absent label gives [].
    """
    if not text:
        return []
    match = re.search(
        rf"(?<![A-Z_]){re.escape(label)}:\s*(.*?)(?={_NEXT_LABEL}|\Z)", text, re.DOTALL
    )
    if not match:
        return []

    span = match.group(1).strip()
    if span.startswith("[") and span.endswith("]"):
        span = span[1:-1]

    items = []
    for raw in re.split(r"[|,\n]", span):
        item = raw.strip().lstrip("-•*").strip()
        if item and not _is_sentinel(item):
            items.append(item)
    return items


def extract_key_value(text: str, label: str) -> Optional[str]:
    """Return the trimmed remainder of the ``LABEL:`` line, or None."""
    if not text:
        return None
    match = re.search(rf"(?<![A-Z_]){re.escape(label)}:\s*(.+)", text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_labeled_block(
    text: str, label: str, stop_labels: Optional[Sequence[str]] = None
) -> Optional[str]:
    """Capture everything after ``LABEL:`` until a stop label or end of text.

    Without ``stop_labels`` any following ALL-CAPS label ends the block.
    """
    if not text:
        return None
    if stop_labels:
        stop = rf"\s*(?:{_label_pattern(stop_labels)}):"
    else:
        stop = _NEXT_LABEL
    match = re.search(
        rf"(?<![A-Z_]){re.escape(label)}:\s*([\s\S]*?)(?={stop}|\Z)", text
    )
    if not match:
        return None
    block = match.group(1).strip()
    return block or None
