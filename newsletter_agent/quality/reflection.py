"""Self-reflection on a draft and targeted correction of its weaknesses."""

import logging
from typing import Sequence

from newsletter_agent.core.extraction import (
    clean_title,
    extract_key_value,
    extract_labeled_block,
    extract_list,
    extract_score,
)
from newsletter_agent.core.utils import round_half_up
from newsletter_agent.models.quality import QualityMetrics, ReflectionResult, SelfCorrectionResult
from newsletter_agent.models.workflow import MAX_SELF_CORRECTION_ATTEMPTS

logger = logging.getLogger(__name__)

DEFAULT_REFLECTION_CONFIDENCE = 50
NO_FIX_CONFIDENCE = 50
MAX_CORRECTION_CONFIDENCE = 95


def needs_revision(
    confidence: int, overall: int, weakness_count: int, attempts: int
) -> bool:
    """Decide whether another correction pass is worth it.

    Rules are checked in order and the first match wins. The model's own
    NEEDS_REVISION answer is deliberately not an input.
    """
    if attempts >= MAX_SELF_CORRECTION_ATTEMPTS:
        return False
    if confidence >= 80 and overall >= 8 and weakness_count <= 1:
        return False
    if confidence >= 60 and overall >= 6 and weakness_count <= 3 and attempts < 1:
        return True
    return False


def correction_confidence(fixes_applied: int, weakness_count: int) -> int:
    """Confidence in a correction: 50 with no fixes, otherwise 60-95."""
    if fixes_applied == 0:
        return NO_FIX_CONFIDENCE
    coverage = min(fixes_applied / max(weakness_count, 1), 1)
    return round_half_up(min(60 + 30 * coverage, MAX_CORRECTION_CONFIDENCE))


def format_metrics(metrics: QualityMetrics) -> str:
    scores = ", ".join(f"{k}={v}" for k, v in metrics.dimension_scores().items())
    return f"{scores}; overall={metrics.overall}/10; confidence={metrics.confidence}%"


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items) or "- None listed"


class ReflectionAnalyzer:
    """Asks the model to critique its own draft."""

    def __init__(self, gateway):
        self.gateway = gateway

    async def analyze(
        self,
        title: str,
        content: str,
        topic: str,
        metrics: QualityMetrics,
        attempts: int = 0,
    ) -> ReflectionResult:
        """Reflect on a draft; ``needs_revision`` is recomputed locally.

        Raises:
            CompletionError: If the completion call fails
        """
        response = await self.gateway.invoke(
            "reflection",
            {
                "title": title,
                "content": content,
                "topic": topic,
                "metrics": format_metrics(metrics),
                "attempts": str(attempts),
            },
        )

        weaknesses = extract_list(response, "WEAKNESSES")
        confidence = max(
            1, extract_score(response, DEFAULT_REFLECTION_CONFIDENCE, labels=("CONFIDENCE",))
        )
        model_flag = (extract_key_value(response, "NEEDS_REVISION") or "").upper()

        result = ReflectionResult(
            strengths=extract_list(response, "STRENGTHS"),
            weaknesses=weaknesses,
            improvements=extract_list(response, "IMPROVEMENTS"),
            confidence=confidence,
            needs_revision=needs_revision(
                confidence, metrics.overall, len(weaknesses), attempts
            ),
            model_needs_revision=model_flag.startswith("YES"),
        )
        if result.needs_revision != result.model_needs_revision:
            logger.debug(
                f"Reflection decision {result.needs_revision} overrides model answer "
                f"{result.model_needs_revision}"
            )
        return result


class SelfCorrector:
    """Applies targeted fixes for the weaknesses found by reflection."""

    def __init__(self, gateway):
        self.gateway = gateway

    async def correct(
        self,
        title: str,
        content: str,
        weaknesses: Sequence[str],
        improvements: Sequence[str],
    ) -> SelfCorrectionResult:
        """Revise a draft.

        Raises:
            CompletionError: If the completion call fails
        """
        response = await self.gateway.invoke(
            "self_correction",
            {
                "title": title,
                "content": content,
                "weaknesses": _bullets(weaknesses),
                "improvements": _bullets(improvements),
            },
        )

        fixes = extract_list(response, "FIXES_APPLIED")
        corrected_content = extract_labeled_block(
            response, "CORRECTED_CONTENT", stop_labels=("FIXES_APPLIED",)
        )
        return SelfCorrectionResult(
            corrected_title=clean_title(extract_key_value(response, "CORRECTED_TITLE") or "")
            or title,
            corrected_content=corrected_content or content,
            fixes_applied=fixes,
            confidence=correction_confidence(len(fixes), len(weaknesses)),
        )
