"""Multi-dimensional quality scoring of a finished newsletter."""

import logging
from typing import List, Optional

from newsletter_agent.core.extraction import extract_list, extract_score
from newsletter_agent.models.quality import (
    QUALITY_DIMENSIONS,
    QualityAssessment,
    QualityMetrics,
    ReflectionResult,
)

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION_SCORE = 5
DEFAULT_CONFIDENCE = 50
IMPROVEMENT_OVERALL_THRESHOLD = 7
IMPROVEMENT_DIMENSION_THRESHOLD = 5


def needs_improvement(metrics: QualityMetrics) -> bool:
    """True when the overall score is below 7 or any dimension is below 5."""
    if metrics.overall < IMPROVEMENT_OVERALL_THRESHOLD:
        return True
    return any(
        score < IMPROVEMENT_DIMENSION_THRESHOLD
        for score in metrics.dimension_scores().values()
    )


def parse_quality_metrics(response: str) -> QualityMetrics:
    """Read the six dimensions and confidence; absent values get neutral defaults."""
    scores = {}
    for name in QUALITY_DIMENSIONS:
        raw = extract_score(response, DEFAULT_DIMENSION_SCORE, labels=(name.upper(),))
        scores[name] = max(1, min(10, raw))
    confidence = max(1, extract_score(response, DEFAULT_CONFIDENCE, labels=("CONFIDENCE",)))
    return QualityMetrics.from_dimensions(scores, confidence)


class QualityGate:
    """Scores a newsletter with one completion call."""

    def __init__(self, gateway):
        self.gateway = gateway

    async def evaluate(self, title: str, content: str, topic: str) -> QualityAssessment:
        """Score a newsletter.

        Raises:
            CompletionError: If the completion call fails
        """
        response = await self.gateway.invoke(
            "quality_validation", {"title": title, "content": content, "topic": topic}
        )
        metrics = parse_quality_metrics(response)
        assessment = QualityAssessment(
            metrics=metrics,
            issues=extract_list(response, "ISSUES"),
            suggestions=extract_list(response, "SUGGESTIONS"),
            needs_improvement=needs_improvement(metrics),
        )
        logger.info(
            f"📊 Quality overall {metrics.overall}/10 "
            f"(confidence {metrics.confidence}%, improve: {assessment.needs_improvement})"
        )
        return assessment


def recommendations(
    metrics: QualityMetrics, reflection: Optional[ReflectionResult] = None
) -> List[str]:
    """Plain-language advice for the weakest areas of a newsletter."""
    advice = []
    if metrics.clarity < 7:
        advice.append("Simplify sentences and make the structure easier to follow")
    if metrics.engagement < 7:
        advice.append("Add concrete examples or a stronger hook to hold attention")
    if metrics.accuracy < 7:
        advice.append("Check facts against the sources and add missing citations")
    if metrics.creativity < 7:
        advice.append("Find a less obvious angle or framing")
    if metrics.persuasiveness < 7:
        advice.append("Support claims with evidence and state the takeaway clearly")
    if reflection is not None:
        if len(reflection.weaknesses) > 2:
            advice.append("Several weaknesses remain, consider another editing pass")
        if reflection.confidence < 70:
            advice.append("Self-assessed confidence is low, review manually before sending")
    return advice
