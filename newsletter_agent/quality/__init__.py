"""Quality gate, reflection and self-correction."""

from newsletter_agent.quality.gate import (
    QualityGate,
    needs_improvement,
    parse_quality_metrics,
    recommendations,
)
from newsletter_agent.quality.loop import SelfCorrectionLoop
from newsletter_agent.quality.reflection import (
    ReflectionAnalyzer,
    SelfCorrector,
    correction_confidence,
    needs_revision,
)

__all__ = [
    "QualityGate",
    "needs_improvement",
    "parse_quality_metrics",
    "recommendations",
    "SelfCorrectionLoop",
    "ReflectionAnalyzer",
    "SelfCorrector",
    "correction_confidence",
    "needs_revision",
]
