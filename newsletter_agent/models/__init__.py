"""Data models for newsletter generation."""

from newsletter_agent.models.content import (
    GenerationRequest,
    NewsletterDraft,
    SnippetWithComment,
    SourceSnippet,
)
from newsletter_agent.models.quality import (
    QUALITY_DIMENSIONS,
    AgentExecutionResult,
    AgentPersona,
    QualityAssessment,
    QualityMetrics,
    ReflectionResult,
    SelfCorrectionResult,
    SynthesisResult,
    ToolResult,
)
from newsletter_agent.models.workflow import (
    Feedback,
    StatePatch,
    WorkflowState,
    apply_patch,
)

__all__ = [
    "GenerationRequest",
    "NewsletterDraft",
    "SnippetWithComment",
    "SourceSnippet",
    "QUALITY_DIMENSIONS",
    "AgentExecutionResult",
    "AgentPersona",
    "QualityAssessment",
    "QualityMetrics",
    "ReflectionResult",
    "SelfCorrectionResult",
    "SynthesisResult",
    "ToolResult",
    "Feedback",
    "StatePatch",
    "WorkflowState",
    "apply_patch",
]
