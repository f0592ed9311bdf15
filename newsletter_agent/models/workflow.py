"""Workflow state threaded through the refinement stages.

``WorkflowState`` is frozen. Stages describe their effect as a ``StatePatch``
and ``apply_patch`` is the only place the two are merged: scalar fields are
replaced when the patch sets them, list fields are appended.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from newsletter_agent.models.content import GenerationRequest, SnippetWithComment
from newsletter_agent.models.quality import QualityMetrics, ReflectionResult

MAX_CRITIQUE_ITERATIONS = 2
MAX_SELF_CORRECTION_ATTEMPTS = 2

_SCALAR_FIELDS = ("source_content", "title", "content", "quality_metrics", "reflection")
_LIST_FIELDS = ("feedback", "processing_steps", "warnings", "errors")


class Feedback(BaseModel):
    """One critique of one artifact version."""

    model_config = ConfigDict(frozen=True)

    newsletter: str = Field(..., description="Artifact version that was critiqued")
    feedback: str = Field(..., description="Critique text")


class WorkflowState(BaseModel):
    """Immutable state of a single generation request."""

    model_config = ConfigDict(frozen=True)

    # Input
    topic: str
    key_insight: Optional[str] = None
    snippets: List[SnippetWithComment] = Field(default_factory=list)
    directives: Optional[str] = None
    outline_template: Optional[str] = None
    style_exemplars: List[str] = Field(default_factory=list)
    enrichment_operations: List[str] = Field(default_factory=list)

    # Derived
    source_content: str = ""
    critique_iterations: int = Field(0, ge=0, le=MAX_CRITIQUE_ITERATIONS)
    feedback: List[Feedback] = Field(default_factory=list)
    self_correction_attempts: int = Field(0, ge=0, le=MAX_SELF_CORRECTION_ATTEMPTS)

    # Output
    title: str = ""
    content: str = ""

    # Observability
    processing_steps: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    quality_metrics: Optional[QualityMetrics] = None
    reflection: Optional[ReflectionResult] = None

    @classmethod
    def from_request(cls, request: GenerationRequest) -> "WorkflowState":
        return cls(
            topic=request.topic,
            key_insight=request.key_insight,
            snippets=list(request.snippets),
            directives=request.directives,
            outline_template=request.outline_template,
            style_exemplars=list(request.style_exemplars),
            enrichment_operations=list(request.enrichment_operations),
        )


class StatePatch(BaseModel):
    """Partial update produced by a stage."""

    source_content: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    quality_metrics: Optional[QualityMetrics] = None
    reflection: Optional[ReflectionResult] = None

    feedback: List[Feedback] = Field(default_factory=list)
    processing_steps: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


def apply_patch(state: WorkflowState, patch: StatePatch) -> WorkflowState:
    """Merge a stage patch into the state, returning a new state."""
    update = {}
    for name in _SCALAR_FIELDS:
        value = getattr(patch, name)
        if value is not None:
            update[name] = value
    for name in _LIST_FIELDS:
        added = getattr(patch, name)
        if added:
            update[name] = [*getattr(state, name), *added]
    if not update:
        return state
    return state.model_copy(update=update)


def increment_counter(state: WorkflowState, name: str, cap: int) -> WorkflowState:
    """Return a copy of ``state`` with counter ``name`` advanced by one.

    Raises:
        ValueError: If the counter is already at ``cap``.
    """
    current = getattr(state, name)
    if current >= cap:
        raise ValueError(f"{name} already at its cap of {cap}")
    return state.model_copy(update={name: current + 1})
