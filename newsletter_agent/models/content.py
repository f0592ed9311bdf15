"""Content models for newsletter generation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from newsletter_agent.models.quality import QualityMetrics


class SourceSnippet(BaseModel):
    """A piece of captured source material."""

    id: str = Field(..., description="Unique identifier")
    title: str = Field(..., description="Snippet title")
    url: Optional[str] = Field(None, description="Original URL")
    content: str = Field(..., description="Captured text")
    user_comment: Optional[str] = Field(
        None, description="Comment stored with the snippet when it was captured"
    )
    raw_html: Optional[str] = Field(None, description="Raw markup of the page")
    tags: List[str] = Field(default_factory=list, description="Tags")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Capture time"
    )


class SnippetWithComment(BaseModel):
    """A snippet paired with an optional comment given for this request."""

    snippet: SourceSnippet = Field(..., description="Source snippet")
    user_comment: Optional[str] = Field(
        None, description="Per-request comment, overrides the stored one"
    )

    @property
    def effective_comment(self) -> Optional[str]:
        return self.user_comment or self.snippet.user_comment


class GenerationRequest(BaseModel):
    """Everything a caller supplies to produce one newsletter."""

    topic: str = Field(..., min_length=1, description="Newsletter topic")
    key_insight: Optional[str] = Field(None, description="Core message to land")
    snippets: List[SnippetWithComment] = Field(
        default_factory=list, description="Ordered source snippets"
    )
    directives: Optional[str] = Field(
        None, description="Free-text generation directives"
    )
    outline_template: Optional[str] = Field(
        None, description="Section outline the newsletter should follow"
    )
    style_exemplars: List[str] = Field(
        default_factory=list, description="Example texts whose style to imitate"
    )
    enrichment_operations: List[str] = Field(
        default_factory=list, description="Named enrichment operations to run"
    )


class NewsletterDraft(BaseModel):
    """Represents a generated newsletter draft."""

    title: str = Field(..., description="Newsletter title")
    content: str = Field(..., description="Generated newsletter content")
    warnings: List[str] = Field(default_factory=list, description="Non-fatal issues")
    errors: List[str] = Field(
        default_factory=list, description="Stage failures that degraded the output"
    )
    processing_steps: List[str] = Field(
        default_factory=list, description="Stages executed, in order"
    )
    quality_metrics: Optional[QualityMetrics] = Field(
        None, description="Last quality gate evaluation, when the gate ran"
    )
    generation_mode: str = Field("refine", description="refine or multi_persona")
    processing_time: float = Field(0.0, description="Wall-clock seconds")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Generation time"
    )
