"""Models for quality evaluation, reflection and persona generation."""

from datetime import datetime
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

from newsletter_agent.core.utils import round_half_up

QUALITY_DIMENSIONS = (
    "clarity",
    "engagement",
    "accuracy",
    "completeness",
    "creativity",
    "persuasiveness",
)


class QualityMetrics(BaseModel):
    """Six scored dimensions plus the model's self-reported confidence."""

    clarity: int = Field(5, ge=1, le=10, description="Clarity score")
    engagement: int = Field(5, ge=1, le=10, description="Engagement score")
    accuracy: int = Field(5, ge=1, le=10, description="Accuracy score")
    completeness: int = Field(5, ge=1, le=10, description="Completeness score")
    creativity: int = Field(5, ge=1, le=10, description="Creativity score")
    persuasiveness: int = Field(5, ge=1, le=10, description="Persuasiveness score")
    overall: int = Field(5, ge=1, le=10, description="Rounded mean of the six")
    confidence: int = Field(50, ge=1, le=100, description="Model confidence")

    @classmethod
    def from_dimensions(cls, scores: Dict[str, int], confidence: int) -> "QualityMetrics":
        """Build metrics, deriving ``overall`` from the six dimensions."""
        values = [scores[name] for name in QUALITY_DIMENSIONS]
        overall = round_half_up(sum(values) / len(values))
        return cls(**scores, overall=overall, confidence=confidence)

    def dimension_scores(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in QUALITY_DIMENSIONS}


class QualityAssessment(BaseModel):
    """Result of one quality gate evaluation."""

    metrics: QualityMetrics
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    needs_improvement: bool = False


class ReflectionResult(BaseModel):
    """Critical self-reflection on an artifact."""

    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    confidence: int = Field(50, ge=1, le=100)
    needs_revision: bool = Field(
        False, description="Decision recomputed from confidence, quality and attempts"
    )
    model_needs_revision: bool = Field(
        False, description="The model's own NEEDS_REVISION answer, informational"
    )


class SelfCorrectionResult(BaseModel):
    """Output of one targeted correction pass."""

    corrected_title: str
    corrected_content: str
    fixes_applied: List[str] = Field(default_factory=list)
    confidence: int = Field(50, ge=0, le=100)


class AgentPersona(str, Enum):
    """Fixed set of generation personas."""

    WRITER = "writer"
    EDITOR = "editor"
    REVIEWER = "reviewer"
    STRATEGIST = "strategist"


class AgentExecutionResult(BaseModel):
    """Output of one persona branch."""

    persona: AgentPersona
    output: str
    title: str = ""
    content: str = ""
    execution_time: float = Field(0.0, description="Latency in seconds")
    confidence: int = Field(0, ge=0, le=100, description="Fixed prior per persona")
    success: bool = True


class SynthesisResult(BaseModel):
    """Reconciled output of all persona branches."""

    title: str
    content: str
    consensus_elements: List[str] = Field(default_factory=list)
    resolved_conflicts: List[str] = Field(default_factory=list)
    confidence: int = Field(85, ge=0, le=100)


class ToolResult(BaseModel):
    """Result of one enrichment operation."""

    tool_name: str
    input: str = ""
    output: str = ""
    success: bool = False
    timestamp: datetime = Field(default_factory=datetime.now)
