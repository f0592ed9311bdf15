"""Newsletter generation stage."""

import logging

from newsletter_agent.models.workflow import StatePatch, WorkflowState
from newsletter_agent.workflow.interfaces import WorkflowStage

logger = logging.getLogger(__name__)


def format_feedback_history(state: WorkflowState) -> str:
    if not state.feedback:
        return "None yet, this is the first draft."
    return "\n\n".join(
        f"Feedback {i}:\n{entry.feedback}" for i, entry in enumerate(state.feedback, 1)
    )


def placeholder_newsletter(topic: str) -> str:
    return (
        f"# {topic}\n\n"
        f"This issue on {topic} could not be generated automatically. "
        "Please retry once the completion service is available."
    )


class GenerateStage(WorkflowStage):
    """Writes (or rewrites) the newsletter, taking all earlier feedback into account."""

    def __init__(self, gateway):
        self.gateway = gateway

    @property
    def stage_name(self) -> str:
        return "generate"

    async def execute(self, state: WorkflowState) -> StatePatch:
        logger.info(
            f"✍️  Generating draft {state.critique_iterations + 1} for '{state.topic}'"
        )
        content = await self.gateway.invoke(
            "newsletter_generation",
            {
                "topic": state.topic,
                "key_insight": state.key_insight or "None given",
                "directives": state.directives or "None",
                "outline": state.outline_template or "None, choose a fitting structure",
                "source_content": state.source_content,
                "feedback": format_feedback_history(state),
            },
        )
        return StatePatch(content=content.strip())

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        return StatePatch(
            content=placeholder_newsletter(state.topic),
            errors=[f"Newsletter generation failed: {error}"],
        )
