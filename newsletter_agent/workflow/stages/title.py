"""Title stage."""

import logging

from newsletter_agent.core.utils import clean_generated_title, truncate_text
from newsletter_agent.models.workflow import StatePatch, WorkflowState
from newsletter_agent.workflow.interfaces import WorkflowStage

logger = logging.getLogger(__name__)

TITLE_CONTEXT_CHARS = 4000


def default_title(topic: str) -> str:
    return f"{topic} Newsletter"


class TitleStage(WorkflowStage):
    """Writes the final headline."""

    def __init__(self, gateway):
        self.gateway = gateway

    @property
    def stage_name(self) -> str:
        return "title"

    async def execute(self, state: WorkflowState) -> StatePatch:
        response = await self.gateway.invoke(
            "newsletter_title",
            {
                "topic": state.topic,
                "newsletter": truncate_text(state.content, TITLE_CONTEXT_CHARS),
            },
        )
        title = clean_generated_title(response)
        if not title:
            raise ValueError("title response was empty after cleanup")
        logger.info(f"🏷️  Title: {title}")
        return StatePatch(title=title)

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        return StatePatch(
            title=default_title(state.topic),
            warnings=[f"Title generation failed, using default title: {error}"],
        )
