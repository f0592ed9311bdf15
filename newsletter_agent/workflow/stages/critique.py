"""Critique stage producing one feedback entry per draft."""

import logging

from newsletter_agent.core.extraction import extract_labeled_block
from newsletter_agent.models.workflow import Feedback, StatePatch, WorkflowState
from newsletter_agent.workflow.interfaces import WorkflowStage

logger = logging.getLogger(__name__)


class CritiqueStage(WorkflowStage):
    @property
    def stage_name(self) -> str:
        return "critique"

    def __init__(self, gateway):
        self.gateway = gateway

    async def execute(self, state: WorkflowState) -> StatePatch:
        response = await self.gateway.invoke(
            "article_critique", {"topic": state.topic, "newsletter": state.content}
        )
        text = extract_labeled_block(response, "FEEDBACK") or response.strip()
        logger.info(f"🧐 Critique {len(state.feedback) + 1} recorded")
        return StatePatch(feedback=[Feedback(newsletter=state.content, feedback=text)])

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        return StatePatch(warnings=[f"Critique failed, no feedback recorded: {error}"])
