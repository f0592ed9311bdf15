"""Style rewrite stage."""

import logging

from newsletter_agent.models.workflow import StatePatch, WorkflowState
from newsletter_agent.workflow.interfaces import WorkflowStage

logger = logging.getLogger(__name__)

EXEMPLAR_SEPARATOR = "\n\n---\n\n"


class RewriteStage(WorkflowStage):
    """Rewrites the draft in the voice of the supplied style examples."""

    def __init__(self, gateway):
        self.gateway = gateway

    @property
    def stage_name(self) -> str:
        return "rewrite"

    async def execute(self, state: WorkflowState) -> StatePatch:
        if not state.style_exemplars:
            return StatePatch(processing_steps=["rewrite skipped: no style examples"])

        content = await self.gateway.invoke(
            "style_rewrite",
            {
                "style_examples": EXEMPLAR_SEPARATOR.join(state.style_exemplars),
                "newsletter": state.content,
            },
        )
        logger.info("🎨 Draft rewritten to match style examples")
        return StatePatch(content=content.strip())

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        return StatePatch(warnings=[f"Style rewrite failed, keeping draft: {error}"])
