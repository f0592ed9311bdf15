"""Source assembly stage."""

import logging

from newsletter_agent.core.assembler import SourceContentAssembler
from newsletter_agent.models.workflow import StatePatch, WorkflowState
from newsletter_agent.workflow.interfaces import WorkflowStage

logger = logging.getLogger(__name__)

NO_SOURCES_TEXT = (
    "No source material was provided. Write from well-established, general "
    "knowledge about the topic and avoid specific figures or quotes."
)
FAILED_SOURCES_TEXT = (
    "Source material could not be processed. Write from well-established, "
    "general knowledge about the topic and avoid specific figures or quotes."
)


class AssembleStage(WorkflowStage):
    """Builds the source text block from the request's snippets."""

    def __init__(self, assembler: SourceContentAssembler):
        self.assembler = assembler

    @property
    def stage_name(self) -> str:
        return "assemble"

    async def execute(self, state: WorkflowState) -> StatePatch:
        if not state.snippets:
            logger.warning("⚠️  No source snippets provided")
            return StatePatch(
                source_content=NO_SOURCES_TEXT,
                warnings=["No source snippets were provided; generated from the topic alone"],
            )

        source_content = await self.assembler.assemble(state.snippets)
        logger.info(f"✅ Assembled {len(state.snippets)} snippets")
        return StatePatch(source_content=source_content)

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        return StatePatch(
            source_content=FAILED_SOURCES_TEXT,
            errors=[f"Source processing failed: {error}"],
        )
