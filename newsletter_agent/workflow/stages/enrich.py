"""Enrichment stage running the requested tool operations."""

import logging

from newsletter_agent.models.workflow import StatePatch, WorkflowState
from newsletter_agent.tools.coordinator import ToolCoordinator, append_tool_results
from newsletter_agent.workflow.interfaces import WorkflowStage

logger = logging.getLogger(__name__)


class EnrichStage(WorkflowStage):
    """Appends enrichment results to the assembled source text."""

    def __init__(self, coordinator: ToolCoordinator):
        self.coordinator = coordinator

    @property
    def stage_name(self) -> str:
        return "enrich"

    async def execute(self, state: WorkflowState) -> StatePatch:
        results = await self.coordinator.run(state.enrichment_operations, state)
        warnings = [
            f"Enrichment '{r.tool_name}' failed: {r.output}" for r in results if not r.success
        ]
        return StatePatch(
            source_content=append_tool_results(state.source_content, results),
            warnings=warnings,
        )

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        return StatePatch(warnings=[f"Enrichment skipped: {error}"])
