"""Refinement workflow: assemble, enrich, generate/critique loop, rewrite, title.

Routing is a pure function of the current node and the state. The critique
loop is bounded by ``critique_iterations`` alone; nothing a model says can
extend or shorten it.
"""

import logging
from enum import Enum
from typing import Dict, Optional

from newsletter_agent.core.assembler import SourceContentAssembler
from newsletter_agent.core.errors import NewsletterGenerationError
from newsletter_agent.models.workflow import (
    MAX_CRITIQUE_ITERATIONS,
    WorkflowState,
    apply_patch,
    increment_counter,
)
from newsletter_agent.tools.coordinator import ToolCoordinator
from newsletter_agent.workflow.interfaces import WorkflowStage
from newsletter_agent.workflow.stages import (
    AssembleStage,
    CritiqueStage,
    EnrichStage,
    GenerateStage,
    RewriteStage,
    TitleStage,
)

logger = logging.getLogger(__name__)


class WorkflowNode(str, Enum):
    ASSEMBLE = "assemble"
    ENRICH = "enrich"
    GENERATE = "generate"
    CRITIQUE = "critique"
    REWRITE = "rewrite"
    TITLE = "title"
    DONE = "done"


def next_node(current: WorkflowNode, state: WorkflowState) -> WorkflowNode:
    """Return the node that follows ``current`` for this state."""
    if current is WorkflowNode.ASSEMBLE:
        if state.enrichment_operations:
            return WorkflowNode.ENRICH
        return WorkflowNode.GENERATE
    if current is WorkflowNode.ENRICH:
        return WorkflowNode.GENERATE
    if current is WorkflowNode.GENERATE:
        if state.critique_iterations < MAX_CRITIQUE_ITERATIONS:
            return WorkflowNode.CRITIQUE
        if state.style_exemplars:
            return WorkflowNode.REWRITE
        return WorkflowNode.TITLE
    if current is WorkflowNode.CRITIQUE:
        return WorkflowNode.GENERATE
    if current is WorkflowNode.REWRITE:
        return WorkflowNode.TITLE
    return WorkflowNode.DONE


class RefinementOrchestrator:
    """Runs one request through the refinement workflow.

    Stage failures are recorded on the state; :meth:`run` always reaches
    ``done`` and returns the final state.
    """

    def __init__(
        self,
        gateway,
        assembler: Optional[SourceContentAssembler] = None,
        tool_coordinator: Optional[ToolCoordinator] = None,
    ):
        if gateway is None:
            raise NewsletterGenerationError(
                "Cannot build refinement workflow without a completion gateway"
            )
        self.gateway = gateway
        assembler = assembler or SourceContentAssembler(gateway)
        tool_coordinator = tool_coordinator or ToolCoordinator(gateway)

        self.stages: Dict[WorkflowNode, WorkflowStage] = {
            WorkflowNode.ASSEMBLE: AssembleStage(assembler),
            WorkflowNode.ENRICH: EnrichStage(tool_coordinator),
            WorkflowNode.GENERATE: GenerateStage(gateway),
            WorkflowNode.CRITIQUE: CritiqueStage(gateway),
            WorkflowNode.REWRITE: RewriteStage(gateway),
            WorkflowNode.TITLE: TitleStage(gateway),
        }

    async def run(self, state: WorkflowState) -> WorkflowState:
        node = WorkflowNode.ASSEMBLE
        logger.info(f"🚀 Starting refinement workflow for '{state.topic}'")

        while node is not WorkflowNode.DONE:
            patch = await self.stages[node].run(state)
            state = apply_patch(state, patch)

            following = next_node(node, state)
            if node is WorkflowNode.CRITIQUE and following is WorkflowNode.GENERATE:
                state = increment_counter(
                    state, "critique_iterations", MAX_CRITIQUE_ITERATIONS
                )
            logger.debug(f"Transition {node.value} -> {following.value}")
            node = following

        logger.info(
            f"✅ Workflow finished after {state.critique_iterations} critique rounds "
            f"with {len(state.warnings)} warnings and {len(state.errors)} errors"
        )
        return state
