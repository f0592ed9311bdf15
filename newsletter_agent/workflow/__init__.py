"""Bounded generate/critique refinement workflow."""

from newsletter_agent.workflow.orchestrator import RefinementOrchestrator, WorkflowNode, next_node

__all__ = ["RefinementOrchestrator", "WorkflowNode", "next_node"]
