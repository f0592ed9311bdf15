"""Optional enrichment operations run before generation."""

from newsletter_agent.tools.base import EnrichmentOperation
from newsletter_agent.tools.coordinator import (
    TOOL_INPUTS,
    ToolCoordinator,
    append_tool_results,
    resolve_tool_input,
)

__all__ = [
    "EnrichmentOperation",
    "TOOL_INPUTS",
    "ToolCoordinator",
    "append_tool_results",
    "resolve_tool_input",
]
