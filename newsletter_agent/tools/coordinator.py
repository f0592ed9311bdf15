"""Runs requested enrichment operations concurrently and merges their output."""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Sequence

from newsletter_agent.models.quality import ToolResult
from newsletter_agent.models.workflow import WorkflowState
from newsletter_agent.tools.base import EnrichmentOperation
from newsletter_agent.tools.completion import CompletionOperation
from newsletter_agent.tools.text_analysis import (
    KeywordExtractionOperation,
    SentimentAnalysisOperation,
)
from newsletter_agent.tools.url_content import UrlContentOperation

logger = logging.getLogger(__name__)

RESULTS_HEADER = "## Enrichment results"

COMPLETION_OPERATIONS = (
    "web_search",
    "fact_check",
    "analyze_trends",
    "competitor_analysis",
    "generate_image_description",
)


def _topic(state: WorkflowState) -> Optional[str]:
    return state.topic


def _key_insight_or_topic(state: WorkflowState) -> Optional[str]:
    return state.key_insight or state.topic


def _source_or_topic(state: WorkflowState) -> Optional[str]:
    return state.source_content or state.topic


def _first_url(state: WorkflowState) -> Optional[str]:
    for item in state.snippets:
        if item.snippet.url:
            return item.snippet.url
    return None


# Which part of the state each operation works on
TOOL_INPUTS: Dict[str, Callable[[WorkflowState], Optional[str]]] = {
    "web_search": _topic,
    "analyze_trends": _topic,
    "competitor_analysis": _topic,
    "fact_check": _key_insight_or_topic,
    "extract_keywords": _source_or_topic,
    "sentiment_analysis": _source_or_topic,
    "generate_image_description": _source_or_topic,
    "extract_url_content": _first_url,
}


def resolve_tool_input(name: str, state: WorkflowState) -> Optional[str]:
    """Look up the input for operation ``name``; None when unknown or missing."""
    resolver = TOOL_INPUTS.get(name)
    if resolver is None:
        return None
    return resolver(state)


def build_default_operations(gateway, settings=None) -> Dict[str, EnrichmentOperation]:
    operations: Dict[str, EnrichmentOperation] = {
        name: CompletionOperation(name, gateway) for name in COMPLETION_OPERATIONS
    }
    url_operation = (
        UrlContentOperation(settings.url_fetch_timeout, settings.default_user_agent)
        if settings
        else UrlContentOperation()
    )
    for operation in (
        KeywordExtractionOperation(),
        SentimentAnalysisOperation(),
        url_operation,
    ):
        operations[operation.operation_name] = operation
    return operations


def append_tool_results(source_content: str, results: Sequence[ToolResult]) -> str:
    """Append successful results as numbered subsections of the source text."""
    successful = [r for r in results if r.success and r.output]
    if not successful:
        return source_content

    sections = [RESULTS_HEADER]
    for i, result in enumerate(successful, 1):
        sections.append(f"### {i}. {result.tool_name}\n{result.output}")
    return f"{source_content}\n\n" + "\n\n".join(sections)


class ToolCoordinator:
    """Resolves inputs for, and concurrently runs, named enrichment operations."""

    def __init__(
        self,
        gateway=None,
        operations: Optional[Dict[str, EnrichmentOperation]] = None,
        settings=None,
    ):
        if operations is None:
            operations = build_default_operations(gateway, settings)
        self.operations = operations

    def list_operations(self) -> List[str]:
        return list(self.operations.keys())

    async def run(self, names: Sequence[str], state: WorkflowState) -> List[ToolResult]:
        """Run every named operation; results come back in request order."""
        if not names:
            return []
        logger.info(f"🔧 Running {len(names)} enrichment operations: {', '.join(names)}")
        results = await asyncio.gather(
            *(self._run_one(name, state) for name in names), return_exceptions=True
        )

        processed = []
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error(f"Enrichment {name} failed: {result}")
                processed.append(ToolResult(tool_name=name, output=str(result)))
            else:
                processed.append(result)
        return processed

    async def _run_one(self, name: str, state: WorkflowState) -> ToolResult:
        operation = self.operations.get(name)
        if operation is None:
            return ToolResult(tool_name=name, output=f"Unknown operation: {name}")

        value = resolve_tool_input(name, state)
        if not value:
            return ToolResult(tool_name=name, output="No input available for this operation")

        try:
            output = await operation.run(value)
        except Exception as e:
            logger.warning(f"⚠️  Enrichment {name} failed: {e}")
            return ToolResult(tool_name=name, input=value, output=f"Failed: {e}")

        return ToolResult(tool_name=name, input=value, output=output, success=True)
