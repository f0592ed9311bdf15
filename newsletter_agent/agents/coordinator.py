"""Parallel persona generation and synthesis into a single draft."""

import asyncio
import logging
import time
from typing import Dict, List, Optional, Sequence

from newsletter_agent.core.errors import CompletionError
from newsletter_agent.core.extraction import (
    clean_title,
    extract_key_value,
    extract_labeled_block,
    extract_list,
    extract_score,
    extract_title_and_body,
)
from newsletter_agent.models.quality import AgentExecutionResult, AgentPersona, SynthesisResult
from newsletter_agent.models.workflow import WorkflowState
from newsletter_agent.agents.personas import PERSONA_ORDER, PERSONAS, PersonaConfig

logger = logging.getLogger(__name__)

DEFAULT_SYNTHESIS_CONFIDENCE = 85


def persona_variables(state: WorkflowState) -> Dict[str, str]:
    return {
        "topic": state.topic,
        "key_insight": state.key_insight or "None given",
        "directives": state.directives or "None",
        "outline": state.outline_template or "None, choose a fitting structure",
        "source_content": state.source_content,
    }


def order_results(results: Sequence[AgentExecutionResult]) -> List[AgentExecutionResult]:
    """Sort results into the fixed persona order, whatever order they finished in."""
    return sorted(results, key=lambda r: PERSONA_ORDER.index(r.persona))


def best_draft(
    results: Sequence[AgentExecutionResult],
) -> Optional[AgentExecutionResult]:
    """The successful result with the highest prior confidence, if any."""
    successful = [r for r in order_results(results) if r.success]
    if not successful:
        return None
    return max(successful, key=lambda r: r.confidence)


def _describe(persona: AgentPersona, result: Optional[AgentExecutionResult]) -> str:
    if result is None:
        return f"No {persona.value} output"
    if not result.success:
        return f"{result.output}\n(This draft failed; confidence 0. Do not rely on it.)"
    return f"(Prior confidence {result.confidence}%)\n{result.output}"


class MultiPersonaCoordinator:
    """Runs all personas concurrently on the same input and reconciles them."""

    def __init__(self, gateway):
        self.gateway = gateway

    async def run_persona(
        self, config: PersonaConfig, variables: Dict[str, str]
    ) -> AgentExecutionResult:
        """Run one persona; a failure becomes a zero-confidence placeholder."""
        started = time.monotonic()
        try:
            output = await self.gateway.invoke(config.template_id, variables)
        except CompletionError as e:
            logger.warning(f"⚠️  {config.persona.value} persona failed: {e}")
            return self._failed(config, e, started)
        except Exception as e:
            logger.exception(f"Unexpected error in {config.persona.value} persona: {e}")
            return self._failed(config, e, started)

        title = clean_title(extract_key_value(output, f"{config.label}_TITLE") or "")
        content = extract_labeled_block(output, f"{config.label}_CONTENT") or ""
        if not title or not content:
            fallback_title, fallback_body = extract_title_and_body(output)
            title = title or fallback_title
            content = content or fallback_body

        elapsed = time.monotonic() - started
        logger.info(f"🎭 {config.persona.value} draft ready in {elapsed:.1f}s")
        return AgentExecutionResult(
            persona=config.persona,
            output=output,
            title=title,
            content=content,
            execution_time=elapsed,
            confidence=config.prior_confidence,
            success=True,
        )

    def _failed(
        self, config: PersonaConfig, error: Exception, started: float
    ) -> AgentExecutionResult:
        return AgentExecutionResult(
            persona=config.persona,
            output=f"{config.label} generation error: {error}",
            execution_time=time.monotonic() - started,
            confidence=0,
            success=False,
        )

    async def run_personas(self, state: WorkflowState) -> List[AgentExecutionResult]:
        """Run every persona concurrently; always returns one result per persona."""
        variables = persona_variables(state)
        logger.info(f"🎭 Running {len(PERSONA_ORDER)} personas for '{state.topic}'")
        results = await asyncio.gather(
            *(self.run_persona(PERSONAS[p], dict(variables)) for p in PERSONA_ORDER)
        )
        return order_results(results)

    async def synthesize(
        self, results: Sequence[AgentExecutionResult], state: WorkflowState
    ) -> SynthesisResult:
        """Merge persona drafts using the fixed conflict-resolution order.

        Raises:
            CompletionError: If the synthesis call fails
        """
        by_persona = {r.persona: r for r in order_results(results)}
        variables = {
            "topic": state.topic,
            "directives": "\n".join(
                part
                for part in (
                    state.directives,
                    f"Key insight: {state.key_insight}" if state.key_insight else None,
                )
                if part
            )
            or "None",
        }
        for persona in PERSONA_ORDER:
            variables[f"{persona.value}_output"] = _describe(
                persona, by_persona.get(persona)
            )

        response = await self.gateway.invoke("persona_synthesis", variables)
        title, content = extract_title_and_body(response)
        synthesis = SynthesisResult(
            title=title,
            content=content,
            consensus_elements=extract_list(response, "CONSENSUS_ELEMENTS"),
            resolved_conflicts=extract_list(response, "RESOLVED_CONFLICTS"),
            confidence=extract_score(response, DEFAULT_SYNTHESIS_CONFIDENCE),
        )
        logger.info(
            f"🧩 Synthesis confidence {synthesis.confidence}% "
            f"({len(synthesis.resolved_conflicts)} conflicts resolved)"
        )
        return synthesis
