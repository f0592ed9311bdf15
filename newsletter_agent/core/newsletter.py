"""Core newsletter generation logic."""

import asyncio
import logging
import time
from typing import Dict, Iterable, Optional, Sequence, Union

from newsletter_agent.agents.coordinator import MultiPersonaCoordinator, best_draft
from newsletter_agent.clients.gateway import CompletionGateway
from newsletter_agent.models.content import (
    GenerationRequest,
    NewsletterDraft,
    SnippetWithComment,
    SourceSnippet,
)
from newsletter_agent.models.settings import Settings
from newsletter_agent.models.workflow import StatePatch, WorkflowState, apply_patch
from newsletter_agent.quality.loop import SelfCorrectionLoop
from newsletter_agent.tools.coordinator import ToolCoordinator
from newsletter_agent.workflow.orchestrator import RefinementOrchestrator
from newsletter_agent.workflow.stages import AssembleStage, EnrichStage
from newsletter_agent.workflow.stages.generate import placeholder_newsletter
from newsletter_agent.workflow.stages.title import default_title
from newsletter_agent.core.assembler import SourceContentAssembler
from newsletter_agent.core.errors import CompletionError, NewsletterGenerationError

logger = logging.getLogger(__name__)

MODE_REFINE = "refine"
MODE_MULTI_PERSONA = "multi_persona"


class NewsletterGenerator:
    """Entry point that turns a generation request into a newsletter draft."""

    def __init__(self, settings: Settings, gateway: Optional[CompletionGateway] = None):
        """Initialize newsletter generator.

        Args:
            settings: Application settings with API keys
            gateway: Completion gateway; built from settings when omitted
        """
        self.settings = settings
        self.gateway = gateway or self._init_gateway(settings)

    def _init_gateway(self, settings: Settings) -> Optional[CompletionGateway]:
        """Initialize the OpenRouter-backed gateway with validation."""
        if not settings.openrouter_api_key or not settings.openrouter_api_key.strip():
            logger.info("🔧 OpenRouter disabled: OPENROUTER_API_KEY not set or empty")
            return None

        logger.info("🔧 OpenRouter enabled for newsletter generation")
        return CompletionGateway.from_settings(settings)

    def _assembler(self) -> SourceContentAssembler:
        return SourceContentAssembler(
            self.gateway, summary_input_limit=self.settings.summary_input_limit
        )

    def _tool_coordinator(self) -> ToolCoordinator:
        return ToolCoordinator(self.gateway, settings=self.settings)

    def _build_orchestrator(self) -> RefinementOrchestrator:
        if self.gateway is None:
            raise NewsletterGenerationError(
                "No completion provider configured. Set OPENROUTER_API_KEY."
            )
        return RefinementOrchestrator(
            self.gateway,
            assembler=self._assembler(),
            tool_coordinator=self._tool_coordinator(),
        )

    async def test_connections(self) -> Dict[str, bool]:
        """Check that the completion provider answers."""
        provider = getattr(self.gateway, "provider", None)
        if provider is None or not hasattr(provider, "test_connection"):
            return {"openrouter": False}
        return {"openrouter": await provider.test_connection()}

    async def generate_newsletter(
        self,
        request: GenerationRequest,
        multi_persona: bool = False,
        quality_gate: Optional[bool] = None,
    ) -> NewsletterDraft:
        """Generate a complete newsletter.

        Args:
            request: Topic, sources and directives
            multi_persona: Draft with four personas and synthesise instead of
                running the refinement loop
            quality_gate: Run the quality gate and self-correction loop
                afterwards; defaults to ``settings.quality_gate_enabled``

        Returns:
            Generated newsletter draft, with warnings for anything that degraded

        Raises:
            NewsletterGenerationError: If generation cannot run at all
        """
        start_time = time.time()
        if quality_gate is None:
            quality_gate = self.settings.quality_gate_enabled
        mode = MODE_MULTI_PERSONA if multi_persona else MODE_REFINE
        logger.info(
            f"Starting newsletter generation for '{request.topic}' "
            f"(mode={mode}, quality_gate={quality_gate})"
        )

        try:
            state = WorkflowState.from_request(request)
            if multi_persona:
                state = await self._run_multi_persona(state)
            else:
                state = await self._build_orchestrator().run(state)

            if quality_gate:
                state = await SelfCorrectionLoop(self.gateway).run(state)
        except NewsletterGenerationError:
            raise
        except Exception as e:
            logger.exception(f"Newsletter generation failed: {e}")
            raise NewsletterGenerationError(
                f"Newsletter generation failed for '{request.topic}': {e}"
            ) from e

        elapsed = time.time() - start_time
        logger.info(f"✅ Newsletter '{state.title}' ready in {elapsed:.1f}s")
        return NewsletterDraft(
            title=state.title or default_title(state.topic),
            content=state.content,
            warnings=list(state.warnings),
            errors=list(state.errors),
            processing_steps=list(state.processing_steps),
            quality_metrics=state.quality_metrics,
            generation_mode=mode,
            processing_time=elapsed,
        )

    async def _run_multi_persona(self, state: WorkflowState) -> WorkflowState:
        if self.gateway is None:
            raise NewsletterGenerationError(
                "No completion provider configured. Set OPENROUTER_API_KEY."
            )

        state = apply_patch(state, await AssembleStage(self._assembler()).run(state))
        if state.enrichment_operations:
            state = apply_patch(
                state, await EnrichStage(self._tool_coordinator()).run(state)
            )

        coordinator = MultiPersonaCoordinator(self.gateway)
        results = await coordinator.run_personas(state)
        state = apply_patch(
            state,
            StatePatch(
                processing_steps=["personas"],
                warnings=[
                    f"{r.persona.value} persona failed: {r.output}"
                    for r in results
                    if not r.success
                ],
            ),
        )

        try:
            synthesis = await coordinator.synthesize(results, state)
            return apply_patch(
                state,
                StatePatch(
                    title=synthesis.title,
                    content=synthesis.content,
                    processing_steps=["synthesis"],
                ),
            )
        except CompletionError as e:
            logger.warning(f"⚠️  Synthesis failed, using best persona draft: {e}")
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Synthesis response unreadable, using best persona draft: {e}")

        fallback = best_draft(results)
        if fallback is None:
            return apply_patch(
                state,
                StatePatch(
                    title=default_title(state.topic),
                    content=placeholder_newsletter(state.topic),
                    processing_steps=["synthesis"],
                    errors=["All personas and synthesis failed"],
                ),
            )
        return apply_patch(
            state,
            StatePatch(
                title=fallback.title,
                content=fallback.content,
                processing_steps=["synthesis"],
                warnings=[
                    f"Synthesis failed, using the {fallback.persona.value} draft"
                ],
            ),
        )

    def generate(
        self,
        topic: str,
        key_insight: Optional[str] = None,
        snippets: Iterable[Union[SnippetWithComment, SourceSnippet]] = (),
        directives: Optional[str] = None,
        outline_template: Optional[str] = None,
        style_exemplars: Optional[Sequence[str]] = None,
        enrichment_operations: Optional[Sequence[str]] = None,
        multi_persona: bool = False,
        quality_gate: Optional[bool] = None,
    ) -> NewsletterDraft:
        """Synchronous wrapper around :meth:`generate_newsletter`."""
        request = GenerationRequest(
            topic=topic,
            key_insight=key_insight,
            snippets=[
                s if isinstance(s, SnippetWithComment) else SnippetWithComment(snippet=s)
                for s in snippets
            ],
            directives=directives,
            outline_template=outline_template,
            style_exemplars=list(style_exemplars or []),
            enrichment_operations=list(enrichment_operations or []),
        )
        return asyncio.run(
            self.generate_newsletter(
                request, multi_persona=multi_persona, quality_gate=quality_gate
            )
        )
