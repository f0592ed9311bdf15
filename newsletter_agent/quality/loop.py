"""Bounded evaluate / reflect / correct loop around a finished draft."""

import logging
from typing import Optional

from newsletter_agent.core.errors import CompletionError
from newsletter_agent.models.workflow import (
    MAX_SELF_CORRECTION_ATTEMPTS,
    StatePatch,
    WorkflowState,
    apply_patch,
    increment_counter,
)
from newsletter_agent.quality.gate import QualityGate
from newsletter_agent.quality.reflection import ReflectionAnalyzer, SelfCorrector

logger = logging.getLogger(__name__)


class SelfCorrectionLoop:
    """Scores a draft and revises it while reflection says revision is worth it.

    Every round re-evaluates from scratch. The loop stops when the recomputed
    ``needs_revision`` is false, which is always the case once
    ``self_correction_attempts`` reaches its cap, or on the first failure.
    """

    def __init__(
        self,
        gateway,
        gate: Optional[QualityGate] = None,
        analyzer: Optional[ReflectionAnalyzer] = None,
        corrector: Optional[SelfCorrector] = None,
    ):
        self.gate = gate or QualityGate(gateway)
        self.analyzer = analyzer or ReflectionAnalyzer(gateway)
        self.corrector = corrector or SelfCorrector(gateway)

    async def run(self, state: WorkflowState) -> WorkflowState:
        while True:
            try:
                assessment = await self.gate.evaluate(
                    state.title, state.content, state.topic
                )
            except (CompletionError, KeyError, ValueError, TypeError) as e:
                logger.warning(f"⚠️  Quality gate unavailable: {e}")
                return apply_patch(
                    state,
                    StatePatch(
                        processing_steps=["quality_gate"],
                        warnings=[f"Quality evaluation failed: {e}"],
                    ),
                )

            state = apply_patch(
                state,
                StatePatch(
                    quality_metrics=assessment.metrics,
                    processing_steps=["quality_gate"],
                    warnings=[f"Quality issue: {issue}" for issue in assessment.issues],
                ),
            )

            try:
                reflection = await self.analyzer.analyze(
                    state.title,
                    state.content,
                    state.topic,
                    assessment.metrics,
                    attempts=state.self_correction_attempts,
                )
            except (CompletionError, KeyError, ValueError, TypeError) as e:
                logger.warning(f"⚠️  Reflection failed: {e}")
                return apply_patch(
                    state,
                    StatePatch(
                        processing_steps=["reflection"],
                        warnings=[f"Reflection failed: {e}"],
                    ),
                )

            state = apply_patch(
                state, StatePatch(reflection=reflection, processing_steps=["reflection"])
            )
            if not reflection.needs_revision:
                logger.info(
                    f"✅ No further revision needed after "
                    f"{state.self_correction_attempts} correction(s)"
                )
                return state

            state = increment_counter(
                state, "self_correction_attempts", MAX_SELF_CORRECTION_ATTEMPTS
            )
            logger.info(f"🔁 Self-correction attempt {state.self_correction_attempts}")

            try:
                correction = await self.corrector.correct(
                    state.title,
                    state.content,
                    reflection.weaknesses,
                    reflection.improvements,
                )
            except (CompletionError, KeyError, ValueError, TypeError) as e:
                logger.warning(f"⚠️  Self-correction failed: {e}")
                return apply_patch(
                    state,
                    StatePatch(
                        processing_steps=["self_correction"],
                        warnings=[f"Self-correction failed, keeping draft: {e}"],
                    ),
                )

            state = apply_patch(
                state,
                StatePatch(
                    title=correction.corrected_title,
                    content=correction.corrected_content,
                    processing_steps=[
                        f"self_correction ({len(correction.fixes_applied)} fixes, "
                        f"confidence {correction.confidence}%)"
                    ],
                ),
            )
