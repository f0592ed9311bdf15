"""Tests for multi-persona generation and synthesis."""

import asyncio

import pytest

from newsletter_agent.agents import (
    PERSONA_ORDER,
    PERSONAS,
    MultiPersonaCoordinator,
    best_draft,
    get_persona,
    order_results,
)
from newsletter_agent.core.errors import CompletionError
from newsletter_agent.models.quality import AgentExecutionResult, AgentPersona
from newsletter_agent.models.workflow import WorkflowState

from tests.fakes import PERSONA_RESPONSES, SYNTHESIS_RESPONSE, ScriptedGateway, failure


def _state():
    return WorkflowState(
        topic="AI agents", key_insight="Cost is falling", source_content="Sources"
    )


def _result(persona, success=True):
    return AgentExecutionResult(
        persona=persona,
        output="out",
        title=persona.value,
        content="body",
        confidence=PERSONAS[persona].prior_confidence if success else 0,
        success=success,
    )


class TestPersonaRegistry:
    def test_priors(self):
        priors = {p.value: c.prior_confidence for p, c in PERSONAS.items()}
        assert priors == {"writer": 85, "editor": 90, "reviewer": 80, "strategist": 88}

    def test_label(self):
        assert get_persona(AgentPersona.STRATEGIST).label == "STRATEGIST"

    def test_unknown_persona(self):
        with pytest.raises(ValueError):
            get_persona("critic")


class TestMultiPersonaCoordinator:
    """Test the persona fan-out and the synthesis step."""

    @pytest.mark.asyncio
    async def test_all_personas_run_with_same_input(self):
        gateway = ScriptedGateway(PERSONA_RESPONSES)
        results = await MultiPersonaCoordinator(gateway).run_personas(_state())

        assert [r.persona for r in results] == PERSONA_ORDER
        assert all(r.success for r in results)
        inputs = [v for t, v in gateway.calls]
        assert all(v == inputs[0] for v in inputs)
        assert inputs[0]["key_insight"] == "Cost is falling"

    @pytest.mark.asyncio
    async def test_labelled_and_unlabelled_drafts_are_parsed(self):
        gateway = ScriptedGateway(PERSONA_RESPONSES)
        results = await MultiPersonaCoordinator(gateway).run_personas(_state())
        by_persona = {r.persona: r for r in results}

        writer = by_persona[AgentPersona.WRITER]
        assert writer.title == "The Writer Take"
        assert writer.content == "Body of writer."
        assert writer.confidence == 85

        strategist = by_persona[AgentPersona.STRATEGIST]
        assert strategist.title == "Strategic Headline"
        assert strategist.content == "Strategy body."

    @pytest.mark.asyncio
    async def test_one_failed_persona_becomes_placeholder(self):
        responses = dict(PERSONA_RESPONSES, persona_reviewer=failure("persona_reviewer"))
        gateway = ScriptedGateway(dict(responses, persona_synthesis=SYNTHESIS_RESPONSE))
        coordinator = MultiPersonaCoordinator(gateway)

        results = await coordinator.run_personas(_state())
        failed = [r for r in results if not r.success]

        assert len(results) == 4
        assert len(failed) == 1
        assert failed[0].persona is AgentPersona.REVIEWER
        assert failed[0].confidence == 0
        assert failed[0].output.startswith("REVIEWER generation error:")

        synthesis = await coordinator.synthesize(results, _state())
        assert synthesis.title == "Merged Title"
        sent = gateway.variables("persona_synthesis")[0]
        assert "confidence 0" in sent["reviewer_output"]
        assert "Prior confidence 90%" in sent["editor_output"]

    @pytest.mark.asyncio
    async def test_results_keep_persona_order_whatever_finishes_first(self):
        delays = {
            "persona_writer": 0.03,
            "persona_editor": 0.0,
            "persona_reviewer": 0.02,
            "persona_strategist": 0.01,
        }

        class SlowGateway(ScriptedGateway):
            async def invoke(self, template_id, variables):
                await asyncio.sleep(delays.get(template_id, 0))
                return await super().invoke(template_id, variables)

        gateway = SlowGateway(PERSONA_RESPONSES)
        results = await MultiPersonaCoordinator(gateway).run_personas(_state())

        assert [r.persona for r in results] == PERSONA_ORDER
        assert [t for t, _ in gateway.calls][0] == "persona_editor"

    @pytest.mark.asyncio
    async def test_synthesis_parses_labels(self):
        gateway = ScriptedGateway({"persona_synthesis": SYNTHESIS_RESPONSE})
        results = [_result(p) for p in reversed(PERSONA_ORDER)]
        synthesis = await MultiPersonaCoordinator(gateway).synthesize(results, _state())

        assert synthesis.title == "Merged Title"
        assert synthesis.content == "Merged body."
        assert synthesis.consensus_elements == ["cost focus", "short intro"]
        assert synthesis.resolved_conflicts == ["tone", "length"]
        assert synthesis.confidence == 92
        assert "Key insight: Cost is falling" in gateway.variables("persona_synthesis")[0][
            "directives"
        ]

    @pytest.mark.asyncio
    async def test_synthesis_confidence_defaults(self):
        gateway = ScriptedGateway({"persona_synthesis": "# Title\nBody"})
        synthesis = await MultiPersonaCoordinator(gateway).synthesize([], _state())

        assert synthesis.confidence == 85
        sent = gateway.variables("persona_synthesis")[0]
        assert sent["writer_output"] == "No writer output"

    @pytest.mark.asyncio
    async def test_synthesis_failure_raises(self):
        gateway = ScriptedGateway({"persona_synthesis": failure("persona_synthesis")})
        with pytest.raises(CompletionError):
            await MultiPersonaCoordinator(gateway).synthesize([], _state())


class TestBestDraft:
    def test_highest_prior_wins(self):
        results = [_result(p) for p in PERSONA_ORDER]
        assert best_draft(results).persona is AgentPersona.EDITOR

    def test_failed_results_are_ignored(self):
        results = [
            _result(AgentPersona.EDITOR, success=False),
            _result(AgentPersona.WRITER),
            _result(AgentPersona.STRATEGIST),
        ]
        assert best_draft(results).persona is AgentPersona.STRATEGIST

    def test_nothing_succeeded(self):
        assert best_draft([_result(AgentPersona.WRITER, success=False)]) is None

    def test_order_results(self):
        shuffled = [_result(p) for p in reversed(PERSONA_ORDER)]
        assert [r.persona for r in order_results(shuffled)] == PERSONA_ORDER
