"""The four generation personas and their fixed prior confidence."""

from dataclasses import dataclass
from typing import Dict, List

from newsletter_agent.models.quality import AgentPersona


@dataclass(frozen=True)
class PersonaConfig:
    """Configuration for one generation persona."""

    persona: AgentPersona
    template_id: str
    prior_confidence: int
    description: str

    @property
    def label(self) -> str:
        """Prefix of this persona's response labels, e.g. WRITER."""
        return self.persona.name


# Persona registry, in synthesis order
PERSONAS: Dict[AgentPersona, PersonaConfig] = {
    AgentPersona.WRITER: PersonaConfig(
        AgentPersona.WRITER,
        "persona_writer",
        85,
        "Narrative flow, hook and vivid language",
    ),
    AgentPersona.EDITOR: PersonaConfig(
        AgentPersona.EDITOR,
        "persona_editor",
        90,
        "Structure, precision and source fidelity",
    ),
    AgentPersona.REVIEWER: PersonaConfig(
        AgentPersona.REVIEWER,
        "persona_reviewer",
        80,
        "Reader value and weak spots",
    ),
    AgentPersona.STRATEGIST: PersonaConfig(
        AgentPersona.STRATEGIST,
        "persona_strategist",
        88,
        "Long-term positioning of the publication",
    ),
}

PERSONA_ORDER: List[AgentPersona] = list(PERSONAS.keys())

# Applied top to bottom when persona drafts disagree
CONFLICT_RESOLUTION_ORDER = (
    "Explicit user requirements",
    "Technical and quality correctness",
    "Value to the end reader",
    "Long-term strategic alignment",
)


def get_persona(persona: AgentPersona) -> PersonaConfig:
    """Get persona configuration.

    Raises:
        ValueError: If the persona is not registered
    """
    if persona not in PERSONAS:
        available = ", ".join(p.value for p in PERSONAS)
        raise ValueError(f"Persona '{persona}' not found. Available: {available}")
    return PERSONAS[persona]
