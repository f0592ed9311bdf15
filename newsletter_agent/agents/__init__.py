"""Multi-persona generation."""

from newsletter_agent.agents.coordinator import (
    MultiPersonaCoordinator,
    best_draft,
    order_results,
)
from newsletter_agent.agents.personas import (
    CONFLICT_RESOLUTION_ORDER,
    PERSONA_ORDER,
    PERSONAS,
    PersonaConfig,
    get_persona,
)

__all__ = [
    "MultiPersonaCoordinator",
    "best_draft",
    "order_results",
    "CONFLICT_RESOLUTION_ORDER",
    "PERSONA_ORDER",
    "PERSONAS",
    "PersonaConfig",
    "get_persona",
]
