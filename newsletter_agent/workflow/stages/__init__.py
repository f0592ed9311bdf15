"""Refinement workflow stages."""

from newsletter_agent.workflow.stages.assemble import AssembleStage
from newsletter_agent.workflow.stages.critique import CritiqueStage
from newsletter_agent.workflow.stages.enrich import EnrichStage
from newsletter_agent.workflow.stages.generate import GenerateStage
from newsletter_agent.workflow.stages.rewrite import RewriteStage
from newsletter_agent.workflow.stages.title import TitleStage

__all__ = [
    "AssembleStage",
    "CritiqueStage",
    "EnrichStage",
    "GenerateStage",
    "RewriteStage",
    "TitleStage",
]
