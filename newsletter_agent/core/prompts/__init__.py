"""Prompt template registry for every completion call the system makes."""

from typing import Dict, Mapping

from newsletter_agent.core.prompts.assembly import (
    HTML_STRUCTURE_CONFIG,
    HTML_STRUCTURE_TEMPLATE,
    KEY_POINTS_CONFIG,
    KEY_POINTS_TEMPLATE,
    SNIPPET_SUMMARY_CONFIG,
    SNIPPET_SUMMARY_TEMPLATE,
)
from newsletter_agent.core.prompts.generation import (
    ARTICLE_CRITIQUE_CONFIG,
    ARTICLE_CRITIQUE_TEMPLATE,
    NEWSLETTER_GENERATION_CONFIG,
    NEWSLETTER_GENERATION_TEMPLATE,
    NEWSLETTER_TITLE_CONFIG,
    NEWSLETTER_TITLE_TEMPLATE,
    STYLE_REWRITE_CONFIG,
    STYLE_REWRITE_TEMPLATE,
)
from newsletter_agent.core.prompts.personas import (
    EDITOR_CONFIG,
    EDITOR_TEMPLATE,
    PERSONA_SYNTHESIS_CONFIG,
    PERSONA_SYNTHESIS_TEMPLATE,
    REVIEWER_CONFIG,
    REVIEWER_TEMPLATE,
    STRATEGIST_CONFIG,
    STRATEGIST_TEMPLATE,
    WRITER_CONFIG,
    WRITER_TEMPLATE,
)
from newsletter_agent.core.prompts.quality import (
    QUALITY_VALIDATION_CONFIG,
    QUALITY_VALIDATION_TEMPLATE,
    REFLECTION_CONFIG,
    REFLECTION_TEMPLATE,
    SELF_CORRECTION_CONFIG,
    SELF_CORRECTION_TEMPLATE,
)
from newsletter_agent.core.prompts.tools import (
    ANALYZE_TRENDS_TEMPLATE,
    COMPETITOR_ANALYSIS_TEMPLATE,
    ENRICHMENT_CONFIG,
    FACT_CHECK_TEMPLATE,
    IMAGE_DESCRIPTION_TEMPLATE,
    WEB_SEARCH_TEMPLATE,
)

# Prompt registry
AVAILABLE_PROMPTS = {
    "snippet_summary": {"template": SNIPPET_SUMMARY_TEMPLATE, "config": SNIPPET_SUMMARY_CONFIG},
    "html_structure": {"template": HTML_STRUCTURE_TEMPLATE, "config": HTML_STRUCTURE_CONFIG},
    "key_points": {"template": KEY_POINTS_TEMPLATE, "config": KEY_POINTS_CONFIG},
    "newsletter_generation": {
        "template": NEWSLETTER_GENERATION_TEMPLATE,
        "config": NEWSLETTER_GENERATION_CONFIG,
    },
    "article_critique": {"template": ARTICLE_CRITIQUE_TEMPLATE, "config": ARTICLE_CRITIQUE_CONFIG},
    "style_rewrite": {"template": STYLE_REWRITE_TEMPLATE, "config": STYLE_REWRITE_CONFIG},
    "newsletter_title": {"template": NEWSLETTER_TITLE_TEMPLATE, "config": NEWSLETTER_TITLE_CONFIG},
    "quality_validation": {
        "template": QUALITY_VALIDATION_TEMPLATE,
        "config": QUALITY_VALIDATION_CONFIG,
    },
    "reflection": {"template": REFLECTION_TEMPLATE, "config": REFLECTION_CONFIG},
    "self_correction": {"template": SELF_CORRECTION_TEMPLATE, "config": SELF_CORRECTION_CONFIG},
    "persona_writer": {"template": WRITER_TEMPLATE, "config": WRITER_CONFIG},
    "persona_editor": {"template": EDITOR_TEMPLATE, "config": EDITOR_CONFIG},
    "persona_reviewer": {"template": REVIEWER_TEMPLATE, "config": REVIEWER_CONFIG},
    "persona_strategist": {"template": STRATEGIST_TEMPLATE, "config": STRATEGIST_CONFIG},
    "persona_synthesis": {
        "template": PERSONA_SYNTHESIS_TEMPLATE,
        "config": PERSONA_SYNTHESIS_CONFIG,
    },
    "web_search": {"template": WEB_SEARCH_TEMPLATE, "config": ENRICHMENT_CONFIG},
    "fact_check": {"template": FACT_CHECK_TEMPLATE, "config": ENRICHMENT_CONFIG},
    "analyze_trends": {"template": ANALYZE_TRENDS_TEMPLATE, "config": ENRICHMENT_CONFIG},
    "competitor_analysis": {"template": COMPETITOR_ANALYSIS_TEMPLATE, "config": ENRICHMENT_CONFIG},
    "generate_image_description": {
        "template": IMAGE_DESCRIPTION_TEMPLATE,
        "config": ENRICHMENT_CONFIG,
    },
}


def get_prompt(template_id: str) -> dict:
    """Get prompt template and configuration.

    Args:
        template_id: Name of the prompt to retrieve

    Returns:
        Dictionary with 'template' and 'config' keys

    Raises:
        ValueError: If template_id is not found
    """
    if template_id not in AVAILABLE_PROMPTS:
        available = ", ".join(AVAILABLE_PROMPTS.keys())
        raise ValueError(f"Prompt '{template_id}' not found. Available: {available}")

    return AVAILABLE_PROMPTS[template_id]


def render_prompt(template_id: str, variables: Mapping[str, str]) -> str:
    """Fill a registered template.

    Raises:
        ValueError: If the template is unknown
        KeyError: If a placeholder has no value in ``variables``
    """
    return get_prompt(template_id)["template"].format(**variables)


def list_prompts() -> list:
    """List all registered prompt ids."""
    return list(AVAILABLE_PROMPTS.keys())


def prompt_config(template_id: str) -> Dict[str, float]:
    return dict(get_prompt(template_id)["config"])
