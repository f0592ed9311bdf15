"""Prompt templates for the four generation personas and their synthesis."""

_PERSONA_INPUTS = """TOPIC: {topic}
KEY INSIGHT: {key_insight}

DIRECTIVES
{directives}

OUTLINE
{outline}

SOURCE MATERIAL
{source_content}
"""

WRITER_TEMPLATE = (
    """You are the WRITER: a storyteller who makes readers want to keep going.
Draft the newsletter with a strong hook, narrative flow and vivid but accurate language.

"""
    + _PERSONA_INPUTS
    + """
Respond in this format:
WRITER_TITLE: <title>
WRITER_CONTENT:
<newsletter in Markdown>
"""
)

EDITOR_TEMPLATE = (
    """You are the EDITOR: precise, structured and allergic to filler.
Draft the newsletter with a clear structure, tight paragraphs and every claim traceable to a source.

"""
    + _PERSONA_INPUTS
    + """
Respond in this format:
EDITOR_TITLE: <title>
EDITOR_CONTENT:
<newsletter in Markdown>
"""
)

REVIEWER_TEMPLATE = (
    """You are the REVIEWER: you read as the target audience and ask "so what?".
Draft the newsletter that gives this reader the most practical value, and list what a weaker draft would get wrong.

"""
    + _PERSONA_INPUTS
    + """
Respond in this format:
REVIEWER_TITLE: <title>
REVIEWER_CONTENT:
<newsletter in Markdown>
REVIEWER_RISKS: risk 1 | risk 2
"""
)

STRATEGIST_TEMPLATE = (
    """You are the STRATEGIST: you care how this issue builds the publication's long-term position.
Draft the newsletter so it reinforces a consistent point of view and gives readers a reason to return.

"""
    + _PERSONA_INPUTS
    + """
Respond in this format:
STRATEGIST_TITLE: <title>
STRATEGIST_CONTENT:
<newsletter in Markdown>
"""
)

PERSONA_SYNTHESIS_TEMPLATE = """You are the lead editor. Four colleagues drafted a newsletter about "{topic}".
Combine their work into one final newsletter.

USER DIRECTIVES
{directives}

WRITER DRAFT
{writer_output}

EDITOR DRAFT
{editor_output}

REVIEWER DRAFT
{reviewer_output}

STRATEGIST DRAFT
{strategist_output}

When drafts disagree, resolve the conflict with this fixed priority order:
1. Explicit user requirements (directives, topic, key insight)
2. Technical and quality correctness
3. Value to the end reader
4. Long-term strategic alignment

Respond exactly in this format:
CONSENSUS_ELEMENTS: element 1 | element 2
RESOLVED_CONFLICTS: conflict and how it was resolved | ...
SYNTHESIS_CONFIDENCE: <1-100>
INTEGRATED_SOLUTION:
**<final title>**
<final newsletter in Markdown>
"""

WRITER_CONFIG = {"max_tokens": 3000, "temperature": 0.8}
EDITOR_CONFIG = {"max_tokens": 3000, "temperature": 0.6}
REVIEWER_CONFIG = {"max_tokens": 3000, "temperature": 0.4}
STRATEGIST_CONFIG = {"max_tokens": 3000, "temperature": 0.7}
PERSONA_SYNTHESIS_CONFIG = {"max_tokens": 3500, "temperature": 0.5}
