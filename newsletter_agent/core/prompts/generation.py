"""Prompt templates for the refinement workflow stages."""

NEWSLETTER_GENERATION_TEMPLATE = """You are an experienced newsletter editor writing for a curious, busy audience.

TOPIC: {topic}
KEY INSIGHT: {key_insight}

DIRECTIVES
{directives}

OUTLINE
{outline}

SOURCE MATERIAL
{source_content}

PREVIOUS FEEDBACK (oldest first, address every point that still applies)
{feedback}

Write the newsletter in Markdown.
- Open with a bold title line (**Title**), then the body.
- Ground every claim in the source material; never invent facts, numbers or quotes.
- Weave the user comments into the narrative, they reflect what the reader cares about.
- Follow the outline when one is given, otherwise choose sections that serve the key insight.
- Close with a short takeaway the reader can act on.
"""

NEWSLETTER_GENERATION_CONFIG = {"max_tokens": 3000, "temperature": 0.6}

ARTICLE_CRITIQUE_TEMPLATE = """You are a demanding editor reviewing a newsletter draft about "{topic}".

DRAFT
{newsletter}

Critique the draft for structure, clarity, accuracy against the sources, reader value and voice.
Be specific: point to passages and say how to fix them.

Respond in this format:
STRENGTHS: strength 1 | strength 2
FEEDBACK:
numbered, actionable revision instructions
"""

ARTICLE_CRITIQUE_CONFIG = {"max_tokens": 1200, "temperature": 0.4}

STYLE_REWRITE_TEMPLATE = """Rewrite the newsletter below so it reads in the style of the examples.
Keep every fact, link and section; change only voice, rhythm and word choice.

STYLE EXAMPLES
{style_examples}

NEWSLETTER
{newsletter}

Return only the rewritten newsletter in Markdown.
"""

STYLE_REWRITE_CONFIG = {"max_tokens": 3000, "temperature": 0.7}

NEWSLETTER_TITLE_TEMPLATE = """Write one headline for this newsletter about "{topic}".

NEWSLETTER
{newsletter}

Rules: under 80 characters, specific rather than clever, no quotes, no Markdown.
Return only the headline on a single line.
"""

NEWSLETTER_TITLE_CONFIG = {"max_tokens": 60, "temperature": 0.7}
