"""Prompt templates for preparing source material."""

SNIPPET_SUMMARY_TEMPLATE = """Summarise this captured article for a newsletter editor in 2-3 factual sentences.
Lead with the main development, then why it matters. No opinions, no filler.

TITLE: {title}
CONTENT:
{content}

Summary:"""

SNIPPET_SUMMARY_CONFIG = {"max_tokens": 250, "temperature": 0.3}

HTML_STRUCTURE_TEMPLATE = """Analyse the structure of this web page markup and report only what is present.

MARKUP
{html}

Respond in this format:
TITLE_STRUCTURE: heading hierarchy (h1 > h2 > h3)
META_INFO: author, publication date, keywords
KEY_ELEMENTS: notable tables, lists, figures or quotes
EXTERNAL_LINKS: the most important outbound links
CONTENT_TYPE: news | analysis | tutorial | opinion | announcement | other
"""

HTML_STRUCTURE_CONFIG = {"max_tokens": 400, "temperature": 0.1}

KEY_POINTS_TEMPLATE = """From the sources below, extract at most 5 key points for a newsletter about them.
User comments show what the reader cares about: points they raise come first.

USER COMMENTS
{user_comments}

SOURCES
{summaries}

Respond on one line:
KEY_POINTS: point 1 | point 2 | point 3
"""

KEY_POINTS_CONFIG = {"max_tokens": 400, "temperature": 0.3}
