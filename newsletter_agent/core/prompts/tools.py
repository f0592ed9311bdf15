"""Prompt templates for model-backed enrichment operations."""

WEB_SEARCH_TEMPLATE = """List what is currently known and being discussed about "{input}".
Give 3-5 short findings, each with the kind of source it would come from.
Say plainly when you are unsure whether something is current."""

FACT_CHECK_TEMPLATE = """Fact-check this claim: "{input}"

Respond in this format:
VERDICT: SUPPORTED | DISPUTED | UNVERIFIABLE
REASONING: one or two sentences
CAVEATS: caveat 1 | caveat 2 (or NONE)"""

ANALYZE_TRENDS_TEMPLATE = """Describe the main trends around "{input}": what is growing, what is fading,
and what a newsletter reader should watch next. Keep it to 5 bullet points."""

COMPETITOR_ANALYSIS_TEMPLATE = """Name the main players around "{input}" and how they differ.
Keep it to 5 bullet points, one per player, each with a single distinguishing fact."""

IMAGE_DESCRIPTION_TEMPLATE = """Describe one documentary-style header image for a newsletter built on this material.
Concrete subject, setting and light; no text, logos or CGI. Two sentences.

MATERIAL
{input}"""

ENRICHMENT_CONFIG = {"max_tokens": 600, "temperature": 0.4}
