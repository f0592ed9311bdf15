"""Prompt templates for quality evaluation, reflection and self-correction."""

QUALITY_VALIDATION_TEMPLATE = """Score this newsletter about "{topic}" as a strict editor would.

TITLE: {title}

CONTENT
{content}

Score each dimension from 1 (poor) to 10 (excellent), then report your confidence (1-100)
in the scores, the concrete issues you found and how to fix them.

Respond exactly in this format:
CLARITY: <1-10>
ENGAGEMENT: <1-10>
ACCURACY: <1-10>
COMPLETENESS: <1-10>
CREATIVITY: <1-10>
PERSUASIVENESS: <1-10>
CONFIDENCE: <1-100>
ISSUES: issue 1 | issue 2 (or NONE)
SUGGESTIONS: suggestion 1 | suggestion 2 (or NONE)
"""

QUALITY_VALIDATION_CONFIG = {"max_tokens": 600, "temperature": 0.1}

REFLECTION_TEMPLATE = """Reflect critically on your own newsletter about "{topic}".

TITLE: {title}

CONTENT
{content}

CURRENT SCORES
{metrics}
Correction attempts so far: {attempts}

Be honest about what works and what does not. Weaknesses must be specific enough to fix.

Respond exactly in this format:
STRENGTHS: strength 1 | strength 2
WEAKNESSES: weakness 1 | weakness 2 (or NONE)
IMPROVEMENTS: improvement 1 | improvement 2
CONFIDENCE: <1-100>
NEEDS_REVISION: YES or NO
"""

REFLECTION_CONFIG = {"max_tokens": 700, "temperature": 0.8}

SELF_CORRECTION_TEMPLATE = """Revise this newsletter to fix the listed weaknesses. Change only what the fixes require.

TITLE: {title}

CONTENT
{content}

WEAKNESSES
{weaknesses}

IMPROVEMENTS TO APPLY
{improvements}

Respond exactly in this format:
CORRECTED_TITLE: <title>
CORRECTED_CONTENT:
<full revised newsletter>
FIXES_APPLIED: fix 1 | fix 2
"""

SELF_CORRECTION_CONFIG = {"max_tokens": 3000, "temperature": 0.5}
