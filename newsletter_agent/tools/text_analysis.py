"""Local text analysis operations that need no completion call."""

import re
from collections import Counter

from newsletter_agent.tools.base import EnrichmentOperation

STOPWORDS = frozenset(
    """a about above after again against all also an and any are as at be because been
    before being below between both but by can could did do does doing down during each
    few for from further had has have having he her here hers him his how i if in into
    is it its itself just more most my no nor not now of off on once only or other our
    out over own same she should so some such than that the their them then there these
    they this those through to too under until up very was we were what when where which
    while who whom why will with would you your source summary url user comment material
    points key""".split()
)

POSITIVE_WORDS = frozenset(
    """good great excellent positive growth improve improved improvement success
    successful gain gains strong benefit benefits win wins breakthrough innovative
    efficient opportunity optimistic progress record rise rising""".split()
)
NEGATIVE_WORDS = frozenset(
    """bad poor negative decline declining loss losses weak risk risks fail failed
    failure problem problems concern concerns crisis drop falling threat lawsuit
    layoffs breach vulnerability slowdown""".split()
)


def _words(text: str):
    return re.findall(r"[a-zA-Z][a-zA-Z'-]{2,}", text.lower())


class KeywordExtractionOperation(EnrichmentOperation):
    """Most frequent content words of the input."""

    def __init__(self, limit: int = 10):
        self.limit = limit

    @property
    def operation_name(self) -> str:
        return "extract_keywords"

    async def run(self, value: str) -> str:
        counts = Counter(w for w in _words(value) if w not in STOPWORDS)
        keywords = [word for word, _ in counts.most_common(self.limit)]
        if not keywords:
            raise ValueError("no keywords found in input")
        return "Keywords: " + ", ".join(keywords)


class SentimentAnalysisOperation(EnrichmentOperation):
    """Lexicon-based overall tone of the input."""

    @property
    def operation_name(self) -> str:
        return "sentiment_analysis"

    async def run(self, value: str) -> str:
        words = _words(value)
        positive = sum(1 for w in words if w in POSITIVE_WORDS)
        negative = sum(1 for w in words if w in NEGATIVE_WORDS)
        total = positive + negative
        score = 0.0 if total == 0 else (positive - negative) / total

        if score > 0.2:
            label = "positive"
        elif score < -0.2:
            label = "negative"
        else:
            label = "neutral"
        return (
            f"Overall sentiment: {label} (score {score:+.2f}, "
            f"{positive} positive / {negative} negative signals)"
        )
