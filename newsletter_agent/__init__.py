"""Newsletter generation agent.

Turns captured source snippets into a finished newsletter through a bounded
generate/critique loop, optional persona synthesis and a quality gate.
"""

__version__ = "0.1.0"
