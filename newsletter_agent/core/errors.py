"""Exceptions raised by newsletter generation."""


class NewsletterAgentError(Exception):
    """Base class for newsletter agent errors."""


class CompletionError(NewsletterAgentError):
    """Raised when a completion call fails, times out or returns nothing."""

    def __init__(self, template_id: str, message: str):
        super().__init__(f"{template_id}: {message}")
        self.template_id = template_id


class NewsletterGenerationError(NewsletterAgentError):
    """Raised when a newsletter cannot be produced at all."""


class ProviderError(NewsletterAgentError):
    """Raised by a completion provider that produced no usable text."""
