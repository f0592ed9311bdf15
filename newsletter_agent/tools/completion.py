"""Enrichment operations answered by the completion provider."""

from newsletter_agent.core.utils import truncate_text
from newsletter_agent.tools.base import EnrichmentOperation

OPERATION_INPUT_CHARS = 3000


class CompletionOperation(EnrichmentOperation):
    """Fills a registered prompt with the operation input."""

    def __init__(self, name: str, gateway, template_id: str = None):
        self._name = name
        self.gateway = gateway
        self.template_id = template_id or name

    @property
    def operation_name(self) -> str:
        return self._name

    async def run(self, value: str) -> str:
        response = await self.gateway.invoke(
            self.template_id, {"input": truncate_text(value, OPERATION_INPUT_CHARS)}
        )
        return response.strip()
