"""Base class for enrichment operations."""

from abc import ABC, abstractmethod


class EnrichmentOperation(ABC):
    """Abstract base class for a named enrichment operation."""

    @property
    @abstractmethod
    def operation_name(self) -> str:
        """Registry name of this operation, e.g. 'web_search'."""
        pass

    @abstractmethod
    async def run(self, value: str) -> str:
        """
        Execute the operation.

        Args:
            value: Input resolved from the workflow state

        Returns:
            Text to append to the source material

        Raises:
            Exception: Any failure; the coordinator isolates it
        """
        pass
