"""Interface shared by every refinement workflow stage."""

import logging
from abc import ABC, abstractmethod

from newsletter_agent.core.errors import CompletionError
from newsletter_agent.models.workflow import StatePatch, WorkflowState

logger = logging.getLogger(__name__)


class WorkflowStage(ABC):
    """A single node of the refinement workflow.

    Subclasses implement :meth:`execute`, which may raise, and
    :meth:`fallback`, which describes the degraded result. Callers only use
    :meth:`run`, which never raises.
    """

    @property
    @abstractmethod
    def stage_name(self) -> str:
        """A unique name for this stage, e.g. 'generate'."""
        pass

    @abstractmethod
    async def execute(self, state: WorkflowState) -> StatePatch:
        """
        Do the stage's work.

        Args:
            state: Current workflow state, read-only

        Returns:
            StatePatch with the stage's contribution
        """
        pass

    def fallback(self, state: WorkflowState, error: Exception) -> StatePatch:
        """Patch used when :meth:`execute` fails."""
        return StatePatch(errors=[f"{self.stage_name} failed: {error}"])

    async def run(self, state: WorkflowState) -> StatePatch:
        try:
            patch = await self.execute(state)
        except CompletionError as e:
            logger.warning(f"⚠️  {self.stage_name}: completion failed: {e}")
            patch = self.fallback(state, e)
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"{self.stage_name}: data error: {e}")
            patch = self.fallback(state, e)
        except Exception as e:
            logger.exception(f"{self.stage_name}: unexpected error: {e}")
            patch = self.fallback(state, e)

        return patch.model_copy(
            update={"processing_steps": [self.stage_name, *patch.processing_steps]}
        )
