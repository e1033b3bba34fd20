"""
TaggingSession: owns one engine and its one-shot initialization.

Surrounding data (workflows, teams, event groups) is refetched after every
submission. Initialization must happen exactly once, when the data is first
available, or a refetch would wipe an in-progress traversal.
"""

from collections.abc import Sequence

from stattaker.application.engine import TaggingEngine
from stattaker.domain.game_state import initial_phase
from stattaker.domain.models import EventGroup, WorkflowDefinition


class TaggingSession:
    """Calling layer that guards TaggingEngine.init_store."""

    def __init__(self, engine: TaggingEngine | None = None):
        self.engine = engine if engine is not None else TaggingEngine()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def ensure_initialized(
        self,
        workflows: Sequence[WorkflowDefinition],
        teams_count: int,
        event_groups: Sequence[EventGroup],
    ) -> bool:
        """
        Initialize the engine on the first call that has workflows.

        Returns:
            True if this call initialized the engine, False if it was
            skipped (already initialized, or no workflows loaded yet)
        """
        if self._initialized or not workflows:
            return False
        phase = initial_phase(teams_count, workflows, event_groups)
        self.engine.init_store(workflows, phase)
        self._initialized = True
        return True
