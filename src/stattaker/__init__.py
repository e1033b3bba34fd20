"""
stattaker: guided video event tagging.

A tagging session walks the user through a workflow's graph of prompts,
queues the attributed events each answer produces, supports exact undo,
and reconstructs who is on the field from recorded substitutions.

Example:
    from stattaker import SubmissionService, TaggingEngine
    from stattaker.infrastructure import InMemoryEventStore
    from stattaker.schemas import load_workflows

    workflows = load_workflows(Path("workflows.json"))
    engine = TaggingEngine(workflows)
    engine.start_workflow(workflows[0], timestamp=83.5)
    engine.select_option(engine.current_step.options[0])
    ...
    SubmissionService(InMemoryEventStore()).submit_workflow(engine, "breakdown-1")
"""

# Application layer (engine and services)
from stattaker.application.engine import TaggingEngine
from stattaker.application.session import TaggingSession
from stattaker.application.submission import (
    SubmissionPlan,
    SubmissionResult,
    SubmissionService,
)

# Domain exceptions
from stattaker.domain.exceptions import (
    ConfigurationError,
    InvalidGameClock,
    InvalidLineup,
    InvalidTransition,
    StoreError,
    SubmissionFailed,
)

# Game-state reconstruction
from stattaker.domain.game_state import get_players_currently_in_game

# Domain interfaces (for custom store adapters)
from stattaker.domain.interfaces import EventStoreInterface

# Domain models
from stattaker.domain.models import (
    Event,
    EventGroup,
    Option,
    Period,
    Phase,
    QueuedEvent,
    Snapshot,
    Step,
    WorkflowDefinition,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Option",
    "Step",
    "WorkflowDefinition",
    "Event",
    "EventGroup",
    "Period",
    "Phase",
    "QueuedEvent",
    "Snapshot",
    # Game state
    "get_players_currently_in_game",
    # Domain interfaces
    "EventStoreInterface",
    # Domain exceptions
    "InvalidTransition",
    "InvalidLineup",
    "InvalidGameClock",
    "StoreError",
    "SubmissionFailed",
    "ConfigurationError",
    # Application layer
    "TaggingEngine",
    "TaggingSession",
    "SubmissionService",
    "SubmissionPlan",
    "SubmissionResult",
]
