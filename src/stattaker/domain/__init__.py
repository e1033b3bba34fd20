"""
Domain layer for the tagging workflow engine.

Contains the data model and pure game-state logic with no external dependencies.
"""

from stattaker.domain.exceptions import (
    ConfigurationError,
    InvalidGameClock,
    InvalidLineup,
    InvalidTransition,
    StoreError,
    SubmissionFailed,
)
from stattaker.domain.game_clock import format_timestamp, parse_game_clock
from stattaker.domain.game_state import (
    count_period_ends,
    get_players_currently_in_game,
    initial_phase,
    latest_lineup_group,
    sort_by_jersey,
    split_roster,
    starters_recorded,
)
from stattaker.domain.interfaces import EventStoreInterface
from stattaker.domain.models import (
    SYSTEM_PERIOD_END_ID,
    SYSTEM_SUB_IN_ID,
    Event,
    EventGroup,
    Option,
    Period,
    Phase,
    Player,
    QueuedEvent,
    Snapshot,
    Step,
    Team,
    WorkflowDefinition,
    find_lineup_workflow,
)
from stattaker.domain.payloads import EventCreate, EventGroupCreate, PeriodCreate

__all__ = [
    # Models
    "Option",
    "Step",
    "WorkflowDefinition",
    "Event",
    "EventGroup",
    "Period",
    "Player",
    "Team",
    "Phase",
    "QueuedEvent",
    "Snapshot",
    "SYSTEM_SUB_IN_ID",
    "SYSTEM_PERIOD_END_ID",
    "find_lineup_workflow",
    # Requests
    "EventGroupCreate",
    "EventCreate",
    "PeriodCreate",
    # Game state
    "get_players_currently_in_game",
    "latest_lineup_group",
    "starters_recorded",
    "initial_phase",
    "count_period_ends",
    "sort_by_jersey",
    "split_roster",
    "parse_game_clock",
    "format_timestamp",
    # Interfaces
    "EventStoreInterface",
    # Exceptions
    "InvalidTransition",
    "InvalidLineup",
    "InvalidGameClock",
    "StoreError",
    "SubmissionFailed",
    "ConfigurationError",
]
