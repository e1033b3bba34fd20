"""
Domain models for the tagging workflow engine.

Workflow definitions, recorded events and engine snapshots are immutable
(frozen dataclasses with tuple collections) so a snapshot taken before a
transition can never be altered by a later one.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

# System-reserved event type ids, fixed by the remote store's EventType model.
SYSTEM_SUB_IN_ID = "00000000-0000-0000-0000-000000000002"
SYSTEM_PERIOD_END_ID = "00000000-0000-0000-0000-000000000003"


# =============================================================================
# WORKFLOW DEFINITION
# =============================================================================


@dataclass(frozen=True)
class Option:
    """A selectable answer on a Step."""

    id: str
    label: str
    next_step_id: str | None = None  # None = traversal terminates
    event_type_id: str | None = None  # None = pure branch, no event recorded
    collect_participant: bool = False
    participant_prompt: str | None = None
    participant_copy_step_id: str | None = None
    collect_value: bool = False
    value_prompt: str | None = None
    display_order: int = 0


@dataclass(frozen=True)
class Step:
    """A single prompt with its options."""

    id: str
    prompt: str
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class WorkflowDefinition:
    """Directed graph of Steps guiding one act of event tagging."""

    id: str
    name: str
    first_step_id: str | None
    system_reserved: bool = False
    steps: tuple[Step, ...] = ()
    display_order: int = 0

    def find_step(self, step_id: str | None) -> Step | None:
        if step_id is None:
            return None
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def find_option(self, option_id: str) -> Option | None:
        for step in self.steps:
            for option in step.options:
                if option.id == option_id:
                    return option
        return None


def find_lineup_workflow(workflows: Iterable[WorkflowDefinition]) -> WorkflowDefinition | None:
    """Return the system-reserved lineup/substitution workflow, if any."""
    for workflow in workflows:
        if workflow.system_reserved:
            return workflow
    return None


# =============================================================================
# RECORDED DATA (read-only input from the remote store)
# =============================================================================


@dataclass(frozen=True)
class Event:
    """A single recorded event inside an EventGroup."""

    event_type_id: str
    breakdown_player_id: str | None = None
    breakdown_team_id: str | None = None
    deleted_at: str | None = None  # ISO timestamp, None if live
    id: str | None = None
    metadata: float | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class EventGroup:
    """One timestamped tagging action, containing the events recorded together."""

    id: str
    workflow_id: str | None
    video_timestamp: float
    events: tuple[Event, ...] = ()
    game_clock_timestamp: int | None = None

    def active_events(self) -> tuple[Event, ...]:
        return tuple(e for e in self.events if not e.is_deleted)


@dataclass(frozen=True)
class Period:
    """A configured game period (quarter, half, overtime)."""

    id: str
    order: int
    duration_seconds: int | None = None


@dataclass(frozen=True)
class Player:
    """A player attached to a breakdown."""

    id: str
    name: str | None = None
    jersey_number: str | None = None
    team_id: str | None = None


@dataclass(frozen=True)
class Team:
    """A team attached to a breakdown."""

    id: str
    name: str | None = None
    abbreviation: str | None = None
    home_away: str | None = None  # "home", "away" or None


# =============================================================================
# TRAVERSAL STATE
# =============================================================================


class Phase(Enum):
    """Which screen the tagging engine is presenting."""

    STARTERS = "starters"  # Initial lineup not yet recorded
    IDLE = "idle"  # Workflow grid, nothing in progress
    STEP = "step"  # Presenting a Step's options
    PARTICIPANT = "participant"  # Waiting for a player/team pick
    VALUE = "value"  # Waiting for a numeric value
    LINEUP = "lineup"  # Mid-game substitution toggle grid
    PERIOD_END = "period_end"  # Confirming an end-of-period marker
    CONFIRMATION = "confirmation"  # Review queued events before submit


@dataclass(frozen=True)
class QueuedEvent:
    """An event accumulated during a traversal, not yet submitted."""

    event_type_id: str
    producing_step_id: str | None
    participant_id: str | None = None
    participant_name: str | None = None
    participant_is_team: bool = False
    value: float | None = None


@dataclass(frozen=True)
class Snapshot:
    """
    Full copy of the engine's traversal state.

    Pushed onto the history stack before every advancing transition;
    restoring the top entry exactly reverses that transition.
    """

    phase: Phase
    current_workflow: WorkflowDefinition | None = None
    current_step: Step | None = None
    awaiting_participant: bool = False
    participant_prompt: str | None = None
    awaiting_value: bool = False
    value_prompt: str | None = None
    pending_step: Step | None = None  # Resolved next step held during a prompt
    queued_events: tuple[QueuedEvent, ...] = field(default_factory=tuple)
    lineup_player_ids: tuple[str, ...] = field(default_factory=tuple)
    selected_timestamp: float | None = None
