"""
TaggingEngine: walks a user through a workflow's step graph.

Holds the current phase, step and queued events plus a history stack of
full-state snapshots. The live state is itself an immutable Snapshot, so
pushing it before a transition and restoring it on go_back() is an exact
inverse with no copying. State is small; snapshots are the undo strategy,
not commands.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from stattaker.domain.exceptions import InvalidTransition
from stattaker.domain.models import (
    Option,
    Phase,
    QueuedEvent,
    Snapshot,
    Step,
    WorkflowDefinition,
)

logger = logging.getLogger(__name__)


class TaggingEngine:
    """
    State machine for one tagging session.

    Every transition completes synchronously and either fully applies or
    raises InvalidTransition before touching state. The engine performs no
    I/O; callers read queued_events at CONFIRMATION and submit them.
    """

    def __init__(
        self,
        workflows: Sequence[WorkflowDefinition] = (),
        initial_phase: Phase = Phase.IDLE,
    ):
        """
        Args:
            workflows: Workflow definitions of the active template
            initial_phase: STARTERS if starters are still missing, else IDLE
        """
        self.video_timestamp: float = 0.0
        self.init_store(workflows, initial_phase)

    def init_store(
        self,
        workflows: Sequence[WorkflowDefinition],
        initial_phase: Phase = Phase.IDLE,
    ) -> None:
        """
        (Re)initialize the session.

        Precondition: called once per tagging session. Calling it again
        mid-traversal discards queued events, the lineup and the history;
        guarding against data refetches is the caller's job (see
        TaggingSession).
        """
        self._workflows = tuple(workflows)
        self._history: list[Snapshot] = []
        self._state = Snapshot(phase=initial_phase)
        self._clear_game_clock()
        logger.debug(
            "Initialized with %d workflows in phase %s",
            len(self._workflows),
            initial_phase.value,
        )

    # =========================================================================
    # STATE ACCESS
    # =========================================================================

    @property
    def workflows(self) -> tuple[WorkflowDefinition, ...]:
        return self._workflows

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_workflow(self) -> WorkflowDefinition | None:
        return self._state.current_workflow

    @property
    def current_step(self) -> Step | None:
        return self._state.current_step

    @property
    def awaiting_participant(self) -> bool:
        return self._state.awaiting_participant

    @property
    def participant_prompt(self) -> str | None:
        return self._state.participant_prompt

    @property
    def awaiting_value(self) -> bool:
        return self._state.awaiting_value

    @property
    def value_prompt(self) -> str | None:
        return self._state.value_prompt

    @property
    def pending_step(self) -> Step | None:
        return self._state.pending_step

    @property
    def queued_events(self) -> tuple[QueuedEvent, ...]:
        return self._state.queued_events

    @property
    def lineup_player_ids(self) -> tuple[str, ...]:
        return self._state.lineup_player_ids

    @property
    def selected_timestamp(self) -> float | None:
        return self._state.selected_timestamp

    @property
    def history(self) -> tuple[Snapshot, ...]:
        return tuple(self._history)

    @property
    def can_go_back(self) -> bool:
        return bool(self._history)

    @property
    def in_workflow(self) -> bool:
        return self._state.phase not in (Phase.IDLE, Phase.STARTERS)

    def snapshot(self) -> Snapshot:
        """Current traversal state (immutable)."""
        return self._state

    def find_step(self, step_id: str | None) -> Step | None:
        if self._state.current_workflow is None:
            return None
        return self._state.current_workflow.find_step(step_id)

    def find_option(self, option_id: str) -> Option | None:
        if self._state.current_workflow is None:
            return None
        return self._state.current_workflow.find_option(option_id)

    # =========================================================================
    # SCRATCH FIELDS (not part of the history)
    # =========================================================================

    def set_video_timestamp(self, timestamp: float) -> None:
        self.video_timestamp = timestamp

    def set_period_id(self, period_id: str | None) -> None:
        self.period_id = period_id

    def set_game_clock_minutes(self, minutes: str) -> None:
        self.game_clock_minutes = minutes

    def set_game_clock_seconds(self, seconds: str) -> None:
        self.game_clock_seconds = seconds

    def _clear_game_clock(self) -> None:
        self.period_id: str | None = None
        self.game_clock_minutes = ""
        self.game_clock_seconds = ""

    # =========================================================================
    # WORKFLOW TRAVERSAL
    # =========================================================================

    def start_workflow(self, workflow: WorkflowDefinition, timestamp: float) -> None:
        """
        Begin a traversal at the workflow's first step.

        Single-option steps are applied immediately without their own
        history entry, so one go_back() from the first real decision
        returns to IDLE.
        """
        self._require("start a workflow", Phase.IDLE)
        self._push()
        self._state = replace(
            self._state,
            phase=Phase.STEP,
            current_workflow=workflow,
            current_step=None,
            queued_events=(),
            selected_timestamp=timestamp,
        )
        logger.debug("Started workflow '%s' at %.2fs", workflow.name, timestamp)

        first = workflow.find_step(workflow.first_step_id)
        if first is None:
            logger.warning(
                "Workflow '%s' first step %r not found", workflow.name, workflow.first_step_id
            )
        self._enter_step(first, set())

    def select_option(self, option: Option, push_history: bool = True) -> None:
        """
        Apply an option: queue its event, then branch, prompt or confirm.

        Args:
            option: The chosen option of the current step
            push_history: False only for auto-advance of single-option steps

        Raises:
            InvalidTransition: Outside STEP, or if option is not on the current step
        """
        self._require("select an option", Phase.STEP)
        step = self._state.current_step
        if step is None or option not in step.options:
            raise InvalidTransition(
                f"select option '{option.id}' from another step", self._state.phase
            )
        if push_history:
            self._push()
        self._apply_option(option, set())

    def select_participant(
        self,
        participant_id: str | None,
        name: str | None,
        is_team: bool,
    ) -> None:
        """
        Attribute the most recently queued event to a player or team.

        ``participant_id=None`` records the event without attribution.
        """
        self._require("select a participant", Phase.PARTICIPANT)
        self._push()
        events = self._state.queued_events
        if events:
            last = replace(
                events[-1],
                participant_id=participant_id,
                participant_name=name,
                participant_is_team=is_team,
            )
            events = events[:-1] + (last,)
        else:
            logger.warning("Participant selected with no queued event to attribute")

        self._state = replace(
            self._state,
            queued_events=events,
            awaiting_participant=False,
            participant_prompt=None,
        )
        if self._state.awaiting_value:
            self._state = replace(self._state, phase=Phase.VALUE)
            return
        self._advance_pending()

    def enter_value(self, value: float) -> None:
        """Attach a numeric value to the most recently queued event."""
        self._require("enter a value", Phase.VALUE)
        self._push()
        events = self._state.queued_events
        if events:
            events = events[:-1] + (replace(events[-1], value=value),)
        self._state = replace(
            self._state,
            queued_events=events,
            awaiting_value=False,
            value_prompt=None,
        )
        self._advance_pending()

    def go_back(self) -> None:
        """Restore the state before the most recent advancing action."""
        if not self._history:
            return
        self._state = self._history.pop()
        logger.debug("Went back to phase %s", self._state.phase.value)

    def cancel_workflow(self) -> None:
        """Drop the traversal and its history; return to IDLE."""
        self._history.clear()
        self._state = Snapshot(phase=Phase.IDLE)
        logger.debug("Traversal cancelled")

    def reset_after_submit(self) -> None:
        """Same as cancel_workflow, and also clears the game clock fields."""
        self.cancel_workflow()
        self._clear_game_clock()

    # =========================================================================
    # LINEUP AND PERIOD END
    # =========================================================================

    def start_lineup(self, timestamp: float, currently_in_game_ids: Iterable[str]) -> None:
        """Enter the substitution grid pre-seeded with who is on the field."""
        self._require("start a lineup change", Phase.IDLE)
        self._push()
        self._state = replace(
            self._state,
            phase=Phase.LINEUP,
            lineup_player_ids=tuple(dict.fromkeys(currently_in_game_ids)),
            selected_timestamp=timestamp,
        )

    def toggle_lineup_player(self, player_id: str) -> None:
        """Add or remove a player from the lineup. Not individually undoable."""
        self._require("toggle a lineup player", Phase.LINEUP, Phase.STARTERS)
        ids = self._state.lineup_player_ids
        if player_id in ids:
            ids = tuple(i for i in ids if i != player_id)
        else:
            ids = ids + (player_id,)
        self._state = replace(self._state, lineup_player_ids=ids)

    def start_period_end(self, timestamp: float) -> None:
        self._require("end a period", Phase.IDLE)
        self._push()
        self._state = replace(
            self._state, phase=Phase.PERIOD_END, selected_timestamp=timestamp
        )

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require(self, action: str, *phases: Phase) -> None:
        if self._state.phase not in phases:
            raise InvalidTransition(action, self._state.phase)

    def _push(self) -> None:
        self._history.append(self._state)

    def _apply_option(self, option: Option, visited: set[str]) -> None:
        state = self._state
        step_id = state.current_step.id if state.current_step else None
        events = state.queued_events
        copied = False

        if option.event_type_id is not None:
            event = QueuedEvent(event_type_id=option.event_type_id, producing_step_id=step_id)
            if option.participant_copy_step_id is not None:
                source = _last_event_from_step(events, option.participant_copy_step_id)
                if source is None:
                    logger.warning(
                        "Option '%s' copies participant from step %r, which queued nothing",
                        option.label,
                        option.participant_copy_step_id,
                    )
                else:
                    event = replace(
                        event,
                        participant_id=source.participant_id,
                        participant_name=source.participant_name,
                        participant_is_team=source.participant_is_team,
                    )
                    copied = source.participant_id is not None
            events = events + (event,)

        next_step = self.find_step(option.next_step_id)
        if option.next_step_id is not None and next_step is None:
            logger.warning(
                "Option '%s' points at missing step %r; treating as terminal",
                option.label,
                option.next_step_id,
            )

        needs_participant = option.collect_participant and not copied
        needs_value = option.collect_value and option.event_type_id is not None
        self._state = replace(
            state,
            queued_events=events,
            pending_step=next_step,
            awaiting_participant=needs_participant,
            participant_prompt=option.participant_prompt if needs_participant else None,
            awaiting_value=needs_value,
            value_prompt=option.value_prompt if needs_value else None,
        )

        if needs_participant:
            self._state = replace(self._state, phase=Phase.PARTICIPANT)
        elif needs_value:
            self._state = replace(self._state, phase=Phase.VALUE)
        else:
            self._enter_step(next_step, visited)

    def _advance_pending(self) -> None:
        self._enter_step(self._state.pending_step, set())

    def _enter_step(self, step: Step | None, visited: set[str]) -> None:
        cleared = replace(
            self._state,
            awaiting_participant=False,
            participant_prompt=None,
            awaiting_value=False,
            value_prompt=None,
            pending_step=None,
        )
        if step is None or not step.options:
            if step is not None:
                logger.warning("Step %r has no options; treating as terminal", step.id)
            self._state = replace(cleared, phase=Phase.CONFIRMATION)
            logger.debug("Reached confirmation with %d events", len(cleared.queued_events))
            return

        self._state = replace(cleared, phase=Phase.STEP, current_step=step)
        if len(step.options) != 1:
            return
        if step.id in visited:
            logger.warning("Single-option cycle at step %r; stopping auto-advance", step.id)
            return
        visited.add(step.id)
        self._apply_option(step.options[0], visited)


def _last_event_from_step(
    events: tuple[QueuedEvent, ...], step_id: str
) -> QueuedEvent | None:
    for event in reversed(events):
        if event.producing_step_id == step_id:
            return event
    return None
