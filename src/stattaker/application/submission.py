"""Application service translating engine state into store create requests.

Requests are built and validated before anything is sent. The engine is
reset only after every request succeeded; on failure its queued events stay
in place so the user can retry without re-answering the workflow.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from stattaker.domain.exceptions import (
    InvalidLineup,
    InvalidTransition,
    StoreError,
    SubmissionFailed,
)
from stattaker.domain.game_clock import parse_game_clock
from stattaker.domain.game_state import count_period_ends
from stattaker.domain.models import (
    SYSTEM_PERIOD_END_ID,
    SYSTEM_SUB_IN_ID,
    EventGroup,
    Period,
    Phase,
    WorkflowDefinition,
    find_lineup_workflow,
)
from stattaker.domain.payloads import EventCreate, EventGroupCreate, PeriodCreate

if TYPE_CHECKING:
    from stattaker.application.engine import TaggingEngine
    from stattaker.domain.interfaces import EventStoreInterface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionPlan:
    """Ordered create requests for one submission."""

    group: EventGroupCreate
    events: tuple[EventCreate, ...]
    period: PeriodCreate | None = None


@dataclass(frozen=True)
class SubmissionResult:
    """Ids assigned by the store."""

    group_id: str
    event_ids: tuple[str, ...]
    period_id: str | None = None


class SubmissionService:
    """Builds and sends create requests for workflow, lineup and period-end submissions."""

    def __init__(self, event_store: EventStoreInterface) -> None:
        """Initialize submission service.

        Args:
            event_store: Port to the remote store.
        """
        self._event_store = event_store

    # =========================================================================
    # REQUEST BUILDING
    # =========================================================================

    def build_workflow_plan(self, engine: TaggingEngine) -> SubmissionPlan:
        """Group plus one event per queued event, in queued order.

        Raises:
            InvalidTransition: If the engine is not at CONFIRMATION.
            InvalidGameClock: If the game clock fields cannot be parsed.
        """
        if engine.phase is not Phase.CONFIRMATION:
            raise InvalidTransition("submit a workflow", engine.phase)

        group = EventGroupCreate(
            video_timestamp=engine.selected_timestamp or 0,
            game_clock_timestamp=parse_game_clock(
                engine.game_clock_minutes, engine.game_clock_seconds
            ),
            workflow_id=engine.current_workflow.id if engine.current_workflow else None,
            period_id=engine.period_id,
        )
        events = tuple(
            EventCreate(
                event_type_id=qe.event_type_id,
                breakdown_player_id=None if qe.participant_is_team else qe.participant_id,
                breakdown_team_id=qe.participant_id if qe.participant_is_team else None,
                metadata=qe.value,
            )
            for qe in engine.queued_events
        )
        return SubmissionPlan(group=group, events=events)

    def build_lineup_plan(
        self, engine: TaggingEngine, workflows: Sequence[WorkflowDefinition]
    ) -> SubmissionPlan:
        """Lineup group with one substitution-in event per selected player.

        Starters are recorded at video time 0.

        Raises:
            InvalidTransition: If the engine is not in LINEUP or STARTERS.
            InvalidLineup: If no lineup workflow exists or no player is selected.
        """
        if engine.phase not in (Phase.LINEUP, Phase.STARTERS):
            raise InvalidTransition("submit a lineup", engine.phase)
        lineup_workflow = find_lineup_workflow(workflows)
        if lineup_workflow is None:
            raise InvalidLineup("Lineup workflow not found.")
        if not engine.lineup_player_ids:
            raise InvalidLineup("Select at least one player.")

        is_starters = engine.phase is Phase.STARTERS
        group = EventGroupCreate(
            video_timestamp=0 if is_starters else engine.selected_timestamp or 0,
            workflow_id=lineup_workflow.id,
        )
        events = tuple(
            EventCreate(event_type_id=SYSTEM_SUB_IN_ID, breakdown_player_id=player_id)
            for player_id in engine.lineup_player_ids
        )
        return SubmissionPlan(group=group, events=events)

    def build_period_end_plan(
        self,
        engine: TaggingEngine,
        periods: Sequence[Period],
        event_groups: Sequence[EventGroup],
        new_period_minutes: str = "",
    ) -> SubmissionPlan:
        """Period-end marker, preceded by a new period when the last one is ending.

        Args:
            engine: Engine in PERIOD_END.
            periods: Configured periods of the breakdown.
            event_groups: Every event group of the breakdown.
            new_period_minutes: Duration of the period to create, as typed.

        Raises:
            InvalidTransition: If the engine is not in PERIOD_END.
        """
        if engine.phase is not Phase.PERIOD_END:
            raise InvalidTransition("submit a period end", engine.phase)

        ending_period = count_period_ends(event_groups) + 1
        period = None
        if ending_period > len(periods):
            period = PeriodCreate(
                order=len(periods) + 1,
                duration_seconds=_minutes_to_seconds(new_period_minutes),
            )

        group = EventGroupCreate(
            video_timestamp=engine.selected_timestamp or 0,
            game_clock_timestamp=0,
            workflow_id=None,
        )
        return SubmissionPlan(
            group=group,
            events=(EventCreate(event_type_id=SYSTEM_PERIOD_END_ID),),
            period=period,
        )

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    def submit_workflow(self, engine: TaggingEngine, breakdown_id: str) -> SubmissionResult:
        """Submit the queued events of a confirmed traversal."""
        return self._submit(engine, breakdown_id, self.build_workflow_plan(engine))

    def submit_lineup(
        self,
        engine: TaggingEngine,
        breakdown_id: str,
        workflows: Sequence[WorkflowDefinition],
    ) -> SubmissionResult:
        """Submit the lineup (starters or substitution) being edited."""
        return self._submit(engine, breakdown_id, self.build_lineup_plan(engine, workflows))

    def submit_period_end(
        self,
        engine: TaggingEngine,
        breakdown_id: str,
        periods: Sequence[Period],
        event_groups: Sequence[EventGroup],
        new_period_minutes: str = "",
    ) -> SubmissionResult:
        """Submit an end-of-period marker."""
        plan = self.build_period_end_plan(engine, periods, event_groups, new_period_minutes)
        return self._submit(engine, breakdown_id, plan)

    def _submit(
        self, engine: TaggingEngine, breakdown_id: str, plan: SubmissionPlan
    ) -> SubmissionResult:
        try:
            period_id = None
            if plan.period is not None:
                period_id = self._event_store.create_period(breakdown_id, plan.period)
            group_id = self._event_store.create_event_group(breakdown_id, plan.group)
            event_ids = tuple(
                self._event_store.create_event(breakdown_id, group_id, event)
                for event in plan.events
            )
        except StoreError as e:
            logger.error("Submission to breakdown %s failed: %s", breakdown_id, e)
            raise SubmissionFailed("Something went wrong. Please try again.", e) from e

        logger.info(
            "Submitted group %s with %d events to breakdown %s",
            group_id,
            len(event_ids),
            breakdown_id,
        )
        engine.reset_after_submit()
        return SubmissionResult(group_id=group_id, event_ids=event_ids, period_id=period_id)


def _minutes_to_seconds(raw: str) -> int | None:
    try:
        minutes = int(raw.strip() or "0")
    except ValueError:
        return None
    return minutes * 60 if minutes > 0 else None
