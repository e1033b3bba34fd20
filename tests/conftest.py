"""Shared pytest fixtures for stattaker tests."""

import pytest

from stattaker.application.engine import TaggingEngine
from stattaker.application.submission import SubmissionService
from stattaker.domain.models import (
    SYSTEM_SUB_IN_ID,
    Event,
    EventGroup,
    Option,
    Step,
    WorkflowDefinition,
)
from stattaker.infrastructure.persistence.memory import InMemoryEventStore


@pytest.fixture
def shot_workflow() -> WorkflowDefinition:
    """Shot attempt: made -> assist?, missed -> rebound."""
    return WorkflowDefinition(
        id="wf-shot",
        name="Shot Attempt",
        first_step_id="s-result",
        steps=(
            Step(
                id="s-result",
                prompt="Result?",
                options=(
                    Option(
                        id="o-made",
                        label="Made",
                        next_step_id="s-assist",
                        event_type_id="et-fgm",
                        collect_participant=True,
                        participant_prompt="Who shot?",
                    ),
                    Option(
                        id="o-missed",
                        label="Missed",
                        next_step_id="s-rebound",
                        event_type_id="et-miss",
                        collect_participant=True,
                        participant_prompt="Who shot?",
                    ),
                ),
            ),
            Step(
                id="s-assist",
                prompt="Assisted?",
                options=(
                    Option(
                        id="o-assist-yes",
                        label="Yes",
                        event_type_id="et-ast",
                        collect_participant=True,
                        participant_prompt="Who assisted?",
                    ),
                    Option(id="o-assist-no", label="No"),
                ),
            ),
            Step(
                id="s-rebound",
                prompt="Rebound?",
                options=(
                    Option(
                        id="o-oreb",
                        label="Offensive",
                        event_type_id="et-oreb",
                        collect_participant=True,
                        participant_prompt="Who rebounded?",
                    ),
                    Option(
                        id="o-dreb",
                        label="Defensive",
                        event_type_id="et-dreb",
                        collect_participant=True,
                        participant_prompt="Who rebounded?",
                    ),
                ),
            ),
        ),
    )


@pytest.fixture
def chain_workflow() -> WorkflowDefinition:
    """Three single-option steps leading to a real two-option decision."""
    return WorkflowDefinition(
        id="wf-chain",
        name="Turnover",
        first_step_id="c1",
        steps=(
            Step(id="c1", prompt="Gate", options=(Option(id="c1-o", label="Go", next_step_id="c2"),)),
            Step(
                id="c2",
                prompt="Record",
                options=(Option(id="c2-o", label="TO", next_step_id="c3", event_type_id="et-to"),),
            ),
            Step(id="c3", prompt="Gate", options=(Option(id="c3-o", label="Go", next_step_id="c4"),)),
            Step(
                id="c4",
                prompt="Kind?",
                options=(
                    Option(id="c4-steal", label="Steal", event_type_id="et-stl"),
                    Option(id="c4-other", label="Other"),
                ),
            ),
        ),
    )


@pytest.fixture
def copy_workflow() -> WorkflowDefinition:
    """Missed shot whose rebound step inherits the shooter."""
    return WorkflowDefinition(
        id="wf-copy",
        name="Putback",
        first_step_id="p-shot",
        steps=(
            Step(
                id="p-shot",
                prompt="Shot",
                options=(
                    Option(
                        id="p-shot-miss",
                        label="Missed",
                        next_step_id="p-reb",
                        event_type_id="et-miss",
                        collect_participant=True,
                        participant_prompt="Who shot?",
                    ),
                    Option(id="p-shot-blocked", label="Blocked", event_type_id="et-blk"),
                ),
            ),
            Step(
                id="p-reb",
                prompt="Who got it?",
                options=(
                    Option(
                        id="p-reb-self",
                        label="Shooter",
                        event_type_id="et-oreb",
                        collect_participant=True,
                        participant_copy_step_id="p-shot",
                    ),
                    Option(id="p-reb-other", label="Someone else", event_type_id="et-dreb"),
                ),
            ),
        ),
    )


@pytest.fixture
def value_workflow() -> WorkflowDefinition:
    """Free throws: a participant and a count on the same event."""
    return WorkflowDefinition(
        id="wf-ft",
        name="Free Throws",
        first_step_id="ft",
        steps=(
            Step(
                id="ft",
                prompt="Free throws",
                options=(
                    Option(
                        id="ft-made",
                        label="Made",
                        event_type_id="et-ftm",
                        collect_participant=True,
                        participant_prompt="Shooter?",
                        collect_value=True,
                        value_prompt="How many?",
                    ),
                    Option(id="ft-none", label="None made"),
                ),
            ),
        ),
    )


@pytest.fixture
def lineup_workflow() -> WorkflowDefinition:
    """System-reserved lineup/substitution workflow."""
    return WorkflowDefinition(
        id="wf-lineup",
        name="Lineup",
        first_step_id=None,
        system_reserved=True,
    )


@pytest.fixture
def workflows(
    shot_workflow: WorkflowDefinition,
    chain_workflow: WorkflowDefinition,
    copy_workflow: WorkflowDefinition,
    value_workflow: WorkflowDefinition,
    lineup_workflow: WorkflowDefinition,
) -> list[WorkflowDefinition]:
    return [shot_workflow, chain_workflow, copy_workflow, value_workflow, lineup_workflow]


@pytest.fixture
def engine(workflows: list[WorkflowDefinition]) -> TaggingEngine:
    """Engine initialized in IDLE."""
    return TaggingEngine(workflows)


@pytest.fixture
def memory_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def submission_service(memory_store: InMemoryEventStore) -> SubmissionService:
    return SubmissionService(memory_store)


def _lineup_group(group_id: str, timestamp: float, *player_ids: str) -> EventGroup:
    return EventGroup(
        id=group_id,
        workflow_id="wf-lineup",
        video_timestamp=timestamp,
        events=tuple(
            Event(event_type_id=SYSTEM_SUB_IN_ID, breakdown_player_id=p) for p in player_ids
        ),
    )


@pytest.fixture
def make_lineup_group():
    """Factory for lineup groups holding one live substitution event per player."""
    return _lineup_group
