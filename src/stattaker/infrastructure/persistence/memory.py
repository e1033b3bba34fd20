"""
In-memory implementation of the event store.

Useful for testing and for dry runs of the CLI.
"""

import uuid
from dataclasses import replace

from stattaker.domain.exceptions import StoreError
from stattaker.domain.interfaces import EventStoreInterface
from stattaker.domain.models import Event, EventGroup, Period
from stattaker.domain.payloads import EventCreate, EventGroupCreate, PeriodCreate


class InMemoryEventStore(EventStoreInterface):
    """Simple in-memory store keyed by breakdown id."""

    def __init__(self, fail_after: int | None = None) -> None:
        """
        Args:
            fail_after: Number of create calls that succeed before every
                further create raises StoreError (None = never fail)
        """
        self._groups: dict[str, dict[str, EventGroup]] = {}
        self._periods: dict[str, list[Period]] = {}
        self._fail_after = fail_after
        self.create_calls = 0

    def _check_failure(self) -> None:
        if self._fail_after is not None and self.create_calls >= self._fail_after:
            raise StoreError("Request failed", status_code=500)
        self.create_calls += 1

    def create_event_group(self, breakdown_id: str, request: EventGroupCreate) -> str:
        self._check_failure()
        group = EventGroup(
            id=str(uuid.uuid4()),
            workflow_id=request.workflow_id,
            video_timestamp=request.video_timestamp,
            game_clock_timestamp=request.game_clock_timestamp,
        )
        self._groups.setdefault(breakdown_id, {})[group.id] = group
        return group.id

    def create_event(self, breakdown_id: str, group_id: str, request: EventCreate) -> str:
        self._check_failure()
        groups = self._groups.get(breakdown_id, {})
        if group_id not in groups:
            raise StoreError(f"Event group not found: {group_id}", status_code=404)
        event_id = str(uuid.uuid4())
        event = Event(
            id=event_id,
            event_type_id=request.event_type_id,
            breakdown_player_id=request.breakdown_player_id,
            breakdown_team_id=request.breakdown_team_id,
            metadata=request.metadata,
        )
        group = groups[group_id]
        groups[group_id] = replace(group, events=group.events + (event,))
        return event_id

    def create_period(self, breakdown_id: str, request: PeriodCreate) -> str:
        self._check_failure()
        period = Period(
            id=str(uuid.uuid4()),
            order=request.order,
            duration_seconds=request.duration_seconds,
        )
        self._periods.setdefault(breakdown_id, []).append(period)
        return period.id

    def list_event_groups(self, breakdown_id: str) -> list[EventGroup]:
        return list(self._groups.get(breakdown_id, {}).values())

    def list_periods(self, breakdown_id: str) -> list[Period]:
        return sorted(self._periods.get(breakdown_id, []), key=lambda p: p.order)

    def add_period(self, breakdown_id: str, period: Period) -> None:
        """Seed a configured period."""
        self._periods.setdefault(breakdown_id, []).append(period)

    def delete_event_group(self, breakdown_id: str, group_id: str) -> None:
        groups = self._groups.get(breakdown_id, {})
        if group_id not in groups:
            raise StoreError(f"Event group not found: {group_id}", status_code=404)
        del groups[group_id]
