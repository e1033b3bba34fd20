"""Create-request records sent to the remote event store."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EventGroupCreate:
    """One event group per submitted traversal."""

    video_timestamp: float
    game_clock_timestamp: int | None = None
    workflow_id: str | None = None
    period_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "video_timestamp": self.video_timestamp,
            "game_clock_timestamp": self.game_clock_timestamp,
            "workflow_id": self.workflow_id,
        }
        if self.period_id is not None:
            payload["period_id"] = self.period_id
        return payload


@dataclass(frozen=True)
class EventCreate:
    """One event inside a group, attributed to a player or a team (or nobody)."""

    event_type_id: str
    breakdown_player_id: str | None = None
    breakdown_team_id: str | None = None
    metadata: float | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "event_type_id": self.event_type_id,
            "breakdown_player_id": self.breakdown_player_id,
            "breakdown_team_id": self.breakdown_team_id,
        }
        # Omitted rather than null when no value was collected
        if self.metadata is not None:
            payload["metadata"] = self.metadata
        return payload


@dataclass(frozen=True)
class PeriodCreate:
    """A new period, created when ending the last configured one."""

    order: int
    duration_seconds: int | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"order": self.order, "duration_seconds": self.duration_seconds}
