"""
Game-state reconstruction from previously recorded event groups.

Each lineup group is a complete replacement of the on-court set, never a
delta, so the current lineup is simply the latest lineup group at or before
the requested time.
"""

import math
from collections.abc import Iterable, Sequence

from stattaker.domain.models import (
    SYSTEM_PERIOD_END_ID,
    EventGroup,
    Phase,
    Player,
    WorkflowDefinition,
    find_lineup_workflow,
)


def latest_lineup_group(
    event_groups: Iterable[EventGroup],
    lineup_workflow_id: str,
    at_timestamp: float,
) -> EventGroup | None:
    """Latest lineup group with video_timestamp <= at_timestamp.

    On equal timestamps the group appearing later in ``event_groups`` wins;
    stores return groups in creation order, so that is the most recent entry.
    """
    latest: EventGroup | None = None
    for group in event_groups:
        if group.workflow_id != lineup_workflow_id:
            continue
        if group.video_timestamp > at_timestamp:
            continue
        if latest is None or group.video_timestamp >= latest.video_timestamp:
            latest = group
    return latest


def get_players_currently_in_game(
    event_groups: Iterable[EventGroup],
    lineup_workflow_id: str,
    at_timestamp: float,
) -> list[str]:
    """
    Player ids on the field at a point in the video.

    Args:
        event_groups: Every event group of the breakdown, soft-deleted events included
        lineup_workflow_id: Id of the system-reserved lineup workflow
        at_timestamp: Video time in seconds

    Returns:
        Ids from the latest lineup group's live events; empty if no lineup
        has been recorded yet
    """
    group = latest_lineup_group(event_groups, lineup_workflow_id, at_timestamp)
    if group is None:
        return []
    return [
        e.breakdown_player_id
        for e in group.active_events()
        if e.breakdown_player_id is not None
    ]


def starters_recorded(
    event_groups: Iterable[EventGroup], lineup_workflow_id: str
) -> bool:
    """True when a lineup group exists within the first second of video."""
    return any(
        g.workflow_id == lineup_workflow_id and g.video_timestamp < 1
        for g in event_groups
    )


def initial_phase(
    teams_count: int,
    workflows: Sequence[WorkflowDefinition],
    event_groups: Sequence[EventGroup],
) -> Phase:
    """Phase a new tagging session opens in: STARTERS until starters exist."""
    if teams_count == 0:
        return Phase.IDLE
    lineup = find_lineup_workflow(workflows)
    if lineup is None:
        return Phase.IDLE
    if starters_recorded(event_groups, lineup.id):
        return Phase.IDLE
    return Phase.STARTERS


def count_period_ends(event_groups: Iterable[EventGroup]) -> int:
    """Number of groups holding a live period-end marker."""
    return sum(
        1
        for g in event_groups
        if any(e.event_type_id == SYSTEM_PERIOD_END_ID for e in g.active_events())
    )


def _jersey_key(player: Player) -> tuple[float, str]:
    jersey = (player.jersey_number or "").strip()
    number = int(jersey) if jersey.isdecimal() else math.inf
    return (number, player.name or "")


def sort_by_jersey(players: Iterable[Player]) -> list[Player]:
    """Order by numeric jersey number (missing last), then name."""
    return sorted(players, key=_jersey_key)


def split_roster(
    players: Iterable[Player], in_game_ids: Iterable[str]
) -> tuple[list[Player], list[Player]]:
    """Split players into (in game, bench), preserving input order."""
    in_game = set(in_game_ids)
    on_field: list[Player] = []
    bench: list[Player] = []
    for player in players:
        (on_field if player.id in in_game else bench).append(player)
    return on_field, bench
