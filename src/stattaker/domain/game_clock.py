"""Game clock parsing and timestamp display."""

import math

from stattaker.domain.exceptions import InvalidGameClock


def _parse_part(raw: str, name: str) -> int:
    text = raw.strip()
    if not text:
        return 0
    try:
        value = int(text)
    except ValueError as e:
        raise InvalidGameClock(f"Game clock {name} must be a whole number: {raw!r}") from e
    if value < 0:
        raise InvalidGameClock(f"Game clock {name} cannot be negative: {value}")
    return value


def parse_game_clock(minutes: str, seconds: str) -> int | None:
    """
    Convert the MM and SS fields into seconds.

    Args:
        minutes: Minutes as typed (may be blank)
        seconds: Seconds as typed (may be blank)

    Returns:
        Total seconds, or None when both fields are blank

    Raises:
        InvalidGameClock: If a field is not a non-negative integer or seconds > 59
    """
    if not minutes.strip() and not seconds.strip():
        return None
    mins = _parse_part(minutes, "minutes")
    secs = _parse_part(seconds, "seconds")
    if secs > 59:
        raise InvalidGameClock(f"Game clock seconds must be 0-59, got {secs}")
    return mins * 60 + secs


def format_timestamp(seconds: float) -> str:
    """Render seconds as m:ss."""
    m = math.floor(seconds / 60)
    s = math.floor(seconds % 60)
    return f"{m}:{s:02d}"
