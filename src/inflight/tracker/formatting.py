"""Display formatting for altitude, speed and time remaining."""

import math
from typing import Any, Optional

from inflight.tracker.payload import as_number


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_altitude(value: Any) -> Optional[str]:
    """35000 -> '35,000 ft'. Zero is a valid altitude."""
    number = as_number(value)
    if number is None:
        return None
    return f"{_round_half_up(number):,} ft"


def format_speed(value: Any) -> Optional[str]:
    """520.4 -> '520 mph'."""
    number = as_number(value)
    if number is None:
        return None
    return f"{_round_half_up(number)} mph"


def format_time_remaining(value: Any) -> Optional[str]:
    """Render minutes as '2h 5m' or '45m'.

    Strings that are not numbers are assumed to be pre-formatted by the
    portal and are returned unchanged.
    """
    if value is None or isinstance(value, bool):
        return None
    number = as_number(value)
    if number is None:
        if isinstance(value, str):
            return value.strip() or None
        return None
    total = max(0, _round_half_up(number))
    hours, minutes = divmod(total, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
