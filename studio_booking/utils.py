"""Shared wall-clock helpers used across the booking core."""

from datetime import time
from typing import Optional

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: time) -> int:
    """Minutes since midnight, ignoring seconds.

    Examples:
        >>> to_minutes(time(9, 30))
        570
    """
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> Optional[time]:
    """Inverse of ``to_minutes``. Returns None outside a single day.

    Examples:
        >>> from_minutes(810)
        datetime.time(13, 30)
    """
    if not 0 <= minutes < MINUTES_PER_DAY:
        return None
    return time(minutes // 60, minutes % 60)
