"""
Mock studio schedule store.

In production, this would read the studio-wide business hours, time-off
rows, and the lunch-break setting from the database. Operator edits go
through the save/add/delete helpers; clients only ever read a snapshot via
``get_studio_availability``.
"""

import logging
from datetime import date, time
from typing import Optional

from studio_booking.schemas.availability_schema import (
    LunchBreak,
    StudioAvailability,
    TimeOffBlock,
    TimeOffType,
    WeeklyHours,
)

logger = logging.getLogger(__name__)

DEFAULT_HOURS: list[WeeklyHours] = [
    WeeklyHours(day_of_week=1, is_open=True, opens_at=time(9), closes_at=time(18)),
    WeeklyHours(day_of_week=2, is_open=True, opens_at=time(9), closes_at=time(18)),
    WeeklyHours(day_of_week=3, is_open=True, opens_at=time(9), closes_at=time(18)),
    WeeklyHours(day_of_week=4, is_open=True, opens_at=time(9), closes_at=time(18)),
    WeeklyHours(day_of_week=5, is_open=True, opens_at=time(9), closes_at=time(18)),
    WeeklyHours(day_of_week=6, is_open=True, opens_at=time(9), closes_at=time(16)),
    WeeklyHours(day_of_week=7, is_open=False),
]

_hours: list[WeeklyHours] = [h.model_copy() for h in DEFAULT_HOURS]
_time_off: dict[int, TimeOffBlock] = {}
_lunch_break: Optional[LunchBreak] = None
_next_time_off_id = 1


async def get_studio_availability() -> StudioAvailability:
    """Snapshot of weekly hours (Mon->Sun), closures, and lunch break."""
    return StudioAvailability(
        hours=sorted((h.model_copy() for h in _hours), key=lambda h: h.day_of_week),
        time_off=[block.model_copy() for block in _time_off.values()],
        lunch_break=_lunch_break.model_copy() if _lunch_break else None,
    )


def get_business_hours() -> list[WeeklyHours]:
    """Return the weekly schedule sorted Monday to Sunday."""
    return sorted((h.model_copy() for h in _hours), key=lambda h: h.day_of_week)


def save_business_hours(days: list[WeeklyHours]) -> None:
    """Replace the weekly schedule. All seven ISO days must be supplied."""
    global _hours
    seen = sorted(d.day_of_week for d in days)
    if seen != list(range(1, 8)):
        raise ValueError(f"Business hours must cover days 1-7 exactly once, got {seen}")
    for d in days:
        if not d.is_open:
            continue
        if d.opens_at is None or d.closes_at is None:
            raise ValueError(f"Day {d.day_of_week} is open but missing opening or closing time")
        if d.opens_at >= d.closes_at:
            raise ValueError(
                f"Day {d.day_of_week} opens at {d.opens_at:%H:%M} "
                f"but closes at {d.closes_at:%H:%M}"
            )
    _hours = [d.model_copy() for d in days]
    logger.info("Business hours saved: %d open days", sum(1 for d in days if d.is_open))


def add_time_off(
    start_date: date,
    end_date: date,
    kind: TimeOffType = TimeOffType.DAY_OFF,
    label: Optional[str] = None,
) -> TimeOffBlock:
    """Create a studio-wide closure. Single days have start == end."""
    global _next_time_off_id
    if end_date < start_date:
        raise ValueError(
            f"Time off ends ({end_date.isoformat()}) before it starts ({start_date.isoformat()})"
        )
    block = TimeOffBlock(
        id=_next_time_off_id,
        start_date=start_date,
        end_date=end_date,
        type=kind,
        label=label,
    )
    _time_off[block.id] = block
    _next_time_off_id += 1
    logger.info("Time off added: %s to %s (%s)", start_date, end_date, kind.value)
    return block


def delete_time_off(block_id: int) -> None:
    """Remove a closure by id. Unknown ids are ignored."""
    if _time_off.pop(block_id, None) is not None:
        logger.info("Time off removed: %d", block_id)


def get_lunch_break() -> Optional[LunchBreak]:
    """Return the lunch break, or None if it has never been saved."""
    return _lunch_break.model_copy() if _lunch_break else None


def save_lunch_break(lunch_break: LunchBreak) -> None:
    """Upsert the studio-wide lunch break."""
    global _lunch_break
    if lunch_break.enabled and lunch_break.start >= lunch_break.end:
        raise ValueError(
            f"Lunch break must start before it ends, got "
            f"{lunch_break.start:%H:%M}-{lunch_break.end:%H:%M}"
        )
    _lunch_break = lunch_break.model_copy()
    logger.info("Lunch break saved (enabled=%s)", lunch_break.enabled)


def reset() -> None:
    """Restore the default schedule. Used by test fixtures for isolation."""
    global _hours, _lunch_break, _next_time_off_id
    _hours = [h.model_copy() for h in DEFAULT_HOURS]
    _time_off.clear()
    _lunch_break = None
    _next_time_off_id = 1
