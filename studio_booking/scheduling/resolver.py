"""
Availability resolver: weekly hours + closures + lunch break -> dates and slots.

Everything here is a pure function of its arguments. Calendar surfaces probe
many candidate dates per render, so nothing is cached and nothing raises on
malformed schedules; bad configuration degrades to "no availability".

Usage:
    resolver = AvailabilityResolver(availability)
    if resolver.is_date_selectable(day, today):
        slots = resolver.slots_for(day)
"""

import logging
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Iterable, Optional

from studio_booking.schemas.availability_schema import (
    LunchBreak,
    StudioAvailability,
    TimeOffBlock,
    WeeklyHours,
)
from studio_booking.utils import from_minutes, to_minutes

logger = logging.getLogger(__name__)

SLOT_STRIDE_MINUTES = 30


@dataclass(frozen=True)
class DateAvailability:
    """Summary of one selectable date for calendar and CLI listings."""

    date: date
    slot_count: int


def hours_for_weekday(hours: Iterable[WeeklyHours], iso_weekday: int) -> Optional[WeeklyHours]:
    """Return the first entry for an ISO weekday (1=Monday..7=Sunday)."""
    for entry in hours:
        if entry.day_of_week == iso_weekday:
            return entry
    return None


def is_blocked(day: date, time_off: Iterable[TimeOffBlock]) -> bool:
    """True when any time-off block covers ``day`` (inclusive both ends)."""
    return any(block.covers(day) for block in time_off)


def is_date_selectable(
    day: date,
    today: date,
    hours: Iterable[WeeklyHours],
    time_off: Iterable[TimeOffBlock],
) -> bool:
    """Whether a client may pick ``day`` on the booking calendar.

    Past dates, weekdays that are closed or missing from the schedule, and
    dates inside a time-off block are each independently disqualifying.
    """
    if day < today:
        return False
    entry = hours_for_weekday(hours, day.isoweekday())
    if entry is None or not entry.is_open:
        return False
    if is_blocked(day, time_off):
        return False
    return True


def generate_slots(
    opens_at: time,
    closes_at: time,
    lunch_break: Optional[LunchBreak] = None,
) -> list[time]:
    """
    Enumerate 30-minute start times between opening and closing.

    Slots step from ``opens_at`` and are kept while a full stride fits before
    ``closes_at``, so closing time is never offered. A close that is not on a
    stride boundary drops the trailing partial window. When the lunch break
    is enabled, slots whose start minute falls in ``[start, end)`` are
    dropped. Service duration is not considered.

    Examples:
        >>> generate_slots(time(9), time(9, 15))
        []
        >>> generate_slots(time(16), time(17, 45))[-1]
        datetime.time(17, 0)
    """
    open_min = to_minutes(opens_at)
    close_min = to_minutes(closes_at)

    lunch_start = lunch_end = -1
    if lunch_break is not None and lunch_break.enabled:
        lunch_start = to_minutes(lunch_break.start)
        lunch_end = to_minutes(lunch_break.end)

    slots: list[time] = []
    minute = open_min
    while minute + SLOT_STRIDE_MINUTES <= close_min:
        if not lunch_start <= minute < lunch_end:
            slot = from_minutes(minute)
            if slot is not None:
                slots.append(slot)
        minute += SLOT_STRIDE_MINUTES
    return slots


def slots_for_date(day: date, availability: StudioAvailability) -> list[time]:
    """Slots for ``day`` from its weekday hours; closed or incomplete days give none."""
    entry = hours_for_weekday(availability.hours, day.isoweekday())
    if entry is None or not entry.is_open:
        return []
    if entry.opens_at is None or entry.closes_at is None:
        logger.debug("Weekday %d is open but missing times", entry.day_of_week)
        return []
    return generate_slots(entry.opens_at, entry.closes_at, availability.lunch_break)


class AvailabilityResolver:
    """Resolver bound to one fetched ``StudioAvailability`` snapshot."""

    def __init__(self, availability: StudioAvailability) -> None:
        self._availability = availability

    @property
    def availability(self) -> StudioAvailability:
        return self._availability

    def is_date_selectable(self, day: date, today: date) -> bool:
        return is_date_selectable(
            day, today, self._availability.hours, self._availability.time_off
        )

    def slots_for(self, day: date) -> list[time]:
        return slots_for_date(day, self._availability)

    def upcoming_dates(self, today: date, horizon_days: int) -> list[DateAvailability]:
        """Selectable dates from ``today`` through ``horizon_days - 1`` days ahead."""
        results = []
        for offset in range(horizon_days):
            day = today + timedelta(days=offset)
            if self.is_date_selectable(day, today):
                results.append(DateAvailability(date=day, slot_count=len(self.slots_for(day))))
        return results
