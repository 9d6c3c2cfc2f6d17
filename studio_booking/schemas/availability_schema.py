"""Studio schedule data models: weekly hours, closures, and lunch break."""

from datetime import date, time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WeeklyHours(BaseModel):
    """Recurring open/close times for one ISO weekday (1=Monday, 7=Sunday).

    When ``is_open`` is false the times are ignored. Inverted or missing
    times are accepted here and simply produce no slots downstream.
    """
    day_of_week: int = Field(ge=1, le=7)
    is_open: bool = True
    opens_at: Optional[time] = None
    closes_at: Optional[time] = None


class TimeOffType(str, Enum):
    DAY_OFF = "day_off"
    VACATION = "vacation"


class TimeOffBlock(BaseModel):
    """Whole-day closure, inclusive on both ends."""
    start_date: date
    end_date: date
    type: TimeOffType = TimeOffType.DAY_OFF
    label: Optional[str] = None
    id: Optional[int] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class LunchBreak(BaseModel):
    """Studio-wide daily window during which no slot may start."""
    enabled: bool = False
    start: time = time(12, 0)
    end: time = time(13, 0)


class StudioAvailability(BaseModel):
    """Everything the resolver needs, fetched once per booking session."""
    hours: list[WeeklyHours] = Field(default_factory=list)
    time_off: list[TimeOffBlock] = Field(default_factory=list)
    lunch_break: Optional[LunchBreak] = None
