"""
Display labels shared by the workflow, the collaborator payload and the CLI.

Abbreviations are spelled out here instead of going through strftime so the
output does not depend on the process locale.
"""

from datetime import date, time
from typing import Optional

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_date_label(day: date) -> str:
    """Format a date as ``"Wed, Mar 6"``."""
    return f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}"


def format_time(value: time) -> str:
    """Compact 12-hour form, minutes omitted when zero.

    Examples:
        >>> format_time(time(9, 0))
        '9am'
        >>> format_time(time(13, 30))
        '1:30pm'
        >>> format_time(time(0, 0))
        '12am'
    """
    suffix = "pm" if value.hour >= 12 else "am"
    hour = value.hour % 12 or 12
    if value.minute == 0:
        return f"{hour}{suffix}"
    return f"{hour}:{value.minute:02d}{suffix}"


def preferred_dates_label(day: date, slot: time) -> str:
    """The human-readable "date at time" label sent with every request."""
    return f"{format_date_label(day)} at {format_time(slot)}"


def format_price(cents: Optional[int]) -> str:
    """Whole-dollar price, or a quote prompt for price-on-request services."""
    if cents is None:
        return "Contact for quote"
    return f"${cents / 100:.0f}"
