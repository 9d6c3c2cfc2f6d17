"""
Command-line entry point.

Usage:
    Console demo:       python main.py console [--scenario booking|closed|retry]
    Availability list:  python main.py availability [--days 14]
"""

import argparse
import asyncio
from typing import Optional

from studio_booking.config import settings
from studio_booking.formatting import format_date_label, format_time
from studio_booking.scheduling.resolver import AvailabilityResolver
from studio_booking.scheduling.workflow import studio_today
from studio_booking.tools.availability import get_studio_availability


async def _print_availability(days: int) -> None:
    """Print selectable dates and their slots for the coming days."""
    resolver = AvailabilityResolver(await get_studio_availability())
    today = studio_today()
    upcoming = resolver.upcoming_dates(today, days)
    print(f"{settings.studio.name}: {len(upcoming)} bookable dates in the next {days} days")
    for entry in upcoming:
        slots = resolver.slots_for(entry.date)
        labels = ", ".join(format_time(s) for s in slots) or "no slots"
        print(f"  {format_date_label(entry.date)}: {labels}")


def _run_console_mode(scenario: Optional[str]) -> None:
    """Start the offline console demo."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    if scenario:
        asyncio.run(session.run_scenario(scenario))
    else:
        asyncio.run(session.run())


def main() -> None:
    parser = argparse.ArgumentParser(description=settings.app_name)
    sub = parser.add_subparsers(dest="command", required=True)

    console = sub.add_parser("console", help="Walk through a booking request")
    console.add_argument("--scenario", choices=["booking", "closed", "retry"], default=None)

    avail = sub.add_parser("availability", help="List upcoming bookable dates")
    avail.add_argument("--days", type=int, default=settings.workflow.booking_horizon_days)

    args = parser.parse_args()
    if args.command == "console":
        _run_console_mode(args.scenario)
    else:
        asyncio.run(_print_availability(args.days))


if __name__ == "__main__":
    main()
