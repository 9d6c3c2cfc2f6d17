"""
Offline console demo: walks a client through a booking request in the terminal.

Drives the real availability resolver and booking-request workflow against
the in-memory schedule and submission stores. No database, no network.

Usage:
    python console_demo.py
    python console_demo.py --scenario closed
    python console_demo.py --scenario retry
"""

import argparse
import asyncio
from datetime import date, time, timedelta
from typing import Optional

from studio_booking.config import settings
from studio_booking.formatting import format_date_label, format_price, format_time
from studio_booking.prompts.templates import NO_SLOTS_MESSAGE, REQUEST_SENT_MESSAGE
from studio_booking.scheduling.state_machine import InvalidTransitionError, WorkflowState
from studio_booking.scheduling.workflow import BookingRequestWorkflow, SelectionError
from studio_booking.schemas.availability_schema import LunchBreak, TimeOffType
from studio_booking.tools import availability as schedule_store
from studio_booking.tools import booking as booking_store
from studio_booking.tools.services import get_all_services, match_service

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


def _parse_time(text: str) -> Optional[time]:
    try:
        return time.fromisoformat(text.strip())
    except ValueError:
        return None


def _parse_date(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


class ConsoleSession:
    """Simulates the booking dialog in the terminal."""

    MAX_INPUT_LENGTH = 500

    def __init__(self) -> None:
        self.workflow: Optional[BookingRequestWorkflow] = None

    def studio_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Studio]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{BOLD}  Studio: {settings.studio.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def _footer(self) -> None:
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        if self.workflow is not None:
            print(f"{DIM}  State trace: {' -> '.join(self.workflow.get_state_trace())}{RESET}")
        print(f"{DIM}  Requests stored: {len(booking_store.list_booking_requests())}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    # ------------------------------------------------------------------ #
    # Scenarios
    # ------------------------------------------------------------------ #

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        runner = {
            "booking": self._scenario_booking,
            "closed": self._scenario_closed,
            "retry": self._scenario_retry,
        }.get(scenario)
        if runner is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"BOOKING REQUEST - Scenario: {scenario}")
        await runner()
        self._footer()

    async def _start(self, service_query: str) -> BookingRequestWorkflow:
        service = match_service(service_query)
        if service is None:
            raise SystemExit(f"No service matches {service_query!r}")
        self.workflow = BookingRequestWorkflow(service)
        self.studio_say(f"Let's find a time for your {service.name}.")
        await self.workflow.open()
        self.system_log(f"State: {self.workflow.state.value}")
        return self.workflow

    def _first_open_date(self, workflow: BookingRequestWorkflow) -> date:
        upcoming = [d for d in workflow.upcoming_dates() if d.slot_count > 0]
        if not upcoming:
            raise SystemExit("No bookable dates in the horizon")
        return upcoming[0].date

    async def _scenario_booking(self) -> None:
        schedule_store.save_lunch_break(LunchBreak(enabled=True, start=time(12), end=time(13)))
        workflow = await self._start("classic lash")
        day = self._first_open_date(workflow)
        self._show_dates(workflow)
        self._choose_date(workflow, day)
        self._choose_time(workflow, workflow.time_slots[0])
        workflow.set_notes("First time getting lashes, sensitive eyes.")
        await self._submit(workflow)

    async def _scenario_closed(self) -> None:
        workflow = await self._start("lash fill")
        first_open = workflow.upcoming_dates()[0].date
        schedule_store.add_time_off(
            first_open, first_open + timedelta(days=6), TimeOffType.VACATION, "Studio retreat"
        )
        self.system_log("Operator blocked the coming week; reopening to refresh availability")
        workflow.close()
        await workflow.open()
        self._choose_date(workflow, first_open)
        self._show_dates(workflow)

    async def _scenario_retry(self) -> None:
        booking_store.set_current_client(None)
        workflow = await self._start("brow lamination")
        day = self._first_open_date(workflow)
        self._choose_date(workflow, day)
        self._choose_time(workflow, workflow.time_slots[-1])
        await self._submit(workflow)
        self.system_log("Client signs in and retries with the same draft")
        booking_store.set_current_client(booking_store.DEMO_CLIENT_ID)
        await self._submit(workflow)

    # ------------------------------------------------------------------ #
    # Interactive mode
    # ------------------------------------------------------------------ #

    async def run(self) -> None:
        self._banner("BOOKING REQUEST - Console Demo (type 'quit' to exit)")
        services = get_all_services()
        for svc in services:
            print(f"  {svc.id}. {svc.name} ({format_price(svc.price_in_cents)})")
        choice = input(f"\n{BLUE}[Client] Service: {RESET}").strip()
        if choice.lower() in ("quit", "exit", "q"):
            return
        service = next((s for s in services if str(s.id) == choice), None) or match_service(choice)
        if service is None:
            self.studio_say("Sorry, I couldn't find that service.")
            return

        self.workflow = BookingRequestWorkflow(service)
        await self.workflow.open()
        self._show_dates(self.workflow)

        while self.workflow.state != WorkflowState.SUBMITTED:
            user_input = input(f"\n{BLUE}[Client] {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                self.workflow.close()
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.studio_say("That was quite long. Could you keep it brief for me?")
                continue
            await self._process_input(user_input)
            self.system_log(f"State: {self.workflow.state.value}")

        self._footer()

    async def _process_input(self, text: str) -> None:
        workflow = self.workflow
        if text.lower() == "back":
            try:
                workflow.back()
            except InvalidTransitionError:
                self.studio_say("There's nothing to go back to.")
            return

        state = workflow.state
        if state == WorkflowState.SELECTING_DATE:
            day = _parse_date(text)
            if day is None:
                self.studio_say("Please enter a date as YYYY-MM-DD.")
                return
            self._choose_date(workflow, day)
        elif state == WorkflowState.SELECTING_TIME:
            slot = _parse_time(text)
            if slot is None:
                self.studio_say("Please enter a time as HH:MM.")
                return
            self._choose_time(workflow, slot)
        elif state == WorkflowState.CONFIRMING:
            if text.lower() in ("send", "yes", "submit"):
                await self._submit(workflow)
            else:
                workflow.set_notes(text)
                self.studio_say("Noted. Type 'send' to send your request.")

    # ------------------------------------------------------------------ #
    # Steps
    # ------------------------------------------------------------------ #

    def _show_dates(self, workflow: BookingRequestWorkflow) -> None:
        upcoming = workflow.upcoming_dates(horizon_days=14)
        if not upcoming:
            self.studio_say("There are no available dates right now.")
            return
        options = ", ".join(
            f"{d.date.isoformat()} ({format_date_label(d.date)})" for d in upcoming[:5]
        )
        self.studio_say(f"Pick a date. Next openings: {options}")

    def _choose_date(self, workflow: BookingRequestWorkflow, day: date) -> None:
        print(f"\n{BLUE}[Client] {RESET}{day.isoformat()}")
        try:
            workflow.choose_date(day)
        except SelectionError as e:
            self.studio_say(f"Sorry, {e}.")
            return
        slots = workflow.time_slots
        if not slots:
            self.studio_say(NO_SLOTS_MESSAGE)
            return
        labels = ", ".join(format_time(s) for s in slots)
        self.studio_say(f"{format_date_label(day)}: {labels}")

    def _choose_time(self, workflow: BookingRequestWorkflow, slot: time) -> None:
        print(f"\n{BLUE}[Client] {RESET}{format_time(slot)}")
        try:
            workflow.choose_time(slot)
        except SelectionError as e:
            self.studio_say(f"Sorry, {e}.")
            return
        self.studio_say(workflow.confirmation_summary())

    async def _submit(self, workflow: BookingRequestWorkflow) -> None:
        self.system_log("Sending request...")
        if await workflow.submit():
            self.studio_say(REQUEST_SENT_MESSAGE)
        elif workflow.draft.error:
            print(f"{YELLOW}{workflow.draft.error}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline booking request demo")
    parser.add_argument(
        "--scenario",
        choices=["booking", "closed", "retry"],
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        asyncio.run(session.run_scenario(args.scenario))
    else:
        asyncio.run(session.run())


if __name__ == "__main__":
    main()
