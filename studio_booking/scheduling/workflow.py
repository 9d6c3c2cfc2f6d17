"""
Booking-request workflow: date -> time -> confirm -> submit.

One instance per client session. It owns its draft exclusively, so no
locking is needed; the only suspension points are the availability fetch
in ``open()`` and the collaborator call in ``submit()``.

Usage:
    workflow = BookingRequestWorkflow(service)
    await workflow.open()
    workflow.choose_date(day)
    workflow.choose_time(workflow.time_slots[0])
    workflow.set_notes("First time getting lashes")
    await workflow.submit()
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Awaitable, Callable, Mapping, Optional
from zoneinfo import ZoneInfo

from studio_booking.config import settings
from studio_booking.formatting import (
    format_date_label,
    format_time,
    preferred_dates_label,
)
from studio_booking.logging_context import get_session_logger, set_session_id
from studio_booking.prompts.templates import (
    GENERIC_SUBMIT_ERROR,
    SIGN_IN_PROMPT,
    build_confirmation_summary,
    build_fallback_message,
)
from studio_booking.scheduling.resolver import AvailabilityResolver, DateAvailability
from studio_booking.scheduling.state_machine import (
    BookingStateMachine,
    InvalidTransitionError,
    TransitionTrigger,
    WorkflowState,
)
from studio_booking.schemas.availability_schema import StudioAvailability
from studio_booking.schemas.booking_schema import BookableService, BookingRequest
from studio_booking.tools.availability import get_studio_availability
from studio_booking.tools.booking import REASON_NOT_AUTHENTICATED, create_booking_request

logger = get_session_logger(__name__)

FetchAvailability = Callable[[], Awaitable[StudioAvailability]]
SubmitBookingRequest = Callable[[BookingRequest], Awaitable[Mapping[str, Any]]]


class SelectionError(ValueError):
    """Raised when a chosen date, time, or note is not acceptable."""


def studio_today() -> date:
    """Today's date in the studio's local time zone."""
    return datetime.now(ZoneInfo(settings.studio.timezone)).date()


@dataclass
class BookingRequestDraft:
    """Ephemeral state of one request, discarded on close."""

    service: BookableService
    selected_date: Optional[date] = None
    selected_time: Optional[time] = None
    notes: str = ""
    error: Optional[str] = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)


class BookingRequestWorkflow:
    """
    Drives a client through a single booking request.

    The state machine enforces step order; this class owns the draft, asks
    the resolver for dates and slots, and maps collaborator outcomes onto
    transitions. Resubmission is blocked while in SUBMITTING.
    """

    def __init__(
        self,
        service: BookableService,
        fetch_availability: FetchAvailability = get_studio_availability,
        submit_booking_request: SubmitBookingRequest = create_booking_request,
        today: Callable[[], date] = studio_today,
    ) -> None:
        self._service = service
        self._fetch_availability = fetch_availability
        self._submit_booking_request = submit_booking_request
        self._today = today
        self._machine = BookingStateMachine()
        self._draft = BookingRequestDraft(service=service)
        self._resolver: Optional[AvailabilityResolver] = None
        self._time_slots: list[time] = []
        self._generation = 0
        self.load_failed = False
        self.session_id = f"BRQ-{uuid.uuid4().hex[:6]}"

    @property
    def state(self) -> WorkflowState:
        return self._machine.current_state

    @property
    def draft(self) -> BookingRequestDraft:
        return self._draft

    @property
    def service(self) -> BookableService:
        return self._service

    @property
    def is_loading(self) -> bool:
        """True until the schedule fetch for this opening has resolved."""
        return self._resolver is None

    @property
    def time_slots(self) -> list[time]:
        return list(self._time_slots)

    def get_state_trace(self) -> list[str]:
        return self._machine.get_state_trace()

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    async def open(self) -> None:
        """Fetch the studio schedule. Failures leave nothing selectable."""
        set_session_id(self.session_id)
        generation = self._generation
        self.load_failed = False
        failed = False
        try:
            availability = await self._fetch_availability()
        except Exception:
            logger.warning("Availability fetch failed; no dates are selectable", exc_info=True)
            availability = StudioAvailability()
            failed = True

        if generation != self._generation:
            logger.debug("Workflow closed while loading availability; snapshot dropped")
            return

        self.load_failed = failed
        self._resolver = AvailabilityResolver(availability)
        logger.info(
            "Availability loaded for %s: %d weekday entries, %d closures",
            self._service.name, len(availability.hours), len(availability.time_off),
        )

    # ------------------------------------------------------------------ #
    # Date and time selection
    # ------------------------------------------------------------------ #

    def is_date_selectable(self, day: date) -> bool:
        if self._resolver is None:
            return False
        return self._resolver.is_date_selectable(day, self._today())

    def upcoming_dates(self, horizon_days: Optional[int] = None) -> list[DateAvailability]:
        """Selectable dates from today, for calendar and list surfaces."""
        if self._resolver is None:
            return []
        horizon = horizon_days
        if horizon is None:
            horizon = settings.workflow.booking_horizon_days
        return self._resolver.upcoming_dates(self._today(), horizon)

    def choose_date(self, day: date) -> None:
        """Pick a date; any previously chosen time is cleared."""
        self._ensure_allowed(TransitionTrigger.DATE_CHOSEN)
        if self._resolver is None or not self.is_date_selectable(day):
            raise SelectionError(f"{day.isoformat()} is not available for booking")

        self._draft.selected_date = day
        self._draft.selected_time = None
        self._time_slots = self._resolver.slots_for(day)
        self._machine.transition(TransitionTrigger.DATE_CHOSEN)
        logger.debug("Date chosen: %s (%d slots)", day.isoformat(), len(self._time_slots))

    def choose_time(self, slot: time) -> None:
        self._ensure_allowed(TransitionTrigger.TIME_CHOSEN)
        if slot not in self._time_slots:
            raise SelectionError(f"{slot:%H:%M} is not an available slot")

        self._draft.selected_time = slot
        self._machine.transition(TransitionTrigger.TIME_CHOSEN)
        logger.debug("Time chosen: %s", slot.strftime("%H:%M"))

    def back(self) -> WorkflowState:
        """Step back one screen.

        Leaving time selection discards the chosen time. Leaving confirmation
        keeps the date and leaves the previous time highlighted only; a new
        ``choose_time`` is still needed to return to confirmation.
        """
        if self.state == WorkflowState.SELECTING_TIME:
            self._draft.selected_time = None
        return self._machine.transition(TransitionTrigger.BACK)

    def set_notes(self, notes: str) -> None:
        if self.state != WorkflowState.CONFIRMING:
            raise InvalidTransitionError(
                f"Notes can only be edited while confirming, not '{self.state.value}'"
            )
        if len(notes) > settings.workflow.max_notes_length:
            raise SelectionError(
                f"Notes are limited to {settings.workflow.max_notes_length} characters"
            )
        self._draft.notes = notes

    # ------------------------------------------------------------------ #
    # Confirmation and submission
    # ------------------------------------------------------------------ #

    def build_request(self) -> BookingRequest:
        """Assemble the collaborator payload from the current draft."""
        draft = self._draft
        if draft.selected_date is None or draft.selected_time is None:
            raise InvalidTransitionError("A date and time must be chosen before submitting")
        label = preferred_dates_label(draft.selected_date, draft.selected_time)
        message = draft.notes.strip() or build_fallback_message(self._service.name, label)
        return BookingRequest(
            service_id=self._service.id,
            message=message,
            preferred_dates_label=label,
            request_id=draft.request_id,
        )

    def confirmation_summary(self) -> str:
        draft = self._draft
        if draft.selected_date is None or draft.selected_time is None:
            raise InvalidTransitionError("Nothing to confirm until a date and time are chosen")
        return build_confirmation_summary(
            service_name=self._service.name,
            date_label=format_date_label(draft.selected_date),
            time_label=format_time(draft.selected_time),
            duration_minutes=self._service.duration_minutes,
            price_in_cents=self._service.price_in_cents,
            deposit_in_cents=self._service.deposit_in_cents,
        )

    async def submit(self) -> bool:
        """
        Send the request exactly once.

        Returns True when this session reached SUBMITTED. A call made while
        another submission is outstanding is ignored and returns False.

        Raises:
            InvalidTransitionError: If called before reaching confirmation.
        """
        if self.state == WorkflowState.SUBMITTING:
            logger.debug("Submit ignored: a request is already in flight")
            return False

        self._machine.transition(TransitionTrigger.SUBMIT)
        set_session_id(self.session_id)
        generation = self._generation
        draft = self._draft
        draft.error = None
        request = self.build_request()
        logger.info(
            "Submitting booking request %s for %s (%s)",
            request.request_id, self._service.name, request.preferred_dates_label,
        )

        try:
            result = await self._submit_booking_request(request)
        except Exception as exc:
            logger.exception("Booking request submission raised")
            reason = REASON_NOT_AUTHENTICATED if "not authenticated" in str(exc).lower() else ""
            result = {"success": False, "reason": reason, "message": str(exc)}

        if generation != self._generation:
            logger.warning(
                "Workflow closed while submitting; discarding result for request %s (success=%s)",
                request.request_id, bool(result.get("success")),
            )
            return False

        if result.get("success"):
            self._machine.transition(TransitionTrigger.SUBMIT_SUCCEEDED)
            logger.info("Booking request %s accepted", request.request_id)
            return True

        if result.get("reason") == REASON_NOT_AUTHENTICATED:
            draft.error = SIGN_IN_PROMPT
        else:
            draft.error = GENERIC_SUBMIT_ERROR
        self._machine.transition(TransitionTrigger.SUBMIT_FAILED)
        logger.warning(
            "Booking request %s failed: %s", request.request_id, result.get("message", "")
        )
        return False

    def close(self) -> None:
        """Discard the draft and return to a fresh, unloaded SELECTING_DATE."""
        if self.state == WorkflowState.SUBMITTING:
            logger.warning("Closing with a submission in flight; its result will be ignored")
        self._generation += 1
        self._machine.reset()
        self._draft = BookingRequestDraft(service=self._service)
        self._resolver = None
        self._time_slots = []
        self.load_failed = False

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _ensure_allowed(self, trigger: TransitionTrigger) -> None:
        if trigger not in self._machine.get_valid_triggers():
            valid = [t.value for t in self._machine.get_valid_triggers()]
            raise InvalidTransitionError(
                f"No valid transition from '{self.state.value}' "
                f"with trigger '{trigger.value}'. Valid triggers: {valid}"
            )
