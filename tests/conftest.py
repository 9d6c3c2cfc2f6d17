"""Shared test fixtures and helpers."""

import asyncio
from datetime import date, time
from typing import Any, Optional

import pytest

from studio_booking.scheduling.state_machine import BookingStateMachine
from studio_booking.scheduling.workflow import BookingRequestWorkflow
from studio_booking.schemas.availability_schema import (
    LunchBreak,
    StudioAvailability,
    TimeOffBlock,
    TimeOffType,
    WeeklyHours,
)
from studio_booking.schemas.booking_schema import BookableService, BookingRequest
from studio_booking.tools import availability as schedule_store
from studio_booking.tools import booking as booking_store
from studio_booking.tools.services import get_service

# 2024-03-04 is a Monday.
TODAY = date(2024, 3, 4)
WEDNESDAY = date(2024, 3, 6)
SATURDAY = date(2024, 3, 9)
SUNDAY = date(2024, 3, 10)
VACATION_START = date(2024, 3, 14)
VACATION_END = date(2024, 3, 16)


@pytest.fixture(autouse=True)
def _reset_stores():
    schedule_store.reset()
    booking_store.reset()
    yield
    schedule_store.reset()
    booking_store.reset()


def make_hours() -> list[WeeklyHours]:
    """Mon-Fri 09:00-17:00, Sat 10:00-14:00, Sun closed."""
    hours = [
        WeeklyHours(day_of_week=d, is_open=True, opens_at=time(9), closes_at=time(17))
        for d in range(1, 6)
    ]
    hours.append(WeeklyHours(day_of_week=6, is_open=True, opens_at=time(10), closes_at=time(14)))
    hours.append(WeeklyHours(day_of_week=7, is_open=False))
    return hours


@pytest.fixture
def weekly_hours() -> list[WeeklyHours]:
    return make_hours()


@pytest.fixture
def lunch_break() -> LunchBreak:
    return LunchBreak(enabled=True, start=time(12), end=time(13))


@pytest.fixture
def vacation() -> TimeOffBlock:
    return TimeOffBlock(
        start_date=VACATION_START,
        end_date=VACATION_END,
        type=TimeOffType.VACATION,
        label="Spring break",
    )


@pytest.fixture
def availability(weekly_hours, lunch_break, vacation) -> StudioAvailability:
    return StudioAvailability(hours=weekly_hours, time_off=[vacation], lunch_break=lunch_break)


@pytest.fixture
def service() -> BookableService:
    svc = get_service(3)
    assert svc is not None
    return svc


@pytest.fixture
def state_machine():
    return BookingStateMachine()


class FakeBookingBackend:
    """Records submitted requests and replays scripted outcomes.

    Outcomes are result dicts or exceptions to raise; once exhausted every
    call succeeds. Setting ``release`` holds each call until the event is set.
    """

    def __init__(self, outcomes: Optional[list[Any]] = None) -> None:
        self.requests: list[BookingRequest] = []
        self.outcomes = list(outcomes or [])
        self.release: Optional[asyncio.Event] = None

    async def submit(self, request: BookingRequest) -> dict:
        self.requests.append(request)
        if self.release is not None:
            await self.release.wait()
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return {"success": True, "booking_id": len(self.requests), "message": "ok"}


@pytest.fixture
def backend() -> FakeBookingBackend:
    return FakeBookingBackend()


def make_workflow(
    service: BookableService,
    availability: StudioAvailability,
    backend: FakeBookingBackend,
    today: date = TODAY,
) -> BookingRequestWorkflow:
    """Workflow wired to a fixed schedule, a fake backend, and a fixed today."""

    async def fetch() -> StudioAvailability:
        return availability

    return BookingRequestWorkflow(
        service,
        fetch_availability=fetch,
        submit_booking_request=backend.submit,
        today=lambda: today,
    )


@pytest.fixture
def workflow(service, availability, backend) -> BookingRequestWorkflow:
    return make_workflow(service, availability, backend)
