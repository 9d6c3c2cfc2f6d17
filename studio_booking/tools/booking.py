"""
Mock booking-request submission.

In production, this would insert a pending booking plus a message thread so
the studio sees the request in its inbox. The studio approves and schedules
the actual appointment separately.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, TypedDict

from studio_booking.config import settings
from studio_booking.prompts.templates import build_client_notes, build_request_body
from studio_booking.schemas.booking_schema import BookingRequest, BookingRequestRecord
from studio_booking.tools.services import get_service

logger = logging.getLogger(__name__)

REASON_NOT_AUTHENTICATED = "not_authenticated"
REASON_SERVICE_NOT_FOUND = "service_not_found"

DEMO_CLIENT_ID = "client-demo"


class BookingRequestResult(TypedDict, total=False):
    """Result from create_booking_request."""

    success: bool
    message: str
    reason: str
    booking_id: int


_requests: dict[int, BookingRequestRecord] = {}
_by_request_id: dict[str, int] = {}
_current_client: Optional[str] = DEMO_CLIENT_ID


def set_current_client(client_id: Optional[str]) -> None:
    """Simulate the signed-in client. None means signed out."""
    global _current_client
    _current_client = client_id


async def create_booking_request(request: BookingRequest) -> BookingRequestResult:
    """Persist a pending booking for the studio to review."""
    if _current_client is None:
        return {
            "success": False,
            "reason": REASON_NOT_AUTHENTICATED,
            "message": "Not authenticated",
        }

    existing = _by_request_id.get(request.request_id)
    if existing is not None:
        logger.info("Duplicate request %s mapped to booking %d", request.request_id, existing)
        return {
            "success": True,
            "booking_id": existing,
            "message": "Booking request already received.",
        }

    service = get_service(request.service_id)
    if service is None:
        return {
            "success": False,
            "reason": REASON_SERVICE_NOT_FOUND,
            "message": "Service not found",
        }

    booking_id = len(_requests) + 1
    record = BookingRequestRecord(
        booking_id=booking_id,
        request_id=request.request_id,
        client_id=_current_client,
        service_id=service.id,
        duration_minutes=service.duration_minutes or settings.studio.default_service_duration,
        total_in_cents=service.price_in_cents or 0,
        client_notes=build_client_notes(request.message, request.preferred_dates_label),
        thread_subject=f"Booking Request: {service.name}",
        message_body=build_request_body(
            service.name, request.message, request.preferred_dates_label
        ),
        created_at=datetime.now(timezone.utc),
    )
    _requests[booking_id] = record
    _by_request_id[request.request_id] = booking_id
    logger.info(
        "Booking request created: %d for %s (%s)",
        booking_id, service.name, request.preferred_dates_label,
    )
    return {"success": True, "booking_id": booking_id, "message": "Booking request sent."}


def get_booking_request(booking_id: int) -> Optional[BookingRequestRecord]:
    """Retrieve a pending booking by id."""
    return _requests.get(booking_id)


def list_booking_requests() -> list[BookingRequestRecord]:
    """All pending bookings in creation order."""
    return list(_requests.values())


def reset() -> None:
    """Clear all requests and sign the demo client back in. Used by test fixtures."""
    global _current_client
    _requests.clear()
    _by_request_id.clear()
    _current_client = DEMO_CLIENT_ID
