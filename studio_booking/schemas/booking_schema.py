"""Service and booking-request data models."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookableService(BaseModel):
    """A service clients can request. Duration is informational only."""
    id: int
    name: str
    duration_minutes: Optional[int] = None
    price_in_cents: Optional[int] = None
    deposit_in_cents: Optional[int] = None
    description: str = ""


class BookingRequest(BaseModel):
    """Payload handed to the submission collaborator."""
    service_id: int
    message: str
    preferred_dates_label: str
    request_id: str = Field(default_factory=lambda: uuid.uuid4().hex)


class BookingRequestRecord(BaseModel):
    """Pending booking persisted by the collaborator, awaiting studio approval."""
    booking_id: int
    request_id: str
    client_id: str
    service_id: int
    status: str = "pending"
    duration_minutes: int
    total_in_cents: int = 0
    client_notes: str
    thread_subject: str
    message_body: str
    created_at: Optional[datetime] = None
