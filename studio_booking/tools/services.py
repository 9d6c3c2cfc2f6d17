"""Studio service catalog with durations, prices, and deposits."""

import logging
from typing import Optional

from studio_booking.schemas.booking_schema import BookableService

logger = logging.getLogger(__name__)

SERVICE_CATALOG: dict[int, BookableService] = {
    svc.id: svc
    for svc in [
        BookableService(
            id=1,
            name="Classic Lash Full Set",
            duration_minutes=120,
            price_in_cents=15000,
            deposit_in_cents=3000,
            description="One extension per natural lash for a polished, natural look.",
        ),
        BookableService(
            id=2,
            name="Volume Lash Full Set",
            duration_minutes=150,
            price_in_cents=20000,
            deposit_in_cents=4000,
            description="Handmade fans for a fuller, dramatic finish.",
        ),
        BookableService(
            id=3,
            name="Lash Fill",
            duration_minutes=60,
            price_in_cents=7500,
            description="Two to three week maintenance for an existing set.",
        ),
        BookableService(
            id=4,
            name="Brow Lamination",
            duration_minutes=45,
            price_in_cents=8500,
            description="Brushed-up, set brows including shaping and tint.",
        ),
        BookableService(
            id=5,
            name="Lash Lift & Tint",
            duration_minutes=60,
            price_in_cents=9000,
            description="Curl and darken natural lashes, no extensions.",
        ),
        BookableService(
            id=6,
            name="Bridal Consultation",
            description="Custom lash and brow plan for the wedding party.",
        ),
    ]
}


def get_all_services() -> list[BookableService]:
    """Return every bookable service in catalog order."""
    return list(SERVICE_CATALOG.values())


def get_service(service_id: int) -> Optional[BookableService]:
    """Look up a service by id. Returns None if not found."""
    return SERVICE_CATALOG.get(service_id)


def match_service(query: str) -> Optional[BookableService]:
    """Match free text to a service by name. Returns None if no match."""
    normalized = query.lower().strip()
    if not normalized:
        return None
    for svc in SERVICE_CATALOG.values():
        if svc.name.lower() == normalized:
            return svc
    for svc in SERVICE_CATALOG.values():
        name = svc.name.lower()
        if normalized in name or name in normalized:
            return svc
    return None
