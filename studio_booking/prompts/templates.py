"""Client-facing text for the booking-request flow."""

from typing import Optional

from studio_booking.formatting import format_price

SIGN_IN_PROMPT = "Please sign in to request a booking."
GENERIC_SUBMIT_ERROR = "Something went wrong sending your request. Please try again."
NO_SLOTS_MESSAGE = "No available slots for this date."
REQUEST_SENT_MESSAGE = (
    "Request sent! We'll review your request and reach out soon to confirm "
    "your appointment. Check your messages for updates."
)


def build_fallback_message(service_name: str, preferred_dates: str) -> str:
    """Message used when the client leaves the notes field empty."""
    return f"I'd like to book {service_name} on {preferred_dates}."


def build_request_body(service_name: str, message: str, preferred_dates: Optional[str]) -> str:
    """Opening message of the studio inbox thread for a new request."""
    if preferred_dates:
        return (
            f"Hi! I'd love to book a {service_name}.\n\n"
            f"Preferred dates: {preferred_dates}\n\n{message}"
        )
    return f"Hi! I'd love to book a {service_name}.\n\n{message}"


def build_client_notes(message: str, preferred_dates: Optional[str]) -> str:
    """Notes stored on the pending booking for the studio to review."""
    if preferred_dates:
        return f"Preferred dates: {preferred_dates}\n\n{message}"
    return message


def build_confirmation_summary(
    service_name: str,
    date_label: str,
    time_label: str,
    duration_minutes: Optional[int],
    price_in_cents: Optional[int],
    deposit_in_cents: Optional[int],
) -> str:
    """Read-back of the request before it is sent."""
    lines = [
        f"  Service: {service_name}",
        f"  Date: {date_label}",
        f"  Time: {time_label}",
    ]
    if duration_minutes:
        lines.append(f"  Duration: {duration_minutes} min")
    lines.append(f"  Price: {format_price(price_in_cents)}")
    summary = "Confirm your request:\n" + "\n".join(lines)
    if deposit_in_cents:
        summary += (
            f"\n\nA {format_price(deposit_in_cents)} deposit is required "
            "to confirm this booking."
        )
    return summary
