"""Tests for display labels and client-facing text."""

from datetime import date, time

from studio_booking.formatting import (
    format_date_label,
    format_price,
    format_time,
    preferred_dates_label,
)
from studio_booking.prompts.templates import (
    build_client_notes,
    build_confirmation_summary,
    build_fallback_message,
    build_request_body,
)


class TestDateAndTimeLabels:
    def test_date_label(self):
        assert format_date_label(date(2024, 3, 6)) == "Wed, Mar 6"

    def test_date_label_sunday_december(self):
        assert format_date_label(date(2024, 12, 29)) == "Sun, Dec 29"

    def test_whole_hour_morning(self):
        assert format_time(time(9)) == "9am"

    def test_half_hour_afternoon(self):
        assert format_time(time(13, 30)) == "1:30pm"

    def test_noon_and_midnight(self):
        assert format_time(time(12)) == "12pm"
        assert format_time(time(0)) == "12am"

    def test_late_evening(self):
        assert format_time(time(23, 30)) == "11:30pm"

    def test_preferred_dates_label(self):
        assert preferred_dates_label(date(2024, 3, 6), time(13, 30)) == "Wed, Mar 6 at 1:30pm"


class TestPrice:
    def test_whole_dollars(self):
        assert format_price(7500) == "$75"

    def test_zero(self):
        assert format_price(0) == "$0"

    def test_quote_when_unpriced(self):
        assert format_price(None) == "Contact for quote"


class TestRequestText:
    def test_fallback_message(self):
        assert (
            build_fallback_message("Lash Fill", "Wed, Mar 6 at 1:30pm")
            == "I'd like to book Lash Fill on Wed, Mar 6 at 1:30pm."
        )

    def test_client_notes_with_dates(self):
        assert build_client_notes("See you soon", "Wed, Mar 6 at 9am") == (
            "Preferred dates: Wed, Mar 6 at 9am\n\nSee you soon"
        )

    def test_client_notes_without_dates(self):
        assert build_client_notes("See you soon", None) == "See you soon"

    def test_request_body(self):
        body = build_request_body("Lash Fill", "See you soon", "Wed, Mar 6 at 9am")
        assert body.startswith("Hi! I'd love to book a Lash Fill.")
        assert "Preferred dates: Wed, Mar 6 at 9am" in body
        assert body.endswith("See you soon")


class TestConfirmationSummary:
    def test_priced_service_without_deposit(self):
        summary = build_confirmation_summary("Lash Fill", "Wed, Mar 6", "9am", 60, 7500, None)
        assert summary.splitlines() == [
            "Confirm your request:",
            "  Service: Lash Fill",
            "  Date: Wed, Mar 6",
            "  Time: 9am",
            "  Duration: 60 min",
            "  Price: $75",
        ]

    def test_deposit_notice(self):
        summary = build_confirmation_summary(
            "Classic Lash Full Set", "Wed, Mar 6", "9am", 120, 15000, 3000
        )
        assert summary.endswith("A $30 deposit is required to confirm this booking.")

    def test_unpriced_service(self):
        summary = build_confirmation_summary(
            "Bridal Consultation", "Wed, Mar 6", "9am", None, None, None
        )
        assert "Duration" not in summary
        assert "  Price: Contact for quote" in summary
