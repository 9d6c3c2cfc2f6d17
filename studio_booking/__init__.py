"""Studio availability resolver and booking-request workflow."""

__version__ = "0.1.0"
