"""Session ID logging context for tracing one booking request end to end.

Provides a session-aware logger that attaches a correlation ID to every
log message, so a single client's walk from date choice to submission
can be followed across the resolver, workflow and collaborators.

Usage:
    from studio_booking.logging_context import get_session_logger, set_session_id

    set_session_id("BRQ-3f9a1c")
    logger = get_session_logger(__name__)
    logger.info("Submitting request")  # record.session_id == "BRQ-3f9a1c"
"""

import logging
from contextvars import ContextVar

_session_id: ContextVar[str] = ContextVar("session_id", default="NO_SESSION_ID")


def set_session_id(session_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _session_id.set(session_id)


def get_session_id() -> str:
    """Retrieve the current correlation ID."""
    return _session_id.get()


class SessionIdFilter(logging.Filter):
    """Injects session_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """Return a logger with the SessionIdFilter attached.

    The filter adds ``session_id`` to each record so formatters can
    include ``%(session_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger
