"""
Centralized configuration with environment variable overrides.

Studio identity, the time zone used to decide "today", and booking
workflow limits are configurable here. Nothing is hardcoded in the
resolver or workflow logic.
"""

import logging
import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class StudioConfig:
    """Studio-specific settings loaded from environment or defaults."""

    name: str = os.getenv("STUDIO_NAME", "Rosewood Lash & Brow Studio")
    timezone: str = os.getenv("STUDIO_TIMEZONE", "America/Los_Angeles")
    default_service_duration: int = _safe_int("DEFAULT_SERVICE_DURATION", "60")


@dataclass(frozen=True)
class WorkflowConfig:
    """Limits applied by the booking-request workflow."""

    booking_horizon_days: int = _safe_int("BOOKING_HORIZON_DAYS", "60")
    max_notes_length: int = _safe_int("MAX_NOTES_LENGTH", "1000")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    studio: StudioConfig = field(default_factory=StudioConfig)
    workflow: WorkflowConfig = field(default_factory=WorkflowConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "studio-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    try:
        ZoneInfo(config.studio.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(
            f"STUDIO_TIMEZONE must be an IANA time zone, got {config.studio.timezone!r}"
        ) from None
    if config.studio.default_service_duration < 1:
        raise ValueError(
            "DEFAULT_SERVICE_DURATION must be >= 1, "
            f"got {config.studio.default_service_duration}"
        )
    if config.workflow.booking_horizon_days < 1:
        raise ValueError(
            f"BOOKING_HORIZON_DAYS must be >= 1, got {config.workflow.booking_horizon_days}"
        )
    if config.workflow.max_notes_length < 1:
        raise ValueError(
            f"MAX_NOTES_LENGTH must be >= 1, got {config.workflow.max_notes_length}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.studio.name)
    return config


# Singleton instance
settings = load_config()
