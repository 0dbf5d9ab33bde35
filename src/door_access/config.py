"""Application configuration."""

import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Leaving the Supabase or calendar settings unset starts the service in a
    degraded mode: verification fails with an infrastructure error without a
    record store, and door triggers are refused without a calendar.
    """

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    google_calendar_access_token: str | None = None
    door_control_calendar_id: str | None = None
    google_calendar_base_url: str = "https://www.googleapis.com/calendar/v3"
    site_timezone: str = "Asia/Hong_Kong"
    reservation_grace_minutes: int = 30
    trigger_event_minutes: int = 1
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def has_record_store(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    @property
    def has_calendar(self) -> bool:
        return bool(
            self.google_calendar_access_token and self.door_control_calendar_id
        )


def parse_timezone(name: str | None) -> ZoneInfo:
    """Return the zone for a configured name, falling back to UTC."""
    if not name:
        return ZoneInfo("UTC")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        _logger.warning("Unknown timezone %r, using UTC", name)
        return ZoneInfo("UTC")
