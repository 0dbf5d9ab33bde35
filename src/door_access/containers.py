"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from door_access.adapters.calendar_client import (
    DisabledTriggerClient,
    HttpxCalendarTriggerClient,
    TriggerClient,
)
from door_access.adapters.supabase_access_event_repository import (
    NullAccessEventRepository,
    SupabaseAccessEventRepository,
)
from door_access.adapters.supabase_record_store import (
    DisconnectedRecordStore,
    SupabaseRecordStore,
)
from door_access.config import Settings, parse_timezone
from door_access.services.audit import AccessAuditService, AccessEventRepository
from door_access.services.invalidator import Invalidator
from door_access.services.resolver import RecordStore, SecretResolver
from door_access.services.verification import VerificationService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    record_store: RecordStore
    trigger_client: TriggerClient
    verification_service: VerificationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tz = parse_timezone(resolved_settings.site_timezone)

    record_store: RecordStore
    event_repository: AccessEventRepository
    if resolved_settings.has_record_store:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        record_store = SupabaseRecordStore(supabase_client)
        event_repository = SupabaseAccessEventRepository(supabase_client)
    else:
        _logger.warning("Supabase is not configured; verification is disabled")
        record_store = DisconnectedRecordStore()
        event_repository = NullAccessEventRepository()

    trigger_client: HttpxCalendarTriggerClient | DisabledTriggerClient
    if resolved_settings.has_calendar:
        trigger_client = HttpxCalendarTriggerClient.create(
            access_token=resolved_settings.google_calendar_access_token,
            door_control_calendar_id=resolved_settings.door_control_calendar_id,
            base_url=resolved_settings.google_calendar_base_url,
            time_zone=tz.key,
        )
    else:
        _logger.warning("Google Calendar is not configured; doors will not open")
        trigger_client = DisabledTriggerClient()

    verification_service = VerificationService(
        resolver=SecretResolver(
            store=record_store,
            timezone=tz,
            grace=timedelta(minutes=resolved_settings.reservation_grace_minutes),
        ),
        invalidator=Invalidator(record_store),
        trigger_client=trigger_client,
        audit_service=AccessAuditService(event_repository),
        trigger_span=timedelta(minutes=resolved_settings.trigger_event_minutes),
    )

    async def close_resources() -> None:
        await trigger_client.close()

    return AppContainer(
        settings=resolved_settings,
        record_store=record_store,
        trigger_client=trigger_client,
        verification_service=verification_service,
        close_resources=close_resources,
    )
