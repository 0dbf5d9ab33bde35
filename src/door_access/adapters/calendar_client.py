"""Google Calendar trigger adapter for the door automation."""

import logging
import re
from dataclasses import dataclass
from http import HTTPStatus
from typing import Protocol

import httpx

from door_access.domain.verification import TriggerConfirmation, TriggerEvent

_logger = logging.getLogger(__name__)

DOOR_CONTROL_ROOM_ID = "door_control"

_EVENT_ID_DISALLOWED = re.compile(r"[^a-zA-Z0-9]")


class TriggerClient(Protocol):
    """Interface for emitting door trigger events."""

    async def create_event(self, event: TriggerEvent) -> TriggerConfirmation | None:
        """Record a trigger event and return a confirmation, or None on failure."""


def calendar_event_id(event_id: str) -> str:
    """Return an event id accepted by Google Calendar."""
    return _EVENT_ID_DISALLOWED.sub("", event_id).lower()


@dataclass
class HttpxCalendarTriggerClient(TriggerClient):
    """Creates trigger events in the door-control calendar via httpx."""

    access_token: str
    calendar_ids: dict[str, str]
    base_url: str
    time_zone: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls,
        access_token: str,
        door_control_calendar_id: str,
        base_url: str,
        time_zone: str,
    ) -> "HttpxCalendarTriggerClient":
        """Create a calendar client with a managed httpx session."""
        return cls(
            access_token=access_token,
            calendar_ids={DOOR_CONTROL_ROOM_ID: door_control_calendar_id},
            base_url=base_url,
            time_zone=time_zone,
            http_client=httpx.AsyncClient(),
        )

    async def create_event(self, event: TriggerEvent) -> TriggerConfirmation | None:
        """Insert the event; an already existing event counts as confirmed."""
        calendar_id = self.calendar_ids.get(event.room_id)
        if calendar_id is None:
            _logger.error("No calendar configured for room %s", event.room_id)
            return None
        event_id = calendar_event_id(event.event_id)
        url = f"{self.base_url}/calendars/{calendar_id}/events"
        payload: dict[str, object] = {
            "id": event_id,
            "summary": event.summary,
            "description": event.description,
            "start": {"dateTime": event.start.isoformat(), "timeZone": self.time_zone},
            "end": {"dateTime": event.end.isoformat(), "timeZone": self.time_zone},
        }
        try:
            response = await self.http_client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=10,
            )
            if response.status_code == HTTPStatus.CONFLICT:
                _logger.warning("Event %s already exists. Skipping creation.", event_id)
                return TriggerConfirmation(event_id=event_id)
            response.raise_for_status()
        except httpx.HTTPError:
            _logger.exception("Error creating calendar event %s", event_id)
            return None
        body = response.json()
        return TriggerConfirmation(
            event_id=body.get("id", event_id), html_link=body.get("htmlLink")
        )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


@dataclass
class DisabledTriggerClient(TriggerClient):
    """Stand-in used when the calendar integration is not configured."""

    async def create_event(self, event: TriggerEvent) -> TriggerConfirmation | None:
        """Refuse every event."""
        _logger.error(
            "Cannot create calendar event %s: calendar API is not configured",
            event.event_id,
        )
        return None

    async def close(self) -> None:
        """Nothing to release."""
