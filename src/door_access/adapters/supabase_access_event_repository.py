"""Supabase repository for access events."""

from dataclasses import dataclass

from supabase import Client

from door_access.services.audit import AccessEventRepository


@dataclass
class SupabaseAccessEventRepository(AccessEventRepository):
    """Supabase-backed access event repository."""

    client: Client

    def create_event(  # noqa: PLR0913
        self,
        secret_hint: str,
        status: str,
        reason: str | None,
        record_kind: str | None,
        record_id: str | None,
        trigger_confirmed: bool,
    ) -> None:
        """Create an access event row."""
        self.client.table("access_events").insert(
            {
                "secret_hint": secret_hint,
                "status": status,
                "reason": reason,
                "record_kind": record_kind,
                "record_id": record_id,
                "trigger_confirmed": trigger_confirmed,
            }
        ).execute()


@dataclass
class NullAccessEventRepository(AccessEventRepository):
    """Discards access events when no record store is configured."""

    def create_event(  # noqa: PLR0913
        self,
        secret_hint: str,
        status: str,
        reason: str | None,
        record_kind: str | None,
        record_id: str | None,
        trigger_confirmed: bool,
    ) -> None:
        """Drop the event."""
