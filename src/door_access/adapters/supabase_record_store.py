"""Supabase-backed record store for reservations and temporary access."""

from dataclasses import dataclass

import httpx
from postgrest import APIError
from supabase import Client

from door_access.domain.errors import (
    MalformedRecordError,
    RecordStoreError,
    RecordStoreUnavailableError,
)
from door_access.domain.records import Reservation, TemporaryAccess
from door_access.services.resolver import RecordStore

_RESERVATION_COLUMNS = "id, date, start_time, end_time, qr_secret, user_name"
_TEMPORARY_ACCESS_COLUMNS = "id, status, valid_from, valid_until, user_email"


@dataclass
class SupabaseRecordStore(RecordStore):
    """Supabase implementation for authorization records.

    Invalidation writes carry the guard column as an extra filter, so the
    update only matches while the row still holds the expected value. An
    empty response means another request consumed the record first.
    """

    client: Client
    reservations_table: str = "reservations"
    temporary_access_table: str = "temporary_access"

    def find_reservation_by_secret(self, secret: str) -> Reservation | None:
        """Return the reservation holding the secret, if present."""
        try:
            response = (
                self.client.table(self.reservations_table)
                .select(_RESERVATION_COLUMNS)
                .eq("qr_secret", secret)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise RecordStoreError("Reservation lookup failed") from exc
        if not response.data:
            return None
        row = response.data[0]
        try:
            return Reservation(
                id=str(row["id"]),
                date=row["date"],
                start_time=row["start_time"],
                end_time=row["end_time"],
                secret=row["qr_secret"],
                user_name=row.get("user_name") or "",
            )
        except KeyError as exc:
            raise MalformedRecordError(str(row.get("id")), f"missing {exc}") from exc

    def find_temporary_access(self, access_id: str) -> TemporaryAccess | None:
        """Return the temporary access grant with the id, if present."""
        try:
            response = (
                self.client.table(self.temporary_access_table)
                .select(_TEMPORARY_ACCESS_COLUMNS)
                .eq("id", access_id)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise RecordStoreError("Temporary access lookup failed") from exc
        if not response.data:
            return None
        row = response.data[0]
        try:
            return TemporaryAccess(
                id=str(row["id"]),
                status=row["status"],
                valid_from=row["valid_from"],
                valid_until=row["valid_until"],
                user_email=row.get("user_email") or "",
            )
        except KeyError as exc:
            raise MalformedRecordError(str(row.get("id")), f"missing {exc}") from exc

    def replace_reservation_secret(
        self, reservation_id: str, expected_secret: str, new_secret: str
    ) -> bool:
        """Swap the secret if the row still holds `expected_secret`."""
        try:
            response = (
                self.client.table(self.reservations_table)
                .update({"qr_secret": new_secret})
                .eq("id", reservation_id)
                .eq("qr_secret", expected_secret)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise RecordStoreError("Reservation invalidation failed") from exc
        return bool(response.data)

    def transition_temporary_access(
        self, access_id: str, expected_status: str, new_status: str
    ) -> bool:
        """Change the status if the row still has `expected_status`."""
        try:
            response = (
                self.client.table(self.temporary_access_table)
                .update({"status": new_status})
                .eq("id", access_id)
                .eq("status", expected_status)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise RecordStoreError("Temporary access invalidation failed") from exc
        return bool(response.data)


@dataclass
class DisconnectedRecordStore(RecordStore):
    """Stand-in used when no record store is configured.

    Every call raises `RecordStoreUnavailableError`, which the verification
    service reports as an infrastructure error.
    """

    def find_reservation_by_secret(self, secret: str) -> Reservation | None:
        raise _unavailable()

    def find_temporary_access(self, access_id: str) -> TemporaryAccess | None:
        raise _unavailable()

    def replace_reservation_secret(
        self, reservation_id: str, expected_secret: str, new_secret: str
    ) -> bool:
        raise _unavailable()

    def transition_temporary_access(
        self, access_id: str, expected_status: str, new_status: str
    ) -> bool:
        raise _unavailable()


def _unavailable() -> RecordStoreUnavailableError:
    return RecordStoreUnavailableError("Backend database not connected")
