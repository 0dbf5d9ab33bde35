"""Secret resolution across reservations and temporary access grants."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from door_access.domain.errors import MalformedRecordError
from door_access.domain.records import (
    TEMPORARY_ACCESS_ACTIVE,
    Reservation,
    TemporaryAccess,
)
from door_access.domain.verification import Decision, VerificationOutcome
from door_access.services.window import (
    DEFAULT_GRACE,
    is_within_window,
    reservation_window,
    temporary_access_window,
)

_logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """Persistence interface for authorization records."""

    def find_reservation_by_secret(self, secret: str) -> Reservation | None:
        """Return the reservation holding this secret, if any."""

    def find_temporary_access(self, access_id: str) -> TemporaryAccess | None:
        """Return the temporary access grant with this id, if any."""

    def replace_reservation_secret(
        self, reservation_id: str, expected_secret: str, new_secret: str
    ) -> bool:
        """Swap the secret only if it still equals `expected_secret`."""

    def transition_temporary_access(
        self, access_id: str, expected_status: str, new_status: str
    ) -> bool:
        """Change the status only if it still equals `expected_status`."""


@dataclass
class SecretResolver:
    """Locates the record a secret belongs to and checks its time window.

    A reservation match is authoritative: when one is found, its window decides
    the outcome and temporary access is never consulted for the same value.
    """

    store: RecordStore
    timezone: ZoneInfo
    grace: timedelta = DEFAULT_GRACE

    def resolve(self, secret: str, now: datetime) -> VerificationOutcome:
        """Resolve a secret into a verification outcome.

        Store failures propagate as `RecordStoreError`; a matched record that
        cannot be interpreted raises `MalformedRecordError`.
        """
        reservation = self.store.find_reservation_by_secret(secret)
        if reservation is not None:
            return self._evaluate_reservation(reservation, now)

        access = self.store.find_temporary_access(secret)
        if access is not None:
            return self._evaluate_temporary_access(access, now)

        return VerificationOutcome(decision=Decision.NOT_FOUND)

    def _evaluate_reservation(
        self, reservation: Reservation, now: datetime
    ) -> VerificationOutcome:
        window = reservation_window(reservation, self.timezone, self.grace)
        if window is None:
            raise MalformedRecordError(
                reservation.id,
                f"unparseable date/time {reservation.date!r} "
                f"{reservation.start_time!r}-{reservation.end_time!r}",
            )
        if not is_within_window(window, now):
            _logger.info(
                "Reservation %s outside window %s - %s at %s",
                reservation.id,
                window.start.isoformat(),
                window.end.isoformat(),
                now.isoformat(),
            )
            return VerificationOutcome(
                decision=Decision.REJECTED_EXPIRED, record=reservation
            )
        return VerificationOutcome(decision=Decision.ACCEPTED, record=reservation)

    def _evaluate_temporary_access(
        self, access: TemporaryAccess, now: datetime
    ) -> VerificationOutcome:
        if access.status != TEMPORARY_ACCESS_ACTIVE:
            _logger.info(
                "Temporary access %s is not active (status=%s)",
                access.id,
                access.status,
            )
            return VerificationOutcome(
                decision=Decision.REJECTED_INACTIVE, record=access
            )
        window = temporary_access_window(access, self.timezone)
        if window is None:
            raise MalformedRecordError(
                access.id,
                f"unparseable validity {access.valid_from!r}-{access.valid_until!r}",
            )
        if not is_within_window(window, now):
            _logger.info(
                "Temporary access %s outside window at %s", access.id, now.isoformat()
            )
            return VerificationOutcome(decision=Decision.REJECTED_EXPIRED, record=access)
        return VerificationOutcome(decision=Decision.ACCEPTED, record=access)
