"""One-time-use invalidation of authorization records."""

import logging
from dataclasses import dataclass
from datetime import datetime

from door_access.domain.records import (
    TEMPORARY_ACCESS_ACTIVE,
    TEMPORARY_ACCESS_EXPIRED,
    AuthorizationRecord,
    Reservation,
    TemporaryAccess,
)
from door_access.services.resolver import RecordStore

_logger = logging.getLogger(__name__)

USED_SECRET_PREFIX = "USED_"


def tombstone_secret(secret: str, now: datetime) -> str:
    """Return the consumed form of a reservation secret."""
    return f"{USED_SECRET_PREFIX}{int(now.timestamp() * 1000)}_{secret}"


@dataclass
class Invalidator:
    """Consumes a matched record with a single conditional write."""

    store: RecordStore

    def invalidate(self, record: AuthorizationRecord, now: datetime) -> bool:
        """Mark the record as used; False means someone else consumed it first."""
        match record:
            case Reservation():
                consumed = self.store.replace_reservation_secret(
                    record.id,
                    expected_secret=record.secret,
                    new_secret=tombstone_secret(record.secret, now),
                )
            case TemporaryAccess():
                consumed = self.store.transition_temporary_access(
                    record.id,
                    expected_status=TEMPORARY_ACCESS_ACTIVE,
                    new_status=TEMPORARY_ACCESS_EXPIRED,
                )
            case _:
                raise TypeError(f"Unsupported record type {type(record).__name__}")
        if not consumed:
            _logger.warning(
                "Invalidation conflict for %s %s", record.kind.value, record.id
            )
        return consumed
