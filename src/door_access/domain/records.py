"""Domain models for authorization records."""

from dataclasses import dataclass
from enum import Enum


class RecordKind(Enum):
    """Kinds of records that can authorize a door opening."""

    RESERVATION = "reservation"
    TEMPORARY = "temporary"


@dataclass(frozen=True)
class Reservation:
    """A booked slot whose QR secret opens the door during the booking."""

    id: str
    date: str
    start_time: str
    end_time: str
    secret: str
    user_name: str

    kind = RecordKind.RESERVATION

    @property
    def holder(self) -> str:
        return self.user_name


@dataclass(frozen=True)
class TemporaryAccess:
    """An ad-hoc access grant; its id doubles as the secret."""

    id: str
    status: str
    valid_from: str
    valid_until: str
    user_email: str

    kind = RecordKind.TEMPORARY

    @property
    def secret(self) -> str:
        return self.id

    @property
    def holder(self) -> str:
        return self.user_email


AuthorizationRecord = Reservation | TemporaryAccess

TEMPORARY_ACCESS_ACTIVE = "active"
TEMPORARY_ACCESS_EXPIRED = "expired"
