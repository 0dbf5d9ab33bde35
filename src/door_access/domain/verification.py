"""Domain models for verification outcomes and results."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from door_access.domain.records import AuthorizationRecord, RecordKind


class Decision(Enum):
    """Resolver decision for a presented secret."""

    ACCEPTED = "accepted"
    REJECTED_EXPIRED = "rejected_expired"
    REJECTED_INACTIVE = "rejected_inactive"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class VerificationOutcome:
    """Normalized result of resolving a secret against the record store."""

    decision: Decision
    record: AuthorizationRecord | None = None

    @property
    def kind(self) -> RecordKind | None:
        return self.record.kind if self.record is not None else None


class VerificationStatus(Enum):
    """Caller-facing verification status."""

    SUCCESS = "success"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    INFRA_ERROR = "infra_error"


@dataclass(frozen=True)
class VerificationResult:
    """Result returned to the caller of the verification service."""

    status: VerificationStatus
    reason: str | None = None
    kind: RecordKind | None = None
    record_id: str | None = None
    trigger_attempted: bool = False
    trigger_confirmed: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is VerificationStatus.SUCCESS


@dataclass(frozen=True)
class TriggerEvent:
    """Event asking the door automation to perform the physical action."""

    summary: str
    description: str
    start: datetime
    end: datetime
    event_id: str
    room_id: str


@dataclass(frozen=True)
class TriggerConfirmation:
    """Confirmation returned by the trigger emitter."""

    event_id: str
    html_link: str | None = None
