"""Verification orchestration: resolve, invalidate, trigger."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from door_access.adapters.calendar_client import DOOR_CONTROL_ROOM_ID, TriggerClient
from door_access.domain.errors import MalformedRecordError, RecordStoreError
from door_access.domain.records import AuthorizationRecord
from door_access.domain.verification import (
    Decision,
    TriggerConfirmation,
    TriggerEvent,
    VerificationResult,
    VerificationStatus,
)
from door_access.services.audit import AccessAuditService
from door_access.services.invalidator import Invalidator
from door_access.services.resolver import SecretResolver

_logger = logging.getLogger(__name__)

OPEN_DOOR_SUMMARY = "OPEN_DOOR"
ALREADY_CONSUMED = "already_consumed"
UNKNOWN_HOLDER = "unknown"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def build_trigger_event(
    record: AuthorizationRecord, now: datetime, span: timedelta
) -> TriggerEvent:
    """Build the door-opening event for a consumed record."""
    return TriggerEvent(
        summary=OPEN_DOOR_SUMMARY,
        description=(
            f"Triggered by {record.kind.value} ID: {record.id} "
            f"for user {record.holder or UNKNOWN_HOLDER}."
        ),
        start=now,
        end=now + span,
        event_id=f"trigger-{int(now.timestamp() * 1000)}-{uuid4().hex[:8]}",
        room_id=DOOR_CONTROL_ROOM_ID,
    )


@dataclass
class VerificationService:
    """Verifies a scanned secret and asks the door automation to open.

    Invalidation runs only for an accepted window and the trigger runs only
    after a successful invalidation. A failed trigger is logged at CRITICAL
    level but the caller still sees success: the secret holder was validated
    and the secret is already consumed.
    """

    resolver: SecretResolver
    invalidator: Invalidator
    trigger_client: TriggerClient
    audit_service: AccessAuditService
    trigger_span: timedelta = timedelta(minutes=1)
    clock: Callable[[], datetime] = field(default=_utc_now)

    async def verify(self, secret: str | None) -> VerificationResult:
        """Verify a secret and return the caller-facing result."""
        if not secret or not secret.strip():
            return VerificationResult(
                status=VerificationStatus.BAD_REQUEST, reason="missing_secret"
            )
        result = await self._verify(secret)
        self.audit_service.record(secret, result)
        return result

    async def _verify(self, secret: str) -> VerificationResult:
        now = self.clock()
        try:
            outcome = self.resolver.resolve(secret, now)
        except (RecordStoreError, MalformedRecordError) as exc:
            _logger.exception("Secret lookup failed")
            return VerificationResult(
                status=VerificationStatus.INFRA_ERROR, reason=str(exc)
            )

        if outcome.decision is Decision.NOT_FOUND:
            _logger.info("No record matches presented secret")
            return VerificationResult(
                status=VerificationStatus.NOT_FOUND, reason=outcome.decision.value
            )

        record = outcome.record
        if record is None:
            raise RuntimeError(f"Outcome {outcome.decision.value} has no record")
        if outcome.decision is not Decision.ACCEPTED:
            _logger.info(
                "Rejected %s %s: %s",
                record.kind.value,
                record.id,
                outcome.decision.value,
            )
            return VerificationResult(
                status=VerificationStatus.REJECTED,
                reason=outcome.decision.value,
                kind=record.kind,
                record_id=record.id,
            )

        try:
            consumed = self.invalidator.invalidate(record, now)
        except RecordStoreError as exc:
            _logger.exception(
                "Invalidation of %s %s failed", record.kind.value, record.id
            )
            return VerificationResult(
                status=VerificationStatus.INFRA_ERROR,
                reason=str(exc),
                kind=record.kind,
                record_id=record.id,
            )
        if not consumed:
            return VerificationResult(
                status=VerificationStatus.REJECTED,
                reason=ALREADY_CONSUMED,
                kind=record.kind,
                record_id=record.id,
            )

        confirmation = await self._emit_trigger(record, now)
        return VerificationResult(
            status=VerificationStatus.SUCCESS,
            kind=record.kind,
            record_id=record.id,
            trigger_attempted=True,
            trigger_confirmed=confirmation is not None,
        )

    async def _emit_trigger(
        self, record: AuthorizationRecord, now: datetime
    ) -> TriggerConfirmation | None:
        event = build_trigger_event(record, now, self.trigger_span)
        try:
            confirmation = await self.trigger_client.create_event(event)
        except Exception:
            _logger.critical(
                "Failed to create trigger event %s for %s %s. Door will not open.",
                event.event_id,
                record.kind.value,
                record.id,
                exc_info=True,
            )
            return None
        if confirmation is None:
            _logger.critical(
                "Trigger event %s for %s %s was not confirmed. Door will not open.",
                event.event_id,
                record.kind.value,
                record.id,
            )
        return confirmation
