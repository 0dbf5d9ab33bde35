"""Access audit trail for verification attempts."""

import logging
from dataclasses import dataclass
from typing import Protocol

from door_access.domain.verification import VerificationResult

_logger = logging.getLogger(__name__)

_SECRET_HINT_LENGTH = 4


class AccessEventRepository(Protocol):
    """Persistence interface for access events."""

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


@dataclass
class AccessAuditService:
    """Service for recording verification attempts."""

    repository: AccessEventRepository

    def record(self, secret: str, result: VerificationResult) -> None:
        """Persist an access event; failures are logged and never raised."""
        try:
            self.repository.create_event(
                secret_hint=secret[:_SECRET_HINT_LENGTH],
                status=result.status.value,
                reason=result.reason,
                record_kind=result.kind.value if result.kind else None,
                record_id=result.record_id,
                trigger_confirmed=result.trigger_confirmed,
            )
        except Exception:
            _logger.exception(
                "Failed to record access event (status=%s record_id=%s)",
                result.status.value,
                result.record_id,
            )
