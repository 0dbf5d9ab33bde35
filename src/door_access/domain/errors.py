"""Exceptions raised by the access core."""


class AccessError(Exception):
    """Base class for access verification failures."""


class RecordStoreError(AccessError):
    """The record store could not be queried or updated."""


class RecordStoreUnavailableError(RecordStoreError):
    """The record store is not configured for this process."""


class MalformedRecordError(AccessError):
    """A stored record could not be interpreted."""

    def __init__(self, record_id: str, detail: str) -> None:
        super().__init__(f"Record {record_id} is malformed: {detail}")
        self.record_id = record_id
        self.detail = detail
