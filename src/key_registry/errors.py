"""Exception types for the record store and the HTTP service.

Store errors describe what went wrong against the table; service errors
carry the status code and the ``{error, details}`` body sent to the caller.
"""

from typing import Any


class RecordStoreError(Exception):
    """Base class for failures raised by the record store."""


class MalformedIdError(RecordStoreError):
    """The id is not in the identifier format the table expects."""

    def __init__(self, record_id: str):
        super().__init__(f"Malformed record id: {record_id!r}")
        self.record_id = record_id


class PersistenceError(RecordStoreError):
    """The database rejected or failed the operation."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class ServiceError(Exception):
    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequestError(ServiceError):
    status_code = 400


class RecordNotFoundError(ServiceError):
    status_code = 404


class InternalError(ServiceError):
    status_code = 500
