"""Service result values and error kinds."""
import enum
from dataclasses import dataclass
from typing import Any, Optional


class ErrorKind(str, enum.Enum):
    """Failure categories returned by the booking services."""

    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    ROLE_NOT_ALLOWED = "RoleNotAllowed"
    PAST_DATE = "PastDate"
    SLOT_UNAVAILABLE = "SlotUnavailable"
    INVALID_STATE = "InvalidState"
    INVALID_STATUS = "InvalidStatus"
    NOT_FOUND = "NotFound"
    VALIDATION_FAILED = "ValidationFailed"
    STORE_FAILURE = "StoreFailure"


# HTTP status used by the API layer for each failure kind
HTTP_STATUS = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.ROLE_NOT_ALLOWED: 403,
    ErrorKind.PAST_DATE: 400,
    ErrorKind.SLOT_UNAVAILABLE: 409,
    ErrorKind.INVALID_STATE: 409,
    ErrorKind.INVALID_STATUS: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.STORE_FAILURE: 500,
}


@dataclass
class ServiceResult:
    """
    Outcome of a service operation.

    Services never raise across their public boundary. Callers inspect
    ``success`` and either use ``value`` or surface ``message``.
    """

    success: bool
    message: str = ""
    value: Any = None
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, value: Any = None, message: str = "") -> "ServiceResult":
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "ServiceResult":
        return cls(success=False, error=error, message=message)

    @property
    def status_code(self) -> int:
        if self.success:
            return 200
        return HTTP_STATUS[self.error]
