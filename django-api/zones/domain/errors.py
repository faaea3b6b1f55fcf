"""Domain error codes for the zones module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    ZONE_NOT_FOUND = "ZONE_NOT_FOUND"
    ATTENDEE_NOT_FOUND = "ATTENDEE_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    OVERRIDE_NOT_FOUND = "OVERRIDE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_DATE = "INVALID_DATE"
    INVALID_REQUEST = "INVALID_REQUEST"
    CHECKIN_DENIED = "CHECKIN_DENIED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ZoneNotFoundError(DomainError):
    """Raised when a zone is not found."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(code=ErrorCode.ZONE_NOT_FOUND, message="Zone not found")
        self.zone_id = zone_id


class AttendeeNotFoundError(DomainError):
    """Raised when an attendee is not found by id or by code."""

    def __init__(self, reference: str) -> None:
        super().__init__(
            code=ErrorCode.ATTENDEE_NOT_FOUND,
            message="Attendee not found",
        )
        self.reference = reference


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class OverrideNotFoundError(DomainError):
    """Raised when an individual access override is not found."""

    def __init__(self, override_id: int) -> None:
        super().__init__(
            code=ErrorCode.OVERRIDE_NOT_FOUND,
            message="Access override not found",
        )
        self.override_id = override_id


class UserNotFoundError(DomainError):
    """Raised when a staff assignment names an unknown user."""

    def __init__(self, user_id: int) -> None:
        super().__init__(code=ErrorCode.USER_NOT_FOUND, message="User not found")
        self.user_id = user_id


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID",
        )


class InvalidDateError(DomainError):
    """Raised when a date parameter is not YYYY-MM-DD."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE,
            message="Invalid date format",
        )


class InvalidRequestError(DomainError):
    """Raised when a request body fails validation."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(code=ErrorCode.INVALID_REQUEST, message=message)


class CheckInDeniedError(DomainError):
    """Raised when a gate or the access resolver refuses passage.

    The message is the human-readable reason staff UIs display verbatim.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.CHECKIN_DENIED, message=reason)

    @property
    def reason(self) -> str:
        return self.message


class StoreError(DomainError):
    """Raised when the persistent store fails. Never retried."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Internal error",
        )
        self.operation = operation
