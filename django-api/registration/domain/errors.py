"""Domain error codes for the registration module.

Business conditions are expected outcomes: services return them inside a
``Result`` instead of raising them.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    INVALID_INPUT = "INVALID_INPUT"


@dataclass(frozen=True)
class DomainError:
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFound(DomainError):
    """An event id does not exist in the catalog."""

    def __init__(self, event_id: object) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=f"Event {event_id} not found")
        self.event_id = event_id


class UserNotFound(DomainError):
    """A user id does not exist in the directory."""

    def __init__(self, user_id: object) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=f"User {user_id} not found")
        self.user_id = user_id


class AttendanceNotFound(DomainError):
    """No attendance record matches the given id or user/event pair."""

    def __init__(self, reference: object) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=f"Attendance {reference} not found")
        self.reference = reference


class DuplicateEmail(DomainError):
    """Another user already registered the address, compared case-insensitively."""

    def __init__(self, email: str) -> None:
        super().__init__(code=ErrorCode.DUPLICATE_EMAIL, message="Email address is already registered")
        self.email = email


class AlreadyRegistered(DomainError):
    """The user already holds a registration for the event."""

    def __init__(self, user_id: object, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message=f"User {user_id} is already registered for event {event_id}",
        )
        self.user_id = user_id
        self.event_id = event_id


class AlreadyCheckedIn(DomainError):
    """The registration was already checked in."""

    def __init__(self, attendance_id: object) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_CHECKED_IN,
            message=f"Attendance {attendance_id} is already checked in",
        )
        self.attendance_id = attendance_id


class CapacityExceeded(DomainError):
    """The event has no seats left."""

    def __init__(self, event_id: object) -> None:
        super().__init__(code=ErrorCode.CAPACITY_EXCEEDED, message=f"Event {event_id} is full")
        self.event_id = event_id


class InvalidInput(DomainError):
    """A non-positive id or an empty required field."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)
