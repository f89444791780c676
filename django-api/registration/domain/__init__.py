from registration.domain.errors import DomainError, ErrorCode
from registration.domain.models import AttendanceRecord, AttendanceStatistics, Event, User
from registration.domain.results import Result
from registration.domain.value_objects import AttendanceId, Capacity, Email, EventId, UserId

__all__ = [
    "Event",
    "User",
    "AttendanceRecord",
    "AttendanceStatistics",
    "EventId",
    "UserId",
    "AttendanceId",
    "Capacity",
    "Email",
    "DomainError",
    "ErrorCode",
    "Result",
]
