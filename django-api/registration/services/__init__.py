from registration.services.attendance_ledger import AttendanceLedger
from registration.services.event_catalog import EventCatalog
from registration.services.session_context import SessionContext
from registration.services.user_directory import UserDirectory

__all__ = [
    "EventCatalog",
    "UserDirectory",
    "AttendanceLedger",
    "SessionContext",
]
