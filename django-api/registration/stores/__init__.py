from registration.stores.interfaces import AttendanceStore, EventStore, UserStore
from registration.stores.memory_store import InMemoryAttendanceStore, InMemoryEventStore, InMemoryUserStore

__all__ = [
    "EventStore",
    "UserStore",
    "AttendanceStore",
    "InMemoryEventStore",
    "InMemoryUserStore",
    "InMemoryAttendanceStore",
]
