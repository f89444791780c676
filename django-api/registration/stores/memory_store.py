"""In-memory implementations of the stores.

Thread-safe within one process. Nothing survives a restart.
"""

import threading
from contextlib import AbstractContextManager
from itertools import count

from registration.domain import AttendanceId, AttendanceRecord, Event, EventId, User, UserId
from registration.stores.interfaces import AttendanceStore, EventStore, UserStore


class _LockedStore:
    def __init__(self) -> None:
        self._lock = threading.RLock()

    def atomic(self) -> AbstractContextManager[object]:
        return self._lock


class InMemoryEventStore(_LockedStore, EventStore):
    """Dict-backed event store keyed by event ID."""

    def __init__(self, events: list[Event] | None = None) -> None:
        super().__init__()
        self._events: dict[EventId, Event] = {}
        for event in events or ():
            self.save_event(event)

    def list_events(self) -> list[Event]:
        with self._lock:
            return list(self._events.values())

    def get_event(self, event_id: EventId) -> Event | None:
        with self._lock:
            return self._events.get(event_id)

    def save_event(self, event: Event) -> None:
        with self._lock:
            self._events[event.id] = event


class InMemoryUserStore(_LockedStore, UserStore):
    """Dict-backed user store. Email lookups return the earliest match."""

    def __init__(self) -> None:
        super().__init__()
        self._users: dict[UserId, User] = {}
        self._ids = count(1)

    def next_id(self) -> UserId:
        with self._lock:
            return UserId(next(self._ids))

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def get_user(self, user_id: UserId) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return next((user for user in self._users.values() if user.email.matches(email)), None)

    def save_user(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user


class InMemoryAttendanceStore(_LockedStore, AttendanceStore):
    """Dict-backed attendance store with a (user, event) index."""

    def __init__(self) -> None:
        super().__init__()
        self._records: dict[AttendanceId, AttendanceRecord] = {}
        self._by_key: dict[tuple[UserId, EventId], AttendanceId] = {}
        self._ids = count(1)

    def next_id(self) -> AttendanceId:
        with self._lock:
            return AttendanceId(next(self._ids))

    def list_records(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._records.values())

    def get_record(self, attendance_id: AttendanceId) -> AttendanceRecord | None:
        with self._lock:
            return self._records.get(attendance_id)

    def find_record(self, user_id: UserId, event_id: EventId) -> AttendanceRecord | None:
        with self._lock:
            attendance_id = self._by_key.get((user_id, event_id))
            return self._records.get(attendance_id) if attendance_id is not None else None

    def save_record(self, record: AttendanceRecord) -> None:
        with self._lock:
            self._records[record.id] = record
            self._by_key[record.key] = record.id

    def delete_record(self, attendance_id: AttendanceId) -> bool:
        with self._lock:
            record = self._records.pop(attendance_id, None)
            if record is None:
                return False
            del self._by_key[record.key]
            return True
