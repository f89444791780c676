"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every store exposes
``atomic()``: services wrap each read-check-write sequence in it, the way a
database-backed store would wrap it in a locking transaction.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from registration.domain import AttendanceId, AttendanceRecord, Event, EventId, User, UserId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[object]:
        """Return a re-entrant critical section covering this store."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events in insertion order."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def save_event(self, event: Event) -> None:
        """Insert an event or replace the stored snapshot with the same ID."""
        ...


class UserStore(ABC):
    """Interface for user persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[object]:
        ...

    @abstractmethod
    def next_id(self) -> UserId:
        """Allocate a fresh user ID. IDs are never reused."""
        ...

    @abstractmethod
    def list_users(self) -> list[User]:
        """Return all users, active or not, in insertion order."""
        ...

    @abstractmethod
    def get_user(self, user_id: UserId) -> User | None:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> User | None:
        """Return the user whose email matches case-insensitively, or None."""
        ...

    @abstractmethod
    def save_user(self, user: User) -> None:
        ...


class AttendanceStore(ABC):
    """Interface for attendance record persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[object]:
        ...

    @abstractmethod
    def next_id(self) -> AttendanceId:
        """Allocate a fresh attendance ID. IDs are never reused."""
        ...

    @abstractmethod
    def list_records(self) -> list[AttendanceRecord]:
        """Return all records in insertion order."""
        ...

    @abstractmethod
    def get_record(self, attendance_id: AttendanceId) -> AttendanceRecord | None:
        ...

    @abstractmethod
    def find_record(self, user_id: UserId, event_id: EventId) -> AttendanceRecord | None:
        """Return the record for a (user, event) pair, or None."""
        ...

    @abstractmethod
    def save_record(self, record: AttendanceRecord) -> None:
        ...

    @abstractmethod
    def delete_record(self, attendance_id: AttendanceId) -> bool:
        """Remove a record. Returns False when there was nothing to remove."""
        ...
