"""Domain models representing registration state.

These are immutable snapshots. Stores keep the latest snapshot of every entity
and replace it on mutation, so whatever a caller holds never changes under it.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from registration.domain.value_objects import AttendanceId, Capacity, Email, EventId, UserId


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    date: datetime
    location: str
    description: str
    capacity: Capacity
    category: str
    image_url: str | None = None
    registered_attendees: int = 0

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Event name cannot be empty")
        if not 0 <= self.registered_attendees <= self.capacity.value:
            raise ValueError("Registered attendees must be between 0 and capacity")

    @property
    def available_spots(self) -> int:
        return self.capacity.value - self.registered_attendees

    @property
    def is_full(self) -> bool:
        return not self.capacity.admits(self.registered_attendees)

    def with_attendee(self) -> "Event":
        return replace(self, registered_attendees=self.registered_attendees + 1)


@dataclass(frozen=True)
class User:
    """Domain representation of a registered User."""

    id: UserId
    first_name: str
    last_name: str
    email: Email
    phone: str
    registered_at: datetime
    organization: str | None = None
    is_active: bool = True
    registered_event_ids: tuple[EventId, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def with_event(self, event_id: EventId) -> "User":
        if event_id in self.registered_event_ids:
            return self
        return replace(self, registered_event_ids=(*self.registered_event_ids, event_id))


@dataclass(frozen=True)
class AttendanceRecord:
    """Binding of one user to one event.

    ``user`` and ``event`` are the snapshots taken when the record was created.
    They are for display only; the catalog and directory stay authoritative.
    """

    id: AttendanceId
    user_id: UserId
    event_id: EventId
    registered_at: datetime
    is_checked_in: bool = False
    checked_in_at: datetime | None = None
    notes: str | None = None
    user: User | None = None
    event: Event | None = None

    @property
    def key(self) -> tuple[UserId, EventId]:
        return self.user_id, self.event_id

    def checked_in(self, at: datetime) -> "AttendanceRecord":
        return replace(self, is_checked_in=True, checked_in_at=at)

    def with_notes(self, notes: str | None) -> "AttendanceRecord":
        return replace(self, notes=notes)


@dataclass(frozen=True)
class AttendanceStatistics:
    """Aggregate over the whole attendance ledger."""

    total_registrations: int = 0
    total_checked_in: int = 0
    overall_attendance_rate: float = 0.0
    unique_users: int = 0
    unique_events: int = 0
