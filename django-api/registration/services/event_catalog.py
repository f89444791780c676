"""Event catalog service.

Listing and lookup of events, plus the one capacity mutation: taking a seat.
Absence is a normal outcome here, so lookups return None instead of failing.
"""

import structlog

from registration.domain import ErrorCode, Event, EventId, Result
from registration.domain.errors import CapacityExceeded, EventNotFound, InvalidInput
from registration.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)


def _parse_event_id(event_id: int | EventId) -> EventId | None:
    try:
        return EventId.coerce(event_id)
    except ValueError:
        return None


class EventCatalog:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_all(self) -> list[Event]:
        """Return all events by date; events on the same date keep insertion order."""
        return sorted(self._store.list_events(), key=lambda event: event.date)

    def get_by_id(self, event_id: int | EventId) -> Event | None:
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return None
        return self._store.get_event(parsed)

    def list_by_category(self, category: str) -> list[Event]:
        """Return events whose category matches case-insensitively, by date."""
        wanted = category.casefold()
        return [event for event in self.list_all() if event.category.casefold() == wanted]

    def list_categories(self) -> list[str]:
        return sorted({event.category for event in self._store.list_events()})

    def search(self, text: str) -> list[Event]:
        """Return events whose name, description or location contains ``text``."""
        needle = text.strip().casefold()
        if not needle:
            return self.list_all()
        return [
            event
            for event in self.list_all()
            if needle in event.name.casefold()
            or needle in event.description.casefold()
            or needle in event.location.casefold()
        ]

    def increment_attendance(self, event_id: int | EventId) -> Result[Event]:
        """Take one seat at an event.

        Fails with NOT_FOUND for an unknown event and CAPACITY_EXCEEDED when
        the event is full; the event is left unchanged in both cases.
        """
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return Result.failure(InvalidInput(f"Invalid event id {event_id!r}"))

        with self._store.atomic():
            event = self._store.get_event(parsed)
            if event is None:
                return Result.failure(EventNotFound(parsed))
            if event.is_full:
                logger.info(
                    "event_capacity_exceeded",
                    code=ErrorCode.CAPACITY_EXCEEDED.value,
                    event_id=parsed.value,
                    capacity=event.capacity.value,
                )
                return Result.failure(CapacityExceeded(parsed))
            event = event.with_attendee()
            self._store.save_event(event)

        logger.info(
            "event_attendance_incremented",
            event_id=parsed.value,
            registered_attendees=event.registered_attendees,
            capacity=event.capacity.value,
        )
        return Result.success(event)
