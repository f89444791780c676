"""Attendance ledger service - registration and check-in state per (user, event).

Lifecycle of one (user, event) pair::

    [no record] --register--> registered --check_in--> checked in
    registered  --cancel--> [no record]
    checked in  --cancel--> [no record]

The ledger counts its own registrations. It never touches
``Event.registered_attendees``, which only ``EventCatalog.increment_attendance``
moves, and cancelling a record does not give the seat back. Callers that want
both counters to move must call both services.
"""

from collections.abc import Callable, Iterable
from datetime import datetime

import structlog
from django.dispatch import Signal
from django.utils import timezone

from registration.clock import aware
from registration.domain import (
    AttendanceId,
    AttendanceRecord,
    AttendanceStatistics,
    DomainError,
    EventId,
    Result,
    UserId,
)
from registration.domain.errors import (
    AlreadyCheckedIn,
    AlreadyRegistered,
    AttendanceNotFound,
    EventNotFound,
    InvalidInput,
    UserNotFound,
)
from registration.services.event_catalog import EventCatalog
from registration.services.user_directory import UserDirectory
from registration.signals import LedgerAction, dispatch, subscribe
from registration.stores.interfaces import AttendanceStore

logger = structlog.get_logger(__name__)


def attendance_rate(checked_in: int, registered: int) -> float:
    """Percentage of registrations that checked in, rounded to one decimal."""
    if registered == 0:
        return 0.0
    return round(checked_in / registered * 100, 1)


def _rejected(operation: str, error: DomainError) -> Result[AttendanceRecord]:
    logger.info("attendance_rejected", operation=operation, code=error.code.value, reason=error.message)
    return Result.failure(error)


def _newest_first(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    return sorted(records, key=lambda record: record.registered_at, reverse=True)


class AttendanceLedger:
    """Service recording who registered for and attended which event."""

    def __init__(
        self,
        store: AttendanceStore,
        catalog: EventCatalog,
        directory: UserDirectory,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._directory = directory
        self._clock = clock
        self.changed = Signal()

    def subscribe(self, callback: Callable[..., object]) -> Callable[[], None]:
        """Call ``callback`` after every committed change; returns the unsubscribe."""
        return subscribe(self.changed, self, callback)

    # -- Mutations ---------------------------------------------------------

    def register_attendance(
        self, user_id: int, event_id: int, registered_at: datetime | None = None
    ) -> Result[AttendanceRecord]:
        """Register a user for an event.

        Fails with ALREADY_REGISTERED when the pair already has a record, and
        with NOT_FOUND when the user or the event does not exist.
        """
        try:
            user_key = UserId.coerce(user_id)
            event_key = EventId.coerce(event_id)
        except ValueError as e:
            return _rejected("register", InvalidInput(str(e)))

        with self._store.atomic():
            if self._store.find_record(user_key, event_key) is not None:
                return _rejected("register", AlreadyRegistered(user_key, event_key))

            user = self._directory.get_by_id(user_key)
            if user is None:
                return _rejected("register", UserNotFound(user_key))
            event = self._catalog.get_by_id(event_key)
            if event is None:
                return _rejected("register", EventNotFound(event_key))

            record = AttendanceRecord(
                id=self._store.next_id(),
                user_id=user_key,
                event_id=event_key,
                registered_at=aware(registered_at) if registered_at else self._clock(),
                user=user,
                event=event,
            )
            self._store.save_record(record)

        self._directory.add_event_id(user_key, event_key)
        logger.info(
            "attendance_registered",
            attendance_id=record.id.value,
            user_id=user_key.value,
            event_id=event_key.value,
        )
        self._notify(LedgerAction.REGISTERED, record)
        return Result.success(record)

    def check_in(self, attendance_id: int) -> Result[AttendanceRecord]:
        """Mark a registration as attended. Only the first check-in succeeds."""
        try:
            key = AttendanceId.coerce(attendance_id)
        except ValueError as e:
            return _rejected("check_in", InvalidInput(str(e)))

        with self._store.atomic():
            record = self._store.get_record(key)
            if record is None:
                return _rejected("check_in", AttendanceNotFound(key))
            if record.is_checked_in:
                return _rejected("check_in", AlreadyCheckedIn(key))
            record = record.checked_in(self._clock())
            self._store.save_record(record)

        logger.info("attendance_checked_in", attendance_id=key.value)
        self._notify(LedgerAction.CHECKED_IN, record)
        return Result.success(record)

    def check_in_by_user_and_event(self, user_id: int, event_id: int) -> Result[AttendanceRecord]:
        """Check in the pair's registration, located by user and event."""
        try:
            user_key = UserId.coerce(user_id)
            event_key = EventId.coerce(event_id)
        except ValueError as e:
            return _rejected("check_in", InvalidInput(str(e)))

        with self._store.atomic():
            record = self._store.find_record(user_key, event_key)
            if record is None:
                return _rejected("check_in", AttendanceNotFound((user_key.value, event_key.value)))
            if record.is_checked_in:
                return _rejected("check_in", AlreadyCheckedIn(record.id))
            record = record.checked_in(self._clock())
            self._store.save_record(record)

        logger.info("attendance_checked_in", attendance_id=record.id.value)
        self._notify(LedgerAction.CHECKED_IN, record)
        return Result.success(record)

    def update_notes(self, attendance_id: int, notes: str | None) -> Result[AttendanceRecord]:
        try:
            key = AttendanceId.coerce(attendance_id)
        except ValueError as e:
            return _rejected("update_notes", InvalidInput(str(e)))

        with self._store.atomic():
            record = self._store.get_record(key)
            if record is None:
                return _rejected("update_notes", AttendanceNotFound(key))
            record = record.with_notes(notes)
            self._store.save_record(record)

        logger.info("attendance_notes_updated", attendance_id=key.value)
        self._notify(LedgerAction.NOTES_UPDATED, record)
        return Result.success(record)

    def cancel_attendance(self, attendance_id: int) -> Result[AttendanceRecord]:
        """Delete a record whether or not it was checked in."""
        try:
            key = AttendanceId.coerce(attendance_id)
        except ValueError as e:
            return _rejected("cancel", InvalidInput(str(e)))

        with self._store.atomic():
            record = self._store.get_record(key)
            if record is None or not self._store.delete_record(key):
                return _rejected("cancel", AttendanceNotFound(key))

        logger.info("attendance_cancelled", attendance_id=key.value, was_checked_in=record.is_checked_in)
        self._notify(LedgerAction.CANCELLED, record)
        return Result.success(record)

    # -- Queries -----------------------------------------------------------

    def list_all(self) -> list[AttendanceRecord]:
        return _newest_first(self._store.list_records())

    def by_event(self, event_id: int) -> list[AttendanceRecord]:
        key = self._event_key(event_id)
        return _newest_first(r for r in self._store.list_records() if r.event_id == key)

    def by_user(self, user_id: int) -> list[AttendanceRecord]:
        key = self._user_key(user_id)
        return _newest_first(r for r in self._store.list_records() if r.user_id == key)

    def get(self, user_id: int, event_id: int) -> AttendanceRecord | None:
        user_key = self._user_key(user_id)
        event_key = self._event_key(event_id)
        if user_key is None or event_key is None:
            return None
        return self._store.find_record(user_key, event_key)

    def registered_count(self, event_id: int) -> int:
        return len(self.by_event(event_id))

    def checked_in_count(self, event_id: int) -> int:
        return sum(1 for record in self.by_event(event_id) if record.is_checked_in)

    def attendance_rate(self, event_id: int) -> float:
        records = self.by_event(event_id)
        return attendance_rate(sum(1 for r in records if r.is_checked_in), len(records))

    def statistics(self) -> AttendanceStatistics:
        records = self._store.list_records()
        checked_in = sum(1 for record in records if record.is_checked_in)
        return AttendanceStatistics(
            total_registrations=len(records),
            total_checked_in=checked_in,
            overall_attendance_rate=attendance_rate(checked_in, len(records)),
            unique_users=len({record.user_id for record in records}),
            unique_events=len({record.event_id for record in records}),
        )

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    def _user_key(user_id: int) -> UserId | None:
        try:
            return UserId.coerce(user_id)
        except ValueError:
            return None

    @staticmethod
    def _event_key(event_id: int) -> EventId | None:
        try:
            return EventId.coerce(event_id)
        except ValueError:
            return None

    def _notify(self, action: LedgerAction, record: AttendanceRecord) -> None:
        dispatch(self.changed, self, action=action, record=record)
