"""User directory service.

Owns user creation and the case-insensitive email uniqueness rule. Sends
``changed`` whenever an existing user is modified so open sessions can follow.
"""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

import structlog
from django.dispatch import Signal
from django.utils import timezone

from registration.clock import aware
from registration.domain import Email, ErrorCode, EventId, Result, User, UserId
from registration.domain.errors import DuplicateEmail, InvalidInput, UserNotFound
from registration.signals import dispatch, subscribe
from registration.stores.interfaces import UserStore

logger = structlog.get_logger(__name__)


def _parse_user_id(user_id: int | UserId) -> UserId | None:
    try:
        return UserId.coerce(user_id)
    except ValueError:
        return None


def _parse_event_id(event_id: int | EventId) -> EventId | None:
    try:
        return EventId.coerce(event_id)
    except ValueError:
        return None


def _missing_fields(**fields: str | None) -> list[str]:
    return [name for name, value in fields.items() if value is None or not value.strip()]


class UserDirectory:
    """Service for registered users."""

    def __init__(self, store: UserStore, clock: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._clock = clock
        self.changed = Signal()

    def subscribe(self, callback: Callable[..., object]) -> Callable[[], None]:
        return subscribe(self.changed, self, callback)

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        organization: str | None = None,
        registered_at: datetime | None = None,
    ) -> Result[User]:
        """Create an active user.

        Fails with DUPLICATE_EMAIL when any user, active or not, already uses
        the address (compared case-insensitively).
        """
        missing = _missing_fields(first_name=first_name, last_name=last_name, email=email, phone=phone)
        if missing:
            return Result.failure(InvalidInput(f"Required fields are empty: {', '.join(missing)}"))
        try:
            address = Email(email)
        except ValueError as e:
            return Result.failure(InvalidInput(str(e)))

        with self._store.atomic():
            if self._store.find_by_email(address.address) is not None:
                logger.info(
                    "user_registration_rejected", code=ErrorCode.DUPLICATE_EMAIL.value, reason="duplicate_email"
                )
                return Result.failure(DuplicateEmail(address.address))
            user = User(
                id=self._store.next_id(),
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=address,
                phone=phone.strip(),
                organization=organization,
                registered_at=aware(registered_at) if registered_at else self._clock(),
            )
            self._store.save_user(user)

        logger.info("user_registered", user_id=user.id.value)
        return Result.success(user)

    def get_by_id(self, user_id: int | UserId) -> User | None:
        parsed = _parse_user_id(user_id)
        if parsed is None:
            return None
        return self._store.get_user(parsed)

    def get_by_email(self, email: str) -> User | None:
        return self._store.find_by_email(email)

    def list_active(self) -> list[User]:
        return [user for user in self._store.list_users() if user.is_active]

    def update(self, user: User) -> Result[User]:
        """Replace the name, email, phone and organization of an existing user.

        The email is not re-checked for uniqueness here.
        """
        missing = _missing_fields(first_name=user.first_name, last_name=user.last_name, phone=user.phone)
        if missing:
            return Result.failure(InvalidInput(f"Required fields are empty: {', '.join(missing)}"))
        address = user.email
        if isinstance(address, str):
            try:
                address = Email(address)
            except ValueError as e:
                return Result.failure(InvalidInput(str(e)))
        elif not isinstance(address, Email):
            return Result.failure(InvalidInput("Email address is invalid"))

        with self._store.atomic():
            existing = self._store.get_user(user.id)
            if existing is None:
                return Result.failure(UserNotFound(user.id))
            updated = replace(
                existing,
                first_name=user.first_name,
                last_name=user.last_name,
                email=address,
                phone=user.phone,
                organization=user.organization,
            )
            self._store.save_user(updated)

        logger.info("user_updated", user_id=updated.id.value)
        dispatch(self.changed, self, user=updated)
        return Result.success(updated)

    def add_event_id(self, user_id: int | UserId, event_id: int | EventId) -> None:
        """Record that a user registered for an event. Repeats, invalid ids and unknown users are ignored."""
        parsed = _parse_user_id(user_id)
        if parsed is None:
            return
        event = _parse_event_id(event_id)
        if event is None:
            return

        with self._store.atomic():
            existing = self._store.get_user(parsed)
            if existing is None or event in existing.registered_event_ids:
                return
            updated = existing.with_event(event)
            self._store.save_user(updated)

        dispatch(self.changed, self, user=updated)

    def event_ids(self, user_id: int | UserId) -> list[EventId]:
        user = self.get_by_id(user_id)
        return list(user.registered_event_ids) if user is not None else []
