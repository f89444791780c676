"""Per-session "current user" handle.

One SessionContext exists per connected client. It is passed explicitly to
whatever needs to know who is acting; nothing about it is process-global.
"""

from collections.abc import Callable
from typing import Any

import structlog
from django.dispatch import Signal

from registration.domain import User, UserId
from registration.services.user_directory import UserDirectory
from registration.signals import dispatch, subscribe

logger = structlog.get_logger(__name__)


class SessionContext:
    """Tracks at most one logged-in user for a single session."""

    def __init__(self, directory: UserDirectory) -> None:
        self._directory = directory
        self._user_id: UserId | None = None
        self.changed = Signal()
        # Weak reference: a discarded session drops its receiver with it.
        directory.changed.connect(self._on_user_changed, sender=directory)

    def subscribe(self, callback: Callable[..., object]) -> Callable[[], None]:
        return subscribe(self.changed, self, callback)

    @property
    def current_user(self) -> User | None:
        """The logged-in user as the directory currently knows them."""
        if self._user_id is None:
            return None
        return self._directory.get_by_id(self._user_id)

    @property
    def is_logged_in(self) -> bool:
        return self._user_id is not None

    def login(self, email: str) -> bool:
        """Log in as the active user with this email (case-insensitive)."""
        user = next((u for u in self._directory.list_active() if u.email.matches(email)), None)
        if user is None:
            logger.info("session_login_rejected")
            return False
        self._user_id = user.id
        logger.info("session_login", user_id=user.id.value)
        dispatch(self.changed, self, user=user)
        return True

    def logout(self) -> None:
        if self._user_id is not None:
            logger.info("session_logout", user_id=self._user_id.value)
        self._user_id = None
        dispatch(self.changed, self, user=None)

    def _on_user_changed(self, sender: UserDirectory, user: User, **kwargs: Any) -> None:
        if user.id == self._user_id:
            dispatch(self.changed, self, user=user)
