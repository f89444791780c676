"""Change notifications for the registration core.

Each service owns its own ``Signal`` and sends it with itself as sender once
per committed mutation, after leaving its critical section. Receivers are
advisory observers: they are called in connection order, and a failing
receiver is logged without affecting the mutation that triggered it.
Every subscription is separate: the same callable subscribed twice is called
twice, and each unsubscribe removes only its own subscription.

Receivers are called as ``receiver(signal=..., sender=..., **kwargs)``:

- ``AttendanceLedger.changed``: ``action`` (LedgerAction), ``record``
- ``UserDirectory.changed``: ``user``
- ``SessionContext.changed``: ``user`` (the new current user or None)
"""

import itertools
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any

import structlog
from django.conf import settings
from django.dispatch import Signal

logger = structlog.get_logger(__name__)

_worker: ThreadPoolExecutor | None = None
_worker_lock = threading.Lock()
_subscription_ids = itertools.count(1)


class LedgerAction(Enum):
    """What happened to the attendance record carried by ``ledger.changed``."""

    REGISTERED = "registered"
    CHECKED_IN = "checked_in"
    NOTES_UPDATED = "notes_updated"
    CANCELLED = "cancelled"


def subscribe(signal: Signal, sender: object, callback: Callable[..., Any]) -> Callable[[], None]:
    """Connect ``callback`` to ``signal`` for ``sender`` and return its unsubscribe.

    Each call gets its own ``dispatch_uid``, so Django does not fold repeated
    subscriptions of one callable into a single receiver.
    """
    uid = f"registration-subscription-{next(_subscription_ids)}"
    signal.connect(callback, sender=sender, weak=False, dispatch_uid=uid)

    def unsubscribe() -> None:
        signal.disconnect(sender=sender, dispatch_uid=uid)

    return unsubscribe


def dispatch(signal: Signal, sender: object, **kwargs: Any) -> None:
    """Deliver a notification, in the background when configured to."""
    if _async_enabled():
        _background_worker().submit(_send, signal, sender, kwargs)
    else:
        _send(signal, sender, kwargs)


def _send(signal: Signal, sender: object, kwargs: dict[str, Any]) -> None:
    for receiver, response in signal.send_robust(sender=sender, **kwargs):
        if isinstance(response, Exception):
            logger.error(
                "change_receiver_failed",
                sender=type(sender).__name__,
                receiver=getattr(receiver, "__qualname__", repr(receiver)),
                exc_info=response,
            )


def _async_enabled() -> bool:
    return settings.configured and getattr(settings, "REGISTRATION_ASYNC_NOTIFICATIONS", False)


def _background_worker() -> ThreadPoolExecutor:
    # A single worker keeps delivery in the order the mutations were committed.
    global _worker
    with _worker_lock:
        if _worker is None:
            _worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="registration-signals")
        return _worker
