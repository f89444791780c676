"""Service wiring.

The catalog, directory and ledger are shared by the whole process; sessions
are opened per client from the shared registry.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from functools import cache

import structlog
from django.conf import settings
from django.utils import timezone

from registration.sample_data import sample_events, seed_users_and_attendance
from registration.services import AttendanceLedger, EventCatalog, SessionContext, UserDirectory
from registration.stores import InMemoryAttendanceStore, InMemoryEventStore, InMemoryUserStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Registry:
    """The shared services of one running application."""

    catalog: EventCatalog
    directory: UserDirectory
    ledger: AttendanceLedger

    def open_session(self) -> SessionContext:
        return SessionContext(self.directory)


def build_registry(
    *, seed_sample_data: bool = False, clock: Callable[[], datetime] = timezone.now
) -> Registry:
    catalog = EventCatalog(InMemoryEventStore(sample_events() if seed_sample_data else None))
    directory = UserDirectory(InMemoryUserStore(), clock=clock)
    ledger = AttendanceLedger(InMemoryAttendanceStore(), catalog, directory, clock=clock)
    if seed_sample_data:
        seed_users_and_attendance(directory, ledger, clock())
    return Registry(catalog=catalog, directory=directory, ledger=ledger)


@cache
def get_registry() -> Registry:
    """Return the process-wide registry, building it on first use."""
    registry = build_registry(seed_sample_data=settings.REGISTRATION_SEED_SAMPLE_DATA)
    stats = registry.ledger.statistics()
    logger.info(
        "registry_built",
        events=len(registry.catalog.list_all()),
        users=len(registry.directory.list_active()),
        registrations=stats.total_registrations,
    )
    return registry
