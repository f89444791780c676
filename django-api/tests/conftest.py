"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from registration.domain import Capacity, Event, EventId, User
from registration.services import AttendanceLedger, EventCatalog, SessionContext, UserDirectory
from registration.stores import InMemoryAttendanceStore, InMemoryEventStore, InMemoryUserStore

NOW = datetime(2026, 1, 10, 12, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic replacement for ``timezone.now``."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_event() -> Callable[..., Event]:
    def factory(
        event_id: int,
        *,
        name: str = "Event",
        date: datetime = NOW,
        category: str = "General",
        capacity: int = 10,
        registered: int = 0,
        location: str = "Main Hall",
        description: str = "",
    ) -> Event:
        return Event(
            id=EventId(event_id),
            name=name,
            date=date,
            location=location,
            description=description,
            capacity=Capacity(capacity),
            category=category,
            registered_attendees=registered,
        )

    return factory


@pytest.fixture
def events(make_event: Callable[..., Event]) -> list[Event]:
    return [
        make_event(1, name="Tech Talk", date=datetime(2026, 3, 15, 9, tzinfo=UTC), category="Technology"),
        make_event(
            2,
            name="Gala Dinner",
            date=datetime(2026, 2, 1, 18, tzinfo=UTC),
            category="Social",
            capacity=2,
            registered=2,
            location="Grand Hotel",
        ),
        make_event(
            3,
            name="Product Launch",
            date=datetime(2026, 3, 15, 9, tzinfo=UTC),
            category="Corporate",
            capacity=5,
            registered=1,
            description="New hardware line",
        ),
        make_event(4, name="Python Meetup", date=datetime(2026, 1, 20, 19, tzinfo=UTC), category="Technology"),
    ]


@pytest.fixture
def event_store(events: list[Event]) -> InMemoryEventStore:
    return InMemoryEventStore(events)


@pytest.fixture
def catalog(event_store: InMemoryEventStore) -> EventCatalog:
    return EventCatalog(event_store)


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def directory(user_store: InMemoryUserStore, clock: FakeClock) -> UserDirectory:
    return UserDirectory(user_store, clock=clock)


@pytest.fixture
def ledger(catalog: EventCatalog, directory: UserDirectory, clock: FakeClock) -> AttendanceLedger:
    return AttendanceLedger(InMemoryAttendanceStore(), catalog, directory, clock=clock)


@pytest.fixture
def session(directory: UserDirectory) -> SessionContext:
    return SessionContext(directory)


@pytest.fixture
def alice(directory: UserDirectory) -> User:
    result = directory.register("Alice", "Archer", "alice@example.com", "555-0001", organization="Acme")
    assert result.value is not None
    return result.value


@pytest.fixture
def bob(directory: UserDirectory) -> User:
    result = directory.register("Bob", "Baker", "bob@example.com", "555-0002")
    assert result.value is not None
    return result.value


@pytest.fixture
def carol(directory: UserDirectory) -> User:
    result = directory.register("Carol", "Cooper", "carol@example.com", "555-0003")
    assert result.value is not None
    return result.value
