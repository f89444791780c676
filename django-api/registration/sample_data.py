"""Demo dataset loaded when ``REGISTRATION_SEED_SAMPLE_DATA`` is on."""

from datetime import UTC, datetime, timedelta

from registration.domain import Capacity, Event, EventId
from registration.services import AttendanceLedger, UserDirectory


def sample_events() -> list[Event]:
    return [
        Event(
            id=EventId(1),
            name="Tech Conference 2026",
            date=datetime(2026, 3, 15, 9, 0, tzinfo=UTC),
            location="Convention Center, Downtown",
            description="Join industry leaders for a day of networking and learning about the latest in technology.",
            capacity=Capacity(500),
            registered_attendees=234,
            category="Technology",
            image_url="/images/tech-conference.jpg",
        ),
        Event(
            id=EventId(2),
            name="Annual Gala Dinner",
            date=datetime(2026, 4, 20, 18, 30, tzinfo=UTC),
            location="Grand Hotel Ballroom",
            description="An elegant evening of fine dining, entertainment, and charity fundraising.",
            capacity=Capacity(300),
            registered_attendees=287,
            category="Social",
            image_url="/images/gala-dinner.jpg",
        ),
        Event(
            id=EventId(3),
            name="Product Launch Event",
            date=datetime(2026, 5, 10, 14, 0, tzinfo=UTC),
            location="Innovation Hub",
            description="Be the first to experience our groundbreaking new product line.",
            capacity=Capacity(150),
            registered_attendees=98,
            category="Corporate",
            image_url="/images/product-launch.jpg",
        ),
        Event(
            id=EventId(4),
            name="Summer Music Festival",
            date=datetime(2026, 6, 25, 12, 0, tzinfo=UTC),
            location="City Park",
            description="A full day of live music featuring local and international artists.",
            capacity=Capacity(1000),
            registered_attendees=756,
            category="Entertainment",
            image_url="/images/music-festival.jpg",
        ),
        Event(
            id=EventId(5),
            name="Business Networking Breakfast",
            date=datetime(2026, 3, 5, 7, 30, tzinfo=UTC),
            location="Downtown Business Center",
            description="Connect with local business leaders over breakfast and discussion.",
            capacity=Capacity(80),
            registered_attendees=62,
            category="Corporate",
            image_url="/images/networking-breakfast.jpg",
        ),
        Event(
            id=EventId(6),
            name="Charity Fun Run",
            date=datetime(2026, 7, 15, 8, 0, tzinfo=UTC),
            location="Riverside Trail",
            description="5K and 10K runs to support local charities. All fitness levels welcome.",
            capacity=Capacity(400),
            registered_attendees=312,
            category="Social",
            image_url="/images/fun-run.jpg",
        ),
    ]


def seed_users_and_attendance(directory: UserDirectory, ledger: AttendanceLedger, now: datetime) -> None:
    """Register the two demo users and their four attendance records.

    Expects the catalog to hold ``sample_events()`` and the directory and
    ledger to be empty.
    """
    john = directory.register(
        "John",
        "Doe",
        "john.doe@example.com",
        "555-0101",
        organization="Tech Corp",
        registered_at=now - timedelta(days=30),
    ).value
    jane = directory.register(
        "Jane",
        "Smith",
        "jane.smith@example.com",
        "555-0102",
        organization="Design Studio",
        registered_at=now - timedelta(days=15),
    ).value
    if john is None or jane is None:
        raise RuntimeError("Sample users must be seeded into an empty directory")

    first = ledger.register_attendance(john.id, 1, now - timedelta(days=5))
    ledger.register_attendance(john.id, 2, now - timedelta(days=3))
    third = ledger.register_attendance(jane.id, 1, now - timedelta(days=4))
    ledger.register_attendance(jane.id, 3, now - timedelta(days=2))

    for registration in (first, third):
        if registration.value is not None:
            ledger.check_in(registration.value.id)
