"""Tests for the user directory.

Run with: pytest tests/test_user_directory.py -v
"""

import threading
from dataclasses import replace
from datetime import UTC, datetime

import pytest

from registration.domain import Email, ErrorCode, EventId, User, UserId
from registration.services import UserDirectory
from registration.stores import InMemoryUserStore

from conftest import FakeClock


class TestRegister:
    """Tests for creating users."""

    def test_register_creates_active_user(self, directory: UserDirectory, clock: FakeClock):
        """A new user gets a fresh id, the current time and is active."""
        result = directory.register("Jane", "Smith", "jane@example.com", "555-0102", organization="Studio")
        assert result
        user = result.value
        assert user.id == UserId(1)
        assert user.full_name == "Jane Smith"
        assert user.organization == "Studio"
        assert user.registered_at == clock.now
        assert user.is_active
        assert user.registered_event_ids == ()

    def test_register_makes_naive_timestamp_aware(self, directory: UserDirectory):
        """A naive registered_at is read in the current time zone (UTC)."""
        result = directory.register(
            "Jane", "Smith", "jane@example.com", "555-0102", registered_at=datetime(2026, 1, 1, 9, 0)
        )
        assert result.value.registered_at == datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    def test_ids_are_allocated_in_sequence(self, alice: User, bob: User):
        """Each registration allocates the next id."""
        assert (alice.id.value, bob.id.value) == (1, 2)

    def test_duplicate_email_differing_in_case_fails(self, directory: UserDirectory):
        """The second registration of a@x.com as A@X.com is rejected."""
        assert directory.register("A", "One", "a@x.com", "1")
        result = directory.register("A", "Two", "A@X.com", "2")
        assert result.code is ErrorCode.DUPLICATE_EMAIL
        assert len(directory.list_active()) == 1

    def test_duplicate_of_inactive_user_fails(
        self, directory: UserDirectory, user_store: InMemoryUserStore, alice: User
    ):
        """Inactive users still own their email address."""
        user_store.save_user(replace(alice, is_active=False))
        result = directory.register("Alicia", "Archer", "ALICE@example.com", "555")
        assert result.code is ErrorCode.DUPLICATE_EMAIL

    @pytest.mark.parametrize(
        ("first_name", "last_name", "email", "phone"),
        [
            ("", "Smith", "jane@example.com", "555"),
            ("Jane", "  ", "jane@example.com", "555"),
            ("Jane", "Smith", "", "555"),
            ("Jane", "Smith", "jane@example.com", ""),
            ("Jane", "Smith", "not-an-email", "555"),
        ],
    )
    def test_invalid_input_fails(self, directory: UserDirectory, first_name, last_name, email, phone):
        """Empty required fields and malformed emails yield INVALID_INPUT."""
        result = directory.register(first_name, last_name, email, phone)
        assert result.code is ErrorCode.INVALID_INPUT
        assert directory.list_active() == []

    def test_concurrent_registrations_with_same_email(self, directory: UserDirectory):
        """Only one of many simultaneous registrations of an address succeeds."""
        callers = 20
        barrier = threading.Barrier(callers)
        outcomes: list[bool] = []

        def register(n: int) -> None:
            barrier.wait()
            outcomes.append(bool(directory.register("Same", f"Person{n}", "SAME@example.com", "555")))

        threads = [threading.Thread(target=register, args=(n,)) for n in range(callers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count(True) == 1
        assert len(directory.list_active()) == 1


class TestLookup:
    """Tests for finding users."""

    def test_get_by_id(self, directory: UserDirectory, alice: User):
        """Users are found by id; unknown and invalid ids are not."""
        assert directory.get_by_id(alice.id.value) == alice
        assert directory.get_by_id(42) is None
        assert directory.get_by_id(0) is None

    def test_get_by_email_is_case_insensitive(self, directory: UserDirectory, alice: User):
        """Email lookup ignores case."""
        assert directory.get_by_email("ALICE@EXAMPLE.COM") == alice
        assert directory.get_by_email("nobody@example.com") is None

    def test_list_active_excludes_inactive(
        self, directory: UserDirectory, user_store: InMemoryUserStore, alice: User, bob: User
    ):
        """Inactive users are hidden from listings but still found by id."""
        user_store.save_user(replace(bob, is_active=False))
        assert directory.list_active() == [alice]
        assert directory.get_by_id(bob.id.value) is not None


class TestUpdate:
    """Tests for editing users."""

    def test_update_replaces_mutable_fields(self, directory: UserDirectory, alice: User):
        """Name, email, phone and organization are replaced."""
        edited = replace(
            alice,
            first_name="Alicia",
            email=Email("alicia@example.com"),
            phone="555-9999",
            organization=None,
            is_active=False,
        )
        result = directory.update(edited)
        assert result
        stored = directory.get_by_id(alice.id.value)
        assert stored.first_name == "Alicia"
        assert str(stored.email) == "alicia@example.com"
        assert stored.phone == "555-9999"
        assert stored.organization is None
        assert stored.is_active
        assert stored.registered_at == alice.registered_at

    def test_update_unknown_user_fails(self, directory: UserDirectory, alice: User):
        """Updating an id that does not exist yields NOT_FOUND."""
        result = directory.update(replace(alice, id=UserId(99)))
        assert result.code is ErrorCode.NOT_FOUND

    def test_update_rejects_empty_name(self, directory: UserDirectory, alice: User):
        """Required fields stay required on update."""
        assert directory.update(replace(alice, last_name="")).code is ErrorCode.INVALID_INPUT

    def test_update_does_not_recheck_email_uniqueness(self, directory: UserDirectory, alice: User, bob: User):
        """An update may take another user's address; lookups return the earlier user."""
        assert directory.update(replace(bob, email=Email("Alice@Example.com")))
        assert directory.get_by_email("alice@example.com") == alice

    def test_update_accepts_plain_string_email(self, directory: UserDirectory, bob: User):
        """A string address is turned into an Email before it is stored."""
        assert directory.update(replace(bob, email="bob2@example.com"))  # type: ignore[arg-type]
        stored = directory.get_by_email("BOB2@example.com")
        assert stored.id == bob.id
        assert isinstance(stored.email, Email)

    @pytest.mark.parametrize("email", ["not-an-address", "   ", None])
    def test_update_rejects_invalid_email(self, directory: UserDirectory, alice: User, email: object):
        """A malformed address fails with INVALID_INPUT and leaves the directory usable."""
        result = directory.update(replace(alice, email=email))  # type: ignore[arg-type]
        assert result.code is ErrorCode.INVALID_INPUT
        assert directory.get_by_email("alice@example.com") == alice
        assert directory.register("Dan", "Lee", "dan@example.com", "555-0400")


class TestRegisteredEvents:
    """Tests for the per-user registered event set."""

    def test_add_event_id_is_idempotent_and_ordered(self, directory: UserDirectory, alice: User):
        """Event ids are appended once, in insertion order."""
        directory.add_event_id(alice.id.value, 3)
        directory.add_event_id(alice.id.value, 1)
        directory.add_event_id(alice.id.value, 3)
        assert directory.event_ids(alice.id.value) == [EventId(3), EventId(1)]

    def test_add_event_id_for_unknown_user_is_noop(self, directory: UserDirectory):
        """Unknown users are ignored."""
        directory.add_event_id(42, 1)
        assert directory.event_ids(42) == []

    @pytest.mark.parametrize("event_id", [0, -2])
    def test_add_event_id_with_invalid_event_is_noop(self, directory: UserDirectory, alice: User, event_id: int):
        """Non-positive event ids are ignored."""
        directory.add_event_id(alice.id.value, event_id)
        assert directory.event_ids(alice.id.value) == []
