"""Print attendance statistics for every event in the catalog."""

import typing as t

from django.core.management.base import BaseCommand, CommandParser

from registration.container import get_registry


class Command(BaseCommand):
    help = "Print per-event and overall attendance statistics."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("--category", help="Only report events in this category.")

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        registry = get_registry()
        catalog, ledger = registry.catalog, registry.ledger

        category = options.get("category")
        events = catalog.list_by_category(category) if category else catalog.list_all()
        if not events:
            self.stdout.write(self.style.WARNING("No events found."))
            return

        for event in events:
            self.stdout.write(
                f"{event.id}\t{event.date:%Y-%m-%d}\t{event.name}\t"
                f"seats {event.registered_attendees}/{event.capacity.value}\t"
                f"registered {ledger.registered_count(event.id)}\t"
                f"checked in {ledger.checked_in_count(event.id)}\t"
                f"rate {ledger.attendance_rate(event.id)}%"
            )

        stats = ledger.statistics()
        self.stdout.write(
            self.style.SUCCESS(
                f"{stats.total_registrations} registrations, {stats.total_checked_in} checked in "
                f"({stats.overall_attendance_rate}%), {stats.unique_users} users across "
                f"{stats.unique_events} events"
            )
        )
