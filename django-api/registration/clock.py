"""Timestamps handed to the registration services."""

from datetime import datetime

from django.utils import timezone


def aware(value: datetime) -> datetime:
    """Interpret a naive datetime in the current time zone; aware ones pass through."""
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
