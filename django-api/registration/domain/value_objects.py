"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class _PositiveId:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{type(self).__name__} must be an integer")
        if self.value <= 0:
            raise ValueError(f"{type(self).__name__} must be positive")

    @classmethod
    def coerce(cls, value: "int | Self") -> Self:
        """Accept either a raw integer or an already-built ID."""
        return value if isinstance(value, cls) else cls(value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId(_PositiveId):
    """Unique identifier for an Event."""


@dataclass(frozen=True)
class UserId(_PositiveId):
    """Unique identifier for a User."""


@dataclass(frozen=True)
class AttendanceId(_PositiveId):
    """Unique identifier for an AttendanceRecord."""


@dataclass(frozen=True)
class Capacity:
    """Strictly positive seat count of an event."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Capacity must be positive")

    def admits(self, registered: int) -> bool:
        return registered < self.value


@dataclass(frozen=True)
class Email:
    """Email address compared case-insensitively.

    The original spelling is kept for display; ``key`` is what uniqueness and
    lookups are based on.
    """

    address: str

    def __post_init__(self) -> None:
        address = self.address.strip()
        if not address or "@" not in address:
            raise ValueError("Email address is invalid")
        object.__setattr__(self, "address", address)

    @property
    def key(self) -> str:
        return self.address.casefold()

    def matches(self, other: str) -> bool:
        return self.key == other.strip().casefold()

    def __str__(self) -> str:
        return self.address
