"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def generate(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RequestId:
    """Unique identifier for a ParticipationRequest."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def generate(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Identifier of a user known to the external user directory."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("UserId must be an integer")
        if self.value <= 0:
            raise ValueError("UserId must be greater than 0")

    @classmethod
    def from_string(cls, value: str | int) -> Self:
        return cls(value=int(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CategoryId:
    """Identifier of a category known to the external category directory."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("CategoryId must be an integer")
        if self.value <= 0:
            raise ValueError("CategoryId must be greater than 0")

    @classmethod
    def from_string(cls, value: str | int) -> Self:
        return cls(value=int(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity. Zero means unlimited."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    @property
    def is_unlimited(self) -> bool:
        return self.value == 0


@dataclass(frozen=True)
class Location:
    """Venue coordinates."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90 <= self.lat <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180 <= self.lon <= 180:
            raise ValueError("Longitude must be between -180 and 180")


@dataclass(frozen=True)
class PageRequest:
    """Offset pagination: `offset` items are skipped, at most `size` returned."""

    offset: int
    size: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("from must be greater than or equal to 0")
        if self.size <= 0:
            raise ValueError("size must be greater than 0")

    @property
    def end(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class LifecyclePolicy:
    """Time rules applied to event dates."""

    owner_min_lead_time: timedelta = timedelta(hours=2)
    publish_min_lead_time: timedelta = timedelta(hours=1)
    default_reject_note: str = "Event rejected by moderator"
    max_note_length: int = 1000

    def __post_init__(self) -> None:
        if self.owner_min_lead_time < timedelta(0) or self.publish_min_lead_time < timedelta(0):
            raise ValueError("Lead times cannot be negative")
        if not self.default_reject_note.strip():
            raise ValueError("Default reject note cannot be blank")

    @property
    def owner_min_lead_hours(self) -> int:
        return int(self.owner_min_lead_time.total_seconds() // 3600)

    @property
    def publish_min_lead_hours(self) -> int:
        return int(self.publish_min_lead_time.total_seconds() // 3600)
