"""Inputs to lifecycle operations.

Handlers build these from validated request data. A `None` field in a patch
means "leave unchanged".
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.enums import EventState, ModeratorStateAction, OwnerStateAction
from events.domain.models import Event
from events.domain.value_objects import Capacity, CategoryId, Location, UserId


@dataclass(frozen=True)
class NewEvent:
    """Data needed to create an event."""

    category_id: CategoryId
    title: str
    annotation: str
    description: str
    location: Location
    event_date: datetime
    paid: bool = False
    participant_limit: Capacity = Capacity(0)
    request_moderation: bool = True


@dataclass(frozen=True)
class EventPatch:
    """Field changes shared by owner and moderator updates."""

    category_id: CategoryId | None = None
    title: str | None = None
    annotation: str | None = None
    description: str | None = None
    location: Location | None = None
    event_date: datetime | None = None
    paid: bool | None = None
    participant_limit: Capacity | None = None
    request_moderation: bool | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields that are set."""
        return {
            name: value
            for name, value in (
                ("category_id", self.category_id),
                ("title", self.title),
                ("annotation", self.annotation),
                ("description", self.description),
                ("location", self.location),
                ("event_date", self.event_date),
                ("paid", self.paid),
                ("participant_limit", self.participant_limit),
                ("request_moderation", self.request_moderation),
            )
            if value is not None
        }


@dataclass(frozen=True)
class OwnerEventPatch(EventPatch):
    state_action: OwnerStateAction | None = None


@dataclass(frozen=True)
class ModeratorEventPatch(EventPatch):
    state_action: ModeratorStateAction | None = None
    moderation_note: str | None = None


@dataclass(frozen=True)
class EventSearchFilters:
    """Moderator event search. An empty tuple or None bound means no filter.

    The date range bounds `event_date` and is inclusive on both ends.
    """

    users: tuple[UserId, ...] = ()
    states: tuple[EventState, ...] = ()
    categories: tuple[CategoryId, ...] = ()
    range_start: datetime | None = None
    range_end: datetime | None = None

    def __post_init__(self) -> None:
        if (
            self.range_start is not None
            and self.range_end is not None
            and self.range_start > self.range_end
        ):
            raise ValueError("Range start must not be after range end")

    def matches(self, event: Event) -> bool:
        if self.users and event.initiator_id not in self.users:
            return False
        if self.states and event.state not in self.states:
            return False
        if self.categories and event.category_id not in self.categories:
            return False
        if self.range_start is not None and event.event_date < self.range_start:
            return False
        if self.range_end is not None and event.event_date > self.range_end:
            return False
        return True
