"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
State changes produce new instances; nothing is mutated in place.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from events.domain.enums import EventState, ModerationAction, RequestStatus
from events.domain.value_objects import (
    Capacity,
    CategoryId,
    EventId,
    Location,
    RequestId,
    UserId,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    initiator_id: UserId
    category_id: CategoryId
    title: str
    annotation: str
    description: str
    location: Location
    paid: bool
    event_date: datetime
    created_on: datetime
    participant_limit: Capacity
    request_moderation: bool = True
    confirmed_requests: int = 0
    state: EventState = EventState.PENDING
    published_on: datetime | None = None
    moderation_note: str | None = None

    def __post_init__(self) -> None:
        if self.confirmed_requests < 0:
            raise ValueError("Confirmed requests cannot be negative")

    @property
    def is_published(self) -> bool:
        return self.state is EventState.PUBLISHED

    @property
    def auto_confirms(self) -> bool:
        """Requests skip organizer moderation."""
        return not self.request_moderation or self.participant_limit.is_unlimited

    @property
    def is_full(self) -> bool:
        if self.participant_limit.is_unlimited:
            return False
        return self.confirmed_requests >= self.participant_limit.value

    @property
    def remaining_capacity(self) -> int | None:
        """Free slots, or None when the event is unlimited."""
        if self.participant_limit.is_unlimited:
            return None
        return max(self.participant_limit.value - self.confirmed_requests, 0)

    def is_initiated_by(self, user_id: UserId) -> bool:
        return self.initiator_id == user_id

    def with_confirmed(self, delta: int) -> "Event":
        """Return a copy with the counter moved by `delta`, floored at zero."""
        return replace(self, confirmed_requests=max(self.confirmed_requests + delta, 0))


@dataclass(frozen=True)
class ParticipationRequest:
    """Domain representation of a participation request."""

    id: RequestId
    event_id: EventId
    requester_id: UserId
    created: datetime
    status: RequestStatus = RequestStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status is not RequestStatus.CANCELED

    def with_status(self, status: RequestStatus) -> "ParticipationRequest":
        return replace(self, status=status)


@dataclass(frozen=True)
class ModerationLogEntry:
    """One moderation action. Entries are never updated or deleted."""

    id: int
    event_id: EventId
    action: ModerationAction
    note: str | None
    acted_on: datetime


@dataclass(frozen=True)
class StatusUpdateResult:
    """Outcome of a bulk status update, each list in request order."""

    confirmed: tuple[ParticipationRequest, ...] = ()
    rejected: tuple[ParticipationRequest, ...] = ()
