"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.

`EventStore.lock_event` is the single serialization point for an event: every
write that touches an event, its participation requests or its moderation log
happens inside that block, and the block commits as one unit.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import datetime

from events.domain import (
    Event,
    EventId,
    EventSearchFilters,
    ModerationAction,
    ModerationLogEntry,
    PageRequest,
    ParticipationRequest,
    RequestId,
    UserId,
)
from events.domain.value_objects import CategoryId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def list_events_by_initiator(self, initiator_id: UserId, page: PageRequest) -> list[Event]:
        """Return one page of a user's events, ordered by created_on ascending."""
        ...

    @abstractmethod
    def search_events(self, filters: EventSearchFilters, page: PageRequest) -> list[Event]:
        """Return one page of events matching every filter, oldest first."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> None:
        """Insert a new event."""
        ...

    @abstractmethod
    def lock_event(self, event_id: EventId) -> AbstractContextManager[Event | None]:
        """Lock an event for the duration of the block and yield its current state.

        Yields None if the event does not exist. Concurrent blocks for the same
        event run one after another. Writes made inside the block are atomic.
        """
        ...

    @abstractmethod
    def save_event(self, event: Event) -> None:
        """Persist changes to an existing event. Call inside `lock_event`."""
        ...


class RequestStore(ABC):
    """Interface for participation request persistence operations."""

    @abstractmethod
    def get_request(self, request_id: RequestId) -> ParticipationRequest | None:
        """Return a request by ID, or None if not found."""
        ...

    @abstractmethod
    def get_requests(self, request_ids: Iterable[RequestId]) -> list[ParticipationRequest]:
        """Return the requests that exist among `request_ids`, in no particular order."""
        ...

    @abstractmethod
    def list_for_requester(self, requester_id: UserId) -> list[ParticipationRequest]:
        """Return a user's requests, ordered by created ascending."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[ParticipationRequest]:
        """Return an event's requests, ordered by created ascending."""
        ...

    @abstractmethod
    def has_active_request(self, event_id: EventId, requester_id: UserId) -> bool:
        """Check if the user has a non-canceled request for the event."""
        ...

    @abstractmethod
    def save_request(self, request: ParticipationRequest) -> None:
        """Insert or update a request."""
        ...

    def save_requests(self, requests: Iterable[ParticipationRequest]) -> None:
        for request in requests:
            self.save_request(request)


class ModerationLogStore(ABC):
    """Append-only storage for moderation actions."""

    @abstractmethod
    def append(
        self,
        event_id: EventId,
        action: ModerationAction,
        note: str | None,
        acted_on: datetime,
    ) -> ModerationLogEntry:
        """Store a new entry and return it with its assigned ID."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId, page: PageRequest) -> list[ModerationLogEntry]:
        """Return one page of entries, newest acted_on first, ties by ID descending."""
        ...


class Directory(ABC):
    """Existence checks against users and categories owned elsewhere."""

    @abstractmethod
    def user_exists(self, user_id: UserId) -> bool:
        ...

    @abstractmethod
    def category_exists(self, category_id: CategoryId) -> bool:
        ...
