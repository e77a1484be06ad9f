"""In-process implementations of the store interfaces.

Used by the service test suite and by anything that needs the core without a
database. Each event gets its own lock, so `lock_event` blocks on the same
event serialize while blocks on different events run in parallel.
"""

import itertools
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
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
from events.stores.interfaces import Directory, EventStore, ModerationLogStore, RequestStore


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}
        self._data_lock = threading.Lock()
        self._registry_lock = threading.Lock()
        self._event_locks: dict[EventId, threading.Lock] = {}

    def get_event(self, event_id: EventId) -> Event | None:
        with self._data_lock:
            return self._events.get(event_id)

    def list_events_by_initiator(self, initiator_id: UserId, page: PageRequest) -> list[Event]:
        with self._data_lock:
            owned = [e for e in self._events.values() if e.initiator_id == initiator_id]
        owned.sort(key=lambda e: e.created_on)
        return owned[page.offset : page.end]

    def search_events(self, filters: EventSearchFilters, page: PageRequest) -> list[Event]:
        with self._data_lock:
            found = [e for e in self._events.values() if filters.matches(e)]
        found.sort(key=lambda e: (e.created_on, e.id.value))
        return found[page.offset : page.end]

    def add_event(self, event: Event) -> None:
        with self._data_lock:
            if event.id in self._events:
                raise KeyError(f"Event {event.id} already exists")
            self._events[event.id] = event

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[Event | None]:
        with self._lock_for(event_id):
            yield self.get_event(event_id)

    def save_event(self, event: Event) -> None:
        with self._data_lock:
            if event.id not in self._events:
                raise KeyError(f"Event {event.id} does not exist")
            self._events[event.id] = event

    def _lock_for(self, event_id: EventId) -> threading.Lock:
        with self._registry_lock:
            return self._event_locks.setdefault(event_id, threading.Lock())


class InMemoryRequestStore(RequestStore):
    def __init__(self) -> None:
        self._requests: dict[RequestId, ParticipationRequest] = {}
        self._lock = threading.Lock()

    def get_request(self, request_id: RequestId) -> ParticipationRequest | None:
        with self._lock:
            return self._requests.get(request_id)

    def get_requests(self, request_ids: Iterable[RequestId]) -> list[ParticipationRequest]:
        with self._lock:
            return [self._requests[rid] for rid in set(request_ids) if rid in self._requests]

    def list_for_requester(self, requester_id: UserId) -> list[ParticipationRequest]:
        return self._select(lambda r: r.requester_id == requester_id)

    def list_for_event(self, event_id: EventId) -> list[ParticipationRequest]:
        return self._select(lambda r: r.event_id == event_id)

    def has_active_request(self, event_id: EventId, requester_id: UserId) -> bool:
        with self._lock:
            return any(
                r.event_id == event_id and r.requester_id == requester_id and r.is_active
                for r in self._requests.values()
            )

    def save_request(self, request: ParticipationRequest) -> None:
        with self._lock:
            self._requests[request.id] = request

    def _select(self, predicate) -> list[ParticipationRequest]:
        with self._lock:
            selected = [r for r in self._requests.values() if predicate(r)]
        # sort is stable, so equal timestamps keep insertion order
        selected.sort(key=lambda r: r.created)
        return selected


class InMemoryModerationLogStore(ModerationLogStore):
    def __init__(self) -> None:
        self._entries: list[ModerationLogEntry] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def append(
        self,
        event_id: EventId,
        action: ModerationAction,
        note: str | None,
        acted_on: datetime,
    ) -> ModerationLogEntry:
        with self._lock:
            entry = ModerationLogEntry(
                id=next(self._ids),
                event_id=event_id,
                action=action,
                note=note,
                acted_on=acted_on,
            )
            self._entries.append(entry)
        return entry

    def list_for_event(self, event_id: EventId, page: PageRequest) -> list[ModerationLogEntry]:
        with self._lock:
            entries = [e for e in self._entries if e.event_id == event_id]
        entries.sort(key=lambda e: (e.acted_on, e.id), reverse=True)
        return entries[page.offset : page.end]


class InMemoryDirectory(Directory):
    def __init__(
        self,
        users: Iterable[UserId] = (),
        categories: Iterable[CategoryId] = (),
    ) -> None:
        self.users: set[UserId] = set(users)
        self.categories: set[CategoryId] = set(categories)

    def user_exists(self, user_id: UserId) -> bool:
        return user_id in self.users

    def category_exists(self, category_id: CategoryId) -> bool:
        return category_id in self.categories
