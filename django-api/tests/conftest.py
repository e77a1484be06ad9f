"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from events import models as orm
from events.domain import (
    Capacity,
    CategoryId,
    Event,
    Location,
    ModeratorEventPatch,
    ModeratorStateAction,
    NewEvent,
    UserId,
)
from events.services import (
    Clock,
    EventLifecycleService,
    ModerationHistoryService,
    RequestAdmissionService,
)
from events.stores import (
    InMemoryDirectory,
    InMemoryEventStore,
    InMemoryModerationLogStore,
    InMemoryRequestStore,
)
from events.stores.django_store import (
    DjangoDirectory,
    DjangoEventStore,
    DjangoModerationLogStore,
    DjangoRequestStore,
)

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
ORGANIZER = UserId(1)


class FixedClock(Clock):
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> None:
        self.current += timedelta(**delta)


def make_new_event(**overrides) -> NewEvent:
    fields = {
        "category_id": CategoryId(1),
        "title": "Jazz in the park",
        "annotation": "An evening of live jazz under the open sky",
        "description": "Local bands play standards and originals until late evening",
        "location": Location(lat=55.75, lon=37.62),
        "event_date": NOW + timedelta(days=7),
        "participant_limit": Capacity(0),
        "request_moderation": True,
    }
    fields.update(overrides)
    return NewEvent(**fields)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory(
        users=[UserId(i) for i in range(1, 51)],
        categories=[CategoryId(1), CategoryId(2)],
    )


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def request_store() -> InMemoryRequestStore:
    return InMemoryRequestStore()


@pytest.fixture
def log_store() -> InMemoryModerationLogStore:
    return InMemoryModerationLogStore()


@pytest.fixture
def lifecycle(event_store, log_store, directory, clock) -> EventLifecycleService:
    return EventLifecycleService(
        events=event_store,
        moderation=ModerationHistoryService(log_store),
        directory=directory,
        clock=clock,
    )


@pytest.fixture
def admission(event_store, request_store, directory, clock) -> RequestAdmissionService:
    return RequestAdmissionService(
        events=event_store,
        requests=request_store,
        directory=directory,
        clock=clock,
    )


@pytest.fixture
def published_event(lifecycle):
    """Factory: create an event as ORGANIZER and publish it."""

    def _published(limit: int = 0, moderation: bool = True) -> Event:
        event = lifecycle.create_event(
            ORGANIZER,
            make_new_event(participant_limit=Capacity(limit), request_moderation=moderation),
        )
        return lifecycle.update_event_by_moderator(
            event.id, ModeratorEventPatch(state_action=ModeratorStateAction.PUBLISH_EVENT)
        )

    return _published


# Database-backed fixtures; tests using them need the django_db marker.


@pytest.fixture
def users():
    User = get_user_model()
    return [UserId(User.objects.create_user(username=f"user{i}").pk) for i in range(4)]


@pytest.fixture
def category():
    return CategoryId(orm.Category.objects.create(name="Concerts").pk)


@pytest.fixture
def db_lifecycle(clock) -> EventLifecycleService:
    return EventLifecycleService(
        events=DjangoEventStore(),
        moderation=ModerationHistoryService(DjangoModerationLogStore()),
        directory=DjangoDirectory(),
        clock=clock,
    )


@pytest.fixture
def db_admission(clock) -> RequestAdmissionService:
    return RequestAdmissionService(
        events=DjangoEventStore(),
        requests=DjangoRequestStore(),
        directory=DjangoDirectory(),
        clock=clock,
    )
