"""Builds services wired to the Django stores and settings."""

from datetime import timedelta
from functools import lru_cache

from django.conf import settings

from events.domain import LifecyclePolicy
from events.services import (
    EventLifecycleService,
    ModerationHistoryService,
    RequestAdmissionService,
    SystemClock,
)
from events.stores.django_store import (
    DjangoDirectory,
    DjangoEventStore,
    DjangoModerationLogStore,
    DjangoRequestStore,
)


def lifecycle_policy() -> LifecyclePolicy:
    config = getattr(settings, "EVENTS", {})
    defaults = LifecyclePolicy()
    return LifecyclePolicy(
        owner_min_lead_time=timedelta(
            hours=config.get("OWNER_MIN_LEAD_HOURS", defaults.owner_min_lead_hours)
        ),
        publish_min_lead_time=timedelta(
            hours=config.get("PUBLISH_MIN_LEAD_HOURS", defaults.publish_min_lead_hours)
        ),
        default_reject_note=config.get("DEFAULT_REJECT_NOTE", defaults.default_reject_note),
        max_note_length=config.get("MAX_MODERATION_NOTE_LENGTH", defaults.max_note_length),
    )


@lru_cache(maxsize=1)
def event_lifecycle_service() -> EventLifecycleService:
    return EventLifecycleService(
        events=DjangoEventStore(),
        moderation=ModerationHistoryService(DjangoModerationLogStore()),
        directory=DjangoDirectory(),
        clock=SystemClock(),
        policy=lifecycle_policy(),
    )


@lru_cache(maxsize=1)
def request_admission_service() -> RequestAdmissionService:
    return RequestAdmissionService(
        events=DjangoEventStore(),
        requests=DjangoRequestStore(),
        directory=DjangoDirectory(),
        clock=SystemClock(),
    )
