"""Django ORM implementation of the stores.

Each method queries the ORM and converts rows to domain models. The event
lock is a `SELECT ... FOR UPDATE` on the event row inside `transaction.atomic`,
so request and log writes made under the lock commit together with the
event update. SQLite has no row locks; there the settings open every
transaction as IMMEDIATE, which serializes `lock_event` blocks database-wide.
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime

from django.contrib.auth import get_user_model
from django.db import transaction

from events import models as orm
from events.domain import (
    Capacity,
    CategoryId,
    Event,
    EventId,
    EventSearchFilters,
    EventState,
    Location,
    ModerationAction,
    ModerationLogEntry,
    PageRequest,
    ParticipationRequest,
    RequestId,
    RequestStatus,
    UserId,
)
from events.stores.interfaces import Directory, EventStore, ModerationLogStore, RequestStore

logger = logging.getLogger(__name__)


def _event_to_domain(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.id),
        initiator_id=UserId(row.initiator_id),
        category_id=CategoryId(row.category_id),
        title=row.title,
        annotation=row.annotation,
        description=row.description,
        location=Location(lat=row.lat, lon=row.lon),
        paid=row.paid,
        event_date=row.event_date,
        created_on=row.created_on,
        participant_limit=Capacity(row.participant_limit),
        request_moderation=row.request_moderation,
        confirmed_requests=row.confirmed_requests,
        state=EventState(row.state),
        published_on=row.published_on,
        moderation_note=row.moderation_note,
    )


def _event_fields(event: Event) -> dict[str, object]:
    return {
        "initiator_id": event.initiator_id.value,
        "category_id": event.category_id.value,
        "title": event.title,
        "annotation": event.annotation,
        "description": event.description,
        "lat": event.location.lat,
        "lon": event.location.lon,
        "paid": event.paid,
        "event_date": event.event_date,
        "created_on": event.created_on,
        "participant_limit": event.participant_limit.value,
        "request_moderation": event.request_moderation,
        "confirmed_requests": event.confirmed_requests,
        "state": event.state.value,
        "published_on": event.published_on,
        "moderation_note": event.moderation_note,
    }


def _request_to_domain(row: orm.ParticipationRequest) -> ParticipationRequest:
    return ParticipationRequest(
        id=RequestId(row.id),
        event_id=EventId(row.event_id),
        requester_id=UserId(row.requester_id),
        created=row.created,
        status=RequestStatus(row.status),
    )


def _log_to_domain(row: orm.ModerationLog) -> ModerationLogEntry:
    return ModerationLogEntry(
        id=row.id,
        event_id=EventId(row.event_id),
        action=ModerationAction(row.action),
        note=row.note,
        acted_on=row.acted_on,
    )


class DjangoEventStore(EventStore):
    """Event store backed by the Django ORM."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        return _event_to_domain(row) if row is not None else None

    def list_events_by_initiator(self, initiator_id: UserId, page: PageRequest) -> list[Event]:
        rows = orm.Event.objects.filter(initiator_id=initiator_id.value).order_by("created_on", "id")
        return [_event_to_domain(row) for row in rows[page.offset : page.end]]

    def search_events(self, filters: EventSearchFilters, page: PageRequest) -> list[Event]:
        rows = orm.Event.objects.all()
        if filters.users:
            rows = rows.filter(initiator_id__in=[u.value for u in filters.users])
        if filters.states:
            rows = rows.filter(state__in=[s.value for s in filters.states])
        if filters.categories:
            rows = rows.filter(category_id__in=[c.value for c in filters.categories])
        if filters.range_start is not None:
            rows = rows.filter(event_date__gte=filters.range_start)
        if filters.range_end is not None:
            rows = rows.filter(event_date__lte=filters.range_end)
        rows = rows.order_by("created_on", "id")
        return [_event_to_domain(row) for row in rows[page.offset : page.end]]

    def add_event(self, event: Event) -> None:
        orm.Event.objects.create(id=event.id.value, **_event_fields(event))

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[Event | None]:
        with transaction.atomic():
            row = orm.Event.objects.select_for_update().filter(pk=event_id.value).first()
            logger.debug("Locked event row %s (found=%s)", event_id, row is not None)
            yield _event_to_domain(row) if row is not None else None

    def save_event(self, event: Event) -> None:
        updated = orm.Event.objects.filter(pk=event.id.value).update(**_event_fields(event))
        if not updated:
            raise orm.Event.DoesNotExist(f"Event {event.id} does not exist")


class DjangoRequestStore(RequestStore):
    def get_request(self, request_id: RequestId) -> ParticipationRequest | None:
        row = orm.ParticipationRequest.objects.filter(pk=request_id.value).first()
        return _request_to_domain(row) if row is not None else None

    def get_requests(self, request_ids: Iterable[RequestId]) -> list[ParticipationRequest]:
        ids = {rid.value for rid in request_ids}
        return [
            _request_to_domain(row) for row in orm.ParticipationRequest.objects.filter(pk__in=ids)
        ]

    def list_for_requester(self, requester_id: UserId) -> list[ParticipationRequest]:
        rows = orm.ParticipationRequest.objects.filter(requester_id=requester_id.value)
        return [_request_to_domain(row) for row in rows.order_by("created")]

    def list_for_event(self, event_id: EventId) -> list[ParticipationRequest]:
        rows = orm.ParticipationRequest.objects.filter(event_id=event_id.value)
        return [_request_to_domain(row) for row in rows.order_by("created")]

    def has_active_request(self, event_id: EventId, requester_id: UserId) -> bool:
        return (
            orm.ParticipationRequest.objects.filter(
                event_id=event_id.value, requester_id=requester_id.value
            )
            .exclude(status=orm.ParticipationRequest.Status.CANCELED)
            .exists()
        )

    def save_request(self, request: ParticipationRequest) -> None:
        orm.ParticipationRequest.objects.update_or_create(
            pk=request.id.value,
            defaults={
                "event_id": request.event_id.value,
                "requester_id": request.requester_id.value,
                "created": request.created,
                "status": request.status.value,
            },
        )


class DjangoModerationLogStore(ModerationLogStore):
    def append(
        self,
        event_id: EventId,
        action: ModerationAction,
        note: str | None,
        acted_on: datetime,
    ) -> ModerationLogEntry:
        row = orm.ModerationLog.objects.create(
            event_id=event_id.value,
            action=action.value,
            note=note,
            acted_on=acted_on,
        )
        return _log_to_domain(row)

    def list_for_event(self, event_id: EventId, page: PageRequest) -> list[ModerationLogEntry]:
        rows = orm.ModerationLog.objects.filter(event_id=event_id.value).order_by("-acted_on", "-id")
        return [_log_to_domain(row) for row in rows[page.offset : page.end]]


class DjangoDirectory(Directory):
    """Looks users up in the configured auth user model and categories in Category."""

    def user_exists(self, user_id: UserId) -> bool:
        return get_user_model().objects.filter(pk=user_id.value).exists()

    def category_exists(self, category_id: CategoryId) -> bool:
        return orm.Category.objects.filter(pk=category_id.value).exists()
