"""Event lifecycle service - moderation state machine and event updates.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Lifecycle:

    [create] -> PENDING -> [moderator publishes] -> PUBLISHED
                   |  ^
                   v  | owner sends back to review
                CANCELED (owner cancels review or moderator rejects)

Every write to an existing event happens under `EventStore.lock_event`, so
lifecycle updates never overwrite a concurrent change to the
confirmed-requests counter.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta
from typing import assert_never

from events.domain import (
    CategoryId,
    Event,
    EventId,
    EventPatch,
    EventSearchFilters,
    EventState,
    LifecyclePolicy,
    ModerationAction,
    ModerationLogEntry,
    ModeratorEventPatch,
    ModeratorStateAction,
    NewEvent,
    OwnerEventPatch,
    OwnerStateAction,
    UserId,
)
from events.domain.errors import (
    CategoryNotFoundError,
    EventAlreadyPublishedError,
    EventNotFoundError,
    EventNotPendingError,
    InvalidDateRangeError,
    InvalidEventDateError,
    InvalidFieldError,
    LimitBelowConfirmedError,
    PublishTooLateError,
    UserNotFoundError,
)
from events.services.clock import Clock
from events.services.moderation_service import ModerationHistoryService
from events.services.parsing import (
    parse_category_id,
    parse_event_id,
    parse_event_state,
    parse_page,
    parse_user_id,
)
from events.stores.interfaces import Directory, EventStore

logger = logging.getLogger(__name__)


class EventLifecycleService:
    """Service for event creation, owner/moderator updates and moderation history."""

    def __init__(
        self,
        events: EventStore,
        moderation: ModerationHistoryService,
        directory: Directory,
        clock: Clock,
        policy: LifecyclePolicy | None = None,
    ) -> None:
        self._events = events
        self._moderation = moderation
        self._directory = directory
        self._clock = clock
        self._policy = policy or LifecyclePolicy()

    # Owner operations

    def create_event(self, initiator_id: UserId | int | str, new_event: NewEvent) -> Event:
        """Create an event in PENDING state.

        Raises:
            InvalidIdError: If the initiator ID is malformed.
            UserNotFoundError: If the initiator does not exist.
            CategoryNotFoundError: If the category does not exist.
            InvalidEventDateError: If the event starts too soon.
        """
        user_id = parse_user_id(initiator_id)
        logger.info("Creating event for user %s", user_id)
        self._require_user(user_id)
        if not self._directory.category_exists(new_event.category_id):
            raise CategoryNotFoundError(new_event.category_id)

        now = self._clock.now()
        self._check_lead_time(
            new_event.event_date, now, self._policy.owner_min_lead_time, self._policy.owner_min_lead_hours
        )

        event = Event(
            id=EventId.generate(),
            initiator_id=user_id,
            category_id=new_event.category_id,
            title=new_event.title,
            annotation=new_event.annotation,
            description=new_event.description,
            location=new_event.location,
            paid=new_event.paid,
            event_date=new_event.event_date,
            created_on=now,
            participant_limit=new_event.participant_limit,
            request_moderation=new_event.request_moderation,
        )
        self._events.add_event(event)
        logger.info("Created event %s", event.id)
        return event

    def list_owner_events(self, owner_id: UserId | int | str, offset: int = 0, size: int = 10) -> list[Event]:
        page = parse_page(offset, size)
        user_id = parse_user_id(owner_id)
        logger.debug("Listing events of user %s (from=%s, size=%s)", user_id, page.offset, page.size)
        self._require_user(user_id)
        return self._events.list_events_by_initiator(user_id, page)

    def get_owner_event(self, owner_id: UserId | int | str, event_id: EventId | str) -> Event:
        """Return an event owned by the user.

        Raises:
            UserNotFoundError: If the user does not exist.
            EventNotFoundError: If the event does not exist or belongs to someone else.
        """
        user_id = parse_user_id(owner_id)
        eid = parse_event_id(event_id)
        self._require_user(user_id)
        event = self._events.get_event(eid)
        if event is None or not event.is_initiated_by(user_id):
            raise EventNotFoundError(eid)
        return event

    def update_event_by_owner(
        self,
        owner_id: UserId | int | str,
        event_id: EventId | str,
        patch: OwnerEventPatch,
    ) -> Event:
        """Apply an owner's changes and optional state action to an unpublished event.

        Raises:
            UserNotFoundError: If the user does not exist.
            EventNotFoundError: If the event does not exist or belongs to someone else.
            EventAlreadyPublishedError: If the event is published.
            InvalidEventDateError: If a new event date starts too soon.
            CategoryNotFoundError: If a new category does not exist.
        """
        user_id = parse_user_id(owner_id)
        eid = parse_event_id(event_id)
        logger.info("Updating event %s by owner %s", eid, user_id)
        self._require_user(user_id)

        with self._events.lock_event(eid) as event:
            if event is None or not event.is_initiated_by(user_id):
                raise EventNotFoundError(eid)
            if event.is_published:
                raise EventAlreadyPublishedError()

            now = self._clock.now()
            if patch.event_date is not None:
                self._check_lead_time(
                    patch.event_date,
                    now,
                    self._policy.owner_min_lead_time,
                    self._policy.owner_min_lead_hours,
                )
            updated = self._apply_patch(event, patch)

            action = patch.state_action
            if action is None:
                pass
            elif action is OwnerStateAction.SEND_TO_REVIEW:
                updated = replace(updated, state=EventState.PENDING)
            elif action is OwnerStateAction.CANCEL_REVIEW:
                updated = replace(updated, state=EventState.CANCELED)
            else:
                assert_never(action)

            self._events.save_event(updated)

        logger.info("Event %s updated by owner, state=%s", eid, updated.state.value)
        return updated

    # Moderator operations

    def update_event_by_moderator(self, event_id: EventId | str, patch: ModeratorEventPatch) -> Event:
        """Apply a moderator's changes and optional publish/reject action.

        Without an action, a non-blank note replaces the stored moderation note.

        Raises:
            EventNotFoundError: If the event does not exist.
            InvalidFieldError: If the moderation note is too long.
            EventNotPendingError: If publishing an event that is not PENDING.
            EventAlreadyPublishedError: If changing or rejecting a published event.
            PublishTooLateError: If the event starts too soon to be published.
            InvalidEventDateError: If a new event date starts too soon.
            CategoryNotFoundError: If a new category does not exist.
        """
        eid = parse_event_id(event_id)
        action = patch.state_action
        note = self._clean_note(patch.moderation_note)
        logger.info(
            "Updating event %s by moderator, action=%s", eid, action.value if action else None
        )

        with self._events.lock_event(eid) as event:
            if event is None:
                raise EventNotFoundError(eid)
            if event.is_published:
                if action is ModeratorStateAction.PUBLISH_EVENT:
                    raise EventNotPendingError()
                raise EventAlreadyPublishedError()

            now = self._clock.now()
            if patch.event_date is not None:
                self._check_lead_time(
                    patch.event_date,
                    now,
                    self._policy.publish_min_lead_time,
                    self._policy.publish_min_lead_hours,
                )
            updated = self._apply_patch(event, patch)

            if action is None:
                if note is not None:
                    updated = replace(updated, moderation_note=note)
            elif action is ModeratorStateAction.PUBLISH_EVENT:
                if updated.state is not EventState.PENDING:
                    raise EventNotPendingError()
                if updated.event_date < now + self._policy.publish_min_lead_time:
                    raise PublishTooLateError(self._policy.publish_min_lead_hours)
                updated = replace(
                    updated,
                    state=EventState.PUBLISHED,
                    published_on=now,
                    moderation_note=note,
                )
                self._moderation.record(eid, ModerationAction.PUBLISH, note, now)
            elif action is ModeratorStateAction.REJECT_EVENT:
                reason = note or self._policy.default_reject_note
                updated = replace(updated, state=EventState.CANCELED, moderation_note=reason)
                self._moderation.record(eid, ModerationAction.REJECT, reason, now)
            else:
                assert_never(action)

            self._events.save_event(updated)

        logger.info("Event %s updated by moderator, state=%s", eid, updated.state.value)
        return updated

    def search_events_for_admin(
        self,
        users: Iterable[UserId | int | str] | None = None,
        states: Iterable[EventState | str] | None = None,
        categories: Iterable[CategoryId | int | str] | None = None,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
        offset: int = 0,
        size: int = 10,
    ) -> list[Event]:
        """Return events matching every given filter, oldest first.

        Missing or empty filters match all events. The range bounds the event
        date inclusively.

        Raises:
            InvalidPaginationError: If offset or size is out of range.
            InvalidIdError: If a user or category ID is malformed.
            InvalidFieldError: If a state is unknown.
            InvalidDateRangeError: If range_start is after range_end.
        """
        page = parse_page(offset, size)
        if range_start is not None and range_end is not None and range_start > range_end:
            raise InvalidDateRangeError()
        filters = EventSearchFilters(
            users=tuple(parse_user_id(u) for u in users or ()),
            states=tuple(parse_event_state(s) for s in states or ()),
            categories=tuple(parse_category_id(c) for c in categories or ()),
            range_start=range_start,
            range_end=range_end,
        )
        logger.debug("Admin event search: %s (from=%s, size=%s)", filters, page.offset, page.size)
        return self._events.search_events(filters, page)

    def get_moderation_history(
        self, event_id: EventId | str, offset: int = 0, size: int = 10
    ) -> list[ModerationLogEntry]:
        """Return moderation entries for an event, newest first.

        Raises:
            InvalidPaginationError: If offset or size is out of range.
            EventNotFoundError: If the event does not exist.
        """
        page = parse_page(offset, size)
        eid = parse_event_id(event_id)
        if self._events.get_event(eid) is None:
            raise EventNotFoundError(eid)
        return self._moderation.history(eid, page)

    # Public reads

    def get_published_event(self, event_id: EventId | str) -> Event:
        eid = parse_event_id(event_id)
        event = self._events.get_event(eid)
        if event is None or not event.is_published:
            raise EventNotFoundError(eid)
        return event

    # Helpers

    def _require_user(self, user_id: UserId) -> None:
        if not self._directory.user_exists(user_id):
            raise UserNotFoundError(user_id)

    def _apply_patch(self, event: Event, patch: EventPatch) -> Event:
        changes = patch.changes()
        if patch.category_id is not None and not self._directory.category_exists(patch.category_id):
            raise CategoryNotFoundError(patch.category_id)
        updated = replace(event, **changes)
        limit = updated.participant_limit
        if not limit.is_unlimited and limit.value < updated.confirmed_requests:
            raise LimitBelowConfirmedError()
        return updated

    def _clean_note(self, note: str | None) -> str | None:
        if note is None or not note.strip():
            return None
        if len(note) > self._policy.max_note_length:
            raise InvalidFieldError(
                f"Moderation note must be at most {self._policy.max_note_length} characters"
            )
        return note

    @staticmethod
    def _check_lead_time(event_date: datetime, now: datetime, lead: timedelta, hours: int) -> None:
        if event_date < now + lead:
            raise InvalidEventDateError(hours)
