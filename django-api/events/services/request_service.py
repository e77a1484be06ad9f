"""Participation request admission.

Owns request state and the event's confirmed-requests counter. Every counter
change happens inside `EventStore.lock_event` for the request's event, which
is what keeps concurrent requests near the limit from overbooking.

Admission rules:
- requests auto-confirm when the event has no pre-moderation or no limit
- otherwise they stay PENDING until the organizer confirms or rejects them
- in a bulk confirmation, request order decides who gets the remaining slots
"""

import logging
from collections.abc import Sequence

from events.domain import (
    EventId,
    ParticipationRequest,
    RequestId,
    RequestStatus,
    StatusUpdateResult,
    UserId,
)
from events.domain.errors import (
    DuplicateRequestError,
    EventNotFoundError,
    EventNotPublishedError,
    InvalidStatusUpdateError,
    NotEventInitiatorError,
    ParticipantLimitReachedError,
    RequestNotFoundError,
    RequestNotPendingError,
    SelfParticipationError,
    UserNotFoundError,
)
from events.services.clock import Clock
from events.services.parsing import parse_event_id, parse_request_id, parse_user_id
from events.stores.interfaces import Directory, EventStore, RequestStore

logger = logging.getLogger(__name__)

_BULK_TARGETS = (RequestStatus.CONFIRMED, RequestStatus.REJECTED)


class RequestAdmissionService:
    """Service for creating, canceling and moderating participation requests."""

    def __init__(
        self,
        events: EventStore,
        requests: RequestStore,
        directory: Directory,
        clock: Clock,
    ) -> None:
        self._events = events
        self._requests = requests
        self._directory = directory
        self._clock = clock

    # Requester operations

    def create_request(
        self, requester_id: UserId | int | str, event_id: EventId | str
    ) -> ParticipationRequest:
        """Submit a participation request.

        Raises:
            UserNotFoundError: If the requester does not exist.
            EventNotFoundError: If the event does not exist.
            SelfParticipationError: If the requester initiated the event.
            EventNotPublishedError: If the event is not published.
            DuplicateRequestError: If the requester already has an active request.
            ParticipantLimitReachedError: If the event is full.
        """
        user_id = parse_user_id(requester_id)
        eid = parse_event_id(event_id)
        logger.info("Creating participation request: user=%s, event=%s", user_id, eid)
        self._require_user(user_id)

        with self._events.lock_event(eid) as event:
            if event is None:
                raise EventNotFoundError(eid)
            if event.is_initiated_by(user_id):
                raise SelfParticipationError()
            if not event.is_published:
                raise EventNotPublishedError()
            if self._requests.has_active_request(eid, user_id):
                raise DuplicateRequestError()
            if event.is_full:
                raise ParticipantLimitReachedError()

            request = ParticipationRequest(
                id=RequestId.generate(),
                event_id=eid,
                requester_id=user_id,
                created=self._clock.now(),
            )
            if event.auto_confirms:
                request = request.with_status(RequestStatus.CONFIRMED)
                self._events.save_event(event.with_confirmed(1))
            self._requests.save_request(request)

        logger.info("Created request %s with status %s", request.id, request.status.value)
        return request

    def cancel_request(
        self, requester_id: UserId | int | str, request_id: RequestId | str
    ) -> ParticipationRequest:
        """Cancel the requester's own request. Canceling twice is a no-op.

        Raises:
            RequestNotFoundError: If the request does not exist or belongs to someone else.
        """
        user_id = parse_user_id(requester_id)
        rid = parse_request_id(request_id)
        logger.info("Canceling request %s by user %s", rid, user_id)

        request = self._requests.get_request(rid)
        if request is None or request.requester_id != user_id:
            raise RequestNotFoundError(rid)
        if request.status is RequestStatus.CANCELED:
            return request

        with self._events.lock_event(request.event_id) as event:
            # status may have changed while waiting for the lock
            current = self._requests.get_request(rid) or request
            if current.status is RequestStatus.CANCELED:
                return current
            if current.status is RequestStatus.CONFIRMED and event is not None:
                self._events.save_event(event.with_confirmed(-1))
            canceled = current.with_status(RequestStatus.CANCELED)
            self._requests.save_request(canceled)

        logger.info("Request %s canceled (was %s)", rid, current.status.value)
        return canceled

    def list_requests_for_requester(self, requester_id: UserId | int | str) -> list[ParticipationRequest]:
        user_id = parse_user_id(requester_id)
        logger.debug("Listing requests of user %s", user_id)
        self._require_user(user_id)
        return self._requests.list_for_requester(user_id)

    # Organizer operations

    def list_requests_for_event(
        self, organizer_id: UserId | int | str, event_id: EventId | str
    ) -> list[ParticipationRequest]:
        """Return an event's requests to its organizer.

        Raises:
            EventNotFoundError: If the event does not exist or the caller did not initiate it.
        """
        user_id = parse_user_id(organizer_id)
        eid = parse_event_id(event_id)
        logger.debug("Listing requests of event %s for organizer %s", eid, user_id)
        event = self._events.get_event(eid)
        if event is None or not event.is_initiated_by(user_id):
            raise EventNotFoundError(eid)
        return self._requests.list_for_event(eid)

    def bulk_update_status(
        self,
        organizer_id: UserId | int | str,
        event_id: EventId | str,
        request_ids: Sequence[RequestId | str | None] | None,
        status: RequestStatus | str | None,
    ) -> StatusUpdateResult:
        """Confirm or reject pending requests of an event in one batch.

        Precondition failures leave every request and the counter untouched.
        On a limited, moderated event the requests are processed in the given
        order: confirmations take the remaining slots, and once the event is
        full every later request in the batch is rejected.

        Raises:
            InvalidStatusUpdateError: If the ID list is empty, has nulls or
                duplicates, or the target status is not CONFIRMED/REJECTED.
            EventNotFoundError: If the event does not exist.
            NotEventInitiatorError: If the caller did not initiate the event.
            RequestNotFoundError: If an ID is unknown or belongs to another event.
            RequestNotPendingError: If any request is not PENDING.
            ParticipantLimitReachedError: If the event is already full.
        """
        target = self._parse_target(status)
        ids = self._parse_request_ids(request_ids)
        user_id = parse_user_id(organizer_id)
        eid = parse_event_id(event_id)
        logger.info(
            "Updating %d request(s) of event %s to %s by user %s", len(ids), eid, target.value, user_id
        )

        with self._events.lock_event(eid) as event:
            if event is None:
                raise EventNotFoundError(eid)
            if not event.is_initiated_by(user_id):
                raise NotEventInitiatorError()

            found = {r.id: r for r in self._requests.get_requests(ids)}
            batch = []
            for rid in ids:
                request = found.get(rid)
                if request is None or request.event_id != eid:
                    raise RequestNotFoundError(rid)
                batch.append(request)
            if any(r.status is not RequestStatus.PENDING for r in batch):
                raise RequestNotPendingError()

            confirmed: list[ParticipationRequest] = []
            rejected: list[ParticipationRequest] = []
            if event.auto_confirms:
                confirmed = [r.with_status(RequestStatus.CONFIRMED) for r in batch]
            else:
                if event.is_full:
                    raise ParticipantLimitReachedError()
                remaining = event.remaining_capacity or 0
                for request in batch:
                    if target is RequestStatus.CONFIRMED and remaining > 0:
                        confirmed.append(request.with_status(RequestStatus.CONFIRMED))
                        remaining -= 1
                    else:
                        rejected.append(request.with_status(RequestStatus.REJECTED))

            self._requests.save_requests(confirmed + rejected)
            if confirmed:
                self._events.save_event(event.with_confirmed(len(confirmed)))

        logger.info(
            "Event %s requests updated: confirmed=%d, rejected=%d", eid, len(confirmed), len(rejected)
        )
        return StatusUpdateResult(confirmed=tuple(confirmed), rejected=tuple(rejected))

    # Helpers

    def _require_user(self, user_id: UserId) -> None:
        if not self._directory.user_exists(user_id):
            raise UserNotFoundError(user_id)

    @staticmethod
    def _parse_target(status: RequestStatus | str | None) -> RequestStatus:
        if isinstance(status, str):
            try:
                status = RequestStatus(status)
            except ValueError:
                status = None
        if status not in _BULK_TARGETS:
            raise InvalidStatusUpdateError("Status must be CONFIRMED or REJECTED")
        return status

    @staticmethod
    def _parse_request_ids(request_ids: Sequence[RequestId | str | None] | None) -> list[RequestId]:
        if not request_ids:
            raise InvalidStatusUpdateError("Request IDs must not be empty")
        if any(rid is None for rid in request_ids):
            raise InvalidStatusUpdateError("Request IDs must not contain null")
        ids = [parse_request_id(rid) for rid in request_ids]
        if len(set(ids)) != len(ids):
            raise InvalidStatusUpdateError("Request IDs must not repeat")
        return ids
