"""Unit tests for RequestAdmissionService.

Covers request creation, cancellation and the organizer's bulk status update
against the in-memory stores.
Run with: pytest tests/test_request_admission.py -v
"""

import pytest

from events.domain import RequestStatus, UserId
from events.domain.errors import (
    DuplicateRequestError,
    EventNotFoundError,
    EventNotPublishedError,
    InvalidIdError,
    InvalidStatusUpdateError,
    NotEventInitiatorError,
    ParticipantLimitReachedError,
    RequestNotFoundError,
    RequestNotPendingError,
    SelfParticipationError,
    UserNotFoundError,
)

from tests.conftest import ORGANIZER, make_new_event

UNKNOWN_ID = "6f1c1a4e-0000-4000-8000-000000000000"


def _confirmed(event_store, event_id) -> int:
    return event_store.get_event(event_id).confirmed_requests


class TestCreateRequest:
    """Tests for create_request."""

    def test_moderated_limited_event_keeps_request_pending(self, admission, published_event, event_store):
        event = published_event(limit=5, moderation=True)
        request = admission.create_request(UserId(2), event.id)
        assert request.status is RequestStatus.PENDING
        assert request.event_id == event.id
        assert _confirmed(event_store, event.id) == 0

    def test_unlimited_event_auto_confirms(self, admission, published_event, event_store):
        """An unlimited event confirms even when moderation is on."""
        event = published_event(limit=0, moderation=True)
        request = admission.create_request(UserId(2), event.id)
        assert request.status is RequestStatus.CONFIRMED
        assert _confirmed(event_store, event.id) == 1

    def test_unmoderated_event_auto_confirms(self, admission, published_event, event_store):
        event = published_event(limit=2, moderation=False)
        admission.create_request(UserId(2), event.id)
        assert _confirmed(event_store, event.id) == 1

    def test_full_event_rejects_new_request(self, admission, published_event, event_store):
        """A third user is refused once a two-seat event is full."""
        event = published_event(limit=2, moderation=False)
        admission.create_request(UserId(2), event.id)
        admission.create_request(UserId(3), event.id)
        with pytest.raises(ParticipantLimitReachedError):
            admission.create_request(UserId(4), event.id)
        assert _confirmed(event_store, event.id) == 2

    def test_initiator_cannot_participate(self, admission, published_event):
        event = published_event()
        with pytest.raises(SelfParticipationError):
            admission.create_request(ORGANIZER, event.id)

    def test_unpublished_event_conflicts(self, admission, lifecycle):
        event = lifecycle.create_event(ORGANIZER, make_new_event())
        with pytest.raises(EventNotPublishedError):
            admission.create_request(UserId(2), event.id)

    def test_duplicate_request_conflicts(self, admission, published_event, request_store):
        event = published_event(limit=5)
        admission.create_request(UserId(2), event.id)
        with pytest.raises(DuplicateRequestError):
            admission.create_request(UserId(2), event.id)
        assert len(request_store.list_for_event(event.id)) == 1

    def test_request_again_after_cancel(self, admission, published_event):
        """A canceled request does not block a new one."""
        event = published_event(limit=5)
        first = admission.create_request(UserId(2), event.id)
        admission.cancel_request(UserId(2), first.id)
        second = admission.create_request(UserId(2), event.id)
        assert second.id != first.id
        assert second.status is RequestStatus.PENDING

    def test_unknown_event_raises_error(self, admission):
        with pytest.raises(EventNotFoundError):
            admission.create_request(UserId(2), UNKNOWN_ID)

    def test_unknown_user_raises_error(self, admission, published_event):
        event = published_event()
        with pytest.raises(UserNotFoundError):
            admission.create_request(UserId(500), event.id)

    def test_malformed_event_id_raises_error(self, admission):
        with pytest.raises(InvalidIdError):
            admission.create_request(UserId(2), "12")


class TestCancelRequest:
    """Tests for cancel_request."""

    def test_cancel_confirmed_request_frees_slot(self, admission, published_event, event_store):
        event = published_event(limit=1, moderation=False)
        request = admission.create_request(UserId(2), event.id)
        canceled = admission.cancel_request(UserId(2), request.id)
        assert canceled.status is RequestStatus.CANCELED
        assert _confirmed(event_store, event.id) == 0
        admission.create_request(UserId(3), event.id)

    def test_cancel_pending_request_keeps_counter(self, admission, published_event, event_store):
        event = published_event(limit=3)
        request = admission.create_request(UserId(2), event.id)
        admission.cancel_request(UserId(2), str(request.id))
        assert _confirmed(event_store, event.id) == 0

    def test_cancel_twice_is_noop(self, admission, published_event, event_store):
        """Canceling again returns the canceled request without touching the counter."""
        event = published_event(limit=0)
        admission.create_request(UserId(3), event.id)
        request = admission.create_request(UserId(2), event.id)
        admission.cancel_request(UserId(2), request.id)
        again = admission.cancel_request(UserId(2), request.id)
        assert again.status is RequestStatus.CANCELED
        assert _confirmed(event_store, event.id) == 1

    def test_other_users_request_is_not_found(self, admission, published_event):
        event = published_event()
        request = admission.create_request(UserId(2), event.id)
        with pytest.raises(RequestNotFoundError):
            admission.cancel_request(UserId(3), request.id)

    def test_unknown_request_raises_error(self, admission):
        with pytest.raises(RequestNotFoundError):
            admission.cancel_request(UserId(2), UNKNOWN_ID)


class TestListRequests:
    def test_requester_sees_own_requests(self, admission, published_event):
        first = published_event()
        second = published_event()
        admission.create_request(UserId(2), first.id)
        admission.create_request(UserId(2), second.id)
        admission.create_request(UserId(3), first.id)
        listed = admission.list_requests_for_requester(UserId(2))
        assert {r.event_id for r in listed} == {first.id, second.id}

    def test_organizer_sees_event_requests(self, admission, published_event):
        event = published_event(limit=5)
        created = [admission.create_request(UserId(i), event.id) for i in (2, 3)]
        assert [r.id for r in admission.list_requests_for_event(ORGANIZER, event.id)] == [
            r.id for r in created
        ]

    def test_non_organizer_gets_not_found(self, admission, published_event):
        event = published_event()
        with pytest.raises(EventNotFoundError):
            admission.list_requests_for_event(UserId(2), event.id)


class TestBulkUpdateStatus:
    """Tests for bulk_update_status."""

    def _pending(self, admission, event, *users):
        return [admission.create_request(UserId(u), event.id) for u in users]

    def test_confirm_fills_slots_in_order_and_rejects_overflow(
        self, admission, published_event, event_store, request_store
    ):
        """With two free slots, A and B are confirmed and C rejected."""
        event = published_event(limit=2)
        a, b, c = self._pending(admission, event, 2, 3, 4)
        result = admission.bulk_update_status(
            ORGANIZER, event.id, [str(a.id), str(b.id), str(c.id)], "CONFIRMED"
        )
        assert [r.id for r in result.confirmed] == [a.id, b.id]
        assert [r.id for r in result.rejected] == [c.id]
        assert _confirmed(event_store, event.id) == 2
        assert request_store.get_request(c.id).status is RequestStatus.REJECTED

    def test_request_order_decides_allocation(self, admission, published_event):
        event = published_event(limit=1)
        a, b = self._pending(admission, event, 2, 3)
        result = admission.bulk_update_status(ORGANIZER, event.id, [b.id, a.id], RequestStatus.CONFIRMED)
        assert [r.id for r in result.confirmed] == [b.id]
        assert [r.id for r in result.rejected] == [a.id]

    def test_reject_all(self, admission, published_event, event_store):
        event = published_event(limit=3)
        a, b = self._pending(admission, event, 2, 3)
        result = admission.bulk_update_status(ORGANIZER, event.id, [a.id, b.id], "REJECTED")
        assert result.confirmed == ()
        assert [r.id for r in result.rejected] == [a.id, b.id]
        assert _confirmed(event_store, event.id) == 0

    def test_full_event_conflicts_and_changes_nothing(
        self, admission, published_event, request_store, event_store
    ):
        """Once full, a later batch fails without touching any request."""
        event = published_event(limit=1)
        a, b = self._pending(admission, event, 2, 3)
        admission.bulk_update_status(ORGANIZER, event.id, [a.id], "CONFIRMED")
        with pytest.raises(ParticipantLimitReachedError):
            admission.bulk_update_status(ORGANIZER, event.id, [b.id], "CONFIRMED")
        assert request_store.get_request(b.id).status is RequestStatus.PENDING
        assert _confirmed(event_store, event.id) == 1

    def test_non_pending_request_conflicts(self, admission, published_event, request_store):
        event = published_event(limit=2)
        a, b = self._pending(admission, event, 2, 3)
        admission.bulk_update_status(ORGANIZER, event.id, [a.id], "REJECTED")
        with pytest.raises(RequestNotPendingError):
            admission.bulk_update_status(ORGANIZER, event.id, [b.id, a.id], "CONFIRMED")
        assert request_store.get_request(b.id).status is RequestStatus.PENDING

    def test_request_of_other_event_is_not_found(self, admission, published_event):
        event = published_event(limit=2)
        other = published_event(limit=2)
        (foreign,) = self._pending(admission, other, 2)
        with pytest.raises(RequestNotFoundError):
            admission.bulk_update_status(ORGANIZER, event.id, [foreign.id], "CONFIRMED")

    def test_non_organizer_conflicts(self, admission, published_event):
        event = published_event(limit=2)
        (a,) = self._pending(admission, event, 2)
        with pytest.raises(NotEventInitiatorError):
            admission.bulk_update_status(UserId(3), event.id, [a.id], "CONFIRMED")

    def test_unknown_event_raises_error(self, admission):
        with pytest.raises(EventNotFoundError):
            admission.bulk_update_status(ORGANIZER, UNKNOWN_ID, [UNKNOWN_ID], "CONFIRMED")

    @pytest.mark.parametrize("status", ["PENDING", "CANCELED", "MAYBE", None])
    def test_invalid_target_status(self, admission, status):
        with pytest.raises(InvalidStatusUpdateError):
            admission.bulk_update_status(ORGANIZER, UNKNOWN_ID, [UNKNOWN_ID], status)

    @pytest.mark.parametrize(
        "request_ids", [[], None, [None], [UNKNOWN_ID, UNKNOWN_ID]], ids=["empty", "missing", "null", "repeated"]
    )
    def test_invalid_request_ids(self, admission, request_ids):
        """ID list problems are reported before the event is looked up."""
        with pytest.raises(InvalidStatusUpdateError):
            admission.bulk_update_status(ORGANIZER, UNKNOWN_ID, request_ids, "CONFIRMED")


class TestAdmissionScenario:
    def test_single_seat_event_round_trip(self, admission, published_event, event_store):
        """Confirm one of two, refuse the other, then free and refill the seat."""
        event = published_event(limit=1)
        a = admission.create_request(UserId(2), event.id)
        b = admission.create_request(UserId(3), event.id)

        result = admission.bulk_update_status(ORGANIZER, event.id, [a.id, b.id], "CONFIRMED")
        assert [r.id for r in result.confirmed] == [a.id]
        assert [r.id for r in result.rejected] == [b.id]

        with pytest.raises(ParticipantLimitReachedError):
            admission.create_request(UserId(4), event.id)

        admission.cancel_request(UserId(2), a.id)
        assert _confirmed(event_store, event.id) == 0

        c = admission.create_request(UserId(4), event.id)
        assert c.status is RequestStatus.PENDING
        admission.bulk_update_status(ORGANIZER, event.id, [c.id], "CONFIRMED")
        assert _confirmed(event_store, event.id) == 1
