"""Unit tests for domain primitives and models.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import uuid
from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from events.domain import (
    Capacity,
    CategoryId,
    Event,
    EventId,
    Location,
    OwnerEventPatch,
    PageRequest,
    RequestStatus,
    UserId,
)
from events.domain.errors import EventNotFoundError, ErrorKind, RequestNotPendingError

from tests.conftest import NOW


def _event(limit: int = 0, moderation: bool = True, confirmed: int = 0) -> Event:
    return Event(
        id=EventId.generate(),
        initiator_id=UserId(1),
        category_id=CategoryId(1),
        title="Title",
        annotation="Annotation",
        description="Description",
        location=Location(lat=0, lon=0),
        paid=False,
        event_date=NOW + timedelta(days=1),
        created_on=NOW,
        participant_limit=Capacity(limit),
        request_moderation=moderation,
        confirmed_requests=confirmed,
    )


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_positive_value(self):
        """Capacity can be created with positive value."""
        assert Capacity(5).value == 5
        assert not Capacity(5).is_unlimited

    def test_capacity_zero_means_unlimited(self):
        """Capacity of zero is unlimited."""
        assert Capacity(0).is_unlimited

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)


class TestIdentifiers:
    """Tests for identifier value objects."""

    def test_event_id_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        raw = uuid.uuid4()
        assert EventId.from_string(str(raw)).value == raw

    def test_event_id_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")

    def test_user_id_rejects_non_positive(self):
        with pytest.raises(ValueError):
            UserId(0)

    def test_user_id_from_string(self):
        assert UserId.from_string("42") == UserId(42)

    def test_ids_are_immutable(self):
        with pytest.raises(FrozenInstanceError):
            UserId(1).value = 2


class TestPageRequest:
    def test_end_is_offset_plus_size(self):
        assert PageRequest(offset=10, size=5).end == 15

    @pytest.mark.parametrize("offset,size", [(-1, 10), (0, 0), (0, -3)])
    def test_rejects_out_of_range(self, offset, size):
        with pytest.raises(ValueError):
            PageRequest(offset=offset, size=size)


class TestLocation:
    def test_rejects_latitude_out_of_range(self):
        with pytest.raises(ValueError):
            Location(lat=91, lon=0)


class TestEvent:
    """Tests for Event admission helpers."""

    def test_unlimited_event_auto_confirms(self):
        """An unlimited event auto-confirms even with moderation on."""
        assert _event(limit=0, moderation=True).auto_confirms

    def test_unmoderated_event_auto_confirms(self):
        assert _event(limit=3, moderation=False).auto_confirms

    def test_limited_moderated_event_needs_organizer(self):
        assert not _event(limit=3, moderation=True).auto_confirms

    def test_is_full_at_limit(self):
        assert _event(limit=2, confirmed=2).is_full
        assert not _event(limit=2, confirmed=1).is_full

    def test_unlimited_event_is_never_full(self):
        event = _event(limit=0, confirmed=1000)
        assert not event.is_full
        assert event.remaining_capacity is None

    def test_remaining_capacity(self):
        assert _event(limit=5, confirmed=2).remaining_capacity == 3

    def test_with_confirmed_floors_at_zero(self):
        """Decrementing an empty counter keeps it at zero."""
        assert _event(confirmed=0).with_confirmed(-1).confirmed_requests == 0

    def test_negative_counter_rejected(self):
        with pytest.raises(ValueError):
            _event(confirmed=-1)


class TestPatch:
    def test_changes_only_contains_set_fields(self):
        patch = OwnerEventPatch(title="New title", paid=False)
        assert patch.changes() == {"title": "New title", "paid": False}


class TestDomainErrors:
    def test_error_kind_and_message(self):
        error = EventNotFoundError("abc")
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.event_id == "abc"
        assert str(error) == "EVENT_NOT_FOUND: Event not found"

    def test_conflict_kind(self):
        assert RequestNotPendingError().kind is ErrorKind.CONFLICT

    def test_request_status_values(self):
        assert RequestStatus("CONFIRMED") is RequestStatus.CONFIRMED
