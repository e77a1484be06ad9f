"""Serializers for request input and domain model output.

Input serializers check the shape and field limits of request bodies and build
domain commands. Output serializers read domain dataclasses directly.
"""

from rest_framework import serializers

from events.domain import (
    Capacity,
    CategoryId,
    Location,
    ModeratorEventPatch,
    ModeratorStateAction,
    NewEvent,
    OwnerEventPatch,
    OwnerStateAction,
)

DATETIME_INPUT_FORMATS = ["%Y-%m-%d %H:%M:%S", "iso-8601"]


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lon = serializers.FloatField(min_value=-180, max_value=180)


class _EventFieldsSerializer(serializers.Serializer):
    """Fields shared by event creation and updates, all optional here."""

    category = serializers.IntegerField(min_value=1, required=False)
    title = serializers.CharField(min_length=3, max_length=120, required=False)
    annotation = serializers.CharField(min_length=20, max_length=2000, required=False)
    description = serializers.CharField(min_length=20, max_length=7000, required=False)
    location = LocationSerializer(required=False)
    event_date = serializers.DateTimeField(input_formats=DATETIME_INPUT_FORMATS, required=False)
    paid = serializers.BooleanField(required=False)
    participant_limit = serializers.IntegerField(min_value=0, required=False)
    request_moderation = serializers.BooleanField(required=False)

    def patch_fields(self) -> dict[str, object]:
        data = self.validated_data
        location = data.get("location")
        limit = data.get("participant_limit")
        category = data.get("category")
        return {
            "category_id": CategoryId(category) if category is not None else None,
            "title": data.get("title"),
            "annotation": data.get("annotation"),
            "description": data.get("description"),
            "location": Location(**location) if location is not None else None,
            "event_date": data.get("event_date"),
            "paid": data.get("paid"),
            "participant_limit": Capacity(limit) if limit is not None else None,
            "request_moderation": data.get("request_moderation"),
        }


class NewEventSerializer(_EventFieldsSerializer):
    category = serializers.IntegerField(min_value=1)
    title = serializers.CharField(min_length=3, max_length=120)
    annotation = serializers.CharField(min_length=20, max_length=2000)
    description = serializers.CharField(min_length=20, max_length=7000)
    location = LocationSerializer()
    event_date = serializers.DateTimeField(input_formats=DATETIME_INPUT_FORMATS)
    paid = serializers.BooleanField(default=False)
    participant_limit = serializers.IntegerField(min_value=0, default=0)
    request_moderation = serializers.BooleanField(default=True)

    def to_command(self) -> NewEvent:
        fields = self.patch_fields()
        return NewEvent(**fields)


class UpdateEventUserSerializer(_EventFieldsSerializer):
    state_action = serializers.ChoiceField(
        choices=[action.value for action in OwnerStateAction], required=False
    )

    def to_command(self) -> OwnerEventPatch:
        action = self.validated_data.get("state_action")
        return OwnerEventPatch(
            **self.patch_fields(),
            state_action=OwnerStateAction(action) if action else None,
        )


class UpdateEventAdminSerializer(_EventFieldsSerializer):
    state_action = serializers.ChoiceField(
        choices=[action.value for action in ModeratorStateAction], required=False
    )
    moderation_note = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, allow_null=True
    )

    def to_command(self) -> ModeratorEventPatch:
        action = self.validated_data.get("state_action")
        return ModeratorEventPatch(
            **self.patch_fields(),
            state_action=ModeratorStateAction(action) if action else None,
            moderation_note=self.validated_data.get("moderation_note"),
        )


class StatusUpdateRequestSerializer(serializers.Serializer):
    """Shape only; emptiness, nulls and allowed statuses are checked by the service."""

    request_ids = serializers.ListField(
        child=serializers.CharField(allow_null=True), allow_empty=True
    )
    status = serializers.CharField()


def _split_csv(values: list[str] | None) -> list[str] | None:
    if not values:
        return None
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


class AdminEventSearchSerializer(serializers.Serializer):
    """Query parameters of the moderator event search.

    List parameters may repeat (`?states=PENDING&states=CANCELED`) or be
    comma-separated (`?states=PENDING,CANCELED`). IDs and states are checked by
    the service.
    """

    users = serializers.ListField(child=serializers.CharField(), required=False)
    states = serializers.ListField(child=serializers.CharField(), required=False)
    categories = serializers.ListField(child=serializers.CharField(), required=False)
    range_start = serializers.DateTimeField(input_formats=DATETIME_INPUT_FORMATS, required=False)
    range_end = serializers.DateTimeField(input_formats=DATETIME_INPUT_FORMATS, required=False)

    def search_kwargs(self) -> dict[str, object]:
        data = self.validated_data
        return {
            "users": _split_csv(data.get("users")),
            "states": _split_csv(data.get("states")),
            "categories": _split_csv(data.get("categories")),
            "range_start": data.get("range_start"),
            "range_end": data.get("range_end"),
        }


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    initiator = serializers.IntegerField(source="initiator_id.value")
    category = serializers.IntegerField(source="category_id.value")
    title = serializers.CharField()
    annotation = serializers.CharField()
    description = serializers.CharField()
    location = LocationSerializer()
    paid = serializers.BooleanField()
    event_date = serializers.DateTimeField()
    created_on = serializers.DateTimeField()
    participant_limit = serializers.IntegerField(source="participant_limit.value")
    request_moderation = serializers.BooleanField()
    confirmed_requests = serializers.IntegerField()
    state = serializers.CharField(source="state.value")
    published_on = serializers.DateTimeField(allow_null=True)
    moderation_note = serializers.CharField(allow_null=True)


class ParticipationRequestSerializer(serializers.Serializer):
    """Serializer for ParticipationRequest domain model."""

    id = serializers.UUIDField(source="id.value")
    event = serializers.UUIDField(source="event_id.value")
    requester = serializers.IntegerField(source="requester_id.value")
    created = serializers.DateTimeField()
    status = serializers.CharField(source="status.value")


class StatusUpdateResultSerializer(serializers.Serializer):
    confirmed_requests = ParticipationRequestSerializer(source="confirmed", many=True)
    rejected_requests = ParticipationRequestSerializer(source="rejected", many=True)


class ModerationLogEntrySerializer(serializers.Serializer):
    """Serializer for ModerationLogEntry domain model."""

    id = serializers.IntegerField()
    event_id = serializers.UUIDField(source="event_id.value")
    action = serializers.CharField(source="action.value")
    note = serializers.CharField(allow_null=True)
    acted_on = serializers.DateTimeField()
