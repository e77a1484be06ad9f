"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q


class Category(models.Model):
    """Persistence model for categories. Managed outside this app."""

    name = models.CharField(max_length=50, unique=True)

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    class State(models.TextChoices):
        PENDING = "PENDING"
        PUBLISHED = "PUBLISHED"
        CANCELED = "CANCELED"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    initiator = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="events"
    )
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="events")
    title = models.CharField(max_length=120)
    annotation = models.CharField(max_length=2000)
    description = models.TextField(max_length=7000)
    lat = models.FloatField()
    lon = models.FloatField()
    paid = models.BooleanField(default=False)
    event_date = models.DateTimeField()
    created_on = models.DateTimeField()
    participant_limit = models.PositiveIntegerField(default=0)
    request_moderation = models.BooleanField(default=True)
    confirmed_requests = models.PositiveIntegerField(default=0)
    state = models.CharField(max_length=20, choices=State.choices, default=State.PENDING)
    published_on = models.DateTimeField(null=True, blank=True)
    moderation_note = models.CharField(max_length=1000, null=True, blank=True)

    class Meta:
        ordering = ["created_on"]
        indexes = [
            models.Index(fields=["initiator", "created_on"], name="event_initiator_created_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class ParticipationRequest(models.Model):
    """Persistence model for participation requests."""

    class Status(models.TextChoices):
        PENDING = "PENDING"
        CONFIRMED = "CONFIRMED"
        REJECTED = "REJECTED"
        CANCELED = "CANCELED"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="requests")
    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="participation_requests"
    )
    created = models.DateTimeField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)

    class Meta:
        ordering = ["created"]
        indexes = [
            models.Index(fields=["requester", "created"], name="request_requester_created_idx"),
            models.Index(fields=["event", "created"], name="request_event_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "requester"],
                condition=~Q(status="CANCELED"),
                name="one_active_request_per_user_event",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.requester_id} -> {self.event_id} ({self.status})"


class ModerationLog(models.Model):
    """Persistence model for moderation history entries. Rows are never updated."""

    class Action(models.TextChoices):
        PUBLISH = "PUBLISH"
        REJECT = "REJECT"

    id = models.BigAutoField(primary_key=True)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="moderation_logs")
    action = models.CharField(max_length=20, choices=Action.choices)
    note = models.CharField(max_length=1000, null=True, blank=True)
    acted_on = models.DateTimeField()

    class Meta:
        ordering = ["-acted_on", "-id"]
        indexes = [
            models.Index(fields=["event", "-acted_on", "-id"], name="modlog_event_acted_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} {self.action} at {self.acted_on}"
