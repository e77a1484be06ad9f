import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True)),
            ],
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=120)),
                ("annotation", models.CharField(max_length=2000)),
                ("description", models.TextField(max_length=7000)),
                ("lat", models.FloatField()),
                ("lon", models.FloatField()),
                ("paid", models.BooleanField(default=False)),
                ("event_date", models.DateTimeField()),
                ("created_on", models.DateTimeField()),
                ("participant_limit", models.PositiveIntegerField(default=0)),
                ("request_moderation", models.BooleanField(default=True)),
                ("confirmed_requests", models.PositiveIntegerField(default=0)),
                (
                    "state",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("PUBLISHED", "Published"), ("CANCELED", "Canceled")],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("published_on", models.DateTimeField(blank=True, null=True)),
                ("moderation_note", models.CharField(blank=True, max_length=1000, null=True)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="events",
                        to="events.category",
                    ),
                ),
                (
                    "initiator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["created_on"],
                "indexes": [
                    models.Index(fields=["initiator", "created_on"], name="event_initiator_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ParticipationRequest",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("CONFIRMED", "Confirmed"),
                            ("REJECTED", "Rejected"),
                            ("CANCELED", "Canceled"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requests",
                        to="events.event",
                    ),
                ),
                (
                    "requester",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="participation_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["created"],
                "indexes": [
                    models.Index(fields=["requester", "created"], name="request_requester_created_idx"),
                    models.Index(fields=["event", "created"], name="request_event_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "CANCELED"), _negated=True),
                        fields=("event", "requester"),
                        name="one_active_request_per_user_event",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ModerationLog",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "action",
                    models.CharField(choices=[("PUBLISH", "Publish"), ("REJECT", "Reject")], max_length=20),
                ),
                ("note", models.CharField(blank=True, max_length=1000, null=True)),
                ("acted_on", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="moderation_logs",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["-acted_on", "-id"],
                "indexes": [
                    models.Index(fields=["event", "-acted_on", "-id"], name="modlog_event_acted_idx"),
                ],
            },
        ),
    ]
