"""
PATH: exhibitions/models.py

EXHIBITIONS

Rules:
- end must not precede start (clean() + DB check)
- status is derived from the clock, never stored:
  upcoming (now < start), ongoing (start <= now <= end), past (end < now)
- one attendance row per (exhibition, user)
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

STATUS_UPCOMING = "upcoming"
STATUS_ONGOING = "ongoing"
STATUS_PAST = "past"

STATUS_CHOICES = [STATUS_UPCOMING, STATUS_ONGOING, STATUS_PAST]


class Exhibition(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    image_url = models.URLField(max_length=1000, blank=True, default="")

    start = models.DateTimeField()
    end = models.DateTimeField()

    is_virtual = models.BooleanField(default=False)
    location = models.CharField(max_length=255, blank=True, default="")
    organizer = models.CharField(max_length=200, blank=True, default="")
    featured = models.BooleanField(default=False)

    featured_artists = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="featured_in_exhibitions",
    )
    artworks = models.ManyToManyField(
        "artworks.Artwork",
        blank=True,
        related_name="exhibitions",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start"]
        constraints = [
            models.CheckConstraint(condition=Q(end__gte=F("start")), name="exhibition_end_after_start"),
        ]

    def clean(self):
        if self.start and self.end and self.end < self.start:
            raise ValidationError({"end": "End must not be before start."})

    def status_at(self, when=None) -> str:
        now = when or timezone.now()
        if now < self.start:
            return STATUS_UPCOMING
        if now > self.end:
            return STATUS_PAST
        return STATUS_ONGOING

    @property
    def status(self) -> str:
        return self.status_at()

    def __str__(self):
        return self.title


class ExhibitionAttendance(models.Model):
    exhibition = models.ForeignKey(Exhibition, on_delete=models.CASCADE, related_name="attendances")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="exhibition_attendances",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["exhibition", "user"], name="uniq_attendance"),
        ]

    def __str__(self):
        return f"{self.user_id} @ {self.exhibition_id}"


class ExhibitionMessage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    exhibition = models.ForeignKey(Exhibition, on_delete=models.CASCADE, related_name="messages")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="exhibition_messages",
    )
    message = models.TextField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"Message {self.id} in {self.exhibition_id}"
