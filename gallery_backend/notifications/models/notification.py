# notifications/models/notification.py

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models


class Notification(models.Model):
    TYPE_LIKE = "like"
    TYPE_COMMENT = "comment"
    TYPE_FOLLOW = "follow"
    TYPE_MENTION = "mention"

    TYPE_CHOICES = [
        (TYPE_LIKE, "Like"),
        (TYPE_COMMENT, "Comment"),
        (TYPE_FOLLOW, "Follow"),
        (TYPE_MENTION, "Mention"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sent_notifications",
    )

    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    content = models.CharField(max_length=500)

    artwork = models.ForeignKey(
        "artworks.Artwork",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )

    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx")]

    def __str__(self):
        return f"{self.type} -> {self.recipient_id}"
