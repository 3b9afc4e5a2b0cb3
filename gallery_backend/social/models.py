# social/models.py

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q


class Follow(models.Model):
    """
    follower -> artist edge.

    Rules:
    - unique per (follower, artist)
    - nobody follows themselves (DB check + clean())
    - only artist-role profiles can be followed (enforced in services)
    """

    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following",
    )
    artist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="followers",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["follower", "artist"], name="uniq_follow_pair"),
            models.CheckConstraint(condition=~Q(follower=F("artist")), name="follow_not_self"),
        ]

    def clean(self):
        if self.follower_id and self.follower_id == self.artist_id:
            raise ValidationError("You cannot follow yourself.")

    def __str__(self):
        return f"{self.follower_id} -> {self.artist_id}"
