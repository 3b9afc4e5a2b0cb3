"""
PATH: artworks/models/engagement.py

VISITOR ENGAGEMENT ROWS

- Comment: free text on an artwork (newest first)
- Like: one per (user, artwork); mirrored into Artwork.likes
- Favorite: one per (user, artwork); private bookmark list
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models

COMMENT_MAX_LENGTH = 2000


class Comment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    artwork = models.ForeignKey(
        "artworks.Artwork",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    text = models.TextField(max_length=COMMENT_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["artwork", "created_at"], name="comment_artwork_created_idx")]

    def __str__(self):
        return f"Comment {self.id} on {self.artwork_id}"


class Like(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="likes",
    )
    artwork = models.ForeignKey(
        "artworks.Artwork",
        on_delete=models.CASCADE,
        related_name="like_rows",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "artwork"], name="uniq_like_user_artwork"),
        ]

    def __str__(self):
        return f"{self.user_id} likes {self.artwork_id}"


class Favorite(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    artwork = models.ForeignKey(
        "artworks.Artwork",
        on_delete=models.CASCADE,
        related_name="favorited_by",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "artwork"], name="uniq_favorite_user_artwork"),
        ]

    def __str__(self):
        return f"{self.user_id} favorited {self.artwork_id}"
