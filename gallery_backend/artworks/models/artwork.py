"""
PATH: artworks/models/artwork.py

ARTWORK CATALOG

Rules:
- Every artwork belongs to exactly one artist (profile).
- `likes` and `views` are denormalized counters maintained with F()
  expressions; `likes` never drops below zero.
- Tags are shared rows (case-insensitive unique names) so the gallery can
  filter by tag in the database.
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

DEFAULT_CATEGORY = "Other"
DEFAULT_TITLE = "Untitled"


def current_year() -> int:
    return timezone.now().year


class Tag(models.Model):
    name = models.CharField(max_length=50, unique=True)

    class Meta:
        ordering = ["name"]

    @staticmethod
    def normalize(name: str) -> str:
        return " ".join(str(name or "").split()).lower()

    def __str__(self):
        return self.name


class Artwork(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    artist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="artworks",
    )

    title = models.CharField(max_length=200, default=DEFAULT_TITLE)
    description = models.TextField(blank=True, default="")
    image_url = models.URLField(max_length=1000, blank=True, default="")

    category = models.CharField(max_length=100, default=DEFAULT_CATEGORY, db_index=True)
    medium = models.CharField(max_length=100, blank=True, default="")
    dimensions = models.CharField(max_length=100, blank=True, default="")
    year = models.PositiveIntegerField(default=current_year, db_index=True)

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    is_for_sale = models.BooleanField(default=False)

    likes = models.PositiveIntegerField(default=0)
    views = models.PositiveIntegerField(default=0)

    tags = models.ManyToManyField(Tag, blank=True, related_name="artworks")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["artist", "created_at"], name="artwork_artist_created_idx"),
            models.Index(fields=["likes"], name="artwork_likes_idx"),
        ]

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags.all()]

    def set_tags(self, names) -> None:
        """
        Replace the artwork's tags with `names` (strings), creating missing
        Tag rows. Blank and duplicate names are dropped.
        """
        cleaned = []
        for name in names or []:
            n = Tag.normalize(name)
            if n and n not in cleaned:
                cleaned.append(n)

        tags = [Tag.objects.get_or_create(name=n)[0] for n in cleaned]
        self.tags.set(tags)

    def __str__(self):
        return f"{self.title} by {self.artist_id}"
