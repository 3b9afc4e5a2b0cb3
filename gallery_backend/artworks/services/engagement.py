"""
PATH: artworks/services/engagement.py

ENGAGEMENT WRITES (likes, favorites, comments)

GUARANTEES:
- like toggle is atomic: Like row and Artwork.likes change together
- Artwork.likes never drops below zero
- the artist is notified on like and comment, never for their own actions
  and never on unlike
- comment text is stripped, non-blank and at most COMMENT_MAX_LENGTH chars
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F
from django.db.models.functions import Greatest

from artworks.models import COMMENT_MAX_LENGTH, Artwork, Comment, Favorite, Like
from artworks.services.exceptions import CommentValidationError, EngagementPermissionError
from notifications.services.notify import notify_comment, notify_like
from permissions.roles import CAP_COMMENT_DELETE_ANY, user_has_capability

logger = logging.getLogger(__name__)


@transaction.atomic
def toggle_like(*, user, artwork: Artwork) -> dict:
    artwork = Artwork.objects.select_for_update().select_related("artist").get(pk=artwork.pk)

    deleted, _ = Like.objects.filter(user=user, artwork=artwork).delete()

    if deleted:
        Artwork.objects.filter(pk=artwork.pk).update(likes=Greatest(F("likes") - 1, 0))
        liked = False
    else:
        Like.objects.create(user=user, artwork=artwork)
        Artwork.objects.filter(pk=artwork.pk).update(likes=F("likes") + 1)
        liked = True
        notify_like(artwork=artwork, sender=user)

    artwork.refresh_from_db(fields=["likes"])

    logger.info(
        "Like toggled",
        extra={"artwork_id": str(artwork.pk), "user_id": str(user.pk), "liked": liked},
    )
    return {"liked": liked, "likes": artwork.likes}


@transaction.atomic
def toggle_favorite(*, user, artwork: Artwork) -> dict:
    deleted, _ = Favorite.objects.filter(user=user, artwork=artwork).delete()
    if deleted:
        return {"favorited": False}

    Favorite.objects.create(user=user, artwork=artwork)
    return {"favorited": True}


def has_liked(user, artwork: Artwork) -> bool:
    if not user or not user.is_authenticated:
        return False
    return Like.objects.filter(user=user, artwork=artwork).exists()


def has_favorited(user, artwork: Artwork) -> bool:
    if not user or not user.is_authenticated:
        return False
    return Favorite.objects.filter(user=user, artwork=artwork).exists()


def clean_comment_text(text) -> str:
    text = str(text or "").strip()
    if not text:
        raise CommentValidationError("Comment cannot be empty")
    if len(text) > COMMENT_MAX_LENGTH:
        raise CommentValidationError(
            f"Comment cannot exceed {COMMENT_MAX_LENGTH} characters"
        )
    return text


@transaction.atomic
def add_comment(*, user, artwork: Artwork, text) -> Comment:
    text = clean_comment_text(text)
    comment = Comment.objects.create(artwork=artwork, user=user, text=text)
    notify_comment(artwork=artwork, sender=user, text=text)

    logger.info(
        "Comment added",
        extra={"artwork_id": str(artwork.pk), "comment_id": str(comment.pk)},
    )
    return comment


def delete_comment(*, user, comment: Comment) -> None:
    is_author = str(comment.user_id) == str(user.pk)
    if not is_author and not user_has_capability(user, CAP_COMMENT_DELETE_ANY):
        raise EngagementPermissionError("You can only delete your own comments")

    comment.delete()
