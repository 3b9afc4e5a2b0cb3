"""
PATH: social/services/follows.py

FOLLOW GRAPH

- toggle_follow: follow/unfollow an artist; notifies the artist on follow only.
  Only following requires the artist role; an existing follow can always be undone
- follower_count / is_following
- artists_with_counts: artist profiles annotated with artwork + follower counts
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count

from notifications.services.notify import notify_follow
from permissions.roles import ROLE_ARTIST
from social.models import Follow
from social.services.exceptions import FollowNotAllowed

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def toggle_follow(*, follower, artist) -> dict:
    if str(follower.pk) == str(artist.pk):
        raise FollowNotAllowed("You cannot follow yourself.")

    deleted, _ = Follow.objects.filter(follower=follower, artist=artist).delete()
    if deleted:
        # unfollow stays possible after the artist changes role
        following = False
    else:
        if artist.role != ROLE_ARTIST:
            raise FollowNotAllowed("Only artists can be followed.")
        Follow.objects.create(follower=follower, artist=artist)
        notify_follow(artist=artist, sender=follower)
        following = True

    logger.info(
        "Follow toggled",
        extra={
            "follower_id": str(follower.pk),
            "artist_id": str(artist.pk),
            "following": following,
        },
    )
    return {"following": following, "followers": follower_count(artist)}


def follower_count(artist) -> int:
    return Follow.objects.filter(artist=artist).count()


def is_following(user, artist) -> bool:
    if not user or not user.is_authenticated:
        return False
    return Follow.objects.filter(follower=user, artist=artist).exists()


def artists_with_counts(q: str = ""):
    qs = User.objects.filter(role=ROLE_ARTIST, is_active=True)
    q = (q or "").strip()
    if q:
        qs = qs.filter(username__icontains=q)

    return qs.annotate(
        artworks_count=Count("artworks", distinct=True),
        followers_count=Count("followers", distinct=True),
    ).order_by("username")
