"""
PATH: notifications/services/notify.py

NOTIFICATION FAN-IN

Called by artworks (like/comment) and social (follow) services inside
their transactions.

Rules:
- Self-actions never notify (liking your own artwork, etc.).
- Anonymous senders are not supported; callers pass a real user.
- Returns the created Notification, or None when skipped.
"""

from __future__ import annotations

import logging

from notifications.models import Notification

logger = logging.getLogger(__name__)


def notify(*, recipient, sender, type: str, content: str, artwork=None):
    if recipient is None:
        return None

    if sender is not None and str(sender.pk) == str(recipient.pk):
        return None

    notification = Notification.objects.create(
        recipient=recipient,
        sender=sender,
        type=type,
        content=content[:500],
        artwork=artwork,
    )

    logger.info(
        "Notification created",
        extra={
            "notification_id": str(notification.id),
            "type": type,
            "recipient_id": str(recipient.pk),
        },
    )
    return notification


def notify_like(*, artwork, sender):
    return notify(
        recipient=artwork.artist,
        sender=sender,
        type=Notification.TYPE_LIKE,
        content=f'{sender.username} liked your artwork "{artwork.title}"',
        artwork=artwork,
    )


def notify_comment(*, artwork, sender, text: str):
    preview = text if len(text) <= 80 else text[:77] + "..."
    return notify(
        recipient=artwork.artist,
        sender=sender,
        type=Notification.TYPE_COMMENT,
        content=f'{sender.username} commented on "{artwork.title}": {preview}',
        artwork=artwork,
    )


def notify_follow(*, artist, sender):
    return notify(
        recipient=artist,
        sender=sender,
        type=Notification.TYPE_FOLLOW,
        content=f"{sender.username} started following you",
    )
