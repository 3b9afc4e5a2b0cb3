# exhibitions/services/schedule.py

from __future__ import annotations

from django.db import transaction
from django.utils import timezone

from exhibitions.models import (
    STATUS_ONGOING,
    STATUS_PAST,
    STATUS_UPCOMING,
    ExhibitionAttendance,
    ExhibitionMessage,
)


def filter_by_status(queryset, status: str, now=None):
    """
    Database-side equivalent of Exhibition.status_at().
    Unknown status values leave the queryset untouched.
    """
    now = now or timezone.now()
    if status == STATUS_UPCOMING:
        return queryset.filter(start__gt=now)
    if status == STATUS_ONGOING:
        return queryset.filter(start__lte=now, end__gte=now)
    if status == STATUS_PAST:
        return queryset.filter(end__lt=now)
    return queryset


@transaction.atomic
def toggle_attendance(*, exhibition, user) -> dict:
    deleted, _ = ExhibitionAttendance.objects.filter(exhibition=exhibition, user=user).delete()
    if not deleted:
        ExhibitionAttendance.objects.create(exhibition=exhibition, user=user)

    return {
        "attending": not deleted,
        "attendees": ExhibitionAttendance.objects.filter(exhibition=exhibition).count(),
    }


def post_message(*, exhibition, user, message: str) -> ExhibitionMessage:
    text = str(message or "").strip()
    if not text:
        raise ValueError("Message cannot be empty")
    return ExhibitionMessage.objects.create(exhibition=exhibition, user=user, message=text)
