"""
PATH: notifications/views.py

NOTIFICATIONS API (requester's own rows only)

- GET  /notifications/                   newest first
- GET  /notifications/unread-count/
- POST /notifications/<id>/read/         404 for other users' rows
- POST /notifications/read-all/
- GET  /notifications/feed/?since=<iso>  polling replacement for a push channel;
                                         oldest first, poll again with `server_time`
                                         (more pages follow while `has_more`)
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from notifications.models import Notification
from notifications.serializers import NotificationSerializer

FEED_LIMIT = 100


class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_queryset(self):
        return (
            Notification.objects.filter(recipient=self.request.user)
            .select_related("sender")
            .order_by("-created_at")
        )

    @extend_schema(
        responses={200: OpenApiResponse(description='{"unread_count": int}')},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        count = self.get_queryset().filter(is_read=False).count()
        return Response({"unread_count": count})

    @extend_schema(
        request=None,
        responses={200: NotificationSerializer, 404: OpenApiResponse(description="Not found")},
        tags=["Notifications"],
    )
    @action(detail=True, methods=["post"], url_path="read")
    def mark_read(self, request, pk=None):
        notification = get_object_or_404(self.get_queryset(), pk=pk)
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return Response(NotificationSerializer(notification).data)

    @extend_schema(
        request=None,
        responses={200: OpenApiResponse(description='{"updated": int}')},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["post"], url_path="read-all")
    def mark_all_read(self, request):
        updated = self.get_queryset().filter(is_read=False).update(is_read=True)
        return Response({"updated": updated})

    @extend_schema(
        parameters=[
            OpenApiParameter(
                "since",
                str,
                description="ISO-8601 datetime; only notifications created after it",
                required=False,
            )
        ],
        responses={200: NotificationSerializer(many=True)},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"])
    def feed(self, request):
        # cursor is fixed before reading so rows created mid-request land in the next poll
        now = timezone.now()
        qs = self.get_queryset().filter(created_at__lte=now)

        raw = (request.query_params.get("since") or "").strip()
        if not raw:
            latest = list(qs[:FEED_LIMIT])
            latest.reverse()
            return self._feed_response(latest, cursor=now, has_more=False)

        try:
            since = parse_datetime(raw.replace(" ", "+"))
        except ValueError:
            since = None
        if since is None:
            return Response(
                {"detail": "since must be an ISO-8601 datetime"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if timezone.is_naive(since):
            since = timezone.make_aware(since, timezone.get_current_timezone())

        qs = qs.filter(created_at__gt=since).order_by("created_at", "id")
        rows = list(qs[: FEED_LIMIT + 1])

        if len(rows) <= FEED_LIMIT:
            return self._feed_response(rows, cursor=now, has_more=False)

        # page is full: stop at a timestamp boundary so the cursor never splits a tie
        boundary = rows[FEED_LIMIT].created_at
        page = [n for n in rows[:FEED_LIMIT] if n.created_at != boundary]
        if not page:
            page = list(qs.filter(created_at=boundary))
        return self._feed_response(page, cursor=page[-1].created_at, has_more=True)

    def _feed_response(self, rows, *, cursor, has_more: bool):
        return Response(
            {
                "results": NotificationSerializer(rows, many=True).data,
                "server_time": cursor.isoformat(),
                "has_more": has_more,
            }
        )