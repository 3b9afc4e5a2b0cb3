"""
PATH: exhibitions/views.py

EXHIBITIONS API

- GET  /exhibitions/?status=upcoming|ongoing|past&featured=true   (AllowAny)
- GET  /exhibitions/<id>/                                         (AllowAny)
- POST/PATCH/DELETE                                               exhibition.manage
- POST /exhibitions/<id>/attend/                                  toggle (authenticated)
- GET/POST /exhibitions/<id>/messages/                            chat (authenticated)
"""

from __future__ import annotations

from django.db.models import Count
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from exhibitions.models import STATUS_CHOICES, Exhibition
from exhibitions.serializers import (
    ExhibitionDetailSerializer,
    ExhibitionMessageSerializer,
    ExhibitionSerializer,
)
from exhibitions.services.schedule import filter_by_status, post_message, toggle_attendance
from permissions.roles import CAP_EXHIBITION_MANAGE, HasCapability


class ExhibitionViewSet(viewsets.ModelViewSet):
    serializer_class = ExhibitionSerializer
    lookup_value_regex = "[0-9a-fA-F-]{36}"
    filter_backends = []

    def get_queryset(self):
        qs = Exhibition.objects.annotate(attendees_count=Count("attendances", distinct=True))

        if self.action == "list":
            params = self.request.query_params
            status_param = (params.get("status") or "").strip().lower()
            if status_param:
                qs = filter_by_status(qs, status_param)

            featured = (params.get("featured") or "").strip().lower()
            if featured in {"true", "1"}:
                qs = qs.filter(featured=True)
            elif featured in {"false", "0"}:
                qs = qs.filter(featured=False)

        return qs.order_by("start")

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ExhibitionDetailSerializer
        return ExhibitionSerializer

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        if self.action in {"attend", "messages"}:
            return [IsAuthenticated()]

        self.required_capability = CAP_EXHIBITION_MANAGE
        return [IsAuthenticated(), HasCapability()]

    @extend_schema(
        parameters=[
            OpenApiParameter("status", str, enum=STATUS_CHOICES),
            OpenApiParameter("featured", bool),
        ],
        tags=["Exhibitions"],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=None,
        responses={200: OpenApiResponse(description='{"attending": bool, "attendees": int}')},
        tags=["Exhibitions"],
    )
    @action(detail=True, methods=["post"])
    def attend(self, request, pk=None):
        exhibition = self.get_object()
        return Response(toggle_attendance(exhibition=exhibition, user=request.user))

    @extend_schema(
        methods=["GET"],
        responses={200: ExhibitionMessageSerializer(many=True)},
        tags=["Exhibitions"],
    )
    @extend_schema(
        methods=["POST"],
        request=ExhibitionMessageSerializer,
        responses={201: ExhibitionMessageSerializer},
        tags=["Exhibitions"],
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        exhibition = self.get_object()

        if request.method == "GET":
            qs = exhibition.messages.select_related("user").order_by("created_at")
            return Response(ExhibitionMessageSerializer(qs, many=True).data)

        s = ExhibitionMessageSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        message = post_message(
            exhibition=exhibition,
            user=request.user,
            message=s.validated_data["message"],
        )
        return Response(ExhibitionMessageSerializer(message).data, status=status.HTTP_201_CREATED)
