"""
PATH: artworks/views/artwork.py

ARTWORK VIEWSET

Public (AllowAny):
- GET  /artworks/                       gallery list (search / filter / sort params)
- GET  /artworks/<id>/                  detail; bumps the view counter
- GET  /artworks/filter-options/        distinct categories, mediums, years, tags
- GET  /artworks/<id>/related/
- GET  /artworks/<id>/comments/

Authenticated:
- POST /artworks/                       requires artwork.upload
- PATCH/PUT/DELETE /artworks/<id>/      owner or admin
- POST /artworks/<id>/like/             toggle
- POST /artworks/<id>/favorite/         toggle
- POST /artworks/<id>/comments/
- GET  /artworks/favorites/
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from artworks.models import Favorite
from artworks.serializers import (
    ArtworkDetailSerializer,
    ArtworkSerializer,
    CommentCreateSerializer,
    CommentSerializer,
    FavoriteResultSerializer,
    LikeResultSerializer,
)
from artworks.services import catalog, engagement
from artworks.services.exceptions import CommentValidationError, InvalidGalleryQuery
from permissions.roles import (
    CAP_ARTWORK_DELETE_ANY,
    CAP_ARTWORK_EDIT_ANY,
    CAP_ARTWORK_UPLOAD,
    HasCapability,
    IsOwnerOrAdmin,
)

logger = logging.getLogger(__name__)


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


GALLERY_QUERY_PARAMETERS = [
    OpenApiParameter("q", str, description="Search title, description and tags"),
    OpenApiParameter("category", str),
    OpenApiParameter("year", int),
    OpenApiParameter("medium", str),
    OpenApiParameter("min_price", float),
    OpenApiParameter("max_price", float),
    OpenApiParameter("tags", str, description="Comma separated; all must match"),
    OpenApiParameter("artist", str, description="Artist profile id"),
    OpenApiParameter("for_sale", bool),
    OpenApiParameter("sort", str, enum=["newest", "oldest", "popular"]),
]

PUBLIC_ACTIONS = {"list", "retrieve", "filter_options", "related"}


class ArtworkViewSet(viewsets.ModelViewSet):
    serializer_class = ArtworkSerializer
    lookup_value_regex = "[0-9a-fA-F-]{36}"
    # the gallery applies its own FilterSet through GalleryQuery
    filter_backends = []

    def get_queryset(self):
        return catalog.base_queryset().order_by("-created_at")

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ArtworkDetailSerializer
        return ArtworkSerializer

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]

        if self.action == "comments" and self.request.method == "GET":
            return [AllowAny()]

        if self.action == "create":
            self.required_capability = CAP_ARTWORK_UPLOAD
            return [IsAuthenticated(), HasCapability()]

        if self.action in {"update", "partial_update"}:
            self.override_capability = CAP_ARTWORK_EDIT_ANY
            return [IsAuthenticated(), IsOwnerOrAdmin()]

        if self.action == "destroy":
            self.override_capability = CAP_ARTWORK_DELETE_ANY
            return [IsAuthenticated(), IsOwnerOrAdmin()]

        return [IsAuthenticated()]

    def get_throttles(self):
        if self.action in PUBLIC_ACTIONS:
            return [PublicCatalogThrottle()]
        return super().get_throttles()

    # ---------------- LIST / DETAIL ----------------

    @extend_schema(parameters=GALLERY_QUERY_PARAMETERS, tags=["Artworks"])
    def list(self, request, *args, **kwargs):
        query = catalog.GalleryQuery.from_params(request.query_params)
        try:
            qs = query.apply(self.get_queryset())
        except InvalidGalleryQuery as exc:
            return Response({"detail": exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ArtworkSerializer(page, many=True).data)
        return Response(ArtworkSerializer(qs, many=True).data)

    @extend_schema(responses={200: ArtworkDetailSerializer}, tags=["Artworks"])
    def retrieve(self, request, *args, **kwargs):
        artwork = self.get_object()
        catalog.record_view(artwork)
        serializer = ArtworkDetailSerializer(artwork, context=self.get_serializer_context())
        return Response(serializer.data)

    # ---------------- WRITES ----------------

    def perform_create(self, serializer):
        artwork = serializer.save(artist=self.request.user)
        logger.info(
            "Artwork created",
            extra={"artwork_id": str(artwork.pk), "artist_id": str(self.request.user.pk)},
        )

    def perform_destroy(self, instance):
        logger.info(
            "Artwork deleted",
            extra={"artwork_id": str(instance.pk), "by": str(self.request.user.pk)},
        )
        instance.delete()

    # ---------------- CATALOG HELPERS ----------------

    @extend_schema(
        responses={200: OpenApiResponse(description="Distinct filter values")},
        tags=["Artworks"],
    )
    @action(detail=False, methods=["get"], url_path="filter-options")
    def filter_options(self, request):
        return Response(catalog.filter_options())

    @extend_schema(responses={200: ArtworkSerializer(many=True)}, tags=["Artworks"])
    @action(detail=True, methods=["get"])
    def related(self, request, pk=None):
        artwork = self.get_object()
        return Response(ArtworkSerializer(catalog.related_artworks(artwork), many=True).data)

    # ---------------- ENGAGEMENT ----------------

    @extend_schema(request=None, responses={200: LikeResultSerializer}, tags=["Artworks"])
    @action(detail=True, methods=["post"])
    def like(self, request, pk=None):
        artwork = self.get_object()
        return Response(engagement.toggle_like(user=request.user, artwork=artwork))

    @extend_schema(request=None, responses={200: FavoriteResultSerializer}, tags=["Artworks"])
    @action(detail=True, methods=["post"])
    def favorite(self, request, pk=None):
        artwork = self.get_object()
        return Response(engagement.toggle_favorite(user=request.user, artwork=artwork))

    @extend_schema(responses={200: ArtworkSerializer(many=True)}, tags=["Artworks"])
    @action(detail=False, methods=["get"])
    def favorites(self, request):
        rows = (
            Favorite.objects.filter(user=request.user)
            .select_related("artwork__artist")
            .prefetch_related("artwork__tags")
            .order_by("-created_at")
        )
        return Response(ArtworkSerializer([f.artwork for f in rows], many=True).data)

    @extend_schema(
        methods=["GET"],
        responses={200: CommentSerializer(many=True)},
        tags=["Artworks"],
    )
    @extend_schema(
        methods=["POST"],
        request=CommentCreateSerializer,
        responses={201: CommentSerializer, 400: OpenApiResponse(description="Invalid comment")},
        tags=["Artworks"],
    )
    @action(detail=True, methods=["get", "post"])
    def comments(self, request, pk=None):
        artwork = self.get_object()

        if request.method == "GET":
            qs = artwork.comments.select_related("user").order_by("-created_at")
            return Response(CommentSerializer(qs, many=True).data)

        s = CommentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            comment = engagement.add_comment(
                user=request.user, artwork=artwork, text=s.validated_data["text"]
            )
        except CommentValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)
