"""
PATH: social/views.py

ARTISTS + FOLLOWS

- GET  /social/artists/?q=                 artist directory with counts (AllowAny)
- GET  /social/artists/<id>/               profile, counts, artworks (AllowAny)
- GET  /social/artists/<id>/followers/     {"followers": int} (AllowAny)
- POST /social/artists/<id>/follow/        toggle (authenticated)
- GET  /social/following/                  requester's followed artists
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from artworks.serializers import ArtworkSerializer
from artworks.services.catalog import base_queryset
from permissions.roles import ROLE_ARTIST
from social.serializers import ArtistListSerializer, FollowResultSerializer
from social.services import follows
from social.services.exceptions import FollowNotAllowed
from users.serializers import PublicProfileSerializer

User = get_user_model()


class ArtistListView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[OpenApiParameter("q", str, description="Username search")],
        responses={200: ArtistListSerializer(many=True)},
        tags=["Social"],
    )
    def get(self, request):
        qs = follows.artists_with_counts(request.query_params.get("q", ""))
        return Response(ArtistListSerializer(qs, many=True).data)


class ArtistDetailView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        responses={200: OpenApiResponse(description="Artist profile, counts and artworks")},
        tags=["Social"],
    )
    def get(self, request, artist_id):
        artist = get_object_or_404(User, id=artist_id, role=ROLE_ARTIST, is_active=True)
        artworks = base_queryset().filter(artist=artist).order_by("-created_at")

        return Response(
            {
                "artist": PublicProfileSerializer(artist).data,
                "followers_count": follows.follower_count(artist),
                "artworks_count": artworks.count(),
                "is_following": follows.is_following(request.user, artist),
                "artworks": ArtworkSerializer(artworks, many=True).data,
            }
        )


class FollowerCountView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        responses={200: OpenApiResponse(description='{"followers": int}')},
        tags=["Social"],
    )
    def get(self, request, artist_id):
        artist = get_object_or_404(User, id=artist_id)
        return Response({"followers": follows.follower_count(artist)})


class FollowToggleView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={
            200: FollowResultSerializer,
            400: OpenApiResponse(description="Self-follow or not an artist"),
        },
        tags=["Social"],
    )
    def post(self, request, artist_id):
        artist = get_object_or_404(User, id=artist_id, is_active=True)
        try:
            result = follows.toggle_follow(follower=request.user, artist=artist)
        except FollowNotAllowed as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(result)


class FollowingListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: ArtistListSerializer(many=True)}, tags=["Social"])
    def get(self, request):
        qs = follows.artists_with_counts().filter(followers__follower=request.user)
        return Response(ArtistListSerializer(qs, many=True).data)
