# artworks/views/dashboard.py

"""
ARTIST DASHBOARD

GET /artworks/dashboard/

Totals for the requester's own catalog (artworks, views, likes, followers)
plus their artworks newest-first. Requires dashboard.view (artists, admins).
"""

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from artworks.serializers import ArtworkSerializer
from artworks.services.catalog import base_queryset
from permissions.roles import CAP_DASHBOARD_VIEW, HasCapability
from social.services.follows import follower_count


class ArtistDashboardView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_DASHBOARD_VIEW

    @extend_schema(
        responses={
            200: OpenApiResponse(description="Stats + artworks"),
            403: OpenApiResponse(description="Not an artist"),
        },
        tags=["Artworks"],
    )
    def get(self, request):
        artworks = base_queryset().filter(artist=request.user).order_by("-created_at")

        totals = artworks.aggregate(
            total_artworks=Count("id"),
            total_views=Coalesce(Sum("views"), 0),
            total_likes=Coalesce(Sum("likes"), 0),
        )

        return Response(
            {
                "stats": {
                    **totals,
                    "total_followers": follower_count(request.user),
                },
                "artworks": ArtworkSerializer(artworks, many=True).data,
            }
        )
