# artworks/urls.py

from django.urls import path
from rest_framework.routers import SimpleRouter

from artworks.views import (
    ArtistDashboardView,
    ArtworkImageUploadView,
    ArtworkViewSet,
    CommentDetailView,
)

app_name = "artworks"

router = SimpleRouter()
router.register(r"", ArtworkViewSet, basename="artwork")

urlpatterns = [
    path("dashboard/", ArtistDashboardView.as_view(), name="dashboard"),
    path("uploads/", ArtworkImageUploadView.as_view(), name="upload"),
    path("comments/<uuid:comment_id>/", CommentDetailView.as_view(), name="comment-detail"),
] + router.urls
