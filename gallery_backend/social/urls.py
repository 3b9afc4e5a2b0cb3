# social/urls.py

from django.urls import path

from social.views import (
    ArtistDetailView,
    ArtistListView,
    FollowerCountView,
    FollowingListView,
    FollowToggleView,
)

app_name = "social"

urlpatterns = [
    path("artists/", ArtistListView.as_view(), name="artist-list"),
    path("artists/<uuid:artist_id>/", ArtistDetailView.as_view(), name="artist-detail"),
    path("artists/<uuid:artist_id>/followers/", FollowerCountView.as_view(), name="artist-followers"),
    path("artists/<uuid:artist_id>/follow/", FollowToggleView.as_view(), name="artist-follow"),
    path("following/", FollowingListView.as_view(), name="following"),
]
