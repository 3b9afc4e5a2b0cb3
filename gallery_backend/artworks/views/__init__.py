# artworks/views/__init__.py

"""
Artworks views package exports.

Purpose:
- Central export point for router and path imports.
"""

from .artwork import ArtworkViewSet
from .comment import CommentDetailView
from .dashboard import ArtistDashboardView
from .uploads import ArtworkImageUploadView

__all__ = [
    "ArtworkViewSet",
    "CommentDetailView",
    "ArtistDashboardView",
    "ArtworkImageUploadView",
]
