from .artwork import (
    ArtworkDetailSerializer,
    ArtworkSerializer,
    FavoriteResultSerializer,
    LikeResultSerializer,
)
from .comment import CommentCreateSerializer, CommentSerializer

__all__ = [
    "ArtworkSerializer",
    "ArtworkDetailSerializer",
    "LikeResultSerializer",
    "FavoriteResultSerializer",
    "CommentSerializer",
    "CommentCreateSerializer",
]
