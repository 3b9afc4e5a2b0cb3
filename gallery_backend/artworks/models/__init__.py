from .artwork import DEFAULT_CATEGORY, DEFAULT_TITLE, Artwork, Tag
from .engagement import COMMENT_MAX_LENGTH, Comment, Favorite, Like

__all__ = [
    "Artwork",
    "Tag",
    "Comment",
    "Like",
    "Favorite",
    "DEFAULT_CATEGORY",
    "DEFAULT_TITLE",
    "COMMENT_MAX_LENGTH",
]
