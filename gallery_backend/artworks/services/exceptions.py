# artworks/services/exceptions.py

"""
GALLERY SERVICE ERRORS

Centralized domain errors for catalog and engagement services.
Views translate them to 400 / 403 responses.
"""


class GalleryServiceError(Exception):
    """Base exception for all gallery service failures."""


class InvalidGalleryQuery(GalleryServiceError):
    """Raised when gallery query parameters cannot be parsed."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(str(errors))


class CommentValidationError(GalleryServiceError):
    """Raised when a comment is blank or too long."""


class EngagementPermissionError(GalleryServiceError):
    """Raised when a user acts on a row they do not own."""
