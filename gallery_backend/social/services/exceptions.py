# social/services/exceptions.py


class SocialServiceError(Exception):
    """Base exception for follow/artist service failures."""


class FollowNotAllowed(SocialServiceError):
    """Raised on self-follow or following a non-artist profile."""
