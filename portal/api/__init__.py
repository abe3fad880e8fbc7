"""API package initialization."""
from portal.api.models import ErrorResponse, UserProfile, UserPublic

__all__ = ["ErrorResponse", "UserProfile", "UserPublic"]
