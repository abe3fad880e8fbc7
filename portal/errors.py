"""Exceptions raised by route handlers and mapped to HTTP responses."""
from typing import Optional


class PortalError(Exception):
    """Base error carrying the HTTP status and error code to report."""
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, errors: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class BadRequestError(PortalError):
    status_code = 400
    code = "BAD_REQUEST"


class InvalidIdError(BadRequestError):
    """Raised when a path identifier is not a number."""
    code = "INVALID_ID"

    def __init__(self, entity: str):
        super().__init__(f"Invalid {entity} ID")


class InvalidCredentialsError(PortalError):
    """Raised when a username/password pair does not match."""
    status_code = 401
    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class NotFoundError(PortalError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(PortalError):
    """Raised when a unique field (username, email) is already taken."""
    status_code = 409
    code = "CONFLICT"
