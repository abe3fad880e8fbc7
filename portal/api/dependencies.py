"""FastAPI dependency injection functions."""
import re

from fastapi import Request

from portal.auth import PasswordHasher
from portal.errors import InvalidIdError
from portal.storage import MemStorage

ID_PATTERN = re.compile(r"-?[0-9]+")


def get_storage(request: Request) -> MemStorage:
    """
    Get the store attached to the running app.

    Pattern: one MemStorage created in create_app(), shared by every
    request for the life of the process.
    """
    return request.app.state.storage


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def parse_id(raw: str, entity: str) -> int:
    """
    Parse a path identifier.

    Only an optional minus sign followed by ASCII digits is accepted;
    whitespace, "+", underscores and non-ASCII digits are rejected.

    Args:
        raw: Path segment as received
        entity: Entity name used in the error message ("doctor", ...)

    Raises:
        InvalidIdError: If raw is not a plain integer
    """
    if not ID_PATTERN.fullmatch(raw):
        raise InvalidIdError(entity)
    return int(raw)
