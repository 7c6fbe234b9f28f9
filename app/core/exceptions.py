"""
Error taxonomy for the API.

Each error is an HTTPException so services can raise it directly and FastAPI
renders it without extra handlers.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# Postgres error codes surfaced by PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NO_DATA_FOUND = "P0002"
CHECK_VIOLATION = "23514"
INVALID_TEXT_REPRESENTATION = "22P02"


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class RemoteFailureError(HTTPException):
    def __init__(self, detail: str = "Upstream storage request failed"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


def translate_storage_error(exc: Exception, conflict_detail: Optional[str] = None) -> HTTPException:
    """Map a Supabase/PostgREST client exception to an API error."""
    if isinstance(exc, APIError):
        if exc.code == UNIQUE_VIOLATION:
            return ConflictError(conflict_detail or "Record already exists")
        if exc.code in (FOREIGN_KEY_VIOLATION, NO_DATA_FOUND):
            return NotFoundError(exc.message or "Referenced record not found")
        if exc.code == INVALID_TEXT_REPRESENTATION:
            # malformed uuid
            return NotFoundError("Not found")
        if exc.code == CHECK_VIOLATION:
            return ConflictError(exc.message or "Change rejected by a database constraint")
        logger.error(f"Storage request failed ({exc.code}): {exc.message}")
        return RemoteFailureError(exc.message or "Upstream storage request failed")
    logger.error(f"Storage request failed: {exc}")
    return RemoteFailureError(str(exc) or "Upstream storage request failed")
