"""
Error taxonomy and the boundary that keeps internal failures private.

Every error leaves the API as {"message": ...}; see the handlers
registered in app.main.
"""

import logging
from contextlib import contextmanager

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class BadRequest(HTTPException):
    """Missing or invalid fields, invalid enum values."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class Unauthorized(HTTPException):
    """Credential mismatch."""

    def __init__(self, message: str = "Invalid credentials or user type."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


class NotFound(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class Conflict(HTTPException):
    """Duplicate email. Reported as 400, which clients of /signup rely on."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class InternalError(HTTPException):
    def __init__(self, message: str = "Internal server error."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@contextmanager
def internal_error_boundary(message: str):
    """
    Wrap a handler body.

    HTTPExceptions raised inside pass through untouched. Anything else
    (database, storage, IO) is logged with its traceback and re-raised
    as InternalError(message), so the caller only sees `message`.

    Usage:
        with internal_error_boundary("Error during signup."):
            ...
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(message)
        raise InternalError(message) from e
