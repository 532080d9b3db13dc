# app/core/errors.py
"""
Error taxonomy for the delivery API.

Every class is an HTTPException so services can raise them at the same
places they would raise a plain HTTPException; the handlers registered
in `app.main` render all of them as `{"error": "<message>"}`.
"""
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Malformed or missing input, or a disallowed status transition."""

    def __init__(self, detail: str = "Validation failed"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    """Duplicate unique value (e.g. email). Reported as 400 by the API."""

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthError(HTTPException):
    """Bad credentials or a missing / invalid bearer token."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Role or ownership mismatch."""

    def __init__(self, detail: str = "Access denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
