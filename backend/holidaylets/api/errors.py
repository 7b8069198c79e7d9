"""Translate domain errors into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from holidaylets.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationFailed,
)


def http_error(exc: DomainError) -> HTTPException:
    """Map a domain error to the matching ``HTTPException``."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    if isinstance(exc, ValidationFailed):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Validation failed", "errors": exc.errors},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
