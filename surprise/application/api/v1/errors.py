"""Centralized error transformation for API routes.

Maps domain and infrastructure errors to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from surprise.domain.shared.error import (
    AuthenticationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    PayloadTooLargeError,
    SurpriseError,
    ValidationError,
)

# Checked in order, so subclasses must precede their bases
DOMAIN_ERROR_STATUS_MAP: list[tuple[type[DomainError], int]] = [
    (NotFoundError, 404),
    (PayloadTooLargeError, 413),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (ConflictError, 409),
]


def map_surprise_error(error: SurpriseError) -> HTTPException:
    """Map an application error to an HTTPException.

    Args:
        error: The error to map.

    Returns:
        HTTPException with appropriate status code and a `{code, message}` detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=500, detail=detail)

    if isinstance(error, DomainError):
        status_code = next(
            (status for kind, status in DOMAIN_ERROR_STATUS_MAP if isinstance(error, kind)),
            400,
        )
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown SurpriseError subclasses
    return HTTPException(status_code=500, detail=detail)
