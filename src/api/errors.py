"""Mapping from domain errors to HTTP errors."""

from fastapi import HTTPException, status

from domain.model.errors import (
    AccountTypeLockedError,
    DomainError,
    DuplicateError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    StorageError,
    TransactionError,
    UnauthenticatedError,
    ValidationError,
)

# Checked in order; subclasses must come before their bases.
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AccountTypeLockedError, status.HTTP_409_CONFLICT),
    (TransactionError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Build the HTTPException a route should raise for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, UnauthenticatedError) else None
            return HTTPException(status_code=status_code, detail=str(error), headers=headers)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error) or "Internal error")
