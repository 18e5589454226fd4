"""Bearer token authentication dependencies."""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_user_repo
from api.errors import to_http_exception
from domain.model.errors import DomainError, UnauthenticatedError
from domain.model.user import Identity
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_repo: UserRepository = Depends(get_user_repo),
) -> Identity:
    """Resolve the bearer token to the caller's identity. Raises 401 otherwise.

    Missing, malformed, forged and expired tokens are all rejected the same way.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return auth_service.authorize(user_repo, credentials.credentials)
    except UnauthenticatedError as e:
        logger.debug("Bearer token rejected", extra={"reason": type(e).__name__})
        raise to_http_exception(e)
    except DomainError as e:
        logger.error("Could not resolve bearer token", extra={"error": str(e)})
        raise to_http_exception(e)
