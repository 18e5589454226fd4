"""Identity routes: register, login, current user and account setup.

Endpoints:
- POST /api/users/register: Create an account (account type unset)
- POST /api/users/login: Exchange credentials for a bearer token
- GET /api/users/me: Current user, used by clients to re-validate a stored token
- PUT /api/users/account-type: Finalize buyer/seller role and upsert profile
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_repo
from api.errors import to_http_exception
from api.models import (
    AccountTypeRequest,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
    to_user_response,
)
from api.security import get_current_identity
from domain.model.errors import DomainError, InvalidTokenError
from domain.model.user import Identity
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user.

    Raises:
        HTTPException: 400 if the email is taken or validation fails
    """
    try:
        user = auth_service.register(repo, request.email, request.password, request.name)
    except DomainError as e:
        raise to_http_exception(e)

    return AuthResponse(token=create_access_token(user.id), user=to_user_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return a fresh bearer token.

    Raises:
        HTTPException: 401 if credentials are invalid (same message either way)
    """
    try:
        user = auth_service.authenticate(repo, request.email, request.password)
    except DomainError as e:
        raise to_http_exception(e)

    return AuthResponse(token=create_access_token(user.id), user=to_user_response(user))


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get current authenticated user."""
    try:
        user = repo.get_by_id(identity.user_id)
    except DomainError as e:
        raise to_http_exception(e)
    if not user:
        raise to_http_exception(InvalidTokenError("User not found"))
    return to_user_response(user)


@router.put("/account-type", response_model=UserEnvelope)
async def update_account_type(
    request: AccountTypeRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Set the caller's role and profile in one atomic write.

    Raises:
        HTTPException: 400 invalid role or missing field, 409 role already
            finalized, 500 if the write failed (nothing persisted)
    """
    try:
        user = auth_service.update_account_type(
            repo,
            identity.user_id,
            request.account_type,
            request.profile.model_dump(exclude_none=True),
        )
    except DomainError as e:
        raise to_http_exception(e)

    return UserEnvelope(user=to_user_response(user))
