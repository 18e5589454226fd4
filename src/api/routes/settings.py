"""Account settings routes.

Endpoints:
- PUT /api/settings/profile: Edit name and contact details (profile upsert)
- PUT /api/settings/password: Change password
- PUT /api/settings/notifications: Notification preferences
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.errors import to_http_exception
from api.models import (
    MessageResponse,
    NotificationPreferencesRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserEnvelope,
    to_user_response,
)
from api.security import get_current_identity
from domain.model.errors import DomainError
from domain.model.user import Identity
from port.user_repository import UserRepository
from services import settings_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.put("/profile", response_model=UserEnvelope)
async def update_profile(
    request: ProfileUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = settings_service.update_profile(
            repo,
            identity.user_id,
            name=request.name,
            phone=request.phone,
            address=request.address,
            profile_image=request.profile_image,
        )
    except DomainError as e:
        raise to_http_exception(e)
    return UserEnvelope(user=to_user_response(user))


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: PasswordChangeRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        settings_service.change_password(
            repo, identity.user_id, request.current_password, request.new_password,
        )
    except DomainError as e:
        raise to_http_exception(e)
    return MessageResponse(message="Password updated successfully")


@router.put("/notifications", response_model=UserEnvelope)
async def update_notification_preferences(
    request: NotificationPreferencesRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = settings_service.update_notification_preferences(
            repo,
            identity.user_id,
            email_notifications=request.email_notifications,
            order_updates=request.order_updates,
        )
    except DomainError as e:
        raise to_http_exception(e)
    return UserEnvelope(user=to_user_response(user))
