"""Notification routes.

Endpoints:
- GET /api/notifications: Caller's notifications, newest first
- PUT /api/notifications/mark-all-read: Mark every unread notification read
- PUT /api/notifications/{id}/read: Mark one notification read
- DELETE /api/notifications/{id}: Delete one notification
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_notification_repo
from api.errors import to_http_exception
from api.models import MessageResponse, NotificationResponse
from api.security import get_current_identity
from domain.model.errors import DomainError
from domain.model.user import Identity
from port.notification_repository import NotificationRepository
from services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    identity: Identity = Depends(get_current_identity),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    notifications = notification_service.list_notifications(repo, identity.user_id)
    return [NotificationResponse.from_domain(n) for n in notifications]


# Registered before /{notification_id}/read so "mark-all-read" is not taken as an id.
@router.put("/mark-all-read", response_model=MessageResponse)
async def mark_all_read(
    identity: Identity = Depends(get_current_identity),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    notification_service.mark_all_read(repo, identity.user_id)
    return MessageResponse(message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    try:
        notification = notification_service.mark_read(repo, identity.user_id, notification_id)
    except DomainError as e:
        raise to_http_exception(e)
    return NotificationResponse.from_domain(notification)


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    try:
        notification_service.delete_notification(repo, identity.user_id, notification_id)
    except DomainError as e:
        raise to_http_exception(e)
    return MessageResponse(message="Notification deleted")
