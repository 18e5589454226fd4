"""Notification service: per-user inbox operations."""

from domain.model.errors import DomainError, NotFoundError
from domain.model.notification import Notification, NotificationType
from port.notification_repository import NotificationRepository

WELCOME_NOTIFICATIONS = (
    ("Welcome to ShopNet!", "Thanks for joining. Start exploring our features now.", NotificationType.SYSTEM),
    ("New Product Feature", "You can now add multiple images to your products.", NotificationType.SYSTEM),
    ("Profile Update Reminder", "Don't forget to complete your profile information.", NotificationType.ACCOUNT),
)


def notify(
    repo: NotificationRepository,
    user_id: str,
    title: str,
    message: str,
    type: NotificationType = NotificationType.SYSTEM,
) -> Notification:
    notification = Notification.create(user_id=user_id, title=title, message=message, type=type)
    if not repo.save(notification):
        raise DomainError("Failed to create notification")
    return notification


def list_notifications(repo: NotificationRepository, user_id: str) -> list[Notification]:
    return repo.find_by_user(user_id)


def mark_read(repo: NotificationRepository, user_id: str, notification_id: str) -> Notification:
    """Mark one of the user's notifications as read. Others' notifications are 404."""
    if not repo.get_for_user(notification_id, user_id):
        raise NotFoundError("Notification not found")
    updated = repo.mark_read(notification_id)
    if not updated:
        raise DomainError("Failed to mark notification as read")
    return updated


def mark_all_read(repo: NotificationRepository, user_id: str) -> int:
    return repo.mark_all_read(user_id)


def delete_notification(repo: NotificationRepository, user_id: str, notification_id: str) -> None:
    if not repo.get_for_user(notification_id, user_id):
        raise NotFoundError("Notification not found")
    if not repo.delete(notification_id):
        raise DomainError("Failed to delete notification")
