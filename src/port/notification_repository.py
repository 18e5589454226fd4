from typing import Protocol

from domain.model.notification import Notification


class NotificationRepository(Protocol):
    def save(self, notification: Notification) -> bool: ...
    def find_by_user(self, user_id: str) -> list[Notification]:
        """List a user's notifications newest first."""
        ...
    def get_for_user(self, notification_id: str, user_id: str) -> Notification | None: ...
    def mark_read(self, notification_id: str) -> Notification | None: ...
    def mark_all_read(self, user_id: str) -> int: ...
    def delete(self, notification_id: str) -> bool: ...
