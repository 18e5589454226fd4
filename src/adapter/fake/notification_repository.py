"""In-memory implementation of NotificationRepository for testing."""

from dataclasses import replace

from domain.model.notification import Notification


class FakeNotificationRepository:
    def __init__(self):
        self.store: dict[str, Notification] = {}

    def save(self, notification: Notification) -> bool:
        self.store[notification.id] = replace(notification)
        return True

    def find_by_user(self, user_id: str) -> list[Notification]:
        items = [replace(n) for n in self.store.values() if n.user_id == user_id]
        return sorted(items, key=lambda n: n.created_at, reverse=True)

    def get_for_user(self, notification_id: str, user_id: str) -> Notification | None:
        notification = self.store.get(notification_id)
        if not notification or notification.user_id != user_id:
            return None
        return replace(notification)

    def mark_read(self, notification_id: str) -> Notification | None:
        notification = self.store.get(notification_id)
        if not notification:
            return None
        notification.read = True
        return replace(notification)

    def mark_all_read(self, user_id: str) -> int:
        count = 0
        for notification in self.store.values():
            if notification.user_id == user_id and not notification.read:
                notification.read = True
                count += 1
        return count

    def delete(self, notification_id: str) -> bool:
        return self.store.pop(notification_id, None) is not None
