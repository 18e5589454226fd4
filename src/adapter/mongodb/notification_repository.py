"""MongoDB implementation of NotificationRepository."""

from logging import getLogger
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import NOTIFICATIONS_COLLECTION_NAME
from domain.model.notification import Notification, NotificationType

logger = getLogger(__name__)


class MongoNotificationRepository:
    def __init__(self, db: Database):
        self.collection = db[NOTIFICATIONS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('user_id', 1), ('created_at', -1)], 'idx_notifications_user_created')
            return True
        except PyMongoError as e:
            logger.error("Failed to create notifications indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Notification:
        return Notification(
            id=doc['_id'],
            user_id=doc['user_id'],
            title=doc['title'],
            message=doc['message'],
            type=NotificationType(doc.get('type', NotificationType.SYSTEM.value)),
            created_at=doc['created_at'],
            read=doc.get('read', False),
        )

    def save(self, notification: Notification) -> bool:
        try:
            self.collection.insert_one({
                '_id': notification.id,
                'user_id': notification.user_id,
                'title': notification.title,
                'message': notification.message,
                'type': notification.type.value,
                'read': notification.read,
                'created_at': notification.created_at,
            })
            return True
        except PyMongoError as e:
            logger.error("Failed to save notification", extra={"userId": notification.user_id, "error": str(e)})
            return False

    def find_by_user(self, user_id: str) -> list[Notification]:
        try:
            cursor = self.collection.find({'user_id': user_id}).sort('created_at', DESCENDING)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list notifications", extra={"userId": user_id, "error": str(e)})
            return []

    def get_for_user(self, notification_id: str, user_id: str) -> Notification | None:
        try:
            doc = self.collection.find_one({'_id': notification_id, 'user_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get notification", extra={"notificationId": notification_id, "error": str(e)})
            return None

    def mark_read(self, notification_id: str) -> Notification | None:
        try:
            doc = self.collection.find_one_and_update(
                {'_id': notification_id},
                {'$set': {'read': True}},
                return_document=ReturnDocument.AFTER,
            )
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to mark notification read", extra={"notificationId": notification_id, "error": str(e)})
            return None

    def mark_all_read(self, user_id: str) -> int:
        try:
            result = self.collection.update_many({'user_id': user_id, 'read': False}, {'$set': {'read': True}})
            return result.modified_count
        except PyMongoError as e:
            logger.error("Failed to mark notifications read", extra={"userId": user_id, "error": str(e)})
            return 0

    def delete(self, notification_id: str) -> bool:
        try:
            return self.collection.delete_one({'_id': notification_id}).deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete notification", extra={"notificationId": notification_id, "error": str(e)})
            return False
