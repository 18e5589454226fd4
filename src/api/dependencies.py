"""FastAPI dependencies that hand repositories to route handlers.

Tests replace these through `app.dependency_overrides` with the in-memory
fakes from `adapter.fake`.
"""

from fastapi import HTTPException, status
from pymongo.database import Database

from adapter.mongodb.connection import get_database
from adapter.mongodb.notification_repository import MongoNotificationRepository
from adapter.mongodb.product_repository import MongoProductRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.notification_repository import NotificationRepository
from port.product_repository import ProductRepository
from port.user_repository import UserRepository


def _require_db() -> Database:
    db = get_database()
    if db is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable")
    return db


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_require_db())


def get_product_repo() -> ProductRepository:
    return MongoProductRepository(_require_db())


def get_notification_repo() -> NotificationRepository:
    return MongoNotificationRepository(_require_db())
