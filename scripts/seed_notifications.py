"""Seed the welcome notifications for a user.

Adds the three welcome notifications to the given user, or to the first
user in the database when no email is passed.

Usage:
    PYTHONPATH=src uv run python scripts/seed_notifications.py
    PYTHONPATH=src uv run python scripts/seed_notifications.py --email alice@example.com
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.connection import get_database
from adapter.mongodb.notification_repository import MongoNotificationRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import StorageError
from domain.model.user import normalize_email
from services.notification_service import WELCOME_NOTIFICATIONS, notify

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the welcome notifications for a user.")
    parser.add_argument("--email", help="User to seed (default: first user found)")
    args = parser.parse_args()

    db = get_database()
    if db is None:
        logger.error("MongoDB unavailable, check MONGO_URL")
        return 1
    users = MongoUserRepository(db)

    try:
        if args.email:
            user = users.get_by_email(normalize_email(args.email))
        else:
            doc = db[USERS_COLLECTION_NAME].find_one({}, {'_id': 1})
            user = users.get_by_id(doc['_id']) if doc else None
    except StorageError:
        logger.error("Could not read users")
        return 1

    if user is None:
        logger.warning("No user found to add notifications to")
        return 1

    repo = MongoNotificationRepository(db)
    for title, message, notification_type in WELCOME_NOTIFICATIONS:
        notify(repo, user.id, title, message, notification_type)

    logger.info(f"Added {len(WELCOME_NOTIFICATIONS)} notifications for {user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
