"""Process-wide MongoDB client.

The client is created lazily and cached. A cached client that stops
answering pings is dropped and rebuilt on the next call. If the first
attempt fails (missing or wrong MONGO_URL) no further attempts are made
until `reset_client()`.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'shopnet')

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 10,
    'minPoolSize': 0,
    'maxIdleTimeMS': 30000,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
}

_client: MongoClient | None = None
_ever_connected = False
_gave_up = False


def reset_client() -> None:
    """Forget the cached client and any earlier failure."""
    global _client, _ever_connected, _gave_up
    _client = None
    _ever_connected = False
    _gave_up = False


def close_client() -> None:
    """Close the cached client, if any. Called on application shutdown."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("[MONGODB] Client closed")


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return a connected client, or None if MongoDB is unreachable."""
    global _client, _ever_connected, _gave_up

    if _client is not None:
        if _is_alive(_client):
            return _client
        logger.debug("[MONGODB] Cached client failed ping, reconnecting")
        _client = None

    if _gave_up:
        return None
    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured.")
        _gave_up = True
        return None

    try:
        client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
        client.admin.command('ping')
    except PyMongoError as e:
        if not _ever_connected:
            logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
            _gave_up = True
        return None

    if not _ever_connected:
        logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
    _ever_connected = True
    _client = client
    return client


def get_database() -> Database | None:
    """Return the application database, or None if MongoDB is unreachable."""
    client = get_mongodb_client()
    return client[DATABASE_NAME] if client is not None else None
